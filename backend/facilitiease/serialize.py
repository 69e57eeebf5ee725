# facilitiease/serialize.py
from datetime import datetime

from bson import ObjectId


def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return serialize_doc(value)
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def serialize_doc(doc: dict | None) -> dict | None:
    """Make a Mongo document JSON-friendly; ``_id`` becomes ``id``."""
    if doc is None:
        return None
    out = {}
    for key, value in doc.items():
        out["id" if key == "_id" else key] = serialize_value(value)
    return out
