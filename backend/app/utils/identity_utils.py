# app/utils/identity_utils.py
import hashlib

from bson import ObjectId

# 24 hex chars == 12 bytes == one ObjectId
OBJECT_ID_HEX_LENGTH = 24


def normalize_email(email: str) -> str:
    return email.strip().lower()


def derive_user_id(email: str) -> ObjectId:
    """
    Deterministic ObjectId for a locally-authenticated account.

    MD5 keeps ids compatible with accounts created before; it is an
    identifier, not a credential.
    """
    digest = hashlib.md5(normalize_email(email).encode("utf-8"), usedforsecurity=False)
    return ObjectId(digest.hexdigest()[:OBJECT_ID_HEX_LENGTH])


def parse_user_id(value):
    """Stored ``_id`` for a token/path id: ObjectId when possible, else the provider subject."""
    if isinstance(value, ObjectId):
        return value
    if ObjectId.is_valid(value):
        return ObjectId(value)
    return value
