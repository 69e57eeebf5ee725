# app/services/profile_service.py
from typing import Iterable, Optional

from pydantic.alias_generators import to_camel

from app.models.profile import PROFILE_FIELDS
from app.models.user import Role
from facilitiease.serialize import serialize_value


def declared_fields(role: Role) -> tuple:
    return tuple(PROFILE_FIELDS[Role(role)].model_fields)


def is_complete(profile: Optional[dict], fields: Iterable[str]) -> bool:
    """
    A missing profile is never complete; otherwise every declared field must
    hold a non-null value.
    """
    if not profile:
        return False
    return all(profile.get(field) is not None for field in fields)


def profile_is_complete(profile: Optional[dict], role: Role) -> bool:
    return is_complete(profile, declared_fields(role))


def profile_out(profile: dict, role: Role) -> dict:
    """API (camelCase) view of a stored role profile."""
    out = {
        "id": serialize_value(profile.get("_id")),
        "userId": serialize_value(profile.get("user_id")),
    }
    for field in declared_fields(role):
        out[to_camel(field)] = serialize_value(profile.get(field))
    out["createdAt"] = serialize_value(profile.get("created_at"))
    out["updatedAt"] = serialize_value(profile.get("updated_at"))
    return out
