# app/models/profile.py
from typing import Any

from app.models.user import Role, utcnow
from app.schemas.profile import ServiceProviderProfileFields, StartupProfileFields
from facilitiease.db.database import SERVICE_PROVIDERS, STARTUPS

PROFILE_FIELDS = {
    Role.STARTUP: StartupProfileFields,
    Role.SERVICE_PROVIDER: ServiceProviderProfileFields,
}

PROFILE_COLLECTIONS = {
    Role.STARTUP: STARTUPS,
    Role.SERVICE_PROVIDER: SERVICE_PROVIDERS,
}


def build_profile_document(role: Role, user_id: Any, seed: dict) -> dict:
    """
    Role profile document with every declared field present; fields the seed
    does not provide are stored as null until the profile is completed.
    """
    fields = PROFILE_FIELDS[role].model_validate(seed)
    now = utcnow()
    return {
        "user_id": user_id,
        **fields.model_dump(mode="json"),
        "created_at": now,
        "updated_at": now,
    }
