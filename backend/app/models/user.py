# app/models/user.py
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    STARTUP = "Startup"
    SERVICE_PROVIDER = "ServiceProvider"


LOCAL_AUTH = "local"


class User(BaseModel):
    """Document stored in the ``users`` collection."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Any = Field(alias="_id")  # ObjectId, or provider subject for external accounts
    email: str
    password_hash: Optional[str] = None  # local auth only
    role: Role
    auth_provider: str = LOCAL_AUTH
    auth_provider_id: Optional[str] = None

    # Auth / account
    email_verified: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def to_document(self) -> dict:
        doc = self.model_dump(by_alias=True)
        doc["role"] = self.role.value
        if doc["password_hash"] is None:
            doc.pop("password_hash")
        return doc
