# app/models/session.py
from dataclasses import dataclass
from typing import Any

from app.models.user import Role


@dataclass(frozen=True)
class Session:
    """Identity resolved from a valid access token."""

    user_id: Any
    email: str
    role: Role
