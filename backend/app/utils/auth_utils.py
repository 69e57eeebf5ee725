# app/utils/auth_utils.py
import logging
from datetime import datetime, timedelta, timezone

import jwt

from facilitiease.core.config import settings
from facilitiease.core.exceptions import Unauthenticated

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


def _encode(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": token_type,
    })
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    return _encode(data, ACCESS, expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(data: dict, expires_delta: timedelta | None = None) -> str:
    return _encode(data, REFRESH, expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def token_claims(user: dict) -> dict:
    return {"sub": str(user["_id"]), "email": user["email"], "role": user["role"]}


def create_token_pair(user: dict) -> dict:
    claims = token_claims(user)
    return {
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token(claims),
        "token_type": "bearer",
    }


def decode_token(token: str, expected_type: str = ACCESS) -> dict:
    try:
        decoded = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired %s token", expected_type)
        raise Unauthenticated("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token")

    if decoded.get("type") != expected_type:
        raise Unauthenticated(f"Invalid token type: expected {expected_type}")
    if not decoded.get("sub") or not decoded.get("role"):
        raise Unauthenticated("Invalid token")
    return decoded
