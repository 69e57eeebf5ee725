# app/middleware/rbac.py
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from app.models.session import Session
from app.models.user import Role
from app.services.account_service import AccountService, get_account_service
from app.utils.auth_utils import ACCESS, decode_token
from app.utils.identity_utils import parse_user_id
from facilitiease.core.exceptions import Unauthenticated

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/sessions", auto_error=False)


async def require_session(token: Optional[str] = Depends(oauth2_scheme)) -> Session:
    """Every privileged write starts here; no token means no session."""
    if not token:
        raise Unauthenticated()

    payload = decode_token(token, expected_type=ACCESS)
    try:
        role = Role(payload["role"])
    except ValueError:
        raise Unauthenticated("Invalid token")

    return Session(
        user_id=parse_user_id(payload["sub"]),
        email=payload.get("email", ""),
        role=role,
    )


async def get_current_user(
    session: Session = Depends(require_session),
    accounts: AccountService = Depends(get_account_service),
) -> dict:
    return await accounts.get_user(session)
