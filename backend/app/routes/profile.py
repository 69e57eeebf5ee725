# app/routes/profile.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.middleware.rbac import require_session
from app.models.profile import PROFILE_FIELDS
from app.models.session import Session
from app.schemas.profile import ProfileResponse
from app.services.account_service import AccountService, get_account_service
from app.services.profile_service import profile_is_complete, profile_out

profile_router = APIRouter(prefix="/profiles", tags=["Profile"])


def profile_response(profile: dict, session: Session) -> ProfileResponse:
    return ProfileResponse(
        role=session.role.value,
        profile=profile_out(profile, session.role),
        requires_completion=not profile_is_complete(profile, session.role),
    )


@profile_router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    session: Session = Depends(require_session),
    accounts: AccountService = Depends(get_account_service),
):
    profile = await accounts.get_profile(session)
    return profile_response(profile, session)


@profile_router.patch("/{user_id}", response_model=ProfileResponse)
async def update_profile(
    user_id: str,
    patch: Dict[str, Any] = Body(...),
    session: Session = Depends(require_session),
    accounts: AccountService = Depends(get_account_service),
):
    # The accepted fields depend on the caller's role, so validate here
    try:
        fields = PROFILE_FIELDS[session.role].model_validate(patch)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    profile = await accounts.update_profile(
        session, user_id, fields.model_dump(mode="json", exclude_unset=True)
    )
    return profile_response(profile, session)
