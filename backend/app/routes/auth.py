from fastapi import APIRouter, Depends, status

from app.middleware.rbac import get_current_user
from app.schemas.user import (
    AccountCreatedResponse,
    RefreshSchema,
    SigninResponse,
    SigninSchema,
    SignupSchema,
    TokenResponse,
    UserOut,
)
from app.services.account_service import AccountService, get_account_service
from app.utils.auth_utils import create_token_pair

auth_router = APIRouter(tags=["Auth"])


# ------------------------
# Sign up
# ------------------------
@auth_router.post("/accounts", response_model=AccountCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_account(data: SignupSchema, accounts: AccountService = Depends(get_account_service)):
    account_id = await accounts.sign_up(data)
    return AccountCreatedResponse(account_id=str(account_id))


# ------------------------
# Sign in
# ------------------------
@auth_router.post("/sessions", response_model=SigninResponse)
async def create_session(data: SigninSchema, accounts: AccountService = Depends(get_account_service)):
    result = await accounts.sign_in(data.email, data.password, data.role)
    return SigninResponse(
        **create_token_pair(result.user),
        requires_completion=result.requires_completion,
    )


# ------------------------
# Refresh token
# ------------------------
@auth_router.post("/sessions/refresh", response_model=TokenResponse)
async def refresh_session(data: RefreshSchema, accounts: AccountService = Depends(get_account_service)):
    user = await accounts.refresh(data.refresh_token)
    return TokenResponse(**create_token_pair(user))


# ------------------------
# Get current user info
# ------------------------
@auth_router.get("/accounts/me", response_model=UserOut)
async def get_current_user_info(current_user: dict = Depends(get_current_user)):
    return UserOut(
        id=str(current_user["_id"]),
        email=current_user["email"],
        role=current_user["role"],
        auth_provider=current_user.get("auth_provider", "local"),
        email_verified=current_user.get("email_verified", False),
    )
