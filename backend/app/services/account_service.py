# app/services/account_service.py
import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends
from starlette.concurrency import run_in_threadpool

from app.crud.account_crud import AccountRepository
from app.models.profile import build_profile_document
from app.models.session import Session
from app.models.user import LOCAL_AUTH, Role, User
from app.schemas.user import SignupSchema
from app.services.profile_service import profile_is_complete
from app.utils.auth_utils import REFRESH, decode_token
from app.utils.hash_utils import CredentialStore, get_credential_store
from app.utils.identity_utils import derive_user_id, normalize_email, parse_user_id
from facilitiease.core.exceptions import Forbidden, InvalidCredentials, NotFound, Unauthenticated
from facilitiease.db.database import get_database

logger = logging.getLogger(__name__)


@dataclass
class SigninResult:
    user: dict
    requires_completion: bool


class AccountService:
    def __init__(self, repository: AccountRepository, credentials: CredentialStore):
        self.repository = repository
        self.credentials = credentials

    # ------------------------
    # Provisioning
    # ------------------------
    @staticmethod
    def _seed(role: Role, seed: dict, email: str) -> dict:
        seed = dict(seed or {})
        if role == Role.SERVICE_PROVIDER:
            seed.setdefault("primary_email_id", email)
        return seed

    async def sign_up(self, data: SignupSchema) -> Any:
        """Create a local account; the user id is derived from the email."""
        email = normalize_email(data.email)
        user_id = derive_user_id(email)
        password_hash = await run_in_threadpool(self.credentials.hash, data.password)

        user = User(
            _id=user_id,
            email=email,
            password_hash=password_hash,
            role=data.role,
            auth_provider=LOCAL_AUTH,
            auth_provider_id=str(user_id),
        )
        profile_doc = build_profile_document(
            data.role, user_id, self._seed(data.role, data.role_profile_seed, email)
        )
        return await self.repository.create_account(user.to_document(), data.role, profile_doc)

    async def provision_external_account(
        self,
        email: str,
        role: Role,
        provider: str,
        subject: str,
        seed: Optional[dict] = None,
    ) -> Any:
        """Create an account whose identity comes from a third-party provider."""
        if provider == LOCAL_AUTH:
            raise ValueError("External accounts need a non-local provider")
        email = normalize_email(email)
        role = Role(role)
        user_id = parse_user_id(subject)

        user = User(
            _id=user_id,
            email=email,
            role=role,
            auth_provider=provider,
            auth_provider_id=subject,
        )
        profile_doc = build_profile_document(role, user_id, self._seed(role, seed, email))
        return await self.repository.create_account(user.to_document(), role, profile_doc)

    # ------------------------
    # Sign-in
    # ------------------------
    async def sign_in(self, email: str, password: str, role: Optional[Role] = None) -> SigninResult:
        user = await self.repository.get_user_by_email(email)
        if user is None:
            # Same cost as a real check so unknown emails are not distinguishable
            await run_in_threadpool(self.credentials.dummy_verify)
            raise InvalidCredentials()

        valid, new_hash = await run_in_threadpool(
            self.credentials.verify_and_upgrade, password, user.get("password_hash")
        )
        if not valid or (role is not None and user["role"] != Role(role).value):
            raise InvalidCredentials()

        if new_hash:
            await self.repository.update_password_hash(user["_id"], new_hash)
            logger.info("Upgraded password hash for user %s", user["_id"])

        profile = await self.repository.get_role_profile(user["_id"], user["role"])
        return SigninResult(
            user=user,
            requires_completion=not profile_is_complete(profile, user["role"]),
        )

    async def refresh(self, refresh_token: str) -> dict:
        claims = decode_token(refresh_token, expected_type=REFRESH)
        user = await self.repository.get_user(parse_user_id(claims["sub"]))
        if user is None:
            raise Unauthenticated("Invalid token")
        return user

    async def get_user(self, session: Session) -> dict:
        user = await self.repository.get_user(session.user_id)
        if user is None:
            raise Unauthenticated("User no longer exists")
        return user

    # ------------------------
    # Profiles
    # ------------------------
    async def get_profile(self, session: Session) -> dict:
        profile = await self.repository.get_role_profile(session.user_id, session.role)
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    async def update_profile(self, session: Session, user_id: str, patch: dict) -> dict:
        """Merge a validated patch into the caller's own role profile."""
        if parse_user_id(user_id) != session.user_id:
            raise Forbidden("You can only update your own profile")
        profile = await self.repository.update_role_profile(session.user_id, session.role, patch)
        logger.info("Updated %s profile for user %s", session.role.value, session.user_id)
        return profile


def get_account_service(
    database=Depends(get_database),
    credentials: CredentialStore = Depends(get_credential_store),
) -> AccountService:
    return AccountService(AccountRepository(database), credentials)
