# app/crud/account_crud.py
import logging
from typing import Any, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from app.models.profile import PROFILE_COLLECTIONS
from app.models.user import Role, utcnow
from app.utils.identity_utils import normalize_email
from facilitiease.core.exceptions import AlreadyExists, Internal, NotFound
from facilitiease.db.database import USERS, ensure_indexes

logger = logging.getLogger(__name__)


class AccountRepository:
    """
    Users and their role profiles.

    A user and its profile are written in one transaction; the unique indexes
    on ``users._id``, ``users.email`` and ``<profile>.user_id`` are what
    actually guarantee one account per email.
    """

    def __init__(self, database):
        self.database = database
        self.users = database[USERS]

    def profiles(self, role: Role):
        return self.database[PROFILE_COLLECTIONS[Role(role)]]

    async def ensure_indexes(self) -> None:
        await ensure_indexes(self.database)

    # ------------------------
    # Users
    # ------------------------
    async def get_user_by_email(self, email: str) -> Optional[dict]:
        return await self.users.find_one({"email": normalize_email(email)})

    async def get_user(self, user_id: Any) -> Optional[dict]:
        return await self.users.find_one({"_id": user_id})

    async def email_exists(self, email: str) -> bool:
        return await self.get_user_by_email(email) is not None

    async def create_account(self, user_doc: dict, role: Role, profile_doc: dict) -> Any:
        """Insert the user and its role profile atomically; returns the user id."""
        if await self.email_exists(user_doc["email"]):
            raise AlreadyExists()

        profiles = self.profiles(role)

        async def insert_both(session):
            await self.users.insert_one(user_doc, session=session)
            await profiles.insert_one(profile_doc, session=session)

        try:
            async with await self.database.client.start_session() as session:
                await session.with_transaction(insert_both)
        except DuplicateKeyError as e:
            # Lost the race against a concurrent signup for the same email
            logger.info("Duplicate key while creating account: %s", e.details or e)
            raise AlreadyExists() from e
        except PyMongoError as e:
            logger.exception("Account creation failed, transaction rolled back")
            raise Internal() from e

        logger.info("Created %s account %s", Role(role).value, user_doc["_id"])
        return user_doc["_id"]

    async def update_password_hash(self, user_id: Any, password_hash: str) -> None:
        await self.users.update_one(
            {"_id": user_id},
            {"$set": {"password_hash": password_hash, "updated_at": utcnow()}},
        )

    # ------------------------
    # Role profiles
    # ------------------------
    async def get_role_profile(self, user_id: Any, role: Role) -> Optional[dict]:
        return await self.profiles(role).find_one({"user_id": user_id})

    async def update_role_profile(self, user_id: Any, role: Role, patch: dict) -> dict:
        """Merge ``patch`` into the user's profile; NotFound when there is none."""
        profiles = self.profiles(role)
        result = await profiles.update_one(
            {"user_id": user_id},
            {"$set": {**patch, "updated_at": utcnow()}},
        )
        if result.matched_count == 0:
            raise NotFound("Profile not found")
        return await profiles.find_one({"user_id": user_id})
