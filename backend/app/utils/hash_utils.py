# app/utils/hash_utils.py
import logging

from passlib.context import CryptContext

from facilitiease.core.config import settings

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Argon2id password hashing; bcrypt hashes from the previous system still
    verify and are upgraded to argon2 on the next successful sign-in.
    """

    def __init__(
        self,
        time_cost: int = settings.ARGON2_TIME_COST,
        memory_cost: int = settings.ARGON2_MEMORY_COST,
        parallelism: int = settings.ARGON2_PARALLELISM,
        bcrypt_rounds: int = settings.BCRYPT_ROUNDS,
    ):
        self.context = CryptContext(
            schemes=["argon2", "bcrypt"],
            deprecated=["bcrypt"],
            argon2__time_cost=time_cost,
            argon2__memory_cost=memory_cost,
            argon2__parallelism=parallelism,
            bcrypt__rounds=bcrypt_rounds,
        )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        valid, _ = self.verify_and_upgrade(password, password_hash)
        return valid

    def verify_and_upgrade(self, password: str, password_hash: str | None):
        """Return ``(valid, new_hash)``; ``new_hash`` is set when the stored hash is outdated."""
        if not password_hash:
            self.dummy_verify()
            return False, None
        try:
            return self.context.verify_and_update(password, password_hash)
        except (ValueError, TypeError):
            # Unrecognised or corrupt stored hash
            logger.warning("Stored password hash could not be identified")
            return False, None

    def dummy_verify(self) -> None:
        self.context.dummy_verify()


credential_store = CredentialStore()


def get_credential_store() -> CredentialStore:
    return credential_store
