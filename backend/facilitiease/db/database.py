# facilitiease/db/database.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING

from facilitiease.core.config import settings

logger = logging.getLogger(__name__)

USERS = "users"
STARTUPS = "startups"
SERVICE_PROVIDERS = "service_providers"
FACILITIES = "facilities"


class Database:
    """
    Owns the Motor client for the lifetime of the process.

    Opened from the app lifespan and handed to repositories through the
    ``get_database`` dependency.
    """

    def __init__(self, url: str, name: str):
        self.url = url
        self.name = name
        self.client = None
        self.db = None

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(self.url)
        self.db = self.client[self.name]
        await ensure_indexes(self)
        logger.info("MongoDB connected (database=%s)", self.name)

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None

    def __getitem__(self, collection: str):
        if self.db is None:
            raise RuntimeError("Database is not connected")
        return self.db[collection]


async def ensure_indexes(database) -> None:
    await database[USERS].create_index([("email", ASCENDING)], unique=True)
    await database[STARTUPS].create_index([("user_id", ASCENDING)], unique=True)
    await database[SERVICE_PROVIDERS].create_index([("user_id", ASCENDING)], unique=True)
    await database[FACILITIES].create_index([("service_provider_id", ASCENDING)])


mongo = Database(settings.MONGO_URL, settings.MONGO_DB_NAME)


def get_database() -> Database:
    return mongo
