"""MongoDB client lifecycle and collection indexes."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.config import Settings, settings

logger = logging.getLogger(__name__)


class MongoDB:
    """
    Holds the single process-wide Motor client.

    The client is created once at startup and shared by every request;
    Motor clients are safe for concurrent use.
    """

    def __init__(self, config: Settings):
        self.settings = config
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        self._initialized = False

    def init_client(self, client: Optional[AsyncIOMotorClient] = None) -> None:
        """Create (or adopt) the client without touching the server."""
        if self.client is not None:
            return

        self.client = client or AsyncIOMotorClient(
            self.settings.MONGODB_CS,
            maxPoolSize=self.settings.MONGODB_MAX_POOL_SIZE,
            minPoolSize=self.settings.MONGODB_MIN_POOL_SIZE,
            serverSelectionTimeoutMS=self.settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
        self.db = self.client[self.settings.MONGODB_DB_NAME]

    async def connect(self) -> None:
        """Connect and make sure the indexes exist."""
        if self._initialized:
            return

        try:
            self.init_client()
            await ensure_indexes(self.db, self.settings)
            self._initialized = True
            logger.info(
                f"Connected to MongoDB database '{self.settings.MONGODB_DB_NAME}' "
                f"(collections: {self.settings.MONGODB_USER_COLLECTION}, "
                f"{self.settings.MONGODB_JOBDATA_COLLECTION})"
            )
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None
        self._initialized = False

    async def ping(self) -> bool:
        return await ping_database(self.db)


async def ping_database(db: Optional[AsyncIOMotorDatabase]) -> bool:
    if db is None:
        return False
    try:
        await db.command("ping")
        return True
    except Exception as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


async def ensure_indexes(db: AsyncIOMotorDatabase, config: Settings = settings) -> None:
    """
    Create the lookup indexes for both collections.

    Username/Email indexes are unique only when MONGODB_ENFORCE_UNIQUE_USERS
    is set; otherwise uniqueness stays an application-level pre-check.
    """
    users = db[config.MONGODB_USER_COLLECTION]
    job_data = db[config.MONGODB_JOBDATA_COLLECTION]
    unique = config.MONGODB_ENFORCE_UNIQUE_USERS

    await users.create_index([("Username", ASCENDING)], unique=unique)
    await users.create_index([("Email", ASCENDING)], unique=unique)
    await job_data.create_index([("UserId", ASCENDING)])

    logger.info(f"MongoDB indexes ensured (unique users: {unique})")


mongodb = MongoDB(settings)


def get_database() -> AsyncIOMotorDatabase:
    """Dependency returning the shared database handle."""
    if mongodb.db is None:
        mongodb.init_client()
    return mongodb.db
