"""MongoDB connection and index management using the Motor async driver."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel

logger = logging.getLogger(__name__)

# collection -> indexes every query path relies on
COLLECTION_INDEXES: dict[str, list[IndexModel]] = {
    "meals": [
        IndexModel([("userId", ASCENDING), ("date", DESCENDING)], name="user_date"),
    ],
    "recipes": [
        IndexModel([("userId", ASCENDING), ("createdAt", DESCENDING)], name="user_created"),
    ],
    # One target per user and week; concurrent first reads upsert the same document.
    "weekly_targets": [
        IndexModel([("userId", ASCENDING), ("startDate", ASCENDING)], name="user_week", unique=True),
    ],
    "user_settings": [
        IndexModel([("userId", ASCENDING)], name="user", unique=True),
    ],
}


class MongoDB:
    """
    Process-wide Motor client for the meal tracker database.

    ``connect`` is called once from the application lifespan, followed by
    ``ensure_indexes``; request handlers reach the database through
    ``get_database``.
    """

    client: AsyncIOMotorClient | None = None
    _db_name: str = "meal_tracker"

    @classmethod
    def connect(cls, uri: str, db_name: str = "meal_tracker") -> None:
        """
        Open the client. Motor connects lazily, on the first operation.

        Args:
            uri: MongoDB connection URI
            db_name: Database holding the meal tracker collections
        """
        cls.client = AsyncIOMotorClient(uri)
        cls._db_name = db_name

    @classmethod
    async def ensure_indexes(cls) -> None:
        """Create the indexes in ``COLLECTION_INDEXES``; existing ones are left alone."""
        db = cls.get_database()
        for collection, indexes in COLLECTION_INDEXES.items():
            names = await db[collection].create_indexes(indexes)
            logger.debug(f"Indexes on {collection}: {', '.join(names)}")

    @classmethod
    def close(cls) -> None:
        if cls.client is not None:
            cls.client.close()
            cls.client = None

    @classmethod
    def get_client(cls) -> AsyncIOMotorClient:
        """
        Get the client.

        Raises:
            RuntimeError: If ``connect`` has not been called
        """
        if cls.client is None:
            raise RuntimeError("MongoDB not connected. Call MongoDB.connect() first.")
        return cls.client

    @classmethod
    def get_database(cls, name: str | None = None) -> AsyncIOMotorDatabase:
        """The meal tracker database, or ``name`` if given."""
        return cls.get_client()[name or cls._db_name]

    @classmethod
    def is_connected(cls) -> bool:
        return cls.client is not None
