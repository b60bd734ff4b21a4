"""Base repository class with common user-scoped database operations."""

import logging
from typing import Any, Generic, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from meal_tracker_api.core.exceptions import DatabaseError
from meal_tracker_api.utils.dates import to_iso, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _object_id(id: str) -> ObjectId | None:
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        return None


class BaseRepository(Generic[T]):
    """
    Base repository providing CRUD operations partitioned by ``userId``.

    Every query is filtered by the owning user, so one user can never read
    or change another user's documents. Subclasses set ``model_class`` for
    document-to-model conversion and ``timestamps`` to maintain
    ``createdAt``/``updatedAt``.
    """

    model_class: type[T]
    timestamps: bool = False

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository with a MongoDB collection.

        Args:
            collection: Motor collection instance
        """
        self.collection = collection

    def _to_model(self, doc: dict[str, Any]) -> T:
        """Convert MongoDB document to the Pydantic model."""
        doc = dict(doc)
        if "_id" in doc:
            doc["id"] = str(doc.pop("_id"))
        return self.model_class.model_validate(doc)

    def _to_models(self, docs: list[dict[str, Any]]) -> list[T]:
        return [self._to_model(doc) for doc in docs if doc is not None]

    async def find_by_id(self, user_id: str, id: str) -> T | None:
        """
        Find a user's document by ID.

        Args:
            user_id: Owning user
            id: Document ObjectId as string

        Returns:
            Model, or None if not found or the ID is malformed
        """
        object_id = _object_id(id)
        if object_id is None:
            return None
        return await self.find_one(user_id, {"_id": object_id})

    async def find_many(
        self,
        user_id: str,
        filter: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        limit: int | None = 100,
        skip: int = 0,
    ) -> list[T]:
        """
        Find a user's documents matching filter.

        Args:
            user_id: Owning user
            filter: Additional MongoDB query filter
            sort: List of (field, direction) tuples
            limit: Maximum documents to return (None for all)
            skip: Number of documents to skip

        Returns:
            List of models
        """
        cursor = self.collection.find({**(filter or {}), "userId": user_id})

        if sort:
            cursor = cursor.sort(sort)

        cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)

        try:
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"Query on {self.collection.name} failed: {e}")
            raise DatabaseError("Failed to read documents") from e
        return self._to_models(docs)

    async def find_one(self, user_id: str, filter: dict[str, Any]) -> T | None:
        """Find a single user document matching filter."""
        try:
            doc = await self.collection.find_one({**filter, "userId": user_id})
        except PyMongoError as e:
            logger.error(f"Lookup in {self.collection.name} failed: {e}")
            raise DatabaseError("Failed to read document") from e
        return self._to_model(doc) if doc else None

    async def insert_one(self, user_id: str, document: dict[str, Any]) -> T:
        """
        Insert a document owned by ``user_id``.

        Args:
            user_id: Owning user
            document: Document fields (camelCase)

        Returns:
            The stored document as a model
        """
        document = {**document, "userId": user_id}
        if self.timestamps:
            now = to_iso(utc_now())
            document.setdefault("createdAt", now)
            document.setdefault("updatedAt", now)

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Insert into {self.collection.name} failed: {e}")
            raise DatabaseError("Failed to save document") from e

        document["_id"] = result.inserted_id
        return self._to_model(document)

    async def update_one(self, user_id: str, id: str, update: dict[str, Any]) -> T | None:
        """
        Update fields of a user's document.

        Args:
            user_id: Owning user
            id: Document ObjectId as string
            update: Fields to ``$set``

        Returns:
            The updated document, or None if it does not exist
        """
        object_id = _object_id(id)
        if object_id is None:
            return None

        update = dict(update)
        if self.timestamps:
            update["updatedAt"] = to_iso(utc_now())

        try:
            doc = await self.collection.find_one_and_update(
                {"_id": object_id, "userId": user_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Update in {self.collection.name} failed: {e}")
            raise DatabaseError("Failed to update document") from e

        return self._to_model(doc) if doc else None

    async def delete_one(self, user_id: str, id: str) -> bool:
        """
        Delete a user's document.

        Returns:
            True if a document was deleted
        """
        object_id = _object_id(id)
        if object_id is None:
            return False
        try:
            result = await self.collection.delete_one({"_id": object_id, "userId": user_id})
        except PyMongoError as e:
            logger.error(f"Delete in {self.collection.name} failed: {e}")
            raise DatabaseError("Failed to delete document") from e
        return result.deleted_count > 0
