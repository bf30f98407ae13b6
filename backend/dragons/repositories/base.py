"""
Base Repository Pattern

Provides a generic, type-safe base class for all repositories.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import ReturnDocument

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        T: The Pydantic model class this repository manages

    Usage:
        class UserRepository(BaseRepository[User]):
            collection_name = "users"
            model_class = User
    """

    # Subclasses must define these
    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, data: Optional[Dict[str, Any]]) -> Optional[T]:
        """Convert a raw document to a model instance."""
        if data is None:
            return None
        return self.model_class(**data)

    def _to_model_list(self, docs: List[Dict[str, Any]]) -> List[T]:
        return [self.model_class(**doc) for doc in docs]

    async def get_by_id(self, id: str) -> Optional[T]:
        """Get a document by ID and return as model instance."""
        data = await self.collection.find_one({"_id": id})
        return self._to_model(data)

    async def get_raw_by_id(
        self,
        id: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"_id": id}, projection)

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        data = await self.collection.find_one(query)
        return self._to_model(data)

    async def find_many(
        self,
        query: Dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = 1,
    ) -> List[T]:
        """Find multiple documents and return as model instances."""
        cursor = self.collection.find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        cursor = cursor.skip(skip).limit(limit)
        docs = await cursor.to_list(limit)
        return self._to_model_list(docs)

    async def find_raw_by_ids(
        self,
        ids: List[str],
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch several documents in one round-trip."""
        if not ids:
            return []
        cursor = self.collection.find({"_id": {"$in": list(ids)}}, projection)
        return await cursor.to_list(None)

    async def exists(self, query: Dict[str, Any]) -> bool:
        """Existence-only lookup; fetches nothing but the id."""
        return await self.collection.find_one(query, {"_id": 1}) is not None

    async def exists_by_id(self, id: str) -> bool:
        return await self.exists({"_id": id})

    async def create(self, model: T) -> T:
        """Create a new document from a model instance."""
        await self.collection.insert_one(model.model_dump(by_alias=True))
        return model

    async def update(self, id: str, update_data: Dict[str, Any]) -> Optional[T]:
        """Update a document by ID and return the updated model."""
        if not update_data:
            return await self.get_by_id(id)
        data = await self.collection.find_one_and_update(
            {"_id": id},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(data)

    async def update_where(self, query: Dict[str, Any], update_ops: Dict[str, Any]) -> Optional[T]:
        """
        Apply raw update operators to the single document matching query.

        Returns the updated model, or None when nothing matched. The match and
        the write are one atomic operation, which is what the conditional
        updates of the subclasses rely on.
        """
        data = await self.collection.find_one_and_update(
            query,
            update_ops,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(data)

    async def delete(self, id: str) -> bool:
        """Delete a document by ID."""
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count > 0
