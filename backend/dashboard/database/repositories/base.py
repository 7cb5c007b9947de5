"""
BaseRepository

Base class for all MongoDB repositories providing common CRUD operations.

Methods:
- create(model) -> model: Insert document, fill in the generated id
- find_by_id(id) -> Optional[model]: Find single document
- find_one(filter) / find_many(filter) / find_all()
- count(filter) -> int
- replace(id, model) -> bool: Replace whole document
- delete(id) -> bool: Delete document

Subclasses set collection_name and model, and add specialized queries.
Ids that are not valid ObjectIds behave like ids of missing documents.
"""

import logging
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from dashboard.models.base import MongoModel, parse_object_id, utc_now

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=MongoModel)


class BaseRepository(Generic[ModelT]):
    """Pass-through wrapper over one Motor collection."""

    collection_name: ClassVar[str]
    model: ClassVar[Type[MongoModel]]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    async def find_all(self) -> List[ModelT]:
        return await self.find_many({})

    async def find_many(self, filter: Dict[str, Any]) -> List[ModelT]:
        documents = await self.collection.find(filter).to_list(length=None)
        return [self.model.from_mongo(doc) for doc in documents]

    async def find_one(self, filter: Dict[str, Any]) -> Optional[ModelT]:
        document = await self.collection.find_one(filter)
        return self.model.from_mongo(document)

    async def find_by_id(self, id: str) -> Optional[ModelT]:
        oid = parse_object_id(id)
        if oid is None:
            return None
        return await self.find_one({"_id": oid})

    async def count(self, filter: Optional[Dict[str, Any]] = None) -> int:
        return await self.collection.count_documents(filter or {})

    async def create(self, model: ModelT) -> ModelT:
        """Insert a new document, stamping both timestamps."""
        now = utc_now()
        model.created_date = now
        model.modified_date = now
        result = await self.collection.insert_one(model.to_mongo())
        model.id = str(result.inserted_id)
        logger.debug(f"Inserted {self.collection_name}/{model.id}")
        return model

    async def replace(self, id: str, model: ModelT) -> bool:
        """Replace the stored document, stamping modifiedDate."""
        oid = parse_object_id(id)
        if oid is None:
            return False
        model.id = id
        model.modified_date = utc_now()
        result = await self.collection.replace_one({"_id": oid}, model.to_mongo())
        return result.matched_count > 0

    async def delete(self, id: str) -> bool:
        oid = parse_object_id(id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
