"""
Base repository - generic document access over one collection.
Challenge: Consistent data access, testability via in-memory databases, store calls in one place.
"""

from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.results import UpdateResult

Document = dict[str, Any]


class BaseRepository:
    """Generic async repository. Subclasses bind a collection and add lookups."""

    collection_name: str

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    async def get_by_id(self, id: ObjectId) -> Document | None:
        """Fetch single document by _id. Used for detail endpoints and existence checks."""
        return await self.collection.find_one({"_id": id})

    async def get_many(self) -> list[Document]:
        """Every document in natural (store) order."""
        return await self.collection.find().to_list(length=None)

    async def add(self, document: Document) -> Document:
        """Insert and return the document with its store-assigned _id."""
        result = await self.collection.insert_one(document)
        return {"_id": result.inserted_id, **{k: v for k, v in document.items() if k != "_id"}}

    async def set_fields(self, id: ObjectId, fields: Document) -> UpdateResult:
        """Partial update: only the given fields are replaced."""
        return await self.collection.update_one({"_id": id}, {"$set": fields})

    async def delete(self, id: ObjectId) -> int:
        """Remove document. Returns the number of deleted documents."""
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count
