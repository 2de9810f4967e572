"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
"""

from bson import ObjectId

from storeapi.db.base import USERS
from storeapi.db.repositories.base_repository import BaseRepository, Document


class UserRepository(BaseRepository):
    """User-specific queries. Emails are stored lower-cased, so lookups are exact."""

    collection_name = USERS

    async def get_by_email(self, email: str, exclude_id: ObjectId | None = None) -> Document | None:
        """Find a user by normalized email, optionally ignoring one user (self on update)."""
        query: Document = {"email": email}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return await self.collection.find_one(query)
