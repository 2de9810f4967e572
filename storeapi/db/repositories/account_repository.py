"""
Account repository - login credentials, kept apart from the user resource.
"""

from storeapi.db.base import ACCOUNTS
from storeapi.db.repositories.base_repository import BaseRepository, Document


class AccountRepository(BaseRepository):
    collection_name = ACCOUNTS

    async def get_by_username(self, username: str) -> Document | None:
        """Find account by username - used for registration and login."""
        return await self.collection.find_one({"username": username})
