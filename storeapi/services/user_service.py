"""
User service - lifecycle rules for the user resource.
"""

import logging

from pymongo.errors import DuplicateKeyError

from storeapi.core.errors import BadRequest, Conflict
from storeapi.db.base import next_timestamp, utcnow
from storeapi.db.repositories.user_repository import UserRepository
from storeapi.schemas.user import UserCreate, UserResponse, UserUpdate
from storeapi.services.base import ResourceService, store_errors
from storeapi.validation.normalizers import new_user_document, user_patch
from storeapi.validation.rules import validate_user_create, validate_user_update

logger = logging.getLogger(__name__)


class UserService(ResourceService[UserRepository, UserResponse]):
    resource = "user"
    plural = "users"
    response_model = UserResponse

    async def create(self, payload: UserCreate) -> UserResponse:
        with store_errors("Error creating user"):
            await validate_user_create(payload, self.repo)
            document = new_user_document(payload, utcnow())
            try:
                document = await self.repo.add(document)
            except DuplicateKeyError as exc:
                # lost the race against a concurrent create with the same email
                logger.info("Duplicate email rejected by unique index: %s", document["email"])
                raise Conflict("User with this email already exists") from exc
            return self.to_response(document)

    async def update(self, raw_id: str, payload: UserUpdate) -> UserResponse:
        id = self.parse_id(raw_id)
        with store_errors("Error updating user"):
            existing = await self.require(id)
            await validate_user_update(payload, self.repo, id)
            changes = user_patch(payload).changes_from(existing)
            if not changes:
                raise BadRequest("No changes made to user")
            fields = changes.to_set_document(updatedAt=next_timestamp(existing.get("updatedAt")))
            try:
                result = await self.repo.set_fields(id, fields)
            except DuplicateKeyError as exc:
                raise Conflict("Email already in use by another user") from exc
            if result.matched_count == 0:
                raise self.not_found()
            updated = await self.require(id)
            return self.to_response(updated)
