"""
Shared lifecycle for document resources (list, get, delete) and store fault mapping.
Challenge: Same request shape for every resource; controllers stay thin.
Design: Services receive repositories, never a global connection.
"""

import logging
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from bson import ObjectId
from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError

from storeapi.core.errors import InternalError, NotFound
from storeapi.db.repositories.base_repository import BaseRepository, Document
from storeapi.schemas.base import DeletedResponse
from storeapi.validation.identifiers import parse_id

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)
RepoT = TypeVar("RepoT", bound=BaseRepository)


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Report any store fault as a 500 carrying the underlying message. No retries.

    A stored document that no longer fits its response model (inserted or
    edited outside the API) counts as a store fault too.
    """
    try:
        yield
    except (PyMongoError, ValidationError) as exc:
        logger.warning("%s: %s", message, exc)
        raise InternalError(message, error=str(exc)) from exc


class ResourceService(Generic[RepoT, ResponseT]):
    """List / get / delete for one collection; subclasses add create and update."""

    resource: str
    plural: str
    response_model: type[ResponseT]

    def __init__(self, repo: RepoT):
        self.repo = repo

    def parse_id(self, raw_id: str) -> ObjectId:
        return parse_id(raw_id, self.resource)

    def not_found(self) -> NotFound:
        return NotFound(f"{self.resource.capitalize()} not found")

    def to_response(self, document: Document) -> ResponseT:
        return self.response_model.model_validate(document)

    async def require(self, id: ObjectId) -> Document:
        """Existence check. Raises 404 when the id is well-formed but unknown."""
        document = await self.repo.get_by_id(id)
        if document is None:
            raise self.not_found()
        return document

    async def list_all(self) -> list[ResponseT]:
        with store_errors(f"Error fetching {self.plural}"):
            documents = await self.repo.get_many()
            return [self.to_response(d) for d in documents]

    async def get(self, raw_id: str) -> ResponseT:
        id = self.parse_id(raw_id)
        with store_errors(f"Error fetching {self.resource}"):
            document = await self.require(id)
            return self.to_response(document)

    async def delete(self, raw_id: str) -> DeletedResponse:
        id = self.parse_id(raw_id)
        with store_errors(f"Error deleting {self.resource}"):
            await self.require(id)
            deleted = await self.repo.delete(id)
        if not deleted:
            # removed by a concurrent request between the two calls
            raise self.not_found()
        return DeletedResponse(id=str(id))
