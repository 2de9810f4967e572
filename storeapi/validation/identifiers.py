"""Document identifier checks, done before any store lookup."""

from bson import ObjectId

from storeapi.core.errors import BadRequest


def is_valid_id(raw: str) -> bool:
    """Structural check only (24 hex characters); says nothing about existence."""
    return isinstance(raw, str) and ObjectId.is_valid(raw)


def parse_id(raw: str, resource: str) -> ObjectId:
    """Parse a path identifier into the store's native type or fail with 400."""
    if not is_valid_id(raw):
        raise BadRequest(f"Invalid {resource} ID format")
    return ObjectId(raw)
