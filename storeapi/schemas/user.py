"""User request/response schemas - API contract.

Request models are deliberately loose (every field optional) so the rule
chain in storeapi.validation.rules can report the first failure with a
specific message instead of a generic validation error.
"""

from pydantic import BaseModel

from storeapi.schemas.base import DocumentResponse


class UserCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    age: int | None = None
    role: str | None = None


class UserUpdate(UserCreate):
    pass


class UserResponse(DocumentResponse):
    name: str
    email: str
    age: int | None = None
    role: str = "user"
