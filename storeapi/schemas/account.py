"""Account schemas - registration, login, session principal."""

from pydantic import BaseModel, Field

from storeapi.schemas.base import CamelModel, ObjectIdStr


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


class RegisteredResponse(CamelModel):
    user_id: ObjectIdStr


class AccountResponse(BaseModel):
    id: ObjectIdStr = Field(validation_alias="_id", serialization_alias="id")
    username: str

    model_config = {"populate_by_name": True, "extra": "ignore"}
