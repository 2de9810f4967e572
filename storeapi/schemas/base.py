"""Shared schema pieces: camelCase wire format, string ids, response envelope."""

from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from storeapi.db.base import as_utc

# Store ids (ObjectId) leave the API as plain strings
ObjectIdStr = Annotated[str, BeforeValidator(str)]
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (matches the stored field names)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentResponse(CamelModel):
    """Base for anything read back from the store: `_id` in, `id` out."""

    id: ObjectIdStr = Field(validation_alias="_id", serialization_alias="id")
    created_at: UtcDatetime
    updated_at: UtcDatetime


class Envelope(BaseModel, Generic[DataT]):
    """Uniform response wrapper. Keys left as None are omitted from the JSON."""

    success: bool = True
    message: str | None = None
    data: DataT | None = None
    count: int | None = None
    error: str | None = None

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class DeletedResponse(BaseModel):
    id: str
