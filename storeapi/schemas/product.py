"""Product request/response schemas - REST API contract."""

from pydantic import FiniteFloat

from storeapi.schemas.base import CamelModel, DocumentResponse


class ProductCreate(CamelModel):
    name: str | None = None
    description: str | None = None
    # NaN and Infinity are valid JSON floats for the parser but not prices
    price: FiniteFloat | None = None
    category: str | None = None
    in_stock: bool | None = None


class ProductUpdate(ProductCreate):
    pass


class ProductResponse(DocumentResponse):
    name: str
    description: str = ""
    price: float
    category: str = "general"
    in_stock: bool = True
