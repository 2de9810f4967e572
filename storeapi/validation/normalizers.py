"""
Field normalization: raw request fields to canonical stored form.
Pure functions, no store access. Absent fields stay absent (UNSET), so an
omitted inStock never turns into False.
"""

from datetime import datetime
from typing import Any

from storeapi.schemas.product import ProductCreate, ProductUpdate
from storeapi.schemas.user import UserCreate, UserUpdate
from storeapi.validation.patch import UNSET, Patch

DEFAULT_ROLE = "user"
DEFAULT_CATEGORY = "general"


def clean_text(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def normalize_email(value: str) -> str:
    return value.strip().lower()


def coerce_price(value: Any) -> float | None:
    return float(value) if value is not None else None


def coerce_age(value: Any) -> int | None:
    return int(value) if value is not None else None


def coerce_flag(value: Any) -> bool | None:
    return bool(value) if value is not None else None


def _provided(payload, field: str) -> bool:
    """Explicitly present in the request body (null counts as present)."""
    return field in payload.model_fields_set


def new_user_document(payload: UserCreate, now: datetime) -> dict[str, Any]:
    return {
        "name": clean_text(payload.name),
        "email": normalize_email(payload.email),
        "age": coerce_age(payload.age),
        "role": clean_text(payload.role) or DEFAULT_ROLE,
        "createdAt": now,
        "updatedAt": now,
    }


def user_patch(payload: UserUpdate) -> Patch:
    return Patch(
        name=clean_text(payload.name) if payload.name is not None else UNSET,
        email=normalize_email(payload.email) if payload.email else UNSET,
        # an explicit null clears the age
        age=coerce_age(payload.age) if _provided(payload, "age") else UNSET,
        role=clean_text(payload.role) if payload.role and payload.role.strip() else UNSET,
    )


def new_product_document(payload: ProductCreate, now: datetime) -> dict[str, Any]:
    in_stock = coerce_flag(payload.in_stock)
    return {
        "name": clean_text(payload.name),
        "description": clean_text(payload.description) or "",
        "price": coerce_price(payload.price),
        "category": clean_text(payload.category) or DEFAULT_CATEGORY,
        "inStock": True if in_stock is None else in_stock,
        "createdAt": now,
        "updatedAt": now,
    }


def product_patch(payload: ProductUpdate) -> Patch:
    return Patch(
        name=clean_text(payload.name) if payload.name else UNSET,
        description=(clean_text(payload.description) or "") if _provided(payload, "description") else UNSET,
        price=coerce_price(payload.price) if payload.price is not None else UNSET,
        category=clean_text(payload.category) if payload.category and payload.category.strip() else UNSET,
        inStock=coerce_flag(payload.in_stock) if payload.in_stock is not None else UNSET,
    )
