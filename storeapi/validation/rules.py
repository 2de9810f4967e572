"""
Validation rules per resource.

Each chain raises on the first failing rule, so a response carries exactly
one message. Store lookups (email uniqueness) come last in a chain, after
every check that can be answered from the payload alone.
"""

import re

from bson import ObjectId

from storeapi.core.errors import BadRequest, Conflict
from storeapi.db.repositories.user_repository import UserRepository
from storeapi.schemas.product import ProductCreate, ProductUpdate
from storeapi.schemas.user import UserCreate, UserUpdate
from storeapi.validation.normalizers import normalize_email

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_AGE, MAX_AGE = 0, 150
MIN_PRODUCT_NAME_LENGTH = 2


def _check_email_format(email: str) -> None:
    if not EMAIL_PATTERN.match(email.strip()):
        raise BadRequest("Invalid email format")


def _check_age(age: int | None) -> None:
    if age is not None and not MIN_AGE <= age <= MAX_AGE:
        raise BadRequest(f"Age must be between {MIN_AGE} and {MAX_AGE}")


def _check_price(price: float) -> None:
    if price < 0:
        raise BadRequest("Price cannot be negative")


def _check_product_name(name: str) -> None:
    if len(name.strip()) < MIN_PRODUCT_NAME_LENGTH:
        raise BadRequest(f"Product name must be at least {MIN_PRODUCT_NAME_LENGTH} characters long")


async def validate_user_create(payload: UserCreate, users: UserRepository) -> None:
    if not payload.name or not payload.name.strip() or not payload.email:
        raise BadRequest("Name and email are required")
    _check_email_format(payload.email)
    _check_age(payload.age)
    if await users.get_by_email(normalize_email(payload.email)):
        raise Conflict("User with this email already exists")


async def validate_user_update(payload: UserUpdate, users: UserRepository, user_id: ObjectId) -> None:
    """Runs after the existence check; only supplied fields are validated."""
    if payload.name is not None and not payload.name.strip():
        raise BadRequest("Name cannot be empty")
    if payload.email:
        _check_email_format(payload.email)
        if await users.get_by_email(normalize_email(payload.email), exclude_id=user_id):
            raise Conflict("Email already in use by another user")
    _check_age(payload.age)


def validate_product_create(payload: ProductCreate) -> None:
    if not payload.name or payload.price is None:
        raise BadRequest("Name and price are required")
    _check_price(payload.price)
    _check_product_name(payload.name)


def validate_product_update(payload: ProductUpdate) -> None:
    """Runs after the existence check; only supplied fields are validated."""
    if payload.price is not None:
        _check_price(payload.price)
    if payload.name:
        _check_product_name(payload.name)
