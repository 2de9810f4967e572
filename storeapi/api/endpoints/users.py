"""
User CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Design: Thin controller; the service holds the lifecycle and rules.
"""

from fastapi import APIRouter, status

from storeapi.core.dependencies import Users
from storeapi.schemas.base import DeletedResponse, Envelope
from storeapi.schemas.user import UserCreate, UserResponse, UserUpdate

router = APIRouter()


@router.get("", response_model=Envelope[list[UserResponse]])
async def list_users(users: Users):
    """All users in store order. No pagination."""
    data = await users.list_all()
    return Envelope[list[UserResponse]](count=len(data), data=data)


@router.get("/{user_id}", response_model=Envelope[UserResponse])
async def get_user(users: Users, user_id: str):
    return Envelope[UserResponse](data=await users.get(user_id))


@router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(users: Users, data: UserCreate):
    """Create user. Email is stored lower-cased and must be unique."""
    user = await users.create(data)
    return Envelope[UserResponse](message="User created successfully", data=user)


@router.put("/{user_id}", response_model=Envelope[UserResponse])
async def update_user(users: Users, user_id: str, data: UserUpdate):
    """Partial update: only fields present in the body change."""
    user = await users.update(user_id, data)
    return Envelope[UserResponse](message="User updated successfully", data=user)


@router.delete("/{user_id}", response_model=Envelope[DeletedResponse])
async def delete_user(users: Users, user_id: str):
    deleted = await users.delete(user_id)
    return Envelope[DeletedResponse](message="User deleted successfully", data=deleted)
