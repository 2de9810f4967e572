"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from storeapi.api.endpoints import auth, health, products, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
# session routes first so /users/register etc. never reach /users/{user_id}
api_router.include_router(auth.router, prefix="/users", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
