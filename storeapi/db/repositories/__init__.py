# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from storeapi.db.repositories.account_repository import AccountRepository
from storeapi.db.repositories.product_repository import ProductRepository
from storeapi.db.repositories.user_repository import UserRepository

__all__ = ["AccountRepository", "ProductRepository", "UserRepository"]
