"""
FastAPI dependencies - injection for services and the session guard (SOLID: Dependency Inversion).
Challenge: Reusable auth, consistent error responses.
"""

from typing import Annotated

from fastapi import Depends, Request

from storeapi.core.errors import Unauthorized
from storeapi.core.security import logout_session, session_account_id
from storeapi.db.repositories import AccountRepository, ProductRepository, UserRepository
from storeapi.db.session import Database
from storeapi.schemas.account import AccountResponse
from storeapi.services.account_service import AccountService
from storeapi.services.product_service import ProductService
from storeapi.services.user_service import UserService


def get_user_service(db: Database) -> UserService:
    return UserService(UserRepository(db))


def get_product_service(db: Database) -> ProductService:
    return ProductService(ProductRepository(db))


def get_account_service(db: Database) -> AccountService:
    return AccountService(AccountRepository(db))


Users = Annotated[UserService, Depends(get_user_service)]
Products = Annotated[ProductService, Depends(get_product_service)]
Accounts = Annotated[AccountService, Depends(get_account_service)]


async def get_current_account(request: Request, accounts: Accounts) -> AccountResponse:
    """Resolve the session to an account. Raises 401 if there is none."""
    account = await accounts.resolve(session_account_id(request))
    if account is None:
        # stale cookie for a deleted account: drop it
        logout_session(request)
        raise Unauthorized("Unauthorized")
    return account


CurrentAccount = Annotated[AccountResponse, Depends(get_current_account)]
