"""
Session endpoints - registration, login and logout (signed cookie sessions).
Challenge: Secure auth, validation, clear status codes.
"""

import logging

from fastapi import APIRouter, Request, status

from storeapi.core.dependencies import Accounts, CurrentAccount
from storeapi.core.errors import InternalError
from storeapi.core.security import login_session, logout_session
from storeapi.schemas.account import AccountResponse, Credentials, RegisteredResponse
from storeapi.schemas.base import Envelope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=Envelope[RegisteredResponse], status_code=status.HTTP_201_CREATED)
async def register(accounts: Accounts, data: Credentials):
    """Create login credentials. Returns the new account id only."""
    registered = await accounts.register(data)
    return Envelope[RegisteredResponse](message="User registered successfully", data=registered)


@router.post("/login", response_model=Envelope[AccountResponse])
async def login(request: Request, accounts: Accounts, data: Credentials):
    """Authenticate and start a session."""
    account = await accounts.authenticate(data)
    login_session(request, account.id)
    return Envelope[AccountResponse](message="Logged in successfully", data=account)


@router.post("/logout", response_model=Envelope[None])
async def logout(request: Request, account: CurrentAccount):
    try:
        logout_session(request)
    except Exception as exc:
        logger.exception("Logout failed for %s", account.username)
        raise InternalError("Error logging out", error=str(exc)) from exc
    return Envelope[None](message="Logged out successfully")
