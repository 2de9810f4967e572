"""
Account service - credential registration and login.
Challenge: Unique usernames, hashed passwords, no hash ever leaves the service.
"""

import logging

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from storeapi.core.errors import BadRequest, Conflict, Unauthorized
from storeapi.core.security import MAX_PASSWORD_BYTES, hash_password, verify_password
from storeapi.db.base import utcnow
from storeapi.db.repositories.account_repository import AccountRepository
from storeapi.schemas.account import AccountResponse, Credentials, RegisteredResponse
from storeapi.services.base import store_errors
from storeapi.validation.identifiers import is_valid_id

logger = logging.getLogger(__name__)


def _require_credentials(data: Credentials) -> tuple[str, str]:
    username = (data.username or "").strip()
    if not username or not data.password:
        raise BadRequest("Username and password are required")
    return username, data.password


class AccountService:
    def __init__(self, repo: AccountRepository):
        self.repo = repo

    async def register(self, data: Credentials) -> RegisteredResponse:
        username, password = _require_credentials(data)
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise BadRequest(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        with store_errors("Error registering user"):
            if await self.repo.get_by_username(username):
                raise Conflict("Username already exists")
            account = {
                "username": username,
                "passwordHash": hash_password(password),
                "createdAt": utcnow(),
            }
            try:
                account = await self.repo.add(account)
            except DuplicateKeyError as exc:
                raise Conflict("Username already exists") from exc
        logger.info("Registered account %s", username)
        return RegisteredResponse(user_id=account["_id"])

    async def authenticate(self, data: Credentials) -> AccountResponse:
        """Verify credentials. Unknown user and wrong password are indistinguishable."""
        username, password = _require_credentials(data)
        with store_errors("Error logging in"):
            account = await self.repo.get_by_username(username)
        if not account or not verify_password(password, account["passwordHash"]):
            logger.info("Failed login for %s", username)
            raise Unauthorized("Invalid username or password")
        return AccountResponse.model_validate(account)

    async def resolve(self, account_id: str | None) -> AccountResponse | None:
        """Deserialize a session principal; None when the account no longer exists."""
        if not account_id or not is_valid_id(account_id):
            return None
        with store_errors("Error loading session"):
            account = await self.repo.get_by_id(ObjectId(account_id))
        return AccountResponse.model_validate(account) if account else None
