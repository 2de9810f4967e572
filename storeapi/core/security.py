"""
Security: password hashing and the session principal.
Challenge: No plain-text passwords; the session cookie carries only an account id.
"""

from fastapi import Request
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_ACCOUNT_KEY = "account_id"

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """One-way hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def login_session(request: Request, account_id: str) -> None:
    """Serialize the principal into the signed session cookie."""
    request.session.clear()
    request.session[SESSION_ACCOUNT_KEY] = account_id


def session_account_id(request: Request) -> str | None:
    return request.session.get(SESSION_ACCOUNT_KEY)


def logout_session(request: Request) -> None:
    request.session.clear()
