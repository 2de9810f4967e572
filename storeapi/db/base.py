"""
Collection names and timestamp helpers shared by all repositories.
"""

from datetime import datetime, timedelta, timezone

USERS = "users"
PRODUCTS = "products"
ACCOUNTS = "accounts"

# BSON dates have millisecond resolution
TIMESTAMP_RESOLUTION = timedelta(milliseconds=1)


def as_utc(value: datetime) -> datetime:
    """Stored dates may come back naive depending on the client; they are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    """Current UTC time truncated to what the store can hold."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def next_timestamp(previous: datetime | None) -> datetime:
    """A timestamp strictly later than `previous`, even within the same millisecond."""
    now = utcnow()
    if previous is not None and now <= as_utc(previous):
        return as_utc(previous) + TIMESTAMP_RESOLUTION
    return now
