"""
MongoDB client management.
Challenge: Connection pooling, fail fast at startup, request-scoped access.
Design: The database handle lives on app.state and reaches handlers only
through the get_db dependency (no module-level connection).
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from storeapi.config import Settings
from storeapi.core.errors import ServiceUnavailable
from storeapi.db.base import ACCOUNTS, USERS

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Client with a bounded connection pool and short server selection timeout."""
    return AsyncIOMotorClient(
        settings.mongodb_uri,
        maxPoolSize=settings.mongo_max_pool_size,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        socketTimeoutMS=settings.mongo_socket_timeout_ms,
        tz_aware=True,
    )


async def connect_to_mongo(settings: Settings) -> tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """Connect and ping. Raises if the server is unreachable, aborting startup."""
    client = create_client(settings)
    await client.admin.command("ping")
    db = client[settings.db_name]
    logger.info("Connected to MongoDB, database=%s", settings.db_name)
    return client, db


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Unique indexes back the lookup-before-write checks against concurrent writers."""
    await db[USERS].create_index("email", unique=True)
    await db[ACCOUNTS].create_index("username", unique=True)
    logger.info("Unique indexes ensured on %s.email and %s.username", USERS, ACCOUNTS)


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """Database handle attached at startup. 503 when the app runs without one."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ServiceUnavailable("Database not connected")
    return db


# Type alias for FastAPI dependency injection
Database = Annotated[AsyncIOMotorDatabase, Depends(get_db)]
