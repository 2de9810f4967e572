"""
Pytest fixtures - in-memory document store, client, logged-in session.
Challenge: Isolated tests; no real MongoDB needed.
"""

import os

# Settings are read at import time and the connection string has no default
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "storeapi_test")

import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from storeapi.db.session import ensure_indexes, get_db
from storeapi.main import app


@pytest_asyncio.fixture
async def db():
    # fresh database per test; mock clients may share one in-memory server
    database = AsyncMongoMockClient()[f"storeapi_test_{ObjectId()}"]
    await ensure_indexes(database)
    yield database


@pytest_asyncio.fixture
async def client(db):
    async def override_get_db():
        return db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient) -> AsyncClient:
    """Same client, with a session cookie from a registered and logged-in account."""
    credentials = {"username": "alice", "password": "password123"}
    response = await client.post("/api/users/register", json=credentials)
    assert response.status_code == 201
    response = await client.post("/api/users/login", json=credentials)
    assert response.status_code == 200
    return client


@pytest_asyncio.fixture
async def created_user(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/users",
        json={"name": "Test User", "email": "test@example.com", "age": 30},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest_asyncio.fixture
async def created_product(auth_client: AsyncClient) -> dict:
    response = await auth_client.post(
        "/api/products",
        json={"name": "Notebook", "description": "A5, dotted", "price": 4.5, "category": "stationery"},
    )
    assert response.status_code == 201
    return response.json()["data"]
