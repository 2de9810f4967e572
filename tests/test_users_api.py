"""
User API tests - REST CRUD, validation and uniqueness.
"""

from datetime import datetime

import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import PyMongoError

from storeapi.db.repositories.user_repository import UserRepository
from storeapi.db.session import get_db
from storeapi.main import app
from storeapi.services.user_service import UserService
from storeapi.validation.identifiers import is_valid_id


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.mark.asyncio
async def test_list_users_empty(client: AsyncClient):
    response = await client.get("/api/users")
    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 0, "data": []}


@pytest.mark.asyncio
async def test_create_user_assigns_id_and_defaults(client: AsyncClient):
    response = await client.post(
        "/api/users",
        json={"name": "  Ada Lovelace ", "email": " Ada@Example.COM "},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    user = body["data"]
    assert is_valid_id(user["id"])
    assert user["name"] == "Ada Lovelace"
    assert user["email"] == "ada@example.com"
    assert user["age"] is None
    assert user["role"] == "user"
    assert user["createdAt"] == user["updatedAt"]


@pytest.mark.asyncio
async def test_create_then_list_and_get(client: AsyncClient, created_user: dict):
    listed = (await client.get("/api/users")).json()
    assert listed["count"] == 1
    assert listed["data"][0]["id"] == created_user["id"]

    response = await client.get(f"/api/users/{created_user['id']}")
    assert response.status_code == 200
    assert response.json()["data"] == created_user


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"email": "a@b.co"}, "Name and email are required"),
        ({"name": "A"}, "Name and email are required"),
        ({"name": "   ", "email": "a@b.co"}, "Name and email are required"),
        ({"name": "A", "email": "not-an-email"}, "Invalid email format"),
        ({"name": "A", "email": "a@b"}, "Invalid email format"),
        ({"name": "A", "email": "a@b.co", "age": 151}, "Age must be between 0 and 150"),
        ({"name": "A", "email": "a@b.co", "age": -1}, "Age must be between 0 and 150"),
    ],
)
async def test_create_user_validation(client: AsyncClient, db, payload: dict, message: str):
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": message}
    assert await db["users"].count_documents({}) == 0


@pytest.mark.asyncio
async def test_create_user_wrong_type_is_bad_request(client: AsyncClient):
    response = await client.post("/api/users", json={"name": "A", "email": "a@b.co", "age": "old"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request payload"
    assert body["error"].startswith("age")


@pytest.mark.asyncio
async def test_duplicate_email_conflicts_regardless_of_case(client: AsyncClient, created_user: dict):
    response = await client.post("/api/users", json={"name": "Other", "email": "TEST@Example.com"})
    assert response.status_code == 409
    assert response.json()["message"] == "User with this email already exists"


@pytest.mark.asyncio
async def test_unique_index_closes_check_then_act_race(client: AsyncClient, created_user: dict, monkeypatch):
    """A create that slips past the lookup is still rejected by the store."""

    async def lookup_misses(self, email, exclude_id=None):
        return None

    monkeypatch.setattr(UserRepository, "get_by_email", lookup_misses)
    response = await client.post("/api/users", json={"name": "Other", "email": "test@example.com"})
    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["get", "put", "delete"])
async def test_malformed_id_is_bad_request(client: AsyncClient, method: str):
    kwargs = {"json": {"name": "X"}} if method == "put" else {}
    response = await getattr(client, method)("/api/users/abc", **kwargs)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user ID format"


@pytest.mark.asyncio
async def test_get_unknown_user(client: AsyncClient):
    response = await client.get(f"/api/users/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "User not found"}


@pytest.mark.asyncio
async def test_update_user_changes_only_given_fields(client: AsyncClient, created_user: dict):
    response = await client.put(f"/api/users/{created_user['id']}", json={"name": "Renamed", "role": "admin"})
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["name"] == "Renamed"
    assert updated["role"] == "admin"
    assert updated["email"] == created_user["email"]
    assert updated["age"] == created_user["age"]
    assert updated["id"] == created_user["id"]
    assert updated["createdAt"] == created_user["createdAt"]
    assert _ts(updated["updatedAt"]) > _ts(created_user["updatedAt"])


@pytest.mark.asyncio
async def test_consecutive_updates_strictly_increase_updated_at(client: AsyncClient, created_user: dict):
    url = f"/api/users/{created_user['id']}"
    first = (await client.put(url, json={"age": 31})).json()["data"]
    second = (await client.put(url, json={"age": 32})).json()["data"]
    assert _ts(second["updatedAt"]) > _ts(first["updatedAt"]) > _ts(created_user["updatedAt"])


@pytest.mark.asyncio
async def test_update_with_empty_body_reports_no_changes(client: AsyncClient, created_user: dict):
    response = await client.put(f"/api/users/{created_user['id']}", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "No changes made to user"


@pytest.mark.asyncio
async def test_update_with_identical_values_reports_no_changes(client: AsyncClient, created_user: dict):
    response = await client.put(
        f"/api/users/{created_user['id']}",
        json={"name": "Test User", "email": "TEST@example.com"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "No changes made to user"


@pytest.mark.asyncio
async def test_update_can_clear_age(client: AsyncClient, created_user: dict):
    response = await client.put(f"/api/users/{created_user['id']}", json={"age": None})
    assert response.status_code == 200
    assert response.json()["data"]["age"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"email": "broken"}, "Invalid email format"),
        ({"age": 200}, "Age must be between 0 and 150"),
        ({"name": "  "}, "Name cannot be empty"),
    ],
)
async def test_update_user_validation(client: AsyncClient, created_user: dict, payload: dict, message: str):
    response = await client.put(f"/api/users/{created_user['id']}", json=payload)
    assert response.status_code == 400
    assert response.json()["message"] == message


@pytest.mark.asyncio
async def test_update_email_taken_by_another_user(client: AsyncClient, created_user: dict):
    other = (await client.post("/api/users", json={"name": "Other", "email": "other@example.com"})).json()["data"]
    response = await client.put(f"/api/users/{other['id']}", json={"email": "Test@Example.com"})
    assert response.status_code == 409
    assert response.json()["message"] == "Email already in use by another user"


@pytest.mark.asyncio
async def test_update_unknown_user_checks_existence_before_rules(client: AsyncClient):
    response = await client.put(f"/api/users/{ObjectId()}", json={"age": 999})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_user_then_get_is_not_found(client: AsyncClient, created_user: dict):
    url = f"/api/users/{created_user['id']}"
    response = await client.delete(url)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User deleted successfully"
    assert body["data"] == {"id": created_user["id"]}

    assert (await client.get(url)).status_code == 404
    assert (await client.delete(url)).status_code == 404


@pytest.mark.asyncio
async def test_store_fault_is_internal_error(client: AsyncClient, monkeypatch):
    async def broken(self):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(UserRepository, "get_many", broken)
    response = await client.get("/api/users")
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Error fetching users",
        "error": "connection reset",
    }


@pytest.mark.asyncio
async def test_unique_index_rejects_update_to_taken_email(client: AsyncClient, created_user: dict, monkeypatch):
    """An email change that slips past the lookup is still rejected by the store."""
    other = (await client.post("/api/users", json={"name": "Other", "email": "other@example.com"})).json()["data"]

    async def lookup_misses(self, email, exclude_id=None):
        return None

    monkeypatch.setattr(UserRepository, "get_by_email", lookup_misses)
    response = await client.put(f"/api/users/{other['id']}", json={"email": "test@example.com"})
    assert response.status_code == 409
    assert response.json()["message"] == "Email already in use by another user"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, repo_method, message",
    [
        ("post", "add", "Error creating user"),
        ("put", "set_fields", "Error updating user"),
        ("delete", "delete", "Error deleting user"),
    ],
)
async def test_store_fault_on_mutation_is_internal_error(
    client: AsyncClient, created_user: dict, monkeypatch, method, repo_method, message
):
    async def broken(self, *args):
        raise PyMongoError("not primary")

    monkeypatch.setattr(UserRepository, repo_method, broken)
    if method == "post":
        response = await client.post("/api/users", json={"name": "New", "email": "new@example.com"})
    elif method == "put":
        response = await client.put(f"/api/users/{created_user['id']}", json={"age": 45})
    else:
        response = await client.delete(f"/api/users/{created_user['id']}")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": message, "error": "not primary"}


@pytest.mark.asyncio
async def test_malformed_stored_user_is_reported_in_envelope(client: AsyncClient, db):
    """A record written outside the API (no timestamps) cannot be shaped into a response."""
    result = await db["users"].insert_one({"name": "legacy", "email": "l@x.io"})

    response = await client.get("/api/users")
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Error fetching users"
    assert "createdAt" in body["error"]

    response = await client.get(f"/api/users/{result.inserted_id}")
    assert response.status_code == 500
    assert response.json()["message"] == "Error fetching user"


@pytest.mark.asyncio
async def test_unexpected_fault_is_reported_in_envelope(db, monkeypatch):
    async def crash(self):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(UserService, "list_all", crash)
    app.dependency_overrides[get_db] = lambda: db
    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/api/users")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"success": False, "message": "Internal server error", "error": "unexpected"}
