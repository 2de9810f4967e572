"""
Shared BDD fixtures and steps (pytest-bdd).
Steps drive the app through FastAPI's synchronous TestClient.
"""

import json

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pytest_bdd import given, parsers, then, when

from storeapi.db.session import get_db
from storeapi.main import app


@pytest.fixture
def api():
    db = AsyncMongoMockClient()[f"storeapi_bdd_{ObjectId()}"]
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@given("I am logged in")
def logged_in(api: TestClient):
    credentials = {"username": "bdd", "password": "password123"}
    assert api.post("/api/users/register", json=credentials).status_code == 201
    assert api.post("/api/users/login", json=credentials).status_code == 200


@when(parsers.parse('I send GET "{path}"'), target_fixture="response")
def send_get(api: TestClient, path: str):
    return api.get(path)


@when(parsers.parse("I send POST \"{path}\" with body '{body}'"), target_fixture="response")
def send_post(api: TestClient, path: str, body: str):
    return api.post(path, json=json.loads(body))


@then(parsers.parse("the response status should be {status:d}"))
def response_status(response, status: int):
    assert response.status_code == status, response.text


@then(parsers.parse('the response message should be "{text}"'))
def response_message(response, text: str):
    assert response.json()["message"] == text


@then(parsers.parse('the response message should contain "{text}"'))
def response_message_contains(response, text: str):
    assert text in response.json()["message"]


@then(parsers.parse('the response field "{field}" should be {value}'))
def response_field(response, field: str, value: str):
    current = response.json()
    for key in field.split("."):
        current = current[key]
    assert current == json.loads(value)
