"""Shared fixtures: cheap Argon2 settings, an in-memory database and a test client."""

import os

# Minimum Argon2 cost; must be set before the settings are first read
os.environ.setdefault("PASSWORDS__TIME_COST", "1")
os.environ.setdefault("PASSWORDS__MEMORY_COST", "8")
os.environ.setdefault("PASSWORDS__PARALLELISM", "1")
os.environ.setdefault("LOGFIRE_TOKEN", "")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from dashboard.auth.passwords import get_password_manager
from dashboard.config import get_settings
from dashboard.database import get_db

from tests.fakes import FakeDatabase
from tests.helpers import basic_auth


@pytest.fixture(autouse=True)
def clear_cached_settings():
    get_settings.cache_clear()
    get_password_manager.cache_clear()
    yield
    get_settings.cache_clear()
    get_password_manager.cache_clear()


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def app(fake_db):
    from dashboard.api.server import create_app

    application = create_app()
    application.dependency_overrides[get_db] = lambda: fake_db
    return application


@pytest.fixture
def client(app):
    # Not entered as a context manager: the lifespan would dial MongoDB
    return TestClient(app)


def _register(client, email, password, first_name, last_name, headers=None):
    response = client.post(
        "/api/users",
        json={
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        },
        headers=headers or {},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return {
        "id": body["id"],
        "email": email,
        "password": password,
        "headers": basic_auth(email, password),
    }


@pytest.fixture
def admin(client):
    response = client.post(
        "/api/setup/first-admin",
        json={"email": "admin@example.com", "password": "admin-secret"},
    )
    assert response.status_code == 201, response.text
    return {
        "id": response.json()["userId"],
        "email": "admin@example.com",
        "password": "admin-secret",
        "headers": basic_auth("admin@example.com", "admin-secret"),
    }


@pytest.fixture
def alice(client, admin):
    return _register(client, "alice@example.com", "alice-secret", "Alice", "Smith")


@pytest.fixture
def bob(client, admin):
    return _register(client, "bob@example.com", "bob-secret", "Bob", "Jones")
