"""Integration tests for first-run setup and health endpoints."""

import pytest

from dashboard.database import get_db

from tests.fakes import FakeDatabase
from tests.helpers import basic_auth


@pytest.fixture
def offline_client(app, client):
    app.dependency_overrides[get_db] = lambda: FakeDatabase(offline=True)
    return client


class TestSetup:
    def test_status_on_empty_database(self, client):
        response = client.get("/api/setup/status")

        assert response.status_code == 200
        assert response.json() == {
            "status": "online",
            "databaseConnected": True,
            "usersCount": 0,
            "adminUserExists": False,
            "databaseName": "test_dashboard",
        }

    def test_status_after_first_admin(self, client, admin, alice):
        body = client.get("/api/setup/status").json()

        assert body["usersCount"] == 2
        assert body["adminUserExists"] is True

    def test_status_when_database_is_down(self, offline_client):
        response = offline_client.get("/api/setup/status")

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["databaseConnected"] is False
        assert "No servers found" in body["error"]

    @pytest.mark.parametrize("path", ["/api/setup/first-admin", "/api/public-setup/first-admin"])
    def test_first_admin_defaults(self, client, path):
        response = client.post(path, json={"email": "root@example.com", "password": "root-secret"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "First admin user created successfully"
        assert body["email"] == "root@example.com"
        assert body["role"] == "Admin"

        user = client.get(f"/api/users/{body['userId']}").json()
        assert user["firstName"] == "Admin"
        assert user["lastName"] == "User"
        assert user["description"] == "Initial admin user"

    def test_first_admin_can_authenticate(self, client, admin):
        response = client.get(
            "/api/users/me", headers=basic_auth("admin@example.com", "admin-secret")
        )

        assert response.json()["role"] == "Admin"

    def test_first_admin_refused_once_users_exist(self, client, alice):
        response = client.post(
            "/api/public-setup/first-admin",
            json={"email": "late@example.com", "password": "late-secret"},
        )

        assert response.status_code == 409
        assert response.json() == {
            "message": "Users already exist in the system",
            "usersCount": 2,
        }

    def test_first_admin_validates_body(self, client):
        response = client.post(
            "/api/setup/first-admin", json={"email": "not-an-email", "password": "root-secret"}
        )

        assert response.status_code == 422


class TestHealth:
    def test_root_banner(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "/docs" in response.text

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["status"] == "online"
        assert body["environment"] == "test"
        assert "timestamp" in body

    def test_public_setup_health(self, client):
        body = client.get("/api/public-setup/health").json()

        assert body["status"] == "online"
        assert "environment" not in body

    def test_api_health_connected(self, client, alice):
        body = client.get("/api/health").json()

        assert body["databaseConnection"] == "connected"
        assert body["userCount"] == 2
        assert body["databaseName"] == "test_dashboard"

    def test_api_health_reports_failures_with_200(self, offline_client):
        response = offline_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["databaseConnection"] == "error"
        assert body["errorType"] == "ServerSelectionTimeoutError"
        assert "errorMessage" in body


class TestDatabaseErrors:
    def test_unexpected_database_error_is_500(self, offline_client):
        response = offline_client.get("/api/users/me", headers=basic_auth("a@example.com", "pw"))

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}
