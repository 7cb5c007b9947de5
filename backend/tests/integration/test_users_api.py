"""
Integration tests for /api/users.

Critical security tests to prevent:
- Password hash leakage in responses
- Privilege escalation through the role field
- Users editing or deleting each other
"""

from unittest.mock import patch

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from tests.helpers import basic_auth


class TestListAndGet:
    def test_list_users_never_exposes_hashes(self, client, alice, bob):
        response = client.get("/api/users")

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert emails == {"admin@example.com", "alice@example.com", "bob@example.com"}
        for user in response.json():
            assert "passwordHash" not in user
            assert "password_hash" not in user

    def test_list_admins(self, client, admin, alice):
        response = client.get("/api/users/admins")

        assert [u["id"] for u in response.json()] == [admin["id"]]

    def test_get_user(self, client, alice):
        response = client.get(f"/api/users/{alice['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Alice"
        assert body["lastName"] == "Smith"
        assert body["role"] == "User"
        assert "createdDate" in body

    def test_get_missing_and_malformed_ids(self, client):
        assert client.get(f"/api/users/{ObjectId()}").status_code == 404
        assert client.get("/api/users/not-an-id").status_code == 404


class TestMe:
    def test_me_returns_caller(self, client, alice):
        response = client.get("/api/users/me", headers=alice["headers"])

        assert response.status_code == 200
        assert response.json()["id"] == alice["id"]

    def test_me_requires_credentials(self, client):
        response = client.get("/api/users/me")

        assert response.status_code == 401
        assert response.json() == {"detail": "Missing Authorization Header"}
        assert response.headers["WWW-Authenticate"] == 'Basic realm="dashboard"'

    def test_me_rejects_wrong_password(self, client, alice):
        response = client.get(
            "/api/users/me", headers=basic_auth(alice["email"], "wrong-password")
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    def test_me_rejects_other_schemes(self, client):
        response = client.get("/api/users/me", headers={"Authorization": "Bearer token"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid Authorization Header"}


class TestRegister:
    def test_register_returns_201_with_location(self, client, admin):
        response = client.post(
            "/api/users",
            json={
                "email": "carol@example.com",
                "password": "carol-secret",
                "firstName": "Carol",
                "lastName": "White",
                "description": "Designer",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert response.headers["Location"].endswith(f"/api/users/{body['id']}")
        assert body["description"] == "Designer"
        assert "passwordHash" not in body

    def test_password_is_stored_hashed(self, client, fake_db, alice):
        stored = fake_db["users"].documents[-1]

        assert stored["email"] == "alice@example.com"
        assert stored["passwordHash"].startswith("$argon2id$")
        assert "alice-secret" not in stored["passwordHash"]

    def test_duplicate_email_returns_existing_user(self, client, alice):
        response = client.post(
            "/api/users",
            json={
                "email": "alice@example.com",
                "password": "another",
                "firstName": "Other",
                "lastName": "Person",
            },
        )

        assert response.status_code == 409
        assert response.json()["id"] == alice["id"]
        assert "passwordHash" not in response.json()

    def test_role_ignored_for_anonymous_callers(self, client, admin):
        response = client.post(
            "/api/users",
            json={
                "email": "mallory@example.com",
                "password": "mallory-secret",
                "firstName": "Mallory",
                "lastName": "Evil",
                "role": "Admin",
            },
        )

        assert response.status_code == 201
        assert response.json()["role"] == "User"

    def test_admin_can_assign_role(self, client, admin):
        response = client.post(
            "/api/users",
            json={
                "email": "second-admin@example.com",
                "password": "second-secret",
                "firstName": "Second",
                "lastName": "Admin",
                "role": "Admin",
            },
            headers=admin["headers"],
        )

        assert response.status_code == 201
        assert response.json()["role"] == "Admin"

    def test_missing_fields_are_422(self, client):
        response = client.post("/api/users", json={"email": "x@example.com"})

        assert response.status_code == 422

    def test_setup_admin_only_on_empty_database(self, client):
        payload = {
            "email": "root@example.com",
            "password": "root-secret",
            "firstName": "Root",
            "lastName": "User",
        }

        first = client.post("/api/users/setup-admin", json=payload)
        second = client.post(
            "/api/users/setup-admin", json={**payload, "email": "root2@example.com"}
        )

        assert first.status_code == 201
        assert first.json()["role"] == "Admin"
        assert second.status_code == 409
        assert second.json()["usersCount"] == 1


class TestUpdateAndDelete:
    def update_payload(self, **overrides):
        payload = {
            "email": "alice@example.com",
            "firstName": "Alicia",
            "lastName": "Smith",
            "description": "Updated",
        }
        payload.update(overrides)
        return payload

    def test_user_updates_self(self, client, alice):
        response = client.put(
            f"/api/users/{alice['id']}", json=self.update_payload(), headers=alice["headers"]
        )

        assert response.status_code == 204
        assert client.get(f"/api/users/{alice['id']}").json()["firstName"] == "Alicia"
        # Password untouched by a profile update
        assert client.get("/api/users/me", headers=alice["headers"]).status_code == 200

    def test_user_cannot_promote_self(self, client, alice):
        client.put(
            f"/api/users/{alice['id']}",
            json=self.update_payload(role="Admin"),
            headers=alice["headers"],
        )

        assert client.get(f"/api/users/{alice['id']}").json()["role"] == "User"

    def test_admin_can_change_role(self, client, admin, alice):
        response = client.put(
            f"/api/users/{alice['id']}",
            json=self.update_payload(role="Admin"),
            headers=admin["headers"],
        )

        assert response.status_code == 204
        assert client.get(f"/api/users/{alice['id']}").json()["role"] == "Admin"

    def test_user_cannot_update_others(self, client, alice, bob):
        response = client.put(
            f"/api/users/{alice['id']}", json=self.update_payload(), headers=bob["headers"]
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "Not authorized to update this user"}

    def test_email_taken_by_other_user(self, client, alice, bob):
        response = client.put(
            f"/api/users/{alice['id']}",
            json=self.update_payload(email="bob@example.com"),
            headers=alice["headers"],
        )

        assert response.status_code == 409

    def test_update_missing_user(self, client, admin):
        response = client.put(
            f"/api/users/{ObjectId()}", json=self.update_payload(), headers=admin["headers"]
        )

        assert response.status_code == 404

    def test_delete_self(self, client, alice):
        response = client.delete(f"/api/users/{alice['id']}", headers=alice["headers"])

        assert response.status_code == 204
        assert client.get(f"/api/users/{alice['id']}").status_code == 404

    def test_delete_other_user_forbidden(self, client, alice, bob):
        response = client.delete(f"/api/users/{alice['id']}", headers=bob["headers"])

        assert response.status_code == 403

    def test_admin_deletes_anyone(self, client, admin, alice):
        response = client.delete(f"/api/users/{alice['id']}", headers=admin["headers"])

        assert response.status_code == 204

    def test_deleted_user_cannot_authenticate(self, client, admin, alice):
        client.delete(f"/api/users/{alice['id']}", headers=admin["headers"])

        assert client.get("/api/users/me", headers=alice["headers"]).status_code == 401


class TestSecurity:
    def test_change_email_and_password(self, client, alice):
        response = client.patch(
            f"/api/users/{alice['id']}/security",
            json={"email": "alice.new@example.com", "password": "new-secret"},
            headers=alice["headers"],
        )

        assert response.status_code == 204
        assert client.get("/api/users/me", headers=alice["headers"]).status_code == 401
        new_headers = basic_auth("alice.new@example.com", "new-secret")
        assert client.get("/api/users/me", headers=new_headers).json()["id"] == alice["id"]

    def test_security_change_for_other_user_forbidden(self, client, alice, bob):
        response = client.patch(
            f"/api/users/{alice['id']}/security",
            json={"email": "stolen@example.com", "password": "stolen"},
            headers=bob["headers"],
        )

        assert response.status_code == 403


class TestEmailAsSubmitted:
    def test_mixed_case_email_logs_in_as_registered(self, client, fake_db, admin):
        response = client.post(
            "/api/users",
            json={
                "email": "Carol@Example.COM",
                "password": "carol-secret",
                "firstName": "Carol",
                "lastName": "White",
            },
        )

        assert response.status_code == 201
        assert response.json()["email"] == "Carol@Example.COM"
        assert fake_db["users"].documents[-1]["email"] == "Carol@Example.COM"

        me = client.get("/api/users/me", headers=basic_auth("Carol@Example.COM", "carol-secret"))
        assert me.status_code == 200
        assert me.json()["id"] == response.json()["id"]

    def test_mixed_case_email_finds_team_member(self, client, admin):
        carol = client.post(
            "/api/users",
            json={
                "email": "Carol@Example.COM",
                "password": "carol-secret",
                "firstName": "Carol",
                "lastName": "White",
            },
        ).json()
        project = client.post(
            "/api/projects",
            json={"title": "Site", "description": "Marketing site"},
            headers=admin["headers"],
        ).json()

        response = client.put(
            f"/api/projects/{project['id']}/team",
            json={"email": "Carol@Example.COM"},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        assert response.json()["teamMembers"] == [carol["id"]]

    def test_malformed_email_is_422(self, client):
        response = client.post(
            "/api/users",
            json={
                "email": "carol-at-example.com",
                "password": "carol-secret",
                "firstName": "Carol",
                "lastName": "White",
            },
        )

        assert response.status_code == 422


class TestRoleValidation:
    def test_unknown_role_on_update_is_422(self, client, admin, alice):
        response = client.put(
            f"/api/users/{alice['id']}",
            json={
                "email": "alice@example.com",
                "firstName": "Alice",
                "lastName": "Smith",
                "role": "superuser",
            },
            headers=admin["headers"],
        )

        assert response.status_code == 422
        assert client.get(f"/api/users/{alice['id']}").json()["role"] == "User"

    def test_wrong_case_role_on_register_is_422(self, client, admin):
        response = client.post(
            "/api/users",
            json={
                "email": "dave@example.com",
                "password": "dave-secret",
                "firstName": "Dave",
                "lastName": "Brown",
                "role": "admin",
            },
            headers=admin["headers"],
        )

        assert response.status_code == 422


class TestConcurrentEmailClaims:
    def test_registration_losing_race_is_409(self, client, fake_db, admin):
        users = fake_db["users"]
        rival_id = ObjectId()

        async def rival_wins(document):
            users.documents.append({**document, "_id": rival_id, "firstName": "Rival"})
            raise DuplicateKeyError("E11000 duplicate key error index: email_unique")

        with patch.object(users, "insert_one", side_effect=rival_wins):
            response = client.post(
                "/api/users",
                json={
                    "email": "erin@example.com",
                    "password": "erin-secret",
                    "firstName": "Erin",
                    "lastName": "Green",
                },
            )

        assert response.status_code == 409
        assert response.json()["id"] == str(rival_id)
        assert response.json()["firstName"] == "Rival"

    def test_update_losing_race_is_409(self, client, fake_db, alice):
        users = fake_db["users"]
        duplicate = DuplicateKeyError("E11000 duplicate key error index: email_unique")

        with patch.object(users, "replace_one", side_effect=duplicate):
            response = client.put(
                f"/api/users/{alice['id']}",
                json={
                    "email": "frank@example.com",
                    "firstName": "Alice",
                    "lastName": "Smith",
                },
                headers=alice["headers"],
            )

        assert response.status_code == 409
        assert response.json() == {"detail": "Email is already in use"}

    def test_security_change_losing_race_is_409(self, client, fake_db, alice):
        users = fake_db["users"]
        duplicate = DuplicateKeyError("E11000 duplicate key error index: email_unique")

        with patch.object(users, "replace_one", side_effect=duplicate):
            response = client.patch(
                f"/api/users/{alice['id']}/security",
                json={"email": "frank@example.com", "password": "new-secret"},
                headers=alice["headers"],
            )

        assert response.status_code == 409
