# =============================================================================
# tests/test_users.py - User Administration Tests
# =============================================================================
# Integration tests for /api/v1/users (admin only).
#
# Run with: pytest tests/test_users.py -v
# =============================================================================

from bson import ObjectId

from lib.mongo_client import USERS
from lib.security import verify_password

URL = "/api/v1/users"


class TestUserAccess:
    """Tests for the admin-only guard."""

    def test_requires_token(self, client):
        """Test that anonymous requests get 401."""
        response = client.get(URL)

        assert response.status_code == 401

    def test_publisher_forbidden(self, client, publisher, auth_headers):
        """Test that non-admin roles get 403."""
        response = client.get(URL, headers=auth_headers(publisher))

        assert response.status_code == 403
        assert response.json()["error"] == "User role publisher is not authorized to access this route"


class TestUserAdministration:
    """Tests for admin user CRUD."""

    def test_list_hides_passwords(self, client, admin, reviewer, auth_headers):
        """Test that listed users never include secret fields."""
        body = client.get(URL, headers=auth_headers(admin)).json()

        assert body["count"] == 2
        for user in body["data"]:
            assert "password" not in user
            assert "resetPasswordToken" not in user

    def test_filter_by_role(self, client, admin, reviewer, publisher, auth_headers):
        """Test filtering users by role."""
        body = client.get(URL, params={"role": "publisher"}, headers=auth_headers(admin)).json()

        assert [user["email"] for user in body["data"]] == ["publisher@gmail.com"]

    def test_create_user(self, client, admin, auth_headers, db):
        """Test that admins can create users of any role with a hashed password."""
        response = client.post(
            URL,
            json={"name": "Kevin Webb", "email": "kevin@gmail.com", "password": "123456", "role": "admin"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["role"] == "admin"
        assert "password" not in data

        stored = db[USERS].find_one({"email": "kevin@gmail.com"})
        assert stored["password"] != "123456"
        assert verify_password("123456", stored["password"])

    def test_create_duplicate_email(self, client, admin, reviewer, auth_headers):
        """Test that emails are unique."""
        response = client.post(
            URL,
            json={"name": "Copy", "email": "user@gmail.com", "password": "123456"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Duplicate field value entered"

    def test_get_user(self, client, admin, reviewer, auth_headers):
        """Test fetching one user."""
        response = client.get(f"{URL}/{reviewer['_id']}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "user@gmail.com"
        assert "password" not in response.json()["data"]

    def test_get_missing_user(self, client, admin, auth_headers):
        """Test fetching a user that does not exist."""
        missing = str(ObjectId())
        response = client.get(f"{URL}/{missing}", headers=auth_headers(admin))

        assert response.status_code == 404
        assert response.json()["error"] == f"User not found with id of {missing}"

    def test_update_user(self, client, admin, reviewer, auth_headers, db):
        """Test changing a user's name and password."""
        response = client.put(
            f"{URL}/{reviewer['_id']}",
            json={"name": "Renamed", "password": "654321"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed"
        stored = db[USERS].find_one({"_id": reviewer["_id"]})
        assert verify_password("654321", stored["password"])

    def test_update_invalid_email(self, client, admin, reviewer, auth_headers):
        """Test that the merged profile is re-validated."""
        response = client.put(
            f"{URL}/{reviewer['_id']}",
            json={"email": "not-an-email"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400

    def test_update_invalid_role(self, client, admin, reviewer, auth_headers):
        """Test that roles are limited to user, publisher and admin."""
        response = client.put(
            f"{URL}/{reviewer['_id']}",
            json={"role": "superuser"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400

    def test_delete_user(self, client, admin, reviewer, auth_headers, db):
        """Test deleting a user."""
        response = client.delete(f"{URL}/{reviewer['_id']}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {}}
        assert db[USERS].find_one({"_id": reviewer["_id"]}) is None
