"""
Tests for profile, password and account endpoints.
"""

from app.models import Task, User

from .conftest import TEST_PASSWORD, bearer, signup


class TestUpdateMe:

    def test_only_allowed_fields_change(self, client, db, registered, auth_headers):
        response = client.patch(
            "/api/users/updateMe",
            headers=auth_headers,
            json={"name": "X", "role": "admin"},
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "X"
        assert user["role"] == "user"

        stored = db.get(User, registered["user"]["id"])
        assert stored.role == "user"

    def test_password_cannot_be_changed_here(self, client, registered, auth_headers):
        client.patch("/api/users/updateMe", headers=auth_headers, json={"password": "sneaky-new-pass"})
        response = client.post("/api/users/login", json={"email": "ada@example.com", "password": TEST_PASSWORD})
        assert response.status_code == 200

    def test_email_and_status(self, client, auth_headers):
        response = client.patch(
            "/api/users/updateMe",
            headers=auth_headers,
            json={"email": "Countess@Example.com", "status": "busy"},
        )
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "countess@example.com"
        assert response.json()["user"]["status"] == "busy"

    def test_email_taken(self, client, auth_headers):
        signup(client, name="Other", email="other@example.com")
        response = client.patch("/api/users/updateMe", headers=auth_headers, json={"email": "other@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    def test_invalid_email(self, client, auth_headers):
        response = client.patch("/api/users/updateMe", headers=auth_headers, json={"email": "not-an-email"})
        assert response.status_code == 400
        assert response.json()["status"] == "fail"


class TestUpdateMyPassword:

    def test_wrong_current_password(self, client, auth_headers):
        response = client.patch(
            "/api/users/updateMyPassword",
            headers=auth_headers,
            json={"password": "not-my-password", "newPassword": "another-secret", "passwordConfirm": "another-secret"},
        )
        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Current password is incorrect"}

    def test_missing_current_password(self, client, auth_headers):
        response = client.patch(
            "/api/users/updateMyPassword",
            headers=auth_headers,
            json={"newPassword": "another-secret", "passwordConfirm": "another-secret"},
        )
        assert response.status_code == 400

    def test_confirmation_mismatch(self, client, auth_headers):
        response = client.patch(
            "/api/users/updateMyPassword",
            headers=auth_headers,
            json={"password": TEST_PASSWORD, "newPassword": "another-secret", "passwordConfirm": "different-secret"},
        )
        assert response.status_code == 400

    def test_new_password_works(self, client, auth_headers):
        response = client.patch(
            "/api/users/updateMyPassword",
            headers=auth_headers,
            json={"password": TEST_PASSWORD, "newPassword": "another-secret", "passwordConfirm": "another-secret"},
        )
        assert response.status_code == 200
        assert response.json()["token"]
        assert response.json()["user"]["password_changed_at"] is not None
        assert "jwt=" in response.headers["set-cookie"]

        old = client.post("/api/users/login", json={"email": "ada@example.com", "password": TEST_PASSWORD})
        new = client.post("/api/users/login", json={"email": "ada@example.com", "password": "another-secret"})
        assert old.status_code == 401
        assert new.status_code == 200


class TestDeleteAccount:

    def test_delete_own_account(self, client, db, registered, auth_headers):
        client.post("/api/tasks/", headers=auth_headers, json={"title": "Write notes"})

        response = client.delete(f"/api/users/deleteMe/{registered['user']['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""

        assert db.get(User, registered["user"]["id"]) is None
        assert db.query(Task).count() == 0
        assert client.get("/api/users/me", headers=auth_headers).status_code == 401

    def test_cannot_delete_someone_else(self, client, db, auth_headers):
        other = signup(client, name="Other", email="other@example.com")
        response = client.delete(f"/api/users/deleteMe/{other['user']['id']}", headers=auth_headers)
        assert response.status_code == 403
        assert db.get(User, other["user"]["id"]) is not None

    def test_admin_can_delete_anyone(self, client, db, registered):
        admin = signup(client, name="Root", email="root@example.com")
        db.get(User, admin["user"]["id"]).role = "admin"
        db.commit()

        response = client.delete(
            f"/api/users/deleteMe/{registered['user']['id']}",
            headers=bearer(admin["token"]),
        )
        assert response.status_code == 204

    def test_admin_deleting_missing_user(self, client, db):
        admin = signup(client, name="Root", email="root@example.com")
        db.get(User, admin["user"]["id"]).role = "admin"
        db.commit()

        response = client.delete("/api/users/deleteMe/9999", headers=bearer(admin["token"]))
        assert response.status_code == 404

    def test_requires_login(self, client, registered):
        response = client.delete(f"/api/users/deleteMe/{registered['user']['id']}")
        assert response.status_code == 401
