"""
Tests for per-user settings.
"""

from .conftest import bearer, signup


class TestSettings:

    def test_defaults_created_on_first_read(self, client, auth_headers):
        response = client.get("/api/settings/", headers=auth_headers)
        assert response.status_code == 200
        settings = response.json()["settings"]
        assert settings["theme"] == "system"
        assert settings["language"] == "en"
        assert settings["timezone"] == "UTC"
        assert settings["email_notifications"] is True
        assert settings["task_reminders"] is True

    def test_update_ignores_unknown_fields(self, client, auth_headers):
        response = client.patch(
            "/api/settings/",
            headers=auth_headers,
            json={"theme": "dark", "task_reminders": False, "user_id": 999},
        )
        assert response.status_code == 200
        settings = response.json()["settings"]
        assert settings["theme"] == "dark"
        assert settings["task_reminders"] is False
        assert "user_id" not in settings

        assert client.get("/api/settings/", headers=auth_headers).json()["settings"]["theme"] == "dark"

    def test_invalid_theme(self, client, auth_headers):
        response = client.patch("/api/settings/", headers=auth_headers, json={"theme": "neon"})
        assert response.status_code == 400

    def test_reset(self, client, auth_headers):
        client.patch("/api/settings/", headers=auth_headers, json={"theme": "dark", "language": "fr"})
        response = client.post("/api/settings/reset", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["settings"]["theme"] == "system"
        assert response.json()["settings"]["language"] == "en"

    def test_settings_are_per_user(self, client, auth_headers):
        client.patch("/api/settings/", headers=auth_headers, json={"theme": "dark"})
        other = signup(client, name="Other", email="other@example.com")
        body = client.get("/api/settings/", headers=bearer(other["token"])).json()
        assert body["settings"]["theme"] == "system"

    def test_requires_login(self, client):
        assert client.get("/api/settings/").status_code == 401
