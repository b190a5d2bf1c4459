"""
Shared test fixtures.

Every test gets a fresh application bound to its own in-memory SQLite
database, so nothing leaks between tests.
"""

import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.database import Base
from main import create_app

TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        jwt_secret=TEST_JWT_SECRET,
        environment="development",
        bcrypt_rounds=4,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    Base.metadata.create_all(bind=application.state.engine)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


def signup(client: TestClient, name="Ada Lovelace", email="ada@example.com", password=TEST_PASSWORD):
    response = client.post(
        "/api/users/signup",
        json={"name": name, "email": email, "password": password, "passwordConfirm": password},
    )
    assert response.status_code == 201, response.json()
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def registered(client):
    """A signed-up user: the sign-up response body (status, token, user)."""
    body = signup(client)
    client.cookies.clear()
    return body


@pytest.fixture
def auth_headers(registered) -> dict[str, str]:
    return bearer(registered["token"])
