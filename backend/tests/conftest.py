"""
Shared pytest fixtures for the EV charging station API tests.

Every test gets its own application wired to a private in-memory SQLite
database, so tests never see each other's users or stations.
"""
from typing import Iterator, Tuple

import pytest
from fastapi.testclient import TestClient

from evcharge.config import Settings
from evcharge.database import Database
from evcharge.main import create_app
from evcharge.services.token_service import TokenService

TEST_SECRET = "test-signing-secret"


def make_settings(**overrides) -> Settings:
    """Return settings configured for testing."""
    values = {
        "database_url": "sqlite://",
        "secret_key": TEST_SECRET,
        "environment": "test",
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def database(settings) -> Iterator[Database]:
    """Standalone database for store/repository tests."""
    db = Database(settings)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """Test client; entering it runs the startup lifespan (connect + create tables)."""
    with TestClient(app) as test_client:
        yield test_client


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, email: str, password: str = "secret123") -> Tuple[str, str]:
    """Create a user through the API and return ``(user_id, token)``."""
    response = client.post("/api/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text

    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    body = response.json()
    return body["user"]["id"], body["token"]


@pytest.fixture
def user(client) -> Tuple[str, str]:
    return register_and_login(client, "owner@example.com")


@pytest.fixture
def other_user(client) -> Tuple[str, str]:
    return register_and_login(client, "someone.else@example.com")


@pytest.fixture
def station_payload() -> dict:
    return {
        "name": "Downtown",
        "location": {"type": "Point", "coordinates": [-73.93, 40.73]},
        "status": "available",
        "powerOutput": 50,
        "connectorType": "Type 2",
    }
