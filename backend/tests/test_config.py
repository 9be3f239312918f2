"""Tests for settings loading and startup behaviour."""
import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from conftest import make_settings
from evcharge.config import Settings
from evcharge.database import Database, DatabaseUnavailableError
from evcharge.main import create_app


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("SECRET_KEY", "JWT_SECRET", "DATABASE_URL", "PORT", "API_PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_read_from_environment(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite://")
    clean_env.setenv("JWT_SECRET", "from-env")
    clean_env.setenv("PORT", "8080")

    settings = Settings(_env_file=None)

    assert settings.secret_key == "from-env"
    assert settings.api_port == 8080
    assert settings.access_token_expire_hours == 24
    assert settings.bcrypt_rounds == 10
    assert settings.restrict_station_mutation_to_owner is False


def test_missing_signing_secret_is_fatal(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite://")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_signing_secret_is_fatal(clean_env):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="sqlite://", secret_key="   ")


def test_cors_origins_are_split():
    settings = make_settings(allowed_origins="http://a.test, http://b.test")

    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_unreachable_database_fails_verification(tmp_path):
    missing = tmp_path / "does-not-exist" / "stations.db"
    database = Database(make_settings(database_url=f"sqlite:///{missing}"))

    with pytest.raises(DatabaseUnavailableError):
        database.verify_connection()


def test_startup_stops_when_database_is_unreachable(tmp_path):
    missing = tmp_path / "does-not-exist" / "stations.db"
    app = create_app(make_settings(database_url=f"sqlite:///{missing}"))

    with pytest.raises(DatabaseUnavailableError):
        with TestClient(app):
            pass


def test_geospatial_index_is_declared(database):
    from sqlalchemy import inspect

    indexes = inspect(database.engine).get_indexes("charging_stations")

    location = [index for index in indexes if index["name"] == "ix_charging_stations_location"]
    assert location and location[0]["column_names"] == ["longitude", "latitude"]
