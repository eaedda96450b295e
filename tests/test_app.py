import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from app.config import Settings
from app.database import get_db
from app.main import app
from app.security.tokens import get_token_service

from conftest import API, auth_headers


class BrokenSession:
    def query(self, *args, **kwargs):
        raise OperationalError("SELECT * FROM transactions WHERE secret", {}, Exception("db down"))

    def close(self):
        pass


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_store_failure_is_reported_generically():
    def broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_db
    try:
        token = get_token_service().issue(1, "Alice", "alice@example.com")
        response = TestClient(app).get(f"{API}/transactions", headers=auth_headers(token))
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Database operation failed. Please try again later."}
    assert "SELECT" not in response.text


def test_missing_secret_key_fails_at_startup(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_secret_key_fails_at_startup(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "   ")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_are_read_only():
    settings = Settings(_env_file=None, SECRET_KEY="k")

    with pytest.raises(ValidationError):
        settings.SECRET_KEY = "changed"


def test_database_url_falls_back_to_postgres_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(
        _env_file=None,
        SECRET_KEY="k",
        DATABASE_HOST="db",
        DATABASE_PORT="5433",
        DATABASE_USER="u",
        DATABASE_PASSWORD="p",
        DATABASE_NAME="money",
    )

    assert settings.SQLALCHEMY_DATABASE_URL == "postgresql+psycopg2://u:p@db:5433/money"


def test_unexpected_failure_is_reported_generically():
    def exploding_db():
        raise RuntimeError("secret internals: connection string postgres://admin:pw@db")
        yield

    app.dependency_overrides[get_db] = exploding_db
    try:
        token = get_token_service().issue(1, "Alice", "alice@example.com")
        response = TestClient(app, raise_server_exceptions=False).get(
            f"{API}/transactions", headers=auth_headers(token)
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Unexpected server error. Please try again later."}
    assert "secret internals" not in response.text
