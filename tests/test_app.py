"""
Tests for the application shell: health probe, error shape, startup.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from patoshub import main as main_module
from patoshub.config import Settings
from patoshub.db import init_db
from patoshub.models import Negocio


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "T" in response.json()["timestamp"]


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "error" in response.json()


def test_unhandled_error_is_generic_500(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("secret detail")

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_admin_is_seeded_once(client, engine, settings, auth_headers):
    init_db(engine, settings.admin_password)

    users = client.get("/api/users", headers=auth_headers).json()
    assert [u["username"] for u in users].count("admin") == 1


def test_main_exits_without_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 1


def test_postgres_scheme_is_normalised():
    settings = Settings(database_url="postgres://u:p@host:5432/db")

    assert settings.sqlalchemy_url == "postgresql://u:p@host:5432/db"


def test_timestamps_default_to_aware_utc():
    row = Negocio(nombre="Cafe", dueno_id="d1")

    assert row.created_at.utcoffset() == timedelta(0)
    assert row.updated_at.utcoffset() == timedelta(0)


def test_create_app_requires_a_database_url(tmp_path):
    settings = Settings(database_url=None, upload_dir=str(tmp_path))

    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        main_module.create_app(settings)
