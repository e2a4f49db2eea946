"""
Shared fixtures: an in-memory SQLite store per test, the application built
around it, and bearer headers for an already-authenticated caller.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from patoshub.auth import token_for_user
from patoshub.config import Settings
from patoshub.db import init_db
from patoshub.main import create_app

JWT_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment: no cloud credentials, temp upload dir."""
    return Settings(
        database_url="sqlite://",
        jwt_secret=JWT_SECRET,
        upload_dir=str(tmp_path / "uploads"),
        admin_password="admin123",
        cloudinary_cloud_name=None,
        cloudinary_api_key=None,
        cloudinary_api_secret=None,
        imagekit_public_key=None,
        imagekit_private_key=None,
        imagekit_url_endpoint=None,
    )


@pytest.fixture
def engine(settings):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine, settings.admin_password)
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    token = token_for_user({"id": "caller-1", "username": "caller", "role": "ADMIN"}, JWT_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def jwt_secret() -> str:
    return JWT_SECRET
