from __future__ import annotations
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from uploadpanel.config import Settings
from uploadpanel.main import create_app
from uploadpanel.services.storage import Storage
from uploadpanel.services.tokens import TokenService

SECRET = "test-secret"


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    d = tmp_path / "uploads"
    d.mkdir()
    return d


@pytest.fixture
def settings(base_dir: Path) -> Settings:
    return Settings(
        admin_username="admin",
        admin_password="secret",
        jwt_secret=SECRET,
        upload_base_dir=base_dir,
        timezone="Asia/Tokyo",
    )


@pytest.fixture
def storage(base_dir: Path) -> Storage:
    return Storage(base_dir, timezone="UTC")


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(SECRET)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def auth_headers(client: TestClient) -> dict:
    r = client.post("/api/auth/login", json={"username": "admin", "password": "secret"})
    return {"Authorization": f"Bearer {r.json()['data']['token']}"}
