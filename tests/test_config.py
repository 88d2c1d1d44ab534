from __future__ import annotations
from pathlib import Path

import pytest

from uploadpanel.config import ConfigError, load_settings

ENV_VARS = ("APP_ENV", "JWT_SECRET", "ADMIN_USERNAME", "ADMIN_PASSWORD", "UPLOAD_BASE_DIR",
            "APP_TIMEZONE", "LOG_LEVEL", "CORS_ORIGINS", "SERVE_UPLOADS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv+delenv: monkeypatch ripristina lo stato anche per cio che load_dotenv aggiunge
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_missing_secret_is_fatal(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(env_dir=tmp_path)


def test_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s")
    monkeypatch.setenv("ADMIN_USERNAME", "admin")
    monkeypatch.setenv("ADMIN_PASSWORD", "pw")
    monkeypatch.setenv("UPLOAD_BASE_DIR", str(tmp_path))
    monkeypatch.setenv("CORS_ORIGINS", "http://a, http://b")
    monkeypatch.setenv("SERVE_UPLOADS", "true")
    s = load_settings(env_dir=tmp_path)
    assert s.admin_username == "admin"
    assert s.admin_password == "pw"
    assert s.upload_base_dir == Path(str(tmp_path))
    assert s.cors_origins == ["http://a", "http://b"]
    assert s.serve_uploads is True
    assert s.timezone == "Asia/Tokyo"


def test_dotenv_file_for_app_env(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("ADMIN_USERNAME", "from-env")
    (tmp_path / ".env.testing").write_text("JWT_SECRET=file-secret\nADMIN_USERNAME=from-file\n")
    s = load_settings(env_dir=tmp_path)
    assert s.jwt_secret == "file-secret"
    # le variabili gia' presenti vincono sul file
    assert s.admin_username == "from-env"
