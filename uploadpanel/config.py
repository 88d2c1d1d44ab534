from __future__ import annotations
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Pattern ammessi per le cartelle di upload (stesso vincolo per upload/list/delete)
FOLDER_NAME_PATTERN = r"[A-Za-z0-9_-]{1,50}"

DEFAULT_FOLDER = "default"
MAX_UPLOAD_SIZE = 20 * 1024 * 1024          # 20 MiB
TOKEN_TTL_SECONDS = 60 * 60 * 150           # 150 ore
TOKEN_ALGORITHM = "HS256"

# Prefisso logico esposto alla SPA (non e' un path del filesystem)
PUBLIC_UPLOADS_PREFIX = "/storage/uploads"


class ConfigError(RuntimeError):
    """Configurazione mancante o non valida: fatale all'avvio."""


class Settings(BaseModel):
    admin_username: str = Field("", description="Username dell'unico amministratore")
    admin_password: str = Field("", description="Password dell'amministratore (confronto in chiaro)")
    jwt_secret: str = Field(..., description="Segreto HS256 per firmare i token")
    upload_base_dir: Path = Field(Path("storage/uploads"), description="Radice dello storage")
    timezone: str = Field("Asia/Tokyo", description="Fuso orario per updatedAtIso")
    log_level: str = Field("INFO")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    serve_uploads: bool = Field(False, description="Monta la radice su /storage/uploads")


def _env_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env_dir: Path | None = None) -> Settings:
    """
    Costruisce Settings dall'ambiente del processo.
    - carica `.env.<APP_ENV>` (se presente) senza sovrascrivere variabili gia' impostate
    - JWT_SECRET assente/vuoto => ConfigError
    """
    app_env = os.getenv("APP_ENV") or "local"
    env_file = Path(env_dir or Path.cwd()) / f".env.{app_env}"
    if env_file.is_file():
        load_dotenv(env_file, override=False)

    secret = os.getenv("JWT_SECRET", "")
    if not secret:
        raise ConfigError("JWT_SECRET is not configured")

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    return Settings(
        admin_username=os.getenv("ADMIN_USERNAME", ""),
        admin_password=os.getenv("ADMIN_PASSWORD", ""),
        jwt_secret=secret,
        upload_base_dir=Path(os.getenv("UPLOAD_BASE_DIR", "storage/uploads")),
        timezone=os.getenv("APP_TIMEZONE", "Asia/Tokyo"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=origins or ["*"],
        serve_uploads=_env_flag(os.getenv("SERVE_UPLOADS", "")),
    )
