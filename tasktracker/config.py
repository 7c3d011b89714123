from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()

_TRUTHY = {"1", "true", "yes", "on"}


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: str = "tasktracker.log"
    log_max_bytes: int = 2_000_000
    log_backup_count: int = 3
    cors_allowed_origins: tuple[str, ...] = field(default_factory=tuple)
    host: str = "127.0.0.1"
    port: int = 8000
    create_schema: bool = False


def parse_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def load_settings() -> Settings:
    load_env()

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise RuntimeError("DATABASE_URL is not set. Create a .env file with your connection string.")

    return Settings(
        database_url=database_url,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        log_file=os.getenv("LOG_FILE", "tasktracker.log"),
        log_max_bytes=int(os.getenv("LOG_MAX_BYTES", "2000000")),
        log_backup_count=int(os.getenv("LOG_BACKUP_COUNT", "3")),
        cors_allowed_origins=parse_origins(os.getenv("CORS_ALLOWED_ORIGINS", "")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        create_schema=os.getenv("DB_CREATE_SCHEMA", "").strip().lower() in _TRUTHY,
    )
