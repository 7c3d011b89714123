from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tasktracker.config import PROJECT_ROOT, Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def log_path(settings: Settings) -> Path:
    return PROJECT_ROOT / settings.log_dir / settings.log_file


def build_handlers(settings: Settings) -> list[logging.Handler]:
    path = log_path(settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
    return [file_handler, console_handler]


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), handlers=build_handlers(settings))
    # At INFO the engine logger would print every SQL statement.
    if logging.getLogger().level > logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
