from __future__ import annotations

import logging
import sys

import uvicorn

from tasktracker.api.app import create_app
from tasktracker.config import load_settings
from tasktracker.infra.db import create_db_engine, create_schema, create_session_factory, init_db
from tasktracker.infra.logging import setup_logging
from tasktracker.infra.repository import TaskRepository
from tasktracker.services.task_service import TaskService

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(settings)

    engine = create_db_engine(settings.database_url)
    try:
        init_db(engine)
    except Exception as exc:  # noqa: BLE001
        logger.critical("Database is unreachable: %s", exc)
        sys.exit(1)
    if settings.create_schema:
        create_schema(engine)

    service = TaskService(TaskRepository(create_session_factory(engine)))
    app = create_app(service, settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
