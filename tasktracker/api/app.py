"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktracker.config import Settings
from tasktracker.services.task_service import TaskService

from .errors import register_error_handlers
from .routes import router

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def cors_options(allowed_origins: tuple[str, ...]) -> dict:
    """Open mode without credentials when no origins are configured."""
    if not allowed_origins:
        logger.warning("No CORS origins configured; allowing '*' (development only).")
        return {
            "allow_origins": ["*"],
            "allow_methods": CORS_METHODS,
            "allow_headers": ["*"],
            "allow_credentials": False,
        }
    logger.info("CORS allowed origins: %s", ", ".join(allowed_origins))
    return {
        "allow_origins": list(allowed_origins),
        "allow_methods": CORS_METHODS,
        "allow_headers": ["*"],
        "allow_credentials": True,
    }


def create_app(service: TaskService, settings: Settings) -> FastAPI:
    app = FastAPI(
        title="Task Tracker",
        description="Tracks tasks through TODO, IN_PROGRESS and DONE",
        version="0.1.0",
    )
    app.state.task_service = service
    app.add_middleware(CORSMiddleware, **cors_options(settings.cors_allowed_origins))
    register_error_handlers(app)
    app.include_router(router)
    return app
