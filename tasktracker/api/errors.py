"""Renders the domain error taxonomy as JSON responses."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tasktracker.domain.errors import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def error_body(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    validation_errors: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "status": status_code,
        "error": error,
        "message": message,
        "path": request.url.path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if validation_errors is not None:
        body["validation_errors"] = validation_errors
    return body


def _field_name(loc: tuple) -> str:
    # ("body", "due_date") -> "due_date", ("query", "status") -> "status"
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "request"


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Validation failed %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Input validation failed",
            exc.errors,
        ),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = {_field_name(tuple(err["loc"])): err["msg"] for err in exc.errors()}
    return await handle_validation_error(request, ValidationError(errors))


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body(request, status.HTTP_404_NOT_FOUND, "Not Found", str(exc)),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            GENERIC_ERROR_MESSAGE,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StorageError, handle_unexpected)
    app.add_exception_handler(Exception, handle_unexpected)
