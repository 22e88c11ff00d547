# app/core/errors.py
"""Application exceptions and the handlers that turn them into JSON responses.

ConflictError shares 400 with ValidationError, as the ticket API always has.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred", context: dict[str, Any] | None = None):
        self.message = message
        # logged, never returned to the client
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str = "Validation failed", field: str | None = None):
        super().__init__(message=message, context={"field": field} if field else None)
        self.field = field


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, resource: str = "Resource", resource_id: str | None = None):
        super().__init__(
            message=f"{resource} not found",
            context={"resource": resource, "resource_id": resource_id},
        )


class ConflictError(AppError):
    status_code = 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "%s %s -> %d %s %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
        exc.context,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
