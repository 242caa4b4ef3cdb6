"""
Error handling middleware.

Routes handle the errors they expect; these handlers only see exceptions
that leak out of a route and map them onto the response envelope.
"""

import traceback

from fastapi import FastAPI, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from jobinsight.api.schemas.common import failure_response
from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.not_found_error import NotFoundError
from jobinsight.domain.exceptions.store_error import StoreError
from jobinsight.domain.exceptions.validation_error import ValidationError
from jobinsight.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return failure_response(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        logger.info("Resource not found", error=str(exc), path=request.url.path)
        return failure_response(404, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store error", error=str(exc), path=request.url.path)
        record_error("store_error", "api")
        return failure_response(500, "A database error occurred")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        record_error("database_error", "api")
        return failure_response(500, "A database error occurred")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return failure_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        record_error("internal_error", "api")
        return failure_response(500, "An unexpected error occurred")
