"""
Request logging middleware.

Binds a request id for the lifetime of the request, so every log event from
normalization down to the executor carries it, and records API metrics
labelled by route template.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from jobinsight.config.logging import bind_context, clear_context, get_logger
from jobinsight.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_SECONDS = 2.0


def _endpoint(request: Request) -> str:
    # Route template keeps metric labels bounded for paths with identifiers
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware:
    """Registers the request logging middleware on the app."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
            request.state.request_id = request_id

            clear_context()
            bind_context(request_id=request_id, method=request.method)

            started = time.perf_counter()
            logger.debug(
                "Request started",
                path=request.url.path,
                query=str(request.query_params) or None,
                client_host=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = time.perf_counter() - started
                record_api_request(request.method, _endpoint(request), 500, elapsed)
                logger.error(
                    "Request failed",
                    endpoint=_endpoint(request),
                    error=str(e),
                    duration_ms=round(elapsed * 1000, 1),
                )
                clear_context()
                raise

            elapsed = time.perf_counter() - started
            endpoint = _endpoint(request)
            record_api_request(request.method, endpoint, response.status_code, elapsed)

            log = logger.warning if elapsed >= SLOW_REQUEST_SECONDS else logger.info
            log(
                "Request completed",
                endpoint=endpoint,
                status_code=response.status_code,
                duration_ms=round(elapsed * 1000, 1),
            )
            clear_context()

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.4f}"
            return response
