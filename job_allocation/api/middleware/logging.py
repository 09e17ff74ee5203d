"""
Request logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from job_allocation.config.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)
from job_allocation.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)


def _route_template(request: Request) -> str:
    # Label by route template, not the raw path
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class LoggingMiddleware:
    """Binds a request id to the log context and times every request."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
            request.state.request_id = request_id

            clear_request_context()
            bind_request_context(
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                user_id=request.headers.get("X-User-Id"),
            )
            logger.debug("Request received", query=str(request.query_params) or None)

            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Request failed",
                    error=str(e),
                    elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
                )
                raise
            finally:
                elapsed = time.perf_counter() - started

            record_api_request(
                request.method, _route_template(request), response.status_code, elapsed
            )

            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request handled",
                status_code=response.status_code,
                elapsed_ms=round(elapsed * 1000, 2),
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.4f}"
            clear_request_context()

            return response
