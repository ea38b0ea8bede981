"""HTTP middleware for the exercise server."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from exoserve.config.defaults import INTERNAL_ERROR_BODY
from exoserve.lib.logging_config import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    def __init__(self, app, debug: bool = False) -> None:  # type: ignore[no-untyped-def]
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            debug: Log at INFO instead of DEBUG.
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Time the request and log its outcome."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        message = (
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms)"
        )
        if self.debug:
            logger.info(message)
        else:
            logger.debug(message)
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn unhandled exceptions into a plain text 500 response."""

    def __init__(self, app, debug: bool = False) -> None:  # type: ignore[no-untyped-def]
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            debug: Include exception details in the log record.
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Run the handler and catch anything it lets escape."""
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                f"Unhandled error on {request.method} {request.url.path}: {e}",
                exc_info=self.debug,
            )
            return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)
