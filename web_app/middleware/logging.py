"""Logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortener.web")

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded = getattr(request.state, "forwarded", None)
        if forwarded is not None and forwarded.client:
            return forwarded.client
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response."""
        start = time.perf_counter()
        self.logger.info(
            f"Request: {request.method} {request.url.path} from {self._client_ip(request)}"
        )

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            self.logger.exception(
                f"Unhandled error: {request.method} {request.url.path} after {duration_ms:.2f}ms"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            f"Response: {request.method} {request.url.path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
        )
        return response
