"""Forwarded headers middleware."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortener.common.headers import extract_forwarded_headers


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Parse X-Forwarded-* once and keep the result on ``request.state.forwarded``."""

    async def dispatch(self, request: Request, call_next: Callable):
        request.state.forwarded = extract_forwarded_headers(request.headers)
        return await call_next(request)
