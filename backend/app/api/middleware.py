"""HTTP middleware: access logging and the frontend origin gate."""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.error_handlers import origin_rejected_response
from app.core.errors import OriginNotAllowedError

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request: method, path, status and duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {elapsed_ms:.3f} ms"
        )
        return response


class OriginGateMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Origin is not exactly the configured frontend.

    A missing Origin header only matches when no frontend is configured.
    """

    def __init__(self, app, allowed_origin: str | None):
        super().__init__(app)
        self.allowed_origin = allowed_origin

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("Origin")
        logger.debug(f"[CORS] Request Origin: {origin}")
        if origin != self.allowed_origin:
            return origin_rejected_response(OriginNotAllowedError(origin))
        return await call_next(request)
