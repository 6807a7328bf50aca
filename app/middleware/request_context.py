"""
Request Context Middleware

Binds per-request fields into structlog's contextvars so every log line
emitted while handling a request carries them, and logs one access line
per request.
"""

import time
from typing import Optional
from uuid import uuid4

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that scopes logging context to a single request.

    An incoming ``X-Request-ID`` header is reused; otherwise a new id is
    generated. The id is echoed back on the response.
    """

    def __init__(self, app, excluded_paths: Optional[list] = None):
        """
        Initialize request context middleware.

        Args:
            app: FastAPI application instance
            excluded_paths: Path prefixes that get context but no access log
        """
        super().__init__(app)
        self.excluded_paths = excluded_paths or [
            "/health",
            "/docs",
            "/openapi.json",
            "/favicon.ico",
        ]

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.time()
        response = await call_next(request)
        response_time_ms = (time.time() - start_time) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id

        if not self._should_exclude_path(request.url.path):
            logger.info(
                "Request completed",
                status_code=response.status_code,
                response_time_ms=round(response_time_ms, 2),
            )

        return response

    def _should_exclude_path(self, path: str) -> bool:
        for excluded_path in self.excluded_paths:
            if path.startswith(excluded_path):
                return True
        return False
