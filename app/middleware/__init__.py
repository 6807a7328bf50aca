"""
Middleware Components

FastAPI middleware for cross-cutting concerns:
- Request-scoped logging context
"""

from .request_context import REQUEST_ID_HEADER, RequestContextMiddleware

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContextMiddleware",
]
