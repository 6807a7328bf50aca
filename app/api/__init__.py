"""
API Package

Central package for all API endpoints.
Provides versioned API routes with proper namespace management.

Note: Routers are imported lazily to avoid circular import issues with application services.
"""

from fastapi import APIRouter


def create_api_router() -> APIRouter:
    """
    Create and configure the main API router with all v1 routes.

    Uses lazy imports to avoid circular dependencies between application
    services, API schemas and API dependencies.
    """
    from app.api.v1.saved_searches import router as saved_searches_router

    api_router = APIRouter()

    # Include v1 routers with version prefix
    api_router.include_router(
        saved_searches_router,
        prefix="/api/v1",
    )

    return api_router


__all__ = ["create_api_router"]
