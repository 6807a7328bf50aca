"""
API-specific dependencies for application services with dependency injection.

This module provides FastAPI dependency injection helpers for application services,
bridging the API layer with the hexagonal architecture's application services.
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError as PydanticValidationError

from app.api.schemas.saved_search_schemas import SavedSearchCreate, SavedSearchUpdate
from app.application.saved_search_service import SavedSearchApplicationService
from app.core.dependencies import CurrentUserDep
from app.domain.exceptions import (
    ConflictError,
    DomainException,
    NotFoundError,
    SavedSearchNotFoundError,
    ValidationError,
)
from app.infrastructure.factories.saved_search_dependency_factory import (
    get_saved_search_dependencies,
)

logger = structlog.get_logger(__name__)


# Application Service Dependencies
async def get_saved_search_service() -> SavedSearchApplicationService:
    """Create SavedSearchApplicationService with injected dependencies."""
    try:
        dependencies = await get_saved_search_dependencies()
        return SavedSearchApplicationService(dependencies)
    except Exception as e:
        logger.error("Failed to create saved search service", error=str(e))
        raise HTTPException(
            status_code=500,
            detail="Saved search service unavailable"
        ) from e


# Type aliases for dependency injection
SavedSearchServiceDep = Annotated[SavedSearchApplicationService, Depends(get_saved_search_service)]


# Request bodies
# Each parser depends on the auth gate; an unauthenticated request never has its body read.
async def _parse_body(request: Request, schema):
    try:
        return schema.model_validate_json(await request.body())
    except PydanticValidationError as e:
        logger.warning("Invalid request body", errors=e.error_count())
        raise HTTPException(status_code=400, detail="Invalid request body") from e


async def get_saved_search_create(
    request: Request,
    current_user: CurrentUserDep,
) -> SavedSearchCreate:
    """Parse the create body once the caller is authenticated."""
    return await _parse_body(request, SavedSearchCreate)


async def get_saved_search_update(
    request: Request,
    current_user: CurrentUserDep,
) -> SavedSearchUpdate:
    """Parse the update body once the caller is authenticated."""
    return await _parse_body(request, SavedSearchUpdate)


SavedSearchCreateBody = Annotated[SavedSearchCreate, Depends(get_saved_search_create)]
SavedSearchUpdateBody = Annotated[SavedSearchUpdate, Depends(get_saved_search_update)]


# Domain Exception Handlers
def map_domain_exception_to_http(exception: Exception) -> HTTPException:
    """Map domain exceptions to appropriate HTTP responses."""

    # NotFoundError hierarchy - 404 Not Found
    if isinstance(exception, (SavedSearchNotFoundError, NotFoundError)):
        return HTTPException(status_code=404, detail=str(exception))

    # ValidationError hierarchy - 400 Bad Request
    elif isinstance(exception, ValidationError):
        return HTTPException(status_code=400, detail=str(exception))

    # ConflictError hierarchy - 409 Conflict
    elif isinstance(exception, ConflictError):
        return HTTPException(status_code=409, detail=str(exception))

    # Generic DomainException - 500 Internal Server Error
    elif isinstance(exception, DomainException):
        logger.error("Unhandled domain exception", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail="Domain operation failed")

    else:
        # Non-domain exception - log and return generic error
        logger.error("Non-domain exception in mapping", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail="Internal server error")


__all__ = [
    "get_saved_search_service",
    "SavedSearchServiceDep",
    "SavedSearchCreateBody",
    "SavedSearchUpdateBody",
    "get_saved_search_create",
    "get_saved_search_update",
    "map_domain_exception_to_http"
]
