"""Concrete factory for creating SavedSearchApplicationService dependencies."""

from __future__ import annotations

from app.application.dependencies.saved_search_dependencies import (
    SavedSearchDependencies,
)
from app.core.config import get_settings
from app.infrastructure.providers.repository_provider import get_saved_search_repository


async def get_saved_search_dependencies() -> SavedSearchDependencies:
    """
    Construct dependencies for the saved search application service.

    Uses the repository provider for a singleton repository instance with
    async lock protection.
    """
    saved_search_repository = await get_saved_search_repository()

    return SavedSearchDependencies(
        saved_search_repository=saved_search_repository,
        request_timeout=get_settings().REQUEST_TIMEOUT,
    )


__all__ = ["get_saved_search_dependencies"]
