"""Dependency container for saved search application service."""

from dataclasses import dataclass
from typing import Optional

from app.domain.repositories.saved_search_repository import ISavedSearchRepository


@dataclass
class SavedSearchDependencies:
    """Container for saved search service dependencies."""

    saved_search_repository: ISavedSearchRepository
    request_timeout: Optional[float] = None


__all__ = ["SavedSearchDependencies"]
