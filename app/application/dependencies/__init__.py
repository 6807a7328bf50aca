"""Application service dependencies and factories."""

from .saved_search_dependencies import SavedSearchDependencies

__all__ = [
    "SavedSearchDependencies",
]
