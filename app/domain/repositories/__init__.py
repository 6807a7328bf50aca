"""Domain repository abstractions."""

from .saved_search_repository import ISavedSearchRepository

__all__ = [
    "ISavedSearchRepository",
]
