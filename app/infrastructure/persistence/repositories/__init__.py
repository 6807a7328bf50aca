"""Repository implementations using SQLModel and domain mappers."""

from .saved_search_repository import SQLModelSavedSearchRepository

__all__ = [
    "SQLModelSavedSearchRepository",
]
