"""Domain entities exposed for application layer use."""

from .saved_search import SavedSearch

__all__ = [
    "SavedSearch",
]
