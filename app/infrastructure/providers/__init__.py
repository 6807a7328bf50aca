"""Infrastructure provider accessors package."""

from .repository_provider import (  # noqa: F401
    get_saved_search_repository,
    reset_saved_search_repository,
)

__all__ = [
    "get_saved_search_repository",
    "reset_saved_search_repository",
]
