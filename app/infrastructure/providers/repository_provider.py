"""Repository provider utilities."""

from __future__ import annotations

import asyncio

from app.database.sqlmodel_engine import get_sqlmodel_db_manager
from app.domain.repositories.saved_search_repository import ISavedSearchRepository
from app.infrastructure.persistence.repositories import SQLModelSavedSearchRepository

_saved_search_repository: ISavedSearchRepository | None = None

_saved_search_lock = asyncio.Lock()


async def get_saved_search_repository() -> ISavedSearchRepository:
    """Return singleton saved search repository implementation."""
    global _saved_search_repository
    if _saved_search_repository is not None:
        return _saved_search_repository

    async with _saved_search_lock:
        if _saved_search_repository is not None:
            return _saved_search_repository

        _saved_search_repository = SQLModelSavedSearchRepository(get_sqlmodel_db_manager())
        return _saved_search_repository


async def reset_saved_search_repository() -> None:
    global _saved_search_repository
    async with _saved_search_lock:
        _saved_search_repository = None


__all__ = [
    "get_saved_search_repository",
    "reset_saved_search_repository",
]
