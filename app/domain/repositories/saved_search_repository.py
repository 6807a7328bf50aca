"""Domain repository contracts for saved search aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.domain.entities.saved_search import SavedSearch
from app.domain.value_objects import SavedSearchId, UserId


class ISavedSearchRepository(ABC):
    """Domain-facing abstraction for saved search persistence operations.

    Every operation is owner-scoped: rows belonging to another owner are
    indistinguishable from rows that do not exist.
    """

    @abstractmethod
    async def list_by_owner(self, owner_id: UserId) -> List[SavedSearch]:
        """List an owner's saved searches, most used first."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId
    ) -> Optional[SavedSearch]:
        """Load a saved search by identifier within owner scope."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_name(
        self,
        name: str,
        owner_id: UserId
    ) -> Optional[SavedSearch]:
        """Get a saved search by name for a specific owner."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, saved_search: SavedSearch) -> SavedSearch:
        """Insert a new saved search.

        Raises DuplicateSavedSearchNameError when the (owner, name) pair is taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def update(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId,
        name: str,
        description: Optional[str],
        query: str,
        conditions: List[Dict[str, Any]],
        updated_at: datetime,
    ) -> Optional[SavedSearch]:
        """Overwrite editable fields of an owner's saved search.

        Returns None when no row matched the id and owner.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId
    ) -> bool:
        """Delete a saved search (hard delete). Returns True if a row was removed."""
        raise NotImplementedError

    @abstractmethod
    async def increment_usage(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId,
        used_at: datetime,
    ) -> Optional[SavedSearch]:
        """Atomically add one to use_count and stamp last_used.

        Returns None when no row matched the id and owner.
        """
        raise NotImplementedError


__all__ = ["ISavedSearchRepository"]
