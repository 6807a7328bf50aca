"""Application layer orchestrator for saved search workflows following hexagonal architecture."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Awaitable, Dict, List, Optional, TypeVar
from uuid import uuid4

import structlog

from app.domain.entities.saved_search import SavedSearch, utc_now
from app.domain.exceptions import (
    DuplicateSavedSearchNameError,
    SavedSearchNotFoundError,
    ValidationError,
)
from app.domain.value_objects import SavedSearchId, UserId

if TYPE_CHECKING:
    from app.application.dependencies.saved_search_dependencies import SavedSearchDependencies


logger = structlog.get_logger(__name__)

T = TypeVar("T")


class SavedSearchApplicationService:
    """Coordinates saved search operations across the domain and the repository port.

    This application service follows hexagonal architecture principles by:
    - Using dependency injection via constructor
    - Depending only on domain interfaces (ports)
    - Orchestrating workflow without implementing storage concerns

    Every operation is scoped to the calling principal; callers pass the
    principal's id explicitly.
    """

    def __init__(self, dependencies: SavedSearchDependencies) -> None:
        """Initialize with injected dependencies.

        Args:
            dependencies: Repository and request settings
        """
        self._deps = dependencies
        self._logger = structlog.get_logger(__name__)

    async def _run(self, operation: Awaitable[T]) -> T:
        """Await a repository call under the configured request timeout."""
        timeout = self._deps.request_timeout
        if timeout is None:
            return await operation
        return await asyncio.wait_for(operation, timeout=timeout)

    async def list_saved_searches(self, user_id: str) -> List[SavedSearch]:
        """List the caller's saved searches, most used first.

        Args:
            user_id: Authenticated principal

        Returns:
            List of SavedSearch domain entities (possibly empty)
        """
        self._logger.debug("Listing saved searches", user_id=user_id)

        return await self._run(
            self._deps.saved_search_repository.list_by_owner(UserId(user_id))
        )

    async def create_saved_search(
        self,
        user_id: str,
        name: Optional[str],
        query: Optional[str],
        description: Optional[str] = None,
        conditions: Optional[List[Dict[str, Any]]] = None,
    ) -> SavedSearch:
        """Create a new saved search owned by the caller.

        Args:
            user_id: Authenticated principal; always becomes the owner
            name: Name for the saved search, unique per owner
            query: Opaque query payload
            description: Optional description
            conditions: Optional opaque filter objects (defaults to empty)

        Returns:
            Created SavedSearch domain entity

        Raises:
            ValidationError: If name or query is missing
            DuplicateSavedSearchNameError: If the owner already uses this name
        """
        if not name or not name.strip() or not query or not query.strip():
            raise ValidationError("Name and query are required")

        owner = UserId(user_id)
        repository = self._deps.saved_search_repository

        self._logger.info("Creating saved search", name=name, user_id=user_id)

        existing = await self._run(repository.get_by_name(name=name, owner_id=owner))
        if existing:
            self._logger.warning(
                "Duplicate saved search name rejected", name=name, user_id=user_id
            )
            raise DuplicateSavedSearchNameError(name)

        now = utc_now()
        saved_search = SavedSearch(
            id=SavedSearchId(uuid4()),
            owner_id=owner,
            name=name,
            description=description,
            query=query,
            conditions=list(conditions or []),
            use_count=0,
            created_at=now,
            updated_at=now,
        )

        saved_search = await self._run(repository.create(saved_search))

        self._logger.info(
            "Saved search created successfully",
            saved_search_id=str(saved_search.id),
            name=name,
            user_id=user_id,
        )

        return saved_search

    async def update_saved_search(
        self,
        saved_search_id: str,
        user_id: str,
        name: Optional[str],
        description: Optional[str],
        query: Optional[str],
        conditions: Optional[List[Dict[str, Any]]] = None,
    ) -> SavedSearch:
        """Overwrite the editable fields of one of the caller's saved searches.

        The ownership lookup runs before any write. A record owned by someone
        else is reported exactly like one that does not exist.

        Raises:
            SavedSearchNotFoundError: If the caller owns no record with this id
            ValidationError: If the new name or query is empty
            DuplicateSavedSearchNameError: If renaming collides with another record
        """
        search_id = SavedSearchId.parse(saved_search_id)
        if search_id is None:
            raise SavedSearchNotFoundError(saved_search_id)

        owner = UserId(user_id)
        repository = self._deps.saved_search_repository

        saved_search = await self._run(repository.get_by_id(search_id, owner))
        if not saved_search:
            self._logger.warning(
                "Saved search not found for update",
                saved_search_id=saved_search_id,
                user_id=user_id,
            )
            raise SavedSearchNotFoundError(saved_search_id)

        saved_search.apply_update(
            name=name,
            description=description,
            query=query,
            conditions=conditions,
        )

        updated = await self._run(
            repository.update(
                saved_search_id=search_id,
                owner_id=owner,
                name=saved_search.name,
                description=saved_search.description,
                query=saved_search.query,
                conditions=saved_search.conditions,
                updated_at=saved_search.updated_at,
            )
        )
        if not updated:
            # Deleted between the lookup and the write.
            raise SavedSearchNotFoundError(saved_search_id)

        self._logger.info(
            "Saved search updated",
            saved_search_id=saved_search_id,
            user_id=user_id,
        )

        return updated

    async def delete_saved_search(self, saved_search_id: str, user_id: str) -> bool:
        """Delete one of the caller's saved searches.

        No existence check is made: deleting an unknown or foreign id is a
        no-op and the caller still sees success.

        Returns:
            True if a row was actually removed
        """
        search_id = SavedSearchId.parse(saved_search_id)
        if search_id is None:
            self._logger.info(
                "Ignoring delete for malformed saved search id",
                saved_search_id=saved_search_id,
                user_id=user_id,
            )
            return False

        deleted = await self._run(
            self._deps.saved_search_repository.delete(search_id, UserId(user_id))
        )

        self._logger.info(
            "Saved search deleted",
            saved_search_id=saved_search_id,
            user_id=user_id,
            removed=deleted,
        )

        return deleted

    async def record_usage(self, saved_search_id: str, user_id: str) -> SavedSearch:
        """Increment use_count and stamp last_used in a single store operation.

        Raises:
            SavedSearchNotFoundError: If the caller owns no record with this id
        """
        search_id = SavedSearchId.parse(saved_search_id)
        if search_id is None:
            raise SavedSearchNotFoundError(saved_search_id)

        saved_search = await self._run(
            self._deps.saved_search_repository.increment_usage(
                search_id, UserId(user_id), used_at=utc_now()
            )
        )
        if not saved_search:
            self._logger.warning(
                "Saved search not found for usage",
                saved_search_id=saved_search_id,
                user_id=user_id,
            )
            raise SavedSearchNotFoundError(saved_search_id)

        self._logger.info(
            "Saved search usage recorded",
            saved_search_id=saved_search_id,
            use_count=saved_search.use_count,
        )

        return saved_search


__all__ = ["SavedSearchApplicationService"]
