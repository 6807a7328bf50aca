"""SQLModel implementation of ISavedSearchRepository using SavedSearchMapper."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, desc, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from app.database.error_handling import handle_database_errors
from app.database.sqlmodel_engine import SQLModelDatabaseManager, get_sqlmodel_db_manager
from app.domain.entities.saved_search import SavedSearch
from app.domain.exceptions import DuplicateSavedSearchNameError
from app.domain.repositories.saved_search_repository import ISavedSearchRepository
from app.domain.value_objects import SavedSearchId, UserId
from app.infrastructure.persistence.mappers.saved_search_mapper import SavedSearchMapper
from app.infrastructure.persistence.models.saved_search_table import SavedSearchTable


class SQLModelSavedSearchRepository(ISavedSearchRepository):
    """SQLModel adapter implementation of ISavedSearchRepository.

    Each call runs in its own short-lived session. Writes are single
    statements scoped by id AND owner.
    """

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        """Get database manager (lazy initialization)."""
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    @handle_database_errors()
    async def list_by_owner(self, owner_id: UserId) -> List[SavedSearch]:
        """List an owner's saved searches, most used first."""
        async with self._get_db_manager().get_session() as session:
            stmt = (
                select(SavedSearchTable)
                .where(SavedSearchTable.user_id == owner_id.value)
                .order_by(
                    desc(SavedSearchTable.use_count),
                    desc(SavedSearchTable.created_at),
                )
            )

            result = await session.execute(stmt)
            rows = result.scalars().all()

            return [SavedSearchMapper.to_domain(row) for row in rows]

    @handle_database_errors()
    async def get_by_id(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId
    ) -> Optional[SavedSearch]:
        """Load a saved search by identifier within owner scope."""
        async with self._get_db_manager().get_session() as session:
            stmt = select(SavedSearchTable).where(
                SavedSearchTable.id == saved_search_id.value,
                SavedSearchTable.user_id == owner_id.value,
            )

            result = await session.execute(stmt)
            table_obj = result.scalars().first()

            if not table_obj:
                return None

            return SavedSearchMapper.to_domain(table_obj)

    @handle_database_errors()
    async def get_by_name(
        self,
        name: str,
        owner_id: UserId
    ) -> Optional[SavedSearch]:
        """Get a saved search by name for a specific owner."""
        async with self._get_db_manager().get_session() as session:
            stmt = select(SavedSearchTable).where(
                SavedSearchTable.user_id == owner_id.value,
                SavedSearchTable.name == name,
            )

            result = await session.execute(stmt)
            table_obj = result.scalars().first()

            if not table_obj:
                return None

            return SavedSearchMapper.to_domain(table_obj)

    @handle_database_errors()
    async def create(self, saved_search: SavedSearch) -> SavedSearch:
        """Insert a saved search and return it as stored."""
        try:
            async with self._get_db_manager().get_session() as session:
                table_obj = SavedSearchMapper.to_table(saved_search)
                session.add(table_obj)
                await session.flush()
                await session.refresh(table_obj)

                created = SavedSearchMapper.to_domain(table_obj)

        except IntegrityError as e:
            # UNIQUE(user_id, name) lost a race with a concurrent create
            raise DuplicateSavedSearchNameError(saved_search.name) from e

        return created

    @handle_database_errors()
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
        """Overwrite editable fields; None when no owned row matched."""
        stmt = (
            update(SavedSearchTable)
            .where(
                SavedSearchTable.id == saved_search_id.value,
                SavedSearchTable.user_id == owner_id.value,
            )
            .values(
                name=name,
                description=description,
                query=query,
                conditions=list(conditions),
                updated_at=updated_at,
            )
            .returning(SavedSearchTable)
        )

        try:
            async with self._get_db_manager().get_session() as session:
                result = await session.execute(stmt)
                table_obj = result.scalars().first()

                updated = SavedSearchMapper.to_domain(table_obj) if table_obj else None

        except IntegrityError as e:
            raise DuplicateSavedSearchNameError(name) from e

        return updated

    @handle_database_errors()
    async def delete(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId
    ) -> bool:
        """Delete a saved search (hard delete)."""
        async with self._get_db_manager().get_session() as session:
            stmt = delete(SavedSearchTable).where(
                SavedSearchTable.id == saved_search_id.value,
                SavedSearchTable.user_id == owner_id.value,
            )

            result = await session.execute(stmt)

            return (result.rowcount or 0) > 0

    @handle_database_errors()
    async def increment_usage(
        self,
        saved_search_id: SavedSearchId,
        owner_id: UserId,
        used_at: datetime,
    ) -> Optional[SavedSearch]:
        """Add one to use_count in the database itself, not in Python."""
        async with self._get_db_manager().get_session() as session:
            stmt = (
                update(SavedSearchTable)
                .where(
                    SavedSearchTable.id == saved_search_id.value,
                    SavedSearchTable.user_id == owner_id.value,
                )
                .values(
                    use_count=SavedSearchTable.use_count + 1,
                    last_used=used_at,
                )
                .returning(SavedSearchTable)
            )

            result = await session.execute(stmt)
            table_obj = result.scalars().first()

            if not table_obj:
                return None

            return SavedSearchMapper.to_domain(table_obj)


__all__ = ["SQLModelSavedSearchRepository"]
