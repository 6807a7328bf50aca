"""
Mapper between SavedSearch domain entities and SavedSearchTable persistence models.

Handles bidirectional conversion with proper value object transformations.
Stored conditions that are not a list of objects are rejected on read.
Timestamps read back without an offset (SQLite) are taken as UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.domain.entities.saved_search import SavedSearch
from app.domain.value_objects import SavedSearchId, UserId
from app.infrastructure.persistence.models.saved_search_table import SavedSearchTable


class SavedSearchMapper:
    """Maps between SavedSearch domain entities and SavedSearchTable persistence models."""

    @staticmethod
    def to_domain(table: SavedSearchTable) -> SavedSearch:
        """Convert SavedSearchTable (persistence) to SavedSearch (domain entity)."""

        return SavedSearch(
            id=SavedSearchId(table.id),
            owner_id=UserId(table.user_id),
            name=table.name,
            description=table.description,
            query=table.query,
            conditions=SavedSearchMapper._decode_conditions(table.conditions),
            use_count=table.use_count or 0,
            last_used=SavedSearchMapper._as_utc(table.last_used),
            created_at=SavedSearchMapper._as_utc(table.created_at),
            updated_at=SavedSearchMapper._as_utc(table.updated_at),
        )

    @staticmethod
    def to_table(entity: SavedSearch) -> SavedSearchTable:
        """Convert SavedSearch (domain entity) to SavedSearchTable (persistence)."""

        return SavedSearchTable(
            id=entity.id.value,
            user_id=entity.owner_id.value,
            name=entity.name,
            description=entity.description,
            query=entity.query,
            conditions=list(entity.conditions),
            use_count=entity.use_count,
            last_used=entity.last_used,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _decode_conditions(raw: Any) -> List[Dict[str, Any]]:
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
            raise ValueError("Stored conditions must be a list of objects")
        return list(raw)

    @staticmethod
    def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


__all__ = ["SavedSearchMapper"]
