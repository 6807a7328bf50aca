"""Pure domain representation of saved searches."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.domain.exceptions import ValidationError
from app.domain.value_objects import SavedSearchId, UserId

NAME_MAX_LENGTH = 255


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class SavedSearch:
    """Aggregate root for a named, owner-scoped search payload.

    ``query`` and ``conditions`` are opaque: they are stored and returned
    verbatim and never interpreted here.
    """

    id: SavedSearchId
    owner_id: UserId
    name: str
    query: str
    description: Optional[str] = None
    conditions: List[Dict[str, Any]] = field(default_factory=list)

    # Usage tracking
    use_count: int = 0
    last_used: Optional[datetime] = None

    # Timestamps
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        """Validate saved search after creation."""
        if self.conditions is None:
            self.conditions = []
        self._validate()

    def _validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Name and query are required")

        if len(self.name) > NAME_MAX_LENGTH:
            raise ValidationError(
                f"Saved search name must be {NAME_MAX_LENGTH} characters or less"
            )

        if not self.query or not self.query.strip():
            raise ValidationError("Name and query are required")

        if self.use_count < 0:
            raise ValidationError("Use count cannot be negative")

    def apply_update(
        self,
        name: str,
        description: Optional[str],
        query: str,
        conditions: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """Overwrite the editable fields and refresh ``updated_at``."""
        self.name = name
        self.description = description
        self.query = query
        self.conditions = list(conditions or [])
        self._validate()
        self.updated_at = utc_now()

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner_id == user_id


__all__ = ["SavedSearch", "NAME_MAX_LENGTH", "utc_now"]
