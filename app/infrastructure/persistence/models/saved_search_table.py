"""
SQLModel SavedSearch table definition.

Conditions are stored as JSONB on PostgreSQL (plain JSON elsewhere). The
(user_id, name) pair is unique so concurrent creates cannot both succeed.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field

from app.infrastructure.persistence.models.base import TimestampedModel


class SavedSearchTable(TimestampedModel, table=True):
    """
    Saved search model with database persistence.
    """
    __tablename__ = "saved_searches"

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_saved_searches_user_name"),
        Index("idx_saved_searches_use_count", "use_count"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        description="Unique identifier"
    )
    user_id: UUID = Field(
        nullable=False,
        index=True,
        description="Owning principal"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Saved search name"
    )
    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Saved search description"
    )
    query: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Opaque query payload"
    )
    conditions: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(
            JSON().with_variant(JSONB(), "postgresql"),
            nullable=False,
            default=list,
        ),
        description="Opaque ordered filter objects"
    )

    # Usage tracking
    use_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Number of times the search was used"
    )
    last_used: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Last time the search was used"
    )


__all__ = ["SavedSearchTable"]
