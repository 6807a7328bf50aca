"""
SQLModel base classes with timestamps.

This module provides the foundation for the SQLModel table definitions used by
the persistence adapters.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """
    Base SQLModel with common configuration.
    """

    model_config = {
        # Enable arbitrary types for complex objects
        "arbitrary_types_allowed": True,
        # Populate by name for aliases
        "populate_by_name": True,
    }


class TimestampedModel(BaseModel):
    """
    Base model with creation and update timestamps stored as timestamptz.
    """

    created_at: datetime = Field(
        default_factory=_utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Record creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=_utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Record last update timestamp"
    )


__all__ = ["BaseModel", "TimestampedModel"]
