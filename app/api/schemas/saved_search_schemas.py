"""
Saved search request/response DTOs.

Request bodies keep ``name`` and ``query`` optional so that a missing value
reaches the application service and is reported with the domain message
instead of a generic body validation error.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.saved_search import SavedSearch


class SavedSearchCreate(BaseModel):
    """Request schema for creating a saved search."""

    name: Optional[str] = Field(None, description="Saved search name, unique per user")
    description: Optional[str] = Field(None, description="Optional description")
    query: Optional[str] = Field(None, description="Opaque query payload")
    conditions: Optional[List[Dict[str, Any]]] = Field(
        None, description="Opaque filter objects, stored in order"
    )

    # Owner-like fields in the body are dropped; the owner is the caller.
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Weekly leads",
                "description": "New leads from the last seven days",
                "query": "status:new",
                "conditions": [{"field": "created_at", "op": "gte", "value": "-7d"}]
            }
        }
    )


class SavedSearchUpdate(BaseModel):
    """Request schema for replacing the editable fields of a saved search."""

    name: Optional[str] = Field(None, description="Saved search name")
    description: Optional[str] = Field(None, description="Description, cleared when omitted")
    query: Optional[str] = Field(None, description="Opaque query payload")
    conditions: Optional[List[Dict[str, Any]]] = Field(
        None, description="Opaque filter objects; empty when omitted"
    )

    model_config = ConfigDict(extra="ignore")


class SavedSearchResponse(BaseModel):
    """Saved search as returned by every endpoint."""

    id: str = Field(..., description="Saved search ID")
    user_id: str = Field(..., description="Owning user")
    name: str
    description: Optional[str] = None
    query: str
    conditions: List[Dict[str, Any]] = Field(default_factory=list)

    # Usage
    use_count: int = Field(0, ge=0)
    last_used: Optional[datetime] = None

    # Metadata
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, saved_search: SavedSearch) -> "SavedSearchResponse":
        return cls(
            id=str(saved_search.id),
            user_id=str(saved_search.owner_id),
            name=saved_search.name,
            description=saved_search.description,
            query=saved_search.query,
            conditions=list(saved_search.conditions),
            use_count=saved_search.use_count,
            last_used=saved_search.last_used,
            created_at=saved_search.created_at,
            updated_at=saved_search.updated_at,
        )


class DeleteResponse(BaseModel):
    """Acknowledgement for delete requests."""

    success: bool = True


__all__ = [
    "SavedSearchCreate",
    "SavedSearchUpdate",
    "SavedSearchResponse",
    "DeleteResponse",
]
