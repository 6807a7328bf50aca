"""
API Schemas - DTOs for REST API following hexagonal architecture.

This module contains all request/response models for the API layer.
These are separated from domain entities and persistence tables.
"""

from app.api.schemas.saved_search_schemas import (
    DeleteResponse,
    SavedSearchCreate,
    SavedSearchResponse,
    SavedSearchUpdate,
)

__all__ = [
    "DeleteResponse",
    "SavedSearchCreate",
    "SavedSearchResponse",
    "SavedSearchUpdate",
]
