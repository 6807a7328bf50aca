"""Mappers between domain entities and persistence models."""

from app.infrastructure.persistence.mappers.saved_search_mapper import SavedSearchMapper

__all__ = [
    "SavedSearchMapper",
]
