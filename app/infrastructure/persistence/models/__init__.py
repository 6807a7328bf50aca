"""
Infrastructure persistence models module.

This module contains database table definitions following hexagonal architecture,
separated from domain models and business logic.
"""

from app.infrastructure.persistence.models.saved_search_table import SavedSearchTable

__all__ = [
    "SavedSearchTable",
]
