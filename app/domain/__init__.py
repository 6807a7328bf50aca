"""Domain layer package exposing pure business abstractions."""

from . import entities
from . import repositories
from .value_objects import SavedSearchId, UserId

__all__ = [
    "entities",
    "repositories",
    "SavedSearchId",
    "UserId",
]
