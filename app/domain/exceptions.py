"""
Domain-level exceptions for the hexagonal architecture.

These exceptions represent business rule violations and domain logic errors.
They should be mapped to appropriate HTTP responses in the API layer.
"""


class DomainException(Exception):
    """Base exception for all domain-level errors."""
    pass


class ValidationError(DomainException):
    """Raised when domain validation rules are violated."""
    pass


class NotFoundError(DomainException):
    """Base exception for entities not found."""
    pass


class SavedSearchNotFoundError(NotFoundError):
    """Raised when a saved search does not exist for the requesting owner."""

    def __init__(self, saved_search_id: str = None):
        self.saved_search_id = saved_search_id
        super().__init__("Search not found")


class ConflictError(DomainException):
    """Raised when a write collides with existing state."""
    pass


class DuplicateSavedSearchNameError(ConflictError):
    """Raised when an owner already has a saved search with the same name."""

    def __init__(self, name: str = None):
        self.name = name
        super().__init__("A search with this name already exists")


__all__ = [
    "DomainException",
    "ValidationError",
    "NotFoundError",
    "SavedSearchNotFoundError",
    "ConflictError",
    "DuplicateSavedSearchNameError",
]
