"""Pydantic models for data validation and serialization."""

from .auth import CurrentUser, TokenData

__all__ = [
    # Authentication models
    "CurrentUser",
    "TokenData",
]
