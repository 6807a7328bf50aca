"""
Centralized error handling for SQLAlchemy-based database operations.

This module provides custom exception classes and error handling utilities
for database operations with proper logging using SQLAlchemy.
"""

from typing import Any, Dict, Optional, Type
from functools import wraps
from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError as SQLAlchemyIntegrityError,
    DataError as SQLAlchemyDataError,
    OperationalError,
    ProgrammingError,
    InvalidRequestError,
    DisconnectionError,
    TimeoutError as SQLAlchemyTimeoutError,
    CompileError
)
import structlog

from app.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)


class DatabaseError(Exception):
    """Base exception for all database-related errors."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error
        self.context = context or {}

        # Log the error with context
        logger.error(
            "Database error occurred",
            error_type=self.__class__.__name__,
            message=message,
            original_error=str(original_error) if original_error else None,
            context=self.context
        )


class ConnectionError(DatabaseError):
    """Raised when database connection issues occur."""
    pass


class QueryError(DatabaseError):
    """Raised when query execution issues occur."""
    pass


class IntegrityViolationError(DatabaseError):
    """Raised when database integrity constraints are violated."""
    pass


_ERROR_MAPPING = (
    (DisconnectionError, ConnectionError),
    (OperationalError, ConnectionError),
    (SQLAlchemyTimeoutError, ConnectionError),
    (SQLAlchemyIntegrityError, IntegrityViolationError),
    (SQLAlchemyDataError, QueryError),
    (ProgrammingError, QueryError),
    (CompileError, QueryError),
    (InvalidRequestError, QueryError),
)


def map_sqlalchemy_error(error: SQLAlchemyError) -> Type[DatabaseError]:
    """Map SQLAlchemy errors to custom exception types."""
    for sqlalchemy_type, database_type in _ERROR_MAPPING:
        if isinstance(error, sqlalchemy_type):
            return database_type
    return DatabaseError


def is_connection_error(error: Exception) -> bool:
    """Check if an error is a connection-related error."""
    return isinstance(error, (DisconnectionError, OperationalError, SQLAlchemyTimeoutError))


def is_integrity_error(error: Exception) -> bool:
    """Check if an error is an integrity constraint violation."""
    return isinstance(error, SQLAlchemyIntegrityError)


def handle_database_errors(
    reraise_as: Optional[Type[DatabaseError]] = None,
    context: Optional[Dict[str, Any]] = None
):
    """
    Decorator to handle database errors and convert them to custom exceptions.

    Domain exceptions raised inside the wrapped coroutine pass through untouched.

    Args:
        reraise_as: Custom exception type to raise instead of mapped type
        context: Additional context to include in the exception
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (DatabaseError, DomainException):
                raise
            except SQLAlchemyError as e:
                exception_class = reraise_as or map_sqlalchemy_error(e)
                raise exception_class(
                    f"Database operation failed in {func.__name__}: {str(e)}",
                    original_error=e,
                    context=context or {}
                ) from e

        return wrapper
    return decorator


__all__ = [
    "DatabaseError",
    "ConnectionError",
    "QueryError",
    "IntegrityViolationError",
    "map_sqlalchemy_error",
    "is_connection_error",
    "is_integrity_error",
    "handle_database_errors",
]
