"""
Database module for the saved searches service.

This module provides engine and session management plus the database error
types raised by repository adapters.
"""

from .sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
    init_sqlmodel_database,
    shutdown_sqlmodel_database,
)
from .error_handling import (
    DatabaseError,
    ConnectionError,
    IntegrityViolationError,
    QueryError,
)

__all__ = [
    "SQLModelDatabaseManager",
    "get_sqlmodel_db_manager",
    "init_sqlmodel_database",
    "shutdown_sqlmodel_database",
    "DatabaseError",
    "ConnectionError",
    "IntegrityViolationError",
    "QueryError",
]
