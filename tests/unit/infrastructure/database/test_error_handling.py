"""Tests for SQLAlchemy error mapping and the repository error decorator."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError, SQLAlchemyError

from app.database.error_handling import (
    ConnectionError,
    DatabaseError,
    IntegrityViolationError,
    QueryError,
    handle_database_errors,
    is_connection_error,
    is_integrity_error,
    map_sqlalchemy_error,
)
from app.domain.exceptions import DuplicateSavedSearchNameError


def _operational() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


def _integrity() -> IntegrityError:
    return IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))


class TestErrorMapping:

    @pytest.mark.parametrize(
        "error,expected",
        [
            (_operational(), ConnectionError),
            (_integrity(), IntegrityViolationError),
            (ProgrammingError("SELECT", {}, Exception("syntax")), QueryError),
            (SQLAlchemyError("other"), DatabaseError),
        ],
    )
    def test_map_sqlalchemy_error(self, error, expected):
        assert map_sqlalchemy_error(error) is expected

    def test_predicates(self):
        assert is_connection_error(_operational())
        assert not is_connection_error(_integrity())
        assert is_integrity_error(_integrity())


class TestHandleDatabaseErrors:

    async def test_wraps_sqlalchemy_errors(self):
        @handle_database_errors(context={"table": "saved_searches"})
        async def failing():
            raise _operational()

        with pytest.raises(ConnectionError) as exc_info:
            await failing()

        assert isinstance(exc_info.value.original_error, OperationalError)
        assert exc_info.value.context == {"table": "saved_searches"}
        assert "failing" in str(exc_info.value)

    async def test_reraise_as_overrides_mapping(self):
        @handle_database_errors(reraise_as=QueryError)
        async def failing():
            raise _operational()

        with pytest.raises(QueryError):
            await failing()

    async def test_domain_exceptions_pass_through(self):
        @handle_database_errors()
        async def duplicate():
            raise DuplicateSavedSearchNameError("n")

        with pytest.raises(DuplicateSavedSearchNameError):
            await duplicate()

    async def test_success_returns_value(self):
        @handle_database_errors()
        async def ok():
            return 42

        assert await ok() == 42
