"""
Unit tests for SavedSearchApplicationService.

This test suite covers:
- Create validation and the duplicate-name guard
- Owner scoping of every repository call
- Update ownership check before the write
- Delete no-op semantics for unknown and malformed ids
- Usage recording through the atomic repository increment
- Request timeout enforcement
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from app.application.dependencies.saved_search_dependencies import SavedSearchDependencies
from app.application.saved_search_service import SavedSearchApplicationService
from app.domain.entities.saved_search import SavedSearch
from app.domain.exceptions import (
    DuplicateSavedSearchNameError,
    SavedSearchNotFoundError,
    ValidationError,
)
from app.domain.repositories.saved_search_repository import ISavedSearchRepository
from app.domain.value_objects import SavedSearchId, UserId

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def mock_saved_search_repository():
    """Mock saved search repository."""
    repo = Mock(spec=ISavedSearchRepository)
    repo.list_by_owner = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_name = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=lambda saved_search: saved_search)
    repo.update = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    repo.increment_usage = AsyncMock()
    return repo


@pytest.fixture
def saved_search_service(mock_saved_search_repository):
    """SavedSearchApplicationService with mocked dependencies."""
    return SavedSearchApplicationService(
        dependencies=SavedSearchDependencies(
            saved_search_repository=mock_saved_search_repository,
        )
    )


@pytest.fixture
def owner_id() -> str:
    return str(uuid4())


@pytest.fixture
def existing_saved_search(owner_id: str) -> SavedSearch:
    """A stored saved search last touched an hour ago."""
    an_hour_ago = datetime.now(timezone.utc) - timedelta(hours=1)
    return SavedSearch(
        id=SavedSearchId(uuid4()),
        owner_id=UserId(owner_id),
        name="Weekly leads",
        description="old",
        query="status:new",
        conditions=[{"field": "stage"}],
        use_count=3,
        created_at=an_hour_ago,
        updated_at=an_hour_ago,
    )


# =============================================================================
# LIST
# =============================================================================


class TestListSavedSearches:

    async def test_lists_for_caller_only(self, saved_search_service, mock_saved_search_repository, owner_id):
        result = await saved_search_service.list_saved_searches(owner_id)

        assert result == []
        mock_saved_search_repository.list_by_owner.assert_awaited_once_with(UserId(owner_id))

    async def test_repository_failure_propagates(self, saved_search_service, mock_saved_search_repository, owner_id):
        mock_saved_search_repository.list_by_owner.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await saved_search_service.list_saved_searches(owner_id)


# =============================================================================
# CREATE
# =============================================================================


class TestCreateSavedSearch:

    async def test_creates_with_defaults(self, saved_search_service, mock_saved_search_repository, owner_id):
        created = await saved_search_service.create_saved_search(
            user_id=owner_id,
            name="Weekly leads",
            query="status:new",
        )

        assert created.owner_id == UserId(owner_id)
        assert created.use_count == 0
        assert created.conditions == []
        assert created.description is None
        mock_saved_search_repository.get_by_name.assert_awaited_once_with(
            name="Weekly leads", owner_id=UserId(owner_id)
        )
        mock_saved_search_repository.create.assert_awaited_once()

    async def test_passes_optional_fields_through(self, saved_search_service, owner_id):
        conditions = [{"field": "region", "op": "eq", "value": "EU"}, {"raw": True}]

        created = await saved_search_service.create_saved_search(
            user_id=owner_id,
            name="EU",
            query="region",
            description="Europe only",
            conditions=conditions,
        )

        assert created.description == "Europe only"
        assert created.conditions == conditions

    @pytest.mark.parametrize(
        "name,query",
        [(None, "q"), ("n", None), ("", "q"), ("n", ""), ("   ", "q")],
    )
    async def test_missing_name_or_query_rejected_without_store_calls(
        self, saved_search_service, mock_saved_search_repository, owner_id, name, query
    ):
        with pytest.raises(ValidationError, match="Name and query are required"):
            await saved_search_service.create_saved_search(user_id=owner_id, name=name, query=query)

        mock_saved_search_repository.get_by_name.assert_not_awaited()
        mock_saved_search_repository.create.assert_not_awaited()

    async def test_duplicate_name_rejected_without_write(
        self, saved_search_service, mock_saved_search_repository, existing_saved_search, owner_id
    ):
        mock_saved_search_repository.get_by_name.return_value = existing_saved_search

        with pytest.raises(DuplicateSavedSearchNameError):
            await saved_search_service.create_saved_search(
                user_id=owner_id, name="Weekly leads", query="status:new"
            )

        mock_saved_search_repository.create.assert_not_awaited()

    async def test_race_lost_at_insert_surfaces_as_duplicate(
        self, saved_search_service, mock_saved_search_repository, owner_id
    ):
        mock_saved_search_repository.create.side_effect = DuplicateSavedSearchNameError("Weekly leads")

        with pytest.raises(DuplicateSavedSearchNameError):
            await saved_search_service.create_saved_search(
                user_id=owner_id, name="Weekly leads", query="status:new"
            )


# =============================================================================
# UPDATE
# =============================================================================


class TestUpdateSavedSearch:

    async def test_updates_owned_record(
        self, saved_search_service, mock_saved_search_repository, existing_saved_search, owner_id
    ):
        mock_saved_search_repository.get_by_id.return_value = existing_saved_search
        mock_saved_search_repository.update.side_effect = lambda **kwargs: existing_saved_search

        original_updated_at = existing_saved_search.updated_at

        result = await saved_search_service.update_saved_search(
            saved_search_id=str(existing_saved_search.id),
            user_id=owner_id,
            name="Monthly leads",
            description=None,
            query="status:open",
            conditions=None,
        )

        assert result is existing_saved_search
        call = mock_saved_search_repository.update.await_args.kwargs
        assert call["saved_search_id"] == existing_saved_search.id
        assert call["owner_id"] == UserId(owner_id)
        assert call["name"] == "Monthly leads"
        assert call["description"] is None
        assert call["query"] == "status:open"
        assert call["conditions"] == []
        assert call["updated_at"] > original_updated_at

    async def test_missing_or_foreign_record_is_not_found(
        self, saved_search_service, mock_saved_search_repository, owner_id
    ):
        saved_search_id = str(uuid4())

        with pytest.raises(SavedSearchNotFoundError, match="Search not found"):
            await saved_search_service.update_saved_search(
                saved_search_id=saved_search_id,
                user_id=owner_id,
                name="n",
                description=None,
                query="q",
            )

        mock_saved_search_repository.get_by_id.assert_awaited_once_with(
            SavedSearchId(saved_search_id), UserId(owner_id)
        )
        mock_saved_search_repository.update.assert_not_awaited()

    async def test_malformed_id_is_not_found(self, saved_search_service, mock_saved_search_repository, owner_id):
        with pytest.raises(SavedSearchNotFoundError):
            await saved_search_service.update_saved_search(
                saved_search_id="not-a-uuid",
                user_id=owner_id,
                name="n",
                description=None,
                query="q",
            )

        mock_saved_search_repository.get_by_id.assert_not_awaited()

    async def test_blank_query_rejected_before_write(
        self, saved_search_service, mock_saved_search_repository, existing_saved_search, owner_id
    ):
        mock_saved_search_repository.get_by_id.return_value = existing_saved_search

        with pytest.raises(ValidationError):
            await saved_search_service.update_saved_search(
                saved_search_id=str(existing_saved_search.id),
                user_id=owner_id,
                name="n",
                description=None,
                query="",
            )

        mock_saved_search_repository.update.assert_not_awaited()

    async def test_row_vanishing_before_write_is_not_found(
        self, saved_search_service, mock_saved_search_repository, existing_saved_search, owner_id
    ):
        mock_saved_search_repository.get_by_id.return_value = existing_saved_search
        mock_saved_search_repository.update.return_value = None

        with pytest.raises(SavedSearchNotFoundError):
            await saved_search_service.update_saved_search(
                saved_search_id=str(existing_saved_search.id),
                user_id=owner_id,
                name="n",
                description=None,
                query="q",
            )


# =============================================================================
# DELETE
# =============================================================================


class TestDeleteSavedSearch:

    async def test_delete_scoped_to_owner(self, saved_search_service, mock_saved_search_repository, owner_id):
        saved_search_id = str(uuid4())

        removed = await saved_search_service.delete_saved_search(saved_search_id, owner_id)

        assert removed is True
        mock_saved_search_repository.delete.assert_awaited_once_with(
            SavedSearchId(saved_search_id), UserId(owner_id)
        )

    async def test_delete_unknown_id_is_quiet_no_op(self, saved_search_service, mock_saved_search_repository, owner_id):
        mock_saved_search_repository.delete.return_value = False

        removed = await saved_search_service.delete_saved_search(str(uuid4()), owner_id)

        assert removed is False

    async def test_delete_malformed_id_skips_store(self, saved_search_service, mock_saved_search_repository, owner_id):
        removed = await saved_search_service.delete_saved_search("garbage", owner_id)

        assert removed is False
        mock_saved_search_repository.delete.assert_not_awaited()


# =============================================================================
# RECORD USAGE
# =============================================================================


class TestRecordUsage:

    async def test_increments_through_repository(
        self, saved_search_service, mock_saved_search_repository, existing_saved_search, owner_id
    ):
        mock_saved_search_repository.increment_usage.return_value = existing_saved_search

        result = await saved_search_service.record_usage(str(existing_saved_search.id), owner_id)

        assert result is existing_saved_search
        args = mock_saved_search_repository.increment_usage.await_args
        assert args.args == (existing_saved_search.id, UserId(owner_id))
        assert args.kwargs["used_at"].tzinfo is not None
        mock_saved_search_repository.get_by_id.assert_not_awaited()
        mock_saved_search_repository.update.assert_not_awaited()

    async def test_unknown_id_is_not_found(self, saved_search_service, mock_saved_search_repository, owner_id):
        mock_saved_search_repository.increment_usage.return_value = None

        with pytest.raises(SavedSearchNotFoundError):
            await saved_search_service.record_usage(str(uuid4()), owner_id)

    async def test_malformed_id_is_not_found(self, saved_search_service, mock_saved_search_repository, owner_id):
        with pytest.raises(SavedSearchNotFoundError):
            await saved_search_service.record_usage("nope", owner_id)

        mock_saved_search_repository.increment_usage.assert_not_awaited()


# =============================================================================
# TIMEOUTS
# =============================================================================


class TestRequestTimeout:

    async def test_slow_repository_call_times_out(self, mock_saved_search_repository, owner_id):
        async def slow_list(owner):
            await asyncio.sleep(1)
            return []

        mock_saved_search_repository.list_by_owner.side_effect = slow_list
        service = SavedSearchApplicationService(
            SavedSearchDependencies(
                saved_search_repository=mock_saved_search_repository,
                request_timeout=0.01,
            )
        )

        with pytest.raises(asyncio.TimeoutError):
            await service.list_saved_searches(owner_id)
