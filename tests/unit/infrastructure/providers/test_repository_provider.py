"""Tests for provider singletons and the saved search dependency factory."""

import pytest

from app.core.config import get_settings
from app.database import shutdown_sqlmodel_database
from app.infrastructure.factories.saved_search_dependency_factory import (
    get_saved_search_dependencies,
)
from app.infrastructure.persistence.repositories import SQLModelSavedSearchRepository
from app.infrastructure.providers import (
    get_saved_search_repository,
    reset_saved_search_repository,
)


@pytest.fixture(autouse=True)
async def reset_database_manager():
    yield
    await shutdown_sqlmodel_database()


async def test_repository_is_singleton():
    first = await get_saved_search_repository()
    second = await get_saved_search_repository()

    assert isinstance(first, SQLModelSavedSearchRepository)
    assert first is second


async def test_reset_creates_new_instance():
    first = await get_saved_search_repository()
    await reset_saved_search_repository()
    second = await get_saved_search_repository()

    assert first is not second


async def test_dependencies_carry_request_timeout():
    dependencies = await get_saved_search_dependencies()

    assert dependencies.saved_search_repository is await get_saved_search_repository()
    assert dependencies.request_timeout == get_settings().REQUEST_TIMEOUT
