"""Pytest fixtures for provider-based architecture."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Callable
from typing import Dict
from uuid import uuid4

# Settings are read at import time by app.main; provide a test secret first.
TEST_SECRET_KEY = "test-secret-key-for-saved-searches-0123456789"
os.environ.setdefault("SECRET_KEY", TEST_SECRET_KEY)
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from app.core.config import Settings, get_settings
from app.database.sqlmodel_engine import SQLModelDatabaseManager
from app.infrastructure.persistence.repositories import SQLModelSavedSearchRepository
from app.infrastructure.providers.repository_provider import reset_saved_search_repository
from app.utils.security import TokenManager


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    await reset_saved_search_repository()
    yield
    await reset_saved_search_repository()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        SECRET_KEY=get_settings().SECRET_KEY,
        ENVIRONMENT="local",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'saved_searches.db'}",
        REQUEST_TIMEOUT=10.0,
    )


@pytest.fixture
async def db_manager(test_settings: Settings) -> AsyncIterator[SQLModelDatabaseManager]:
    """Initialized database manager with tables created."""
    manager = SQLModelDatabaseManager(test_settings)
    await manager.initialize()
    await manager.create_tables()
    try:
        yield manager
    finally:
        await manager.drop_tables()
        await manager.shutdown()


@pytest.fixture
def saved_search_repository(db_manager: SQLModelDatabaseManager) -> SQLModelSavedSearchRepository:
    """Repository adapter bound to the test database."""
    return SQLModelSavedSearchRepository(db_manager)


@pytest.fixture
def token_manager() -> TokenManager:
    return TokenManager(secret_key=get_settings().SECRET_KEY)


@pytest.fixture
def user_id() -> str:
    return str(uuid4())


@pytest.fixture
def other_user_id() -> str:
    return str(uuid4())


@pytest.fixture
def auth_headers(token_manager: TokenManager) -> Callable[[str], Dict[str, str]]:
    """Build bearer headers for a given principal."""

    def _headers(principal_id: str) -> Dict[str, str]:
        token = token_manager.create_access_token(user_id=principal_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers
