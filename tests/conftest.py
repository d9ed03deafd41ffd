"""Shared pytest fixtures."""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
from fakes import FakeCursor

from sessionvault.core.modules.session.service import SessionService
from sessionvault.core.modules.user.models import User


@pytest.fixture
def cursor():
    return FakeCursor()


@pytest.fixture
def collection(cursor):
    """Mock MongoDB collection with async methods."""
    coll = MagicMock()
    coll.insert_one = AsyncMock()
    coll.find_one = AsyncMock(return_value=None)
    coll.find_one_and_update = AsyncMock(return_value=None)
    coll.count_documents = AsyncMock(return_value=0)
    coll.create_index = AsyncMock()
    coll.find = MagicMock(return_value=cursor)
    return coll


@pytest.fixture
def session_service(collection):
    """SessionService wired to the mock collection."""
    database = MagicMock()
    database.get_collection.return_value = collection
    return SessionService(database)


@pytest.fixture
def mock_user():
    """Create a mock user for testing."""
    return User(
        id=UUID("87654321-4321-8765-4321-876543218765"),
        username="testuser",
        password_hash="$2b$12$hashed_password_here",
    )
