"""
Pytest configuration and shared fixtures for all tests.
"""
import uuid
from datetime import date
from typing import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from huma.main import create_app
from huma.services.insights import CheckinRow


@pytest.fixture
def test_user_id() -> uuid.UUID:
    """Generate a test user ID."""
    return uuid.UUID("123e4567-e89b-12d3-a456-426614174000")


@pytest.fixture
def test_team_id() -> uuid.UUID:
    """Generate a test team ID."""
    return uuid.UUID("323e4567-e89b-12d3-a456-426614174002")


@pytest.fixture
def another_user_id() -> uuid.UUID:
    """Generate another test user ID for multi-user tests."""
    return uuid.UUID("223e4567-e89b-12d3-a456-426614174001")


@pytest.fixture
def auth_headers(test_user_id):
    """Headers identifying the test user."""
    return {"X-User-Id": str(test_user_id)}


@pytest.fixture
def mock_db():
    """Mocked AsyncSession; tests set `execute.return_value` as needed."""
    db = Mock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def sync_client(mock_db) -> Generator[TestClient, None, None]:
    """Test client with the database dependency replaced by a mock."""
    app = create_app()

    async def override_get_db():
        yield mock_db

    from huma.db.session import get_db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def monday() -> date:
    """A Monday used as the anchor of weekly scenarios."""
    return date(2026, 2, 16)


@pytest.fixture
def team_checkin_rows():
    """Individual check-ins of a team over the week of 2026-02-16."""
    return [
        CheckinRow(date=date(2026, 2, 16), mood_value=80, causes='["WORKLOAD"]'),
        CheckinRow(date=date(2026, 2, 16), mood_value=60, causes='["BALANCE"]'),
        CheckinRow(date=date(2026, 2, 18), mood_value=55, causes='["RELATIONS"]'),
    ]
