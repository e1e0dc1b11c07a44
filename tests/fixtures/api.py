"""Shared fixtures for API testing.

These fixtures provide a TestClient and a fresh CalendarManager instance
for each test, ensuring test isolation.
"""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import app
from models.calendar_manager import CalendarManager
from tests.fixtures.core.calendars import create_calendar_manager


@pytest.fixture
def test_client():
    """Provide a FastAPI TestClient for making API requests.

    The client is not entered as a context manager, so the lifespan does not
    run and the dependencies must be overridden by the test.

    Returns:
        A FastAPI TestClient instance.
    """
    return TestClient(app)


@pytest.fixture
def fresh_manager() -> CalendarManager:
    """Provide a fresh CalendarManager for each test.

    Work (America/New_York) is active; Personal (Europe/London) also exists.

    Returns:
        A newly initialized CalendarManager.
    """
    return create_calendar_manager()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings writing exports into a per-test temporary directory."""
    return Settings(export_dir=str(tmp_path / "exports"))
