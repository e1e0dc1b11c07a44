"""Shared fixtures for API integration tests.

This module provides the TestClient setup with a fresh CalendarManager and
test settings injected through FastAPI's dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_calendar_manager, get_settings
from main import app


@pytest.fixture
def client_with_manager(fresh_manager, test_settings):
    """Provide a TestClient with a fresh CalendarManager injected.

    Args:
        fresh_manager: A pytest fixture providing a fresh CalendarManager.
        test_settings: Settings pointing exports at a temporary directory.

    Yields:
        A tuple of (TestClient, CalendarManager) for testing.

    Example:
        def test_something(client_with_manager):
            client, manager = client_with_manager
            response = client.get("/calendars")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_calendar_manager] = lambda: fresh_manager
    app.dependency_overrides[get_settings] = lambda: test_settings

    client = TestClient(app)

    yield client, fresh_manager

    app.dependency_overrides.clear()
