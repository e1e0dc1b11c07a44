"""Test fixtures for the calendar service.

This package provides reusable test fixtures:
- core: events, calendars and calendar managers
- api: TestClient setup with an injected CalendarManager
"""
