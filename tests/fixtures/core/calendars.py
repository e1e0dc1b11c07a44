"""Fixtures for Calendar and CalendarManager."""

from datetime import date, time

import pytest

from models.calendar import Calendar, Weekday
from models.calendar_manager import CalendarManager


def create_calendar(name: str = "Work", timezone: str = "America/New_York") -> Calendar:
    """Create an empty Calendar.

    Args:
        name: Calendar name.
        timezone: IANA zone name.

    Returns:
        Calendar instance ready for testing.
    """
    return Calendar(name=name, timezone=timezone)


def create_calendar_manager(
    calendars: dict[str, str] | None = None, active: str | None = None
) -> CalendarManager:
    """Create a CalendarManager with calendars already registered.

    Args:
        calendars: Mapping of calendar name to zone
            (defaults to Work in New York and Personal in London).
        active: Calendar to activate (defaults to the first one).

    Returns:
        CalendarManager instance ready for testing.
    """
    if calendars is None:
        calendars = {"Work": "America/New_York", "Personal": "Europe/London"}
    manager = CalendarManager()
    for name, zone in calendars.items():
        manager.create_calendar(name, zone)
    if calendars:
        manager.use_calendar(active or next(iter(calendars)))
    return manager


@pytest.fixture
def calendar() -> Calendar:
    """An empty calendar named Work in America/New_York."""
    return create_calendar()


@pytest.fixture
def standup_series(calendar):
    """Work calendar holding a 3-occurrence Monday standup series (May 5, 12, 19 2025)."""
    events = calendar.create_event_series(
        "Standup", date(2025, 5, 5), time(9, 0), time(9, 30), [Weekday.MONDAY], 3
    )
    return calendar, events


@pytest.fixture
def manager() -> CalendarManager:
    """Manager with Work (New York, active) and Personal (London)."""
    return create_calendar_manager()
