"""Calendar data models package.

This package contains the core calendar model: immutable events and their
builder, calendars with series generation and scoped editing, the calendar
manager with cross-calendar copying, and the exception hierarchy.
"""

from models.calendar import Calendar, EditScope, Weekday
from models.calendar_manager import CalendarManager
from models.event import Event, EventBuilder, EventKey, EventStatus, LocationType
from models.exceptions import (
    AmbiguousEventError,
    CalendarError,
    CalendarNotFoundError,
    DuplicateCalendarError,
    DuplicateEventError,
    EventNotFoundError,
    InvalidArgumentError,
    InvalidEventError,
    NoActiveCalendarError,
)

__all__ = [
    "Calendar",
    "CalendarManager",
    "EditScope",
    "Weekday",
    "Event",
    "EventBuilder",
    "EventKey",
    "EventStatus",
    "LocationType",
    "CalendarError",
    "InvalidArgumentError",
    "InvalidEventError",
    "DuplicateEventError",
    "DuplicateCalendarError",
    "CalendarNotFoundError",
    "EventNotFoundError",
    "AmbiguousEventError",
    "NoActiveCalendarError",
]
