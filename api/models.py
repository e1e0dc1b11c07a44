"""Shared response models for API endpoints.

These models give the calendar, event and copy routes a consistent response
structure. Events are returned as the core Event model.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.event import Event


class CalendarSummaryResponse(BaseModel):
    """Name, zone and size of one calendar.

    Attributes:
        name: Calendar name.
        timezone: IANA zone name.
        event_count: Number of events in the calendar.
    """

    name: str
    timezone: str
    event_count: int


class CalendarSnapshotResponse(CalendarSummaryResponse):
    """A calendar with all its events, sorted by start.

    Attributes:
        events: Every event in the calendar.
    """

    events: list[Event]


class CalendarListResponse(BaseModel):
    """All registered calendars.

    Attributes:
        active_calendar: Name of the active calendar, if any.
        calendars: Summary of each calendar in creation order.
    """

    active_calendar: Optional[str] = None
    calendars: list[CalendarSummaryResponse]


class EventListResponse(BaseModel):
    """A list of events from one calendar.

    Attributes:
        calendar: Name of the calendar the events belong to.
        events: The events, sorted by start.
        count: Number of events returned.
    """

    calendar: str
    events: list[Event]
    count: int

    @classmethod
    def of(cls, calendar_name: str, events: list[Event]) -> "EventListResponse":
        return cls(calendar=calendar_name, events=events, count=len(events))


class SeriesResponse(EventListResponse):
    """Events created by one series generation.

    Attributes:
        series_id: Id shared by the generated events.
    """

    series_id: Optional[str] = Field(default=None, description="Generated series id")


class BusyResponse(BaseModel):
    """Whether the active calendar is busy at an instant."""

    calendar: str
    at: datetime
    busy: bool


class ExportResponse(BaseModel):
    """Result of exporting the active calendar.

    Attributes:
        path: Absolute path of the written file.
        format: "csv" or "ical".
        event_count: Number of events written.
    """

    path: str
    format: str
    event_count: int
