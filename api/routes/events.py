"""Event endpoints.

Provides REST API for the events of the active calendar: creating single
events and recurring series, scoped editing, and date/range/busy queries.
"""

from datetime import date, datetime, time
from typing import Any, Optional, Union

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field, model_validator

from api.dependencies import ActiveCalendarDep
from api.models import BusyResponse, EventListResponse, SeriesResponse
from models.calendar import TIME_PROPERTIES, EditScope
from models.event import Event, EventStatus, LocationType
from models.exceptions import InvalidArgumentError

router = APIRouter(
    prefix="/events",
    tags=["events"],
)


# Request Models


class CreateEventRequest(BaseModel):
    """Request to create a single event in the active calendar.

    Args:
        subject: Event subject.
        start: Start datetime (calendar-local).
        end: End datetime; optional for all-day events.
        all_day: Whether this is an all-day event.
        description: Event description.
        location: Location type.
        status: Visibility status.
    """

    subject: str = Field(description="Event subject")
    start: datetime = Field(description="Start datetime")
    end: Optional[datetime] = Field(default=None, description="End datetime")
    all_day: bool = Field(default=False, description="Is all-day event")
    description: Optional[str] = Field(default=None, description="Event description")
    location: LocationType = Field(default=LocationType.NONE, description="Location type")
    status: EventStatus = Field(default=EventStatus.PUBLIC, description="Visibility status")


class CreateSeriesRequest(BaseModel):
    """Request to generate a recurring series in the active calendar.

    Exactly one of occurrences and end_date must be given. Timed series need
    start_time and end_time; all-day series ignore them.

    Args:
        subject: Subject shared by every occurrence.
        start_date: First date considered.
        weekdays: Days of the week, as names ("monday") or numbers (0 = Monday).
        occurrences: Number of occurrences to create.
        end_date: Last date considered (inclusive).
        all_day: Whether the occurrences are all-day events.
        start_time: Start time of each timed occurrence.
        end_time: End time of each timed occurrence.
    """

    subject: str = Field(description="Event subject")
    start_date: date = Field(description="First date of the series")
    weekdays: list[Union[int, str]] = Field(description="Days of the week to repeat on")
    occurrences: Optional[int] = Field(default=None, description="Number of occurrences")
    end_date: Optional[date] = Field(default=None, description="Last date (inclusive)")
    all_day: bool = Field(default=False, description="Create all-day occurrences")
    start_time: Optional[time] = Field(default=None, description="Occurrence start time")
    end_time: Optional[time] = Field(default=None, description="Occurrence end time")

    @model_validator(mode="after")
    def validate_shape(self) -> "CreateSeriesRequest":
        """Require one end condition, and times for timed series."""
        if (self.occurrences is None) == (self.end_date is None):
            raise ValueError("Provide exactly one of occurrences or end_date")
        if not self.all_day and (self.start_time is None or self.end_time is None):
            raise ValueError("start_time and end_time are required for timed series")
        return self


class EditEventRequest(BaseModel):
    """Request to edit one property of an event.

    Args:
        subject: Subject of the event to edit.
        start: Start datetime of the event to edit.
        property: subject, start, end, description, location or status.
        value: New value. For start/end, a datetime or time string whose time
            of day is applied on the event's existing date.
        scope: single, forward or all_events.
    """

    subject: str = Field(description="Subject of the target event")
    start: datetime = Field(description="Start of the target event")
    property: str = Field(description="Property to edit")
    value: Any = Field(description="New value")
    scope: EditScope = Field(default=EditScope.SINGLE, description="Edit scope")


def _parse_time_value(value: Any) -> Union[datetime, time]:
    """Parse an ISO datetime or time string sent for a start/end edit."""
    if not isinstance(value, str):
        raise InvalidArgumentError("Value for start/end must be an ISO datetime or time")
    try:
        return time.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid datetime or time: {value}") from None


# Route Handlers


@router.get("", response_model=EventListResponse)
async def list_events(calendar: ActiveCalendarDep):
    """List every event in the active calendar, sorted by start.

    Args:
        calendar: The active calendar (injected by FastAPI).

    Returns:
        All events of the calendar.
    """
    return EventListResponse.of(calendar.name, calendar.get_all_events())


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(request: CreateEventRequest, calendar: ActiveCalendarDep):
    """Create a single event in the active calendar.

    Args:
        request: Event details.
        calendar: The active calendar (injected by FastAPI).

    Returns:
        The created event.
    """
    return calendar.create_event(
        subject=request.subject,
        start=request.start,
        end=request.end,
        all_day=request.all_day,
        description=request.description,
        location=request.location,
        status=request.status,
    )


@router.post("/series", response_model=SeriesResponse, status_code=status.HTTP_201_CREATED)
async def create_series(request: CreateSeriesRequest, calendar: ActiveCalendarDep):
    """Generate a recurring series in the active calendar.

    If an occurrence collides with an existing event the request fails with
    409 and the occurrences generated before it remain in the calendar.

    Args:
        request: Series definition.
        calendar: The active calendar (injected by FastAPI).

    Returns:
        The generated events and their series id.
    """
    if request.all_day and request.occurrences is not None:
        events = calendar.create_all_day_event_series(
            request.subject, request.start_date, request.weekdays, request.occurrences
        )
    elif request.all_day:
        events = calendar.create_all_day_event_series_until(
            request.subject, request.start_date, request.weekdays, request.end_date
        )
    elif request.occurrences is not None:
        events = calendar.create_event_series(
            request.subject,
            request.start_date,
            request.start_time,
            request.end_time,
            request.weekdays,
            request.occurrences,
        )
    else:
        events = calendar.create_event_series_until(
            request.subject,
            request.start_date,
            request.start_time,
            request.end_time,
            request.weekdays,
            request.end_date,
        )

    return SeriesResponse(
        calendar=calendar.name,
        events=events,
        count=len(events),
        series_id=events[0].series_id if events else None,
    )


@router.post("/edit", response_model=EventListResponse)
async def edit_event(request: EditEventRequest, calendar: ActiveCalendarDep):
    """Edit a property of an event, cascading through its series per scope.

    Args:
        request: Target event, property, value and scope.
        calendar: The active calendar (injected by FastAPI).

    Returns:
        The replacement events.
    """
    value = request.value
    if request.property.strip().lower() in TIME_PROPERTIES:
        value = _parse_time_value(value)

    edited = calendar.edit_event(
        request.subject, request.start, request.property, value, request.scope
    )
    return EventListResponse.of(calendar.name, edited)


@router.get("/on-date", response_model=EventListResponse)
async def get_events_on_date(
    calendar: ActiveCalendarDep,
    day: date = Query(alias="date", description="Date to list"),
):
    """List events that start on, end on or span a date."""
    return EventListResponse.of(calendar.name, calendar.get_events_on_date(day))


@router.get("/range", response_model=EventListResponse)
async def get_events_in_range(start: datetime, end: datetime, calendar: ActiveCalendarDep):
    """List events overlapping [start, end).

    Args:
        start: Range start (calendar-local).
        end: Range end (calendar-local).
        calendar: The active calendar (injected by FastAPI).

    Returns:
        Overlapping events sorted by start.
    """
    if end < start:
        raise InvalidArgumentError("Range end cannot be before range start")
    return EventListResponse.of(calendar.name, calendar.get_events_in_range(start, end))


@router.get("/busy", response_model=BusyResponse)
async def get_busy_status(at: datetime, calendar: ActiveCalendarDep):
    """Report whether any event covers the given instant."""
    return BusyResponse(calendar=calendar.name, at=at, busy=calendar.is_busy(at))
