"""Calendar endpoints.

Provides REST API for managing calendars - creating them, selecting the
active calendar, renaming them and changing their time zone.
"""

from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from api.dependencies import ActiveCalendarDep, CalendarManagerDep
from api.models import CalendarListResponse, CalendarSnapshotResponse, CalendarSummaryResponse
from models.calendar import Calendar

router = APIRouter(
    prefix="/calendars",
    tags=["calendars"],
)


# Request Models


class CreateCalendarRequest(BaseModel):
    """Request to create a new calendar.

    Args:
        name: Unique calendar name.
        timezone: IANA time zone name.
    """

    name: str = Field(description="Calendar name")
    timezone: str = Field(default="UTC", description="IANA time zone name")


class UseCalendarRequest(BaseModel):
    """Request to select the active calendar."""

    name: str = Field(description="Calendar to activate")


class EditCalendarRequest(BaseModel):
    """Request to change a calendar property.

    Args:
        property: "name" or "timezone".
        value: New value for the property.
    """

    property: str = Field(description="Property to change (name or timezone)")
    value: Any = Field(description="New value")


def _summary(calendar: Calendar) -> CalendarSummaryResponse:
    return CalendarSummaryResponse(
        name=calendar.name,
        timezone=calendar.timezone,
        event_count=calendar.event_count,
    )


# Route Handlers


@router.get("", response_model=CalendarListResponse)
async def list_calendars(manager: CalendarManagerDep):
    """List every calendar and the active one.

    Args:
        manager: The CalendarManager instance (injected by FastAPI).

    Returns:
        Calendar summaries in creation order.
    """
    return CalendarListResponse(**manager.get_snapshot())


@router.post("", response_model=CalendarSummaryResponse, status_code=status.HTTP_201_CREATED)
async def create_calendar(request: CreateCalendarRequest, manager: CalendarManagerDep):
    """Create a calendar.

    The new calendar is not made active; use POST /calendars/use for that.

    Args:
        request: Name and time zone of the new calendar.
        manager: The CalendarManager instance (injected by FastAPI).

    Returns:
        Summary of the created calendar.
    """
    calendar = manager.create_calendar(request.name, request.timezone)
    return _summary(calendar)


@router.get("/active", response_model=CalendarSnapshotResponse)
async def get_active_calendar(calendar: ActiveCalendarDep):
    """Get the active calendar with all its events."""
    return CalendarSnapshotResponse(**calendar.get_snapshot())


@router.post("/use", response_model=CalendarSummaryResponse)
async def use_calendar(request: UseCalendarRequest, manager: CalendarManagerDep):
    """Make a calendar the active one.

    Args:
        request: Name of the calendar to activate.
        manager: The CalendarManager instance (injected by FastAPI).

    Returns:
        Summary of the now active calendar.
    """
    return _summary(manager.use_calendar(request.name))


@router.get("/{name}", response_model=CalendarSnapshotResponse)
async def get_calendar(name: str, manager: CalendarManagerDep):
    """Get one calendar with all its events."""
    return CalendarSnapshotResponse(**manager.get_calendar(name).get_snapshot())


@router.patch("/{name}", response_model=CalendarSummaryResponse)
async def edit_calendar(name: str, request: EditCalendarRequest, manager: CalendarManagerDep):
    """Rename a calendar or change its time zone.

    Changing the time zone converts every event to the same instant in the
    new zone.

    Args:
        name: Current calendar name.
        request: Property and new value.
        manager: The CalendarManager instance (injected by FastAPI).

    Returns:
        Summary of the edited calendar.
    """
    calendar = manager.edit_calendar(name, request.property, request.value)
    return _summary(calendar)
