"""Copy endpoints.

Copies events from the active calendar into any calendar (including the
active one): a single event, all events on a date, or a date range.
"""

from datetime import date, datetime

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from api.dependencies import CalendarManagerDep
from api.models import EventListResponse

router = APIRouter(
    prefix="/copy",
    tags=["copy"],
)


# Request Models


class CopyEventRequest(BaseModel):
    """Request to copy one event.

    Args:
        subject: Subject of the source event in the active calendar.
        source_start: Start of the source event.
        target_calendar: Calendar to copy into.
        target_start: Start of the copy, in the target calendar's zone.
    """

    subject: str = Field(description="Source event subject")
    source_start: datetime = Field(description="Source event start")
    target_calendar: str = Field(description="Target calendar name")
    target_start: datetime = Field(description="Start of the copy")


class CopyDateRequest(BaseModel):
    """Request to copy every event on a date.

    Args:
        source_date: Date in the active calendar.
        target_calendar: Calendar to copy into.
        target_date: Date to place the copies on.
    """

    source_date: date = Field(description="Source date")
    target_calendar: str = Field(description="Target calendar name")
    target_date: date = Field(description="Target date")


class CopyRangeRequest(BaseModel):
    """Request to copy the events starting in a date range.

    Args:
        start_date: First source date (inclusive).
        end_date: Last source date (inclusive).
        target_calendar: Calendar to copy into.
        target_start_date: Start of the destination range.
    """

    start_date: date = Field(description="First source date")
    end_date: date = Field(description="Last source date")
    target_calendar: str = Field(description="Target calendar name")
    target_start_date: date = Field(description="First destination date")


# Route Handlers


@router.post("/event", response_model=EventListResponse, status_code=status.HTTP_201_CREATED)
async def copy_event(request: CopyEventRequest, manager: CalendarManagerDep):
    """Copy one event, keeping its duration.

    Args:
        request: Source event and destination.
        manager: The CalendarManager instance (injected by FastAPI).

    Returns:
        The inserted copy, listed under the target calendar.
    """
    copied = manager.copy_event(
        request.subject, request.source_start, request.target_calendar, request.target_start
    )
    return EventListResponse.of(request.target_calendar, [copied])


@router.post("/date", response_model=EventListResponse, status_code=status.HTTP_201_CREATED)
async def copy_events_on_date(request: CopyDateRequest, manager: CalendarManagerDep):
    """Copy every event on a date onto another date.

    Times are converted to the target calendar's zone. Nothing is inserted
    if any copy would duplicate an existing event.
    """
    copies = manager.copy_events_on_date(
        request.source_date, request.target_calendar, request.target_date
    )
    return EventListResponse.of(request.target_calendar, copies)


@router.post("/range", response_model=EventListResponse, status_code=status.HTTP_201_CREATED)
async def copy_events_between(request: CopyRangeRequest, manager: CalendarManagerDep):
    """Copy the events starting in a date range, preserving weekdays.

    Args:
        request: Source range and destination start date.
        manager: The CalendarManager instance (injected by FastAPI).

    Returns:
        The inserted copies.
    """
    copies = manager.copy_events_between(
        request.start_date, request.end_date, request.target_calendar, request.target_start_date
    )
    return EventListResponse.of(request.target_calendar, copies)
