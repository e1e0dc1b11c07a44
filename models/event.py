"""Calendar event model and its builder."""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from models.exceptions import InvalidEventError, describe_validation_error

# All-day events always occupy this window on their date.
ALL_DAY_START = time(8, 0)
ALL_DAY_END = time(17, 0)


class LocationType(str, Enum):
    """Where an event takes place."""

    NONE = "none"
    PHYSICAL = "physical"
    ONLINE = "online"

    @property
    def display_value(self) -> str:
        """Human-readable label used by exporters ("" for NONE)."""
        return _LOCATION_DISPLAY[self]


_LOCATION_DISPLAY = {
    LocationType.NONE: "",
    LocationType.PHYSICAL: "Physical",
    LocationType.ONLINE: "Online",
}


class EventStatus(str, Enum):
    """Visibility status of an event."""

    PUBLIC = "public"
    PRIVATE = "private"


class EventKey(NamedTuple):
    """Identity fingerprint of an event.

    Two events with equal keys are the same event for duplicate detection,
    whatever their description, location, status, all-day flag or series.
    """

    subject: str
    start: datetime
    end: datetime


class Event(BaseModel):
    """A single immutable calendar occurrence.

    Times are naive wall-clock datetimes interpreted in the owning calendar's
    time zone. All-day events are normalized to 08:00-17:00 on the date of
    the supplied start.

    Args:
        subject: Event title (non-blank).
        start: Start datetime.
        end: End datetime (strictly after start for timed events).
        description: Optional free-text description.
        location: Where the event takes place.
        status: Public or private.
        all_day: Whether this is an all-day event.
        series_id: Identifier shared by the members of a generated series.
    """

    model_config = ConfigDict(frozen=True)

    subject: str = Field(description="Event subject")
    start: datetime = Field(description="Start datetime (calendar-local)")
    end: datetime = Field(description="End datetime (calendar-local)")
    description: Optional[str] = Field(default=None, description="Event description")
    location: LocationType = Field(default=LocationType.NONE, description="Location type")
    status: EventStatus = Field(default=EventStatus.PUBLIC, description="Visibility status")
    all_day: bool = Field(default=False, description="All-day event flag")
    series_id: Optional[str] = Field(default=None, description="Series this event belongs to")

    @model_validator(mode="before")
    @classmethod
    def normalize_all_day(cls, data: Any) -> Any:
        """Pin all-day events to 08:00-17:00 on their start date."""
        if not isinstance(data, dict) or not data.get("all_day"):
            return data
        start = data.get("start")
        if start is None:
            return data
        if isinstance(start, str):
            start = datetime.fromisoformat(start)
        day = start.date() if isinstance(start, datetime) else start
        if not isinstance(day, date):
            return data
        return {
            **data,
            "start": datetime.combine(day, ALL_DAY_START),
            "end": datetime.combine(day, ALL_DAY_END),
        }

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, subject: str) -> str:
        """Reject blank subjects."""
        if not subject.strip():
            raise ValueError("Subject cannot be empty")
        return subject

    @field_validator("start", "end")
    @classmethod
    def validate_naive(cls, value: datetime) -> datetime:
        """Event times are calendar-local and must not carry a tzinfo."""
        if value.tzinfo is not None:
            raise ValueError("Event times must be naive (calendar-local) datetimes")
        return value

    @model_validator(mode="after")
    def validate_time_order(self) -> "Event":
        """Timed events must end strictly after they start."""
        if not self.all_day and self.start >= self.end:
            raise ValueError("Start datetime must be before end datetime")
        return self

    @property
    def key(self) -> EventKey:
        """Fingerprint used for identity and duplicate detection."""
        return EventKey(self.subject, self.start, self.end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def is_in_series(self) -> bool:
        """Check whether this event belongs to a generated series.

        Returns:
            True if the event carries a series id.
        """
        return self.series_id is not None

    def copy_with_changes(self, **changes: Any) -> "Event":
        """Return a validated copy with the given fields replaced.

        Unlike model_copy, the copy goes through full validation, so all-day
        normalization and time ordering still apply.

        Args:
            **changes: Field values to replace.

        Returns:
            The new Event.

        Raises:
            InvalidEventError: If the resulting event is invalid.
        """
        data = self.model_dump()
        data.update(changes)
        try:
            return Event(**data)
        except ValidationError as e:
            raise InvalidEventError(describe_validation_error(e)) from e

    def copy_with_new_times(self, new_start: datetime, new_end: datetime) -> "Event":
        """Return a copy with only start and end changed (series id kept)."""
        return self.copy_with_changes(start=new_start, end=new_end)

    def copy_with_series_id(self, new_series_id: Optional[str]) -> "Event":
        """Return a copy with only the series association changed.

        Args:
            new_series_id: New series id, or None to detach from any series.

        Returns:
            The new Event.
        """
        return self.model_copy(update={"series_id": new_series_id})


class EventBuilder:
    """Collects event attributes and validates them in build().

    Setters return the builder so calls can be chained:

        event = (
            EventBuilder()
            .set_subject("Standup")
            .set_start(datetime(2025, 5, 5, 9, 0))
            .set_end(datetime(2025, 5, 5, 9, 15))
            .build()
        )
    """

    def __init__(self) -> None:
        self._subject: Optional[str] = None
        self._start: Optional[datetime] = None
        self._end: Optional[datetime] = None
        self._description: Optional[str] = None
        self._location = LocationType.NONE
        self._status = EventStatus.PUBLIC
        self._all_day = False
        self._series_id: Optional[str] = None

    def set_subject(self, subject: str) -> "EventBuilder":
        self._subject = subject
        return self

    def set_start(self, start: datetime) -> "EventBuilder":
        self._start = start
        return self

    def set_end(self, end: datetime) -> "EventBuilder":
        self._end = end
        return self

    def set_description(self, description: Optional[str]) -> "EventBuilder":
        self._description = description
        return self

    def set_location(self, location: LocationType) -> "EventBuilder":
        self._location = location
        return self

    def set_status(self, status: EventStatus) -> "EventBuilder":
        self._status = status
        return self

    def set_all_day(self, all_day: bool) -> "EventBuilder":
        self._all_day = all_day
        return self

    def set_series_id(self, series_id: Optional[str]) -> "EventBuilder":
        self._series_id = series_id
        return self

    def build(self) -> Event:
        """Validate the collected attributes and create the Event.

        Returns:
            The immutable Event.

        Raises:
            InvalidEventError: If the subject is missing or blank, the start is
                missing, a timed event has no end, or end is not after start.
        """
        if self._subject is None or not self._subject.strip():
            raise InvalidEventError("Subject cannot be null or empty")
        if self._start is None:
            raise InvalidEventError("Start datetime cannot be null")
        if not self._all_day and self._end is None:
            raise InvalidEventError("End datetime is required for timed events")

        try:
            return Event(
                subject=self._subject,
                start=self._start,
                end=self._end,
                description=self._description,
                location=self._location,
                status=self._status,
                all_day=self._all_day,
                series_id=self._series_id,
            )
        except ValidationError as e:
            raise InvalidEventError(describe_validation_error(e)) from e
