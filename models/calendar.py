"""Calendar model.

A Calendar owns the events of one named, timezone-tagged calendar. Events are
stored in a dict keyed by their (subject, start, end) fingerprint, which makes
duplicate detection a key lookup.

Series are not stored as entities: a series is the set of events sharing a
series_id, minted per calendar as "SID_<n>".
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time, timedelta
from enum import Enum, IntEnum
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from models.event import (
    ALL_DAY_START,
    Event,
    EventBuilder,
    EventKey,
    EventStatus,
    LocationType,
)
from models.exceptions import (
    AmbiguousEventError,
    DuplicateEventError,
    EventNotFoundError,
    InvalidArgumentError,
)
from models.timezones import convert_wall_time, resolve_zone

logger = logging.getLogger(__name__)

SERIES_ID_PREFIX = "SID_"

EDITABLE_PROPERTIES = ("subject", "start", "end", "description", "location", "status")
TIME_PROPERTIES = frozenset({"start", "end"})


class Weekday(IntEnum):
    """Day of the week, numbered like date.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: Union["Weekday", int, str]) -> "Weekday":
        """Coerce a Weekday, an int 0-6 or a day name to a Weekday.

        Raises:
            InvalidArgumentError: If the value names no weekday.
        """
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidArgumentError(f"Unknown weekday: {value}") from None
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(f"Unknown weekday: {value}") from None


class EditScope(str, Enum):
    """How far an edit cascades through a series."""

    SINGLE = "single"
    FORWARD = "forward"
    ALL_EVENTS = "all_events"


def _sort_key(event: Event) -> tuple[datetime, datetime, str]:
    return (event.start, event.end, event.subject)


class Calendar(BaseModel):
    """A named calendar in one time zone, holding a set of events.

    Args:
        name: Calendar name (non-blank).
        timezone: IANA time zone name the event times are expressed in.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(description="Calendar name")
    timezone: str = Field(default="UTC", description="IANA time zone name")

    _events: dict[EventKey, Event] = PrivateAttr(default_factory=dict)
    _series_counter: int = PrivateAttr(default=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        """Reject blank calendar names."""
        if not name.strip():
            raise ValueError("Calendar name cannot be blank")
        return name

    @field_validator("timezone", mode="before")
    @classmethod
    def validate_timezone(cls, value: Any) -> str:
        """Accept a zone name or ZoneInfo and store the canonical key."""
        return resolve_zone(value).key

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def event_count(self) -> int:
        return len(self._events)

    # ===== Insertion =====

    def add_event(self, event: Event) -> Event:
        """Add a single event.

        Args:
            event: Event to insert.

        Returns:
            The inserted event.

        Raises:
            DuplicateEventError: If an event with the same fingerprint exists.
        """
        self._insert(event)
        return event

    def add_events(self, events: Iterable[Event]) -> list[Event]:
        """Add several events, all or nothing.

        Every fingerprint is checked against the calendar and against the
        other new events before anything is inserted.

        Args:
            events: Events to insert.

        Returns:
            The inserted events, in the order given.

        Raises:
            DuplicateEventError: If any fingerprint would be duplicated.
        """
        events = list(events)
        seen: set[EventKey] = set()
        for event in events:
            if event.key in self._events or event.key in seen:
                raise DuplicateEventError(*event.key)
            seen.add(event.key)
        for event in events:
            self._events[event.key] = event
        return events

    def create_event(
        self,
        subject: str,
        start: datetime,
        end: Optional[datetime] = None,
        all_day: bool = False,
        description: Optional[str] = None,
        location: LocationType = LocationType.NONE,
        status: EventStatus = EventStatus.PUBLIC,
    ) -> Event:
        """Build a single (non-series) event and add it.

        Args:
            subject: Event subject.
            start: Start datetime (any time for all-day events).
            end: End datetime; may be omitted for all-day events.
            all_day: Whether the event is all-day.
            description: Optional description.
            location: Location type.
            status: Visibility status.

        Returns:
            The created event.

        Raises:
            InvalidEventError: If the event attributes are invalid.
            DuplicateEventError: If the fingerprint already exists.
        """
        event = (
            EventBuilder()
            .set_subject(subject)
            .set_start(start)
            .set_end(end)
            .set_all_day(all_day)
            .set_description(description)
            .set_location(location)
            .set_status(status)
            .build()
        )
        return self.add_event(event)

    # ===== Series generation =====

    def create_event_series(
        self,
        subject: str,
        start_date: date,
        start_time: time,
        end_time: time,
        weekdays: Iterable[Union[Weekday, int, str]],
        occurrences: int,
    ) -> list[Event]:
        """Generate a timed series with a fixed number of occurrences.

        Walks forward one day at a time from start_date and creates an event on
        every date whose weekday is in weekdays, until occurrences events exist.

        If an occurrence collides with an existing event, generation stops with
        DuplicateEventError and the occurrences already added stay in place.

        Args:
            subject: Subject shared by all occurrences.
            start_date: First date considered.
            start_time: Start time of each occurrence.
            end_time: End time of each occurrence.
            weekdays: Days of the week to place occurrences on.
            occurrences: Number of occurrences to create.

        Returns:
            The created events in date order.

        Raises:
            InvalidArgumentError: If occurrences <= 0, weekdays is empty or
                end_time is not after start_time.
            DuplicateEventError: If an occurrence duplicates an existing event.
        """
        days = self._validate_series(subject, weekdays)
        if occurrences <= 0:
            raise InvalidArgumentError("Occurrences must be greater than 0")
        self._validate_times(start_time, end_time)
        dates = _dates_by_count(start_date, days, occurrences)
        return self._add_series(subject, dates, start_time, end_time)

    def create_event_series_until(
        self,
        subject: str,
        start_date: date,
        start_time: time,
        end_time: time,
        weekdays: Iterable[Union[Weekday, int, str]],
        end_date: date,
    ) -> list[Event]:
        """Generate a timed series on matching weekdays up to end_date inclusive.

        Same partial-insertion behavior as create_event_series.

        Raises:
            InvalidArgumentError: If end_date is before start_date, weekdays is
                empty or end_time is not after start_time.
            DuplicateEventError: If an occurrence duplicates an existing event.
        """
        days = self._validate_series(subject, weekdays)
        if end_date < start_date:
            raise InvalidArgumentError("Series end date cannot be before start date")
        self._validate_times(start_time, end_time)
        dates = _dates_until(start_date, days, end_date)
        return self._add_series(subject, dates, start_time, end_time)

    def create_all_day_event_series(
        self,
        subject: str,
        start_date: date,
        weekdays: Iterable[Union[Weekday, int, str]],
        occurrences: int,
    ) -> list[Event]:
        """Generate an all-day series with a fixed number of occurrences."""
        days = self._validate_series(subject, weekdays)
        if occurrences <= 0:
            raise InvalidArgumentError("Occurrences must be greater than 0")
        return self._add_series(subject, _dates_by_count(start_date, days, occurrences))

    def create_all_day_event_series_until(
        self,
        subject: str,
        start_date: date,
        weekdays: Iterable[Union[Weekday, int, str]],
        end_date: date,
    ) -> list[Event]:
        """Generate an all-day series up to end_date inclusive."""
        days = self._validate_series(subject, weekdays)
        if end_date < start_date:
            raise InvalidArgumentError("Series end date cannot be before start date")
        return self._add_series(subject, _dates_until(start_date, days, end_date))

    def new_series_id(self) -> str:
        """Mint the next series id for this calendar."""
        self._series_counter += 1
        return f"{SERIES_ID_PREFIX}{self._series_counter}"

    def _validate_series(
        self, subject: str, weekdays: Iterable[Union[Weekday, int, str]]
    ) -> frozenset[Weekday]:
        if not subject or not subject.strip():
            raise InvalidArgumentError("Subject cannot be empty")
        days = frozenset(Weekday.parse(day) for day in weekdays)
        if not days:
            raise InvalidArgumentError("At least one weekday must be specified")
        return days

    @staticmethod
    def _validate_times(start_time: time, end_time: time) -> None:
        if end_time <= start_time:
            raise InvalidArgumentError("Series end time must be after start time")

    def _add_series(
        self,
        subject: str,
        dates: Iterable[date],
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
    ) -> list[Event]:
        """Insert one event per date under a fresh series id.

        All-day events are created when start_time is None.
        """
        series_id = self.new_series_id()
        created: list[Event] = []

        for day in dates:
            builder = EventBuilder().set_subject(subject).set_series_id(series_id)
            if start_time is None:
                builder.set_start(datetime.combine(day, ALL_DAY_START)).set_all_day(True)
            else:
                builder.set_start(datetime.combine(day, start_time))
                builder.set_end(datetime.combine(day, end_time))
            event = builder.build()

            try:
                self._insert(event)
            except DuplicateEventError:
                logger.warning(
                    f"Series {series_id} '{subject}' in calendar '{self.name}' stopped "
                    f"after {len(created)} occurrence(s): duplicate on {day.isoformat()}"
                )
                raise
            created.append(event)

        logger.info(
            f"Created series {series_id} '{subject}' with {len(created)} occurrence(s) "
            f"in calendar '{self.name}'"
        )
        return created

    # ===== Editing =====

    def edit_event(
        self,
        subject: str,
        start: datetime,
        property: str,
        new_value: Any,
        scope: Union[EditScope, str] = EditScope.SINGLE,
    ) -> list[Event]:
        """Edit one property of an event, cascading through its series per scope.

        The target is the unique event matching (subject, start). Then:

        - SINGLE: only the target changes. Editing start or end detaches it
          from its series.
        - FORWARD: the target and every later member of its series change.
          Editing start or end moves all of them into one new series.
        - ALL_EVENTS: every member of the series changes; series id is kept.

        FORWARD and ALL_EVENTS behave like SINGLE for events outside a series.
        For start and end only the time of day is taken from new_value; the
        date of each edited event is kept.

        The edit is validated in full before the calendar is touched, so a
        failure leaves every event as it was.

        Args:
            subject: Subject of the target event.
            start: Start datetime of the target event.
            property: One of subject, start, end, description, location, status.
            new_value: New value for the property.
            scope: Edit scope.

        Returns:
            The replacement events, sorted by start.

        Raises:
            EventNotFoundError: If no event matches.
            AmbiguousEventError: If several events match.
            InvalidArgumentError: If the property, value or scope is invalid.
            DuplicateEventError: If an edited event would duplicate another.
        """
        prop = _normalize_property(property)
        scope = _normalize_scope(scope)
        target = self.find_event(subject, start)
        is_time_edit = prop in TIME_PROPERTIES

        if scope is EditScope.SINGLE or not target.is_in_series():
            replacements = {
                target.key: self._modify(target, prop, new_value, detach=is_time_edit)
            }
        elif scope is EditScope.FORWARD:
            members = [
                event for event in self.get_series_events(target.series_id)
                if event.start >= target.start
            ]
            if is_time_edit:
                new_series_id = self.new_series_id()
                replacements = {
                    event.key: self._modify(event, prop, new_value).copy_with_series_id(
                        new_series_id
                    )
                    for event in members
                }
            else:
                replacements = {
                    event.key: self._modify(event, prop, new_value) for event in members
                }
        elif scope is EditScope.ALL_EVENTS:
            replacements = {
                event.key: self._modify(event, prop, new_value)
                for event in self.get_series_events(target.series_id)
            }
        else:
            raise InvalidArgumentError(f"Unsupported edit scope: {scope}")

        self._replace(replacements)
        logger.debug(
            f"Edited {prop} of {len(replacements)} event(s) '{subject}' "
            f"({scope.value}) in calendar '{self.name}'"
        )
        return sorted(replacements.values(), key=_sort_key)

    def _modify(self, event: Event, prop: str, value: Any, detach: bool = False) -> Event:
        """Return a copy of event with one property changed."""
        changes: dict[str, Any] = {}
        if prop == "subject":
            changes["subject"] = _require_str(value, prop)
        elif prop == "start":
            changes["start"] = datetime.combine(event.start.date(), _time_of_day(value))
        elif prop == "end":
            changes["end"] = datetime.combine(event.end.date(), _time_of_day(value))
        elif prop == "description":
            changes["description"] = _require_str(value, prop)
        elif prop == "location":
            changes["location"] = _coerce_enum(LocationType, value, prop)
        elif prop == "status":
            changes["status"] = _coerce_enum(EventStatus, value, prop)
        else:
            raise InvalidArgumentError(f"Invalid property: {prop}")

        if detach:
            changes["series_id"] = None
        return event.copy_with_changes(**changes)

    def _replace(self, replacements: dict[EventKey, Event]) -> None:
        """Swap old events for new ones after checking for fingerprint clashes."""
        seen: set[EventKey] = set()
        for new_event in replacements.values():
            clashes = new_event.key in self._events and new_event.key not in replacements
            if clashes or new_event.key in seen:
                raise DuplicateEventError(*new_event.key)
            seen.add(new_event.key)

        for old_key in replacements:
            del self._events[old_key]
        for new_event in replacements.values():
            self._events[new_event.key] = new_event

    # ===== Queries =====

    def find_event(self, subject: str, start: datetime) -> Event:
        """Find the unique event with this subject and start.

        Raises:
            EventNotFoundError: If no event matches.
            AmbiguousEventError: If more than one event matches.
        """
        matches = [
            event for event in self._events.values()
            if event.subject == subject and event.start == start
        ]
        if not matches:
            raise EventNotFoundError(subject, start)
        if len(matches) > 1:
            raise AmbiguousEventError(subject, start, len(matches))
        return matches[0]

    def get_events_on_date(self, day: date) -> list[Event]:
        """Return events whose span touches the given date, sorted by start.

        An event touches a date if it starts on it, ends on it, or spans it.
        """
        return sorted(
            (
                event for event in self._events.values()
                if event.start.date() <= day <= event.end.date()
            ),
            key=_sort_key,
        )

    def get_events_in_range(self, start: datetime, end: datetime) -> list[Event]:
        """Return events overlapping [start, end), sorted by start.

        Args:
            start: Range start.
            end: Range end.

        Returns:
            Events with event.start < end and start < event.end.
        """
        return sorted(
            (
                event for event in self._events.values()
                if event.start < end and start < event.end
            ),
            key=_sort_key,
        )

    def is_busy(self, at: datetime) -> bool:
        """Check whether any event covers the instant (start inclusive, end exclusive)."""
        return any(event.start <= at < event.end for event in self._events.values())

    def get_all_events(self) -> list[Event]:
        """Return every event, sorted by start."""
        return sorted(self._events.values(), key=_sort_key)

    def get_series_events(self, series_id: Optional[str]) -> list[Event]:
        """Return the members of a series, sorted by start."""
        if series_id is None:
            return []
        return sorted(
            (event for event in self._events.values() if event.series_id == series_id),
            key=_sort_key,
        )

    # ===== Calendar properties =====

    def rename(self, new_name: str) -> None:
        """Change the calendar name.

        Raises:
            InvalidArgumentError: If the new name is blank.
        """
        if not isinstance(new_name, str) or not new_name.strip():
            raise InvalidArgumentError("Calendar name cannot be blank")
        self.name = new_name

    def set_timezone(self, zone: Union[str, ZoneInfo]) -> None:
        """Move the calendar to another time zone.

        Every timed event is reinterpreted in the old zone and converted to the
        same instant in the new zone; dates may shift across midnight. All-day
        events keep their date and their 08:00-17:00 window. The event
        collection is swapped in one step. Setting the current zone is a no-op.

        Args:
            zone: New IANA zone name or ZoneInfo.

        Raises:
            InvalidArgumentError: If the zone is unknown.
        """
        new_zone = resolve_zone(zone)
        if new_zone.key == self.timezone:
            return

        old_zone = self.zone
        converted: dict[EventKey, Event] = {}
        for event in self._events.values():
            # All-day events belong to a calendar date, not an instant
            if event.all_day:
                moved = event
            else:
                moved = event.copy_with_new_times(
                    convert_wall_time(event.start, old_zone, new_zone),
                    convert_wall_time(event.end, old_zone, new_zone),
                )
            if moved.key in converted:
                raise DuplicateEventError(*moved.key)
            converted[moved.key] = moved

        self._events = converted
        self.timezone = new_zone.key
        logger.info(
            f"Calendar '{self.name}' moved from {old_zone.key} to {new_zone.key} "
            f"({len(converted)} events converted)"
        )

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the calendar.

        Returns:
            Dictionary with name, timezone, event_count and events.
        """
        return {
            "name": self.name,
            "timezone": self.timezone,
            "event_count": self.event_count,
            "events": [event.model_dump(mode="json") for event in self.get_all_events()],
        }

    def _insert(self, event: Event) -> None:
        if event.key in self._events:
            raise DuplicateEventError(*event.key)
        self._events[event.key] = event


def _dates_by_count(start_date: date, days: frozenset[Weekday], occurrences: int) -> Iterator[date]:
    current = start_date
    count = 0
    while count < occurrences:
        if current.weekday() in days:
            yield current
            count += 1
        current += timedelta(days=1)


def _dates_until(start_date: date, days: frozenset[Weekday], end_date: date) -> Iterator[date]:
    current = start_date
    while current <= end_date:
        if current.weekday() in days:
            yield current
        current += timedelta(days=1)


def _normalize_property(property: str) -> str:
    if not isinstance(property, str) or property.strip().lower() not in EDITABLE_PROPERTIES:
        raise InvalidArgumentError(
            f"Invalid property: {property}. Expected one of {', '.join(EDITABLE_PROPERTIES)}"
        )
    return property.strip().lower()


def _normalize_scope(scope: Union[EditScope, str]) -> EditScope:
    try:
        return EditScope(scope)
    except ValueError:
        raise InvalidArgumentError(f"Invalid edit scope: {scope}") from None


def _require_str(value: Any, prop: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Value for {prop} must be a string")
    return value


def _time_of_day(value: Any) -> time:
    # datetime is a subclass of date, not time, so check it first
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    raise InvalidArgumentError("Value for start/end must be a datetime or time")


def _coerce_enum(enum_cls: type[Enum], value: Any, prop: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid {prop}: {value}") from None
