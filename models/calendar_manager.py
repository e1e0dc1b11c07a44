"""Registry of named calendars and cross-calendar copy operations."""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from models.calendar import Calendar
from models.event import Event
from models.exceptions import (
    CalendarNotFoundError,
    DuplicateCalendarError,
    InvalidArgumentError,
    NoActiveCalendarError,
)
from models.timezones import convert_wall_time, resolve_zone

logger = logging.getLogger(__name__)

CALENDAR_PROPERTIES = ("name", "timezone")


class CalendarManager:
    """Owns a set of uniquely named calendars and tracks the active one.

    Event-level operations that take no calendar name (copy sources, the REST
    /events routes) act on the active calendar, which is None until
    use_calendar() is called.
    """

    def __init__(self) -> None:
        self._calendars: dict[str, Calendar] = {}
        self._active: Optional[Calendar] = None

    # ===== Registry =====

    def create_calendar(self, name: str, timezone: Union[str, ZoneInfo] = "UTC") -> Calendar:
        """Create and register a new calendar.

        Args:
            name: Unique calendar name.
            timezone: IANA zone name or ZoneInfo.

        Returns:
            The new Calendar.

        Raises:
            DuplicateCalendarError: If the name is taken.
            InvalidArgumentError: If the name is blank or the zone is unknown.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Calendar name cannot be blank")
        if name in self._calendars:
            raise DuplicateCalendarError(name)

        calendar = Calendar(name=name, timezone=resolve_zone(timezone).key)
        self._calendars[name] = calendar
        logger.info(f"Created calendar '{name}' in {calendar.timezone}")
        return calendar

    def use_calendar(self, name: str) -> Calendar:
        """Make the named calendar active.

        Raises:
            CalendarNotFoundError: If no calendar has that name.
        """
        self._active = self.get_calendar(name)
        logger.info(f"Active calendar is now '{name}'")
        return self._active

    @property
    def active_calendar(self) -> Optional[Calendar]:
        return self._active

    def require_active_calendar(self) -> Calendar:
        """Return the active calendar.

        Raises:
            NoActiveCalendarError: If no calendar is active.
        """
        if self._active is None:
            raise NoActiveCalendarError()
        return self._active

    def get_calendar(self, name: str) -> Calendar:
        """Look up a calendar by name.

        Raises:
            CalendarNotFoundError: If no calendar has that name.
        """
        try:
            return self._calendars[name]
        except KeyError:
            raise CalendarNotFoundError(name, self.list_calendars()) from None

    def list_calendars(self) -> list[str]:
        """Return the registered calendar names in creation order."""
        return list(self._calendars)

    def edit_calendar(self, name: str, property: str, new_value: Any) -> Calendar:
        """Change a calendar's name or time zone.

        Renaming re-keys the registry but keeps the same Calendar instance, so
        an active calendar stays active under its new name.

        Args:
            name: Current calendar name.
            property: "name" or "timezone" (case-insensitive).
            new_value: New name, or zone name / ZoneInfo.

        Returns:
            The edited Calendar.

        Raises:
            CalendarNotFoundError: If the calendar does not exist.
            DuplicateCalendarError: If renaming onto a taken name.
            InvalidArgumentError: For an unknown property or invalid value.
        """
        calendar = self.get_calendar(name)
        prop = property.strip().lower() if isinstance(property, str) else property

        if prop == "name":
            if not isinstance(new_value, str):
                raise InvalidArgumentError("Calendar name must be a string")
            if new_value == name:
                return calendar
            if new_value in self._calendars:
                raise DuplicateCalendarError(new_value)
            calendar.rename(new_value)
            # Rebuild to keep creation order with the new key in place
            self._calendars = {
                (new_value if key == name else key): value
                for key, value in self._calendars.items()
            }
            logger.info(f"Renamed calendar '{name}' to '{new_value}'")
        elif prop == "timezone":
            if not isinstance(new_value, (str, ZoneInfo)):
                raise InvalidArgumentError("Invalid value for timezone property")
            calendar.set_timezone(new_value)
        else:
            raise InvalidArgumentError(
                f"Invalid property: {property}. Expected one of {', '.join(CALENDAR_PROPERTIES)}"
            )
        return calendar

    # ===== Copying =====

    def copy_event(
        self,
        event_name: str,
        source_start: datetime,
        target_calendar_name: str,
        target_start: datetime,
    ) -> Event:
        """Copy one event from the active calendar to a new start time.

        The copy keeps the source duration. No zone conversion is applied:
        target_start is already expressed in the target calendar's zone.
        Copies into a different calendar lose their series id.

        Args:
            event_name: Subject of the source event.
            source_start: Start of the source event.
            target_calendar_name: Calendar to copy into (may be the active one).
            target_start: Start of the copy.

        Returns:
            The inserted copy.

        Raises:
            NoActiveCalendarError: If no calendar is active.
            CalendarNotFoundError: If the target calendar does not exist.
            EventNotFoundError: If the source event does not exist.
            AmbiguousEventError: If the source event is not unique.
            DuplicateEventError: If the copy duplicates an existing event.
        """
        source = self.require_active_calendar()
        target = self.get_calendar(target_calendar_name)
        event = source.find_event(event_name, source_start)

        copied = event.copy_with_new_times(target_start, target_start + event.duration)
        if target is not source and copied.is_in_series():
            copied = copied.copy_with_series_id(None)

        target.add_event(copied)
        logger.info(
            f"Copied '{event_name}' from '{source.name}' to '{target.name}' "
            f"at {target_start.isoformat()}"
        )
        return copied

    def copy_events_on_date(
        self, source_date: date, target_calendar_name: str, target_date: date
    ) -> list[Event]:
        """Copy every event on a date of the active calendar onto target_date.

        Times are converted to the target calendar's zone, and the converted
        time of day is placed on target_date. Series copied into another
        calendar get fresh ids from that calendar, one per source series.
        Insertion is all or nothing.

        Args:
            source_date: Date to copy from, in the active calendar.
            target_calendar_name: Calendar to copy into.
            target_date: Date to place the copies on.

        Returns:
            The inserted copies.

        Raises:
            NoActiveCalendarError: If no calendar is active.
            CalendarNotFoundError: If the target calendar does not exist.
            DuplicateEventError: If any copy would duplicate an event.
        """
        source = self.require_active_calendar()
        target = self.get_calendar(target_calendar_name)
        series_map: dict[str, str] = {}

        copies = [
            self._copy_into(event, source, target, target_date, series_map)
            for event in source.get_events_on_date(source_date)
        ]
        target.add_events(copies)
        logger.info(
            f"Copied {len(copies)} event(s) on {source_date.isoformat()} from "
            f"'{source.name}' to '{target.name}' on {target_date.isoformat()}"
        )
        return copies

    def copy_events_between(
        self,
        start_date: date,
        end_date: date,
        target_calendar_name: str,
        target_start_date: date,
    ) -> list[Event]:
        """Copy events starting in [start_date, end_date] to a new week range.

        Each event lands on the first day on or after target_start_date with
        the event's weekday, shifted by as many weeks as separate the Monday of
        start_date from the Monday of the event's date. Zone conversion and
        series remapping work as in copy_events_on_date.

        Args:
            start_date: First source date (inclusive).
            end_date: Last source date (inclusive).
            target_calendar_name: Calendar to copy into.
            target_start_date: Start of the destination range.

        Returns:
            The inserted copies.

        Raises:
            InvalidArgumentError: If end_date is before start_date.
            NoActiveCalendarError: If no calendar is active.
            CalendarNotFoundError: If the target calendar does not exist.
            DuplicateEventError: If any copy would duplicate an event.
        """
        if end_date < start_date:
            raise InvalidArgumentError("End date cannot be before start date")
        source = self.require_active_calendar()
        target = self.get_calendar(target_calendar_name)

        range_start = datetime.combine(start_date, datetime.min.time())
        range_end = datetime.combine(end_date + timedelta(days=1), datetime.min.time())
        anchor_monday = _monday_of(start_date)
        series_map: dict[str, str] = {}

        copies = []
        for event in source.get_all_events():
            if not range_start <= event.start < range_end:
                continue
            source_day = event.start.date()
            weeks = (_monday_of(source_day) - anchor_monday).days // 7
            destination = _next_or_same(target_start_date, source_day.weekday())
            destination += timedelta(weeks=weeks)
            copies.append(self._copy_into(event, source, target, destination, series_map))

        target.add_events(copies)
        logger.info(
            f"Copied {len(copies)} event(s) between {start_date.isoformat()} and "
            f"{end_date.isoformat()} from '{source.name}' to '{target.name}' "
            f"starting {target_start_date.isoformat()}"
        )
        return copies

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable overview of all calendars."""
        return {
            "active_calendar": self._active.name if self._active else None,
            "calendars": [
                {
                    "name": calendar.name,
                    "timezone": calendar.timezone,
                    "event_count": calendar.event_count,
                }
                for calendar in self._calendars.values()
            ],
        }

    @staticmethod
    def _copy_into(
        event: Event,
        source: Calendar,
        target: Calendar,
        target_date: date,
        series_map: dict[str, str],
    ) -> Event:
        """Build the copy of event placed on target_date in target's zone."""
        converted_start = convert_wall_time(event.start, source.zone, target.zone)
        new_start = datetime.combine(target_date, converted_start.time())
        copied = event.copy_with_new_times(new_start, new_start + event.duration)

        if target is not source and copied.is_in_series():
            if copied.series_id not in series_map:
                series_map[copied.series_id] = target.new_series_id()
            copied = copied.copy_with_series_id(series_map[copied.series_id])
        return copied


def _monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _next_or_same(day: date, weekday: int) -> date:
    return day + timedelta(days=(weekday - day.weekday()) % 7)
