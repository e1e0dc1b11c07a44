"""iCalendar (RFC 5545) exporter built on the icalendar library."""

import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Union
from zoneinfo import ZoneInfo

from icalendar import Calendar as ICalCalendar
from icalendar import Event as ICalEvent

from exporters.base import Exporter
from models.calendar import Calendar
from models.event import Event, EventStatus, LocationType

PRODID = "-//Calendar Application//EN"
UID_DOMAIN = "calendar-app"


class IcalExporter(Exporter):
    """Exports events as a VCALENDAR with one VEVENT per event.

    Event times are calendar-local, so they are localized to the calendar's
    zone and written in UTC.
    """

    def export(self, events: list[Event], path: Union[str, Path], calendar: Calendar) -> str:
        path = Path(path)
        path.write_bytes(self.build_calendar(events, calendar).to_ical())
        return str(path.resolve())

    def build_calendar(self, events: list[Event], calendar: Calendar) -> ICalCalendar:
        """Build the icalendar object for the given events.

        Args:
            events: Events to include.
            calendar: Owning calendar, for the name and time zone headers.

        Returns:
            The populated icalendar Calendar.
        """
        cal = ICalCalendar()
        cal.add("version", "2.0")
        cal.add("prodid", PRODID)
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "PUBLISH")
        cal.add("x-wr-calname", calendar.name)
        cal.add("x-wr-timezone", calendar.timezone)

        stamp = datetime.now(timezone.utc)
        for event in events:
            cal.add_component(self._build_event(event, calendar.zone, stamp))
        return cal

    @staticmethod
    def _build_event(event: Event, zone: ZoneInfo, stamp: datetime) -> ICalEvent:
        vevent = ICalEvent()
        vevent.add("uid", event_uid(event))
        vevent.add("dtstamp", stamp)
        vevent.add("dtstart", _to_utc(event.start, zone))
        vevent.add("dtend", _to_utc(event.end, zone))
        vevent.add("summary", event.subject)
        if event.description:
            vevent.add("description", event.description)
        if event.location is not LocationType.NONE:
            vevent.add("location", event.location.display_value)
        vevent.add("class", "PRIVATE" if event.status is EventStatus.PRIVATE else "PUBLIC")
        if event.all_day:
            vevent.add("x-microsoft-cdo-alldayevent", "TRUE")
        return vevent


def event_uid(event: Event) -> str:
    """Derive a stable UID from the event fingerprint."""
    fingerprint = "|".join(
        [event.subject, event.start.isoformat(), event.end.isoformat()]
    )
    digest = hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()[:16]
    return f"{digest}@{UID_DOMAIN}"


def _to_utc(value: datetime, zone: ZoneInfo) -> datetime:
    return value.replace(tzinfo=zone).astimezone(timezone.utc)
