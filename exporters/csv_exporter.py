"""CSV exporter using the column layout Google Calendar imports."""

import csv
from datetime import datetime
from pathlib import Path
from typing import Union

from exporters.base import Exporter
from models.calendar import Calendar
from models.event import Event, EventStatus

CSV_HEADER = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%I:%M %p"


class CsvExporter(Exporter):
    """Exports events as one CSV row each.

    All-day events leave both time columns empty. Times are written as
    calendar-local wall-clock values.
    """

    def export(self, events: list[Event], path: Union[str, Path], calendar: Calendar) -> str:
        path = Path(path)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(CSV_HEADER)
            for event in events:
                writer.writerow(self.format_row(event))
        return str(path.resolve())

    @staticmethod
    def format_row(event: Event) -> list[str]:
        """Build the CSV cells for one event."""
        return [
            event.subject,
            event.start.strftime(DATE_FORMAT),
            _format_time(event.start, event.all_day),
            event.end.strftime(DATE_FORMAT),
            _format_time(event.end, event.all_day),
            "True" if event.all_day else "False",
            event.description or "",
            event.location.display_value,
            "True" if event.status is EventStatus.PRIVATE else "False",
        ]


def _format_time(value: datetime, all_day: bool) -> str:
    return "" if all_day else value.strftime(TIME_FORMAT)
