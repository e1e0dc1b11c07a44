"""Request builders shared by the API tests."""

from datetime import date, datetime, time
from typing import Any


def event_request(
    subject: str = "Meeting",
    start: datetime = datetime(2025, 5, 5, 10, 0),
    end: datetime | None = datetime(2025, 5, 5, 11, 0),
    **kwargs: Any,
) -> dict[str, Any]:
    """Build a JSON body for POST /events."""
    body = {"subject": subject, "start": start.isoformat()}
    if end is not None:
        body["end"] = end.isoformat()
    body.update(kwargs)
    return body


def series_request(
    subject: str = "Standup",
    start_date: date = date(2025, 5, 5),
    weekdays: list[Any] | None = None,
    occurrences: int | None = 3,
    end_date: date | None = None,
    start_time: time | None = time(9, 0),
    end_time: time | None = time(9, 30),
    all_day: bool = False,
) -> dict[str, Any]:
    """Build a JSON body for POST /events/series."""
    body: dict[str, Any] = {
        "subject": subject,
        "start_date": start_date.isoformat(),
        "weekdays": weekdays if weekdays is not None else ["monday"],
        "all_day": all_day,
    }
    if occurrences is not None:
        body["occurrences"] = occurrences
    if end_date is not None:
        body["end_date"] = end_date.isoformat()
    if start_time is not None:
        body["start_time"] = start_time.isoformat()
    if end_time is not None:
        body["end_time"] = end_time.isoformat()
    return body
