"""Exceptions raised by the calendar models.

Every failure the core can report derives from CalendarError, so callers
(route handlers, scripts) can catch the whole family in one place or pick
out specific kinds.

Exception Hierarchy:
    CalendarError (base)
    ├── InvalidArgumentError - malformed input (also a ValueError)
    │   └── InvalidEventError - event failed builder validation
    ├── DuplicateEventError - fingerprint already present
    ├── DuplicateCalendarError - calendar name already taken
    ├── CalendarNotFoundError - no calendar with that name
    ├── EventNotFoundError - no event matches (subject, start)
    ├── AmbiguousEventError - several events match (subject, start)
    └── NoActiveCalendarError - operation needs an active calendar
"""

from datetime import datetime

from pydantic import ValidationError


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a one-line message.

    Args:
        error: The pydantic validation error.

    Returns:
        The individual error messages joined with "; ".
    """
    messages = []
    for detail in error.errors():
        message = detail.get("msg", "invalid value")
        messages.append(message.removeprefix("Value error, "))
    return "; ".join(messages)


class CalendarError(Exception):
    """Base exception for all calendar model errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(CalendarError, ValueError):
    """Raised when input fails validation at a model boundary.

    Covers bad subjects, bad time ordering, empty weekday sets, non-positive
    occurrence counts, unknown property names and wrong value types.
    """


class InvalidEventError(InvalidArgumentError):
    """Raised by EventBuilder.build() when event invariants are violated."""


class DuplicateEventError(CalendarError):
    """Raised when an insertion would duplicate an event fingerprint.

    Attributes:
        subject: Subject of the conflicting event.
        start: Start of the conflicting event.
        end: End of the conflicting event.
    """

    def __init__(self, subject: str, start: datetime, end: datetime) -> None:
        self.subject = subject
        self.start = start
        self.end = end
        super().__init__(
            f"Event '{subject}' from {start.isoformat()} to {end.isoformat()} already exists"
        )


class DuplicateCalendarError(CalendarError):
    """Raised when a calendar name is already registered.

    Attributes:
        name: The colliding calendar name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Calendar with name '{name}' already exists")


class CalendarNotFoundError(CalendarError, LookupError):
    """Raised when a calendar name is not registered.

    Attributes:
        name: The requested calendar name.
        available_calendars: Names that do exist.
    """

    def __init__(self, name: str, available_calendars: list[str] | None = None) -> None:
        self.name = name
        self.available_calendars = available_calendars or []
        super().__init__(f"Calendar with name '{name}' does not exist")


class EventNotFoundError(CalendarError, LookupError):
    """Raised when no event matches a (subject, start) pair.

    Attributes:
        subject: The requested subject.
        start: The requested start.
    """

    def __init__(self, subject: str, start: datetime) -> None:
        self.subject = subject
        self.start = start
        super().__init__(f"No event '{subject}' starting at {start.isoformat()}")


class AmbiguousEventError(CalendarError):
    """Raised when more than one event matches a (subject, start) pair.

    Attributes:
        subject: The requested subject.
        start: The requested start.
        match_count: How many events matched.
    """

    def __init__(self, subject: str, start: datetime, match_count: int) -> None:
        self.subject = subject
        self.start = start
        self.match_count = match_count
        super().__init__(
            f"{match_count} events named '{subject}' start at {start.isoformat()}; "
            "unable to pick one"
        )


class NoActiveCalendarError(CalendarError):
    """Raised when an operation needs an active calendar and none is set."""

    def __init__(self, message: str = "No active calendar selected") -> None:
        super().__init__(message)
