"""Exception handlers for the calendar FastAPI application.

This module converts the calendar model exceptions into consistent JSON
responses of the form {"error", "detail", "type"}. Handlers are looked up
by exception class, so every subclass of a registered class is covered.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.exceptions import (
    AmbiguousEventError,
    CalendarError,
    CalendarNotFoundError,
    DuplicateCalendarError,
    DuplicateEventError,
    EventNotFoundError,
    InvalidArgumentError,
    NoActiveCalendarError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, exc: Exception, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "detail": str(exc),
            "type": type(exc).__name__,
            **extra,
        },
    )


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    """Handle InvalidArgumentError (including InvalidEventError).

    Returns:
        JSONResponse with 400 status.
    """
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid Argument", exc)


async def calendar_not_found_handler(request: Request, exc: CalendarNotFoundError):
    """Handle CalendarNotFoundError exceptions.

    Returns a 404 with the requested name and the calendars that do exist.

    Args:
        request: The incoming request that triggered the error.
        exc: The CalendarNotFoundError exception.

    Returns:
        JSONResponse with 404 status and helpful details.
    """
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        "Calendar Not Found",
        exc,
        requested_calendar=exc.name,
        available_calendars=exc.available_calendars,
    )


async def event_not_found_handler(request: Request, exc: EventNotFoundError):
    """Handle EventNotFoundError exceptions.

    Returns:
        JSONResponse with 404 status.
    """
    return _error_response(status.HTTP_404_NOT_FOUND, "Event Not Found", exc)


async def duplicate_event_handler(request: Request, exc: DuplicateEventError):
    """Handle DuplicateEventError exceptions.

    Returns:
        JSONResponse with 409 status.
    """
    return _error_response(status.HTTP_409_CONFLICT, "Duplicate Event", exc)


async def duplicate_calendar_handler(request: Request, exc: DuplicateCalendarError):
    """Handle DuplicateCalendarError exceptions.

    Returns:
        JSONResponse with 409 status.
    """
    return _error_response(status.HTTP_409_CONFLICT, "Duplicate Calendar", exc)


async def ambiguous_event_handler(request: Request, exc: AmbiguousEventError):
    """Handle AmbiguousEventError exceptions.

    Returns:
        JSONResponse with 409 status and the number of matching events.
    """
    return _error_response(
        status.HTTP_409_CONFLICT, "Ambiguous Event", exc, match_count=exc.match_count
    )


async def no_active_calendar_handler(request: Request, exc: NoActiveCalendarError):
    """Handle NoActiveCalendarError exceptions.

    Returns a 409 (Conflict) indicating a calendar must be selected first.

    Args:
        request: The incoming request that triggered the error.
        exc: The NoActiveCalendarError exception.

    Returns:
        JSONResponse with 409 status.
    """
    return _error_response(
        status.HTTP_409_CONFLICT,
        "No Active Calendar",
        exc,
        suggestion="Select a calendar with POST /calendars/use",
    )


async def calendar_error_handler(request: Request, exc: CalendarError):
    """Handle any other CalendarError as a bad request."""
    return _error_response(status.HTTP_400_BAD_REQUEST, "Calendar Error", exc)


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised inside route handlers.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "type": "ValidationError",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions not covered by the calendar hierarchy.

    Returns:
        JSONResponse with 400 status.
    """
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid Value", exc)


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It logs the traceback
    and keeps it out of the response.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )


# Registration table used by main.py
EXCEPTION_HANDLERS = [
    (InvalidArgumentError, invalid_argument_handler),
    (CalendarNotFoundError, calendar_not_found_handler),
    (EventNotFoundError, event_not_found_handler),
    (DuplicateEventError, duplicate_event_handler),
    (DuplicateCalendarError, duplicate_calendar_handler),
    (AmbiguousEventError, ambiguous_event_handler),
    (NoActiveCalendarError, no_active_calendar_handler),
    (CalendarError, calendar_error_handler),
    (ValidationError, validation_exception_handler),
    (ValueError, value_error_handler),
    (Exception, generic_exception_handler),
]
