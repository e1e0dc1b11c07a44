"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared CalendarManager and the loaded settings.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from config import Settings, load_settings
from models.calendar import Calendar
from models.calendar_manager import CalendarManager

logger = logging.getLogger(__name__)

# Global state
# The service keeps all calendars in memory in a single shared manager
_calendar_manager: CalendarManager | None = None
_settings: Settings | None = None


def get_calendar_manager() -> CalendarManager:
    """Get the shared CalendarManager instance.

    This function is a FastAPI dependency. Route handlers receive the
    manager by declaring a parameter of type CalendarManagerDep.

    Returns:
        The shared CalendarManager instance.

    Raises:
        RuntimeError: If the manager hasn't been initialized yet.
    """
    if _calendar_manager is None:
        raise RuntimeError(
            "CalendarManager not initialized. Call initialize_calendar_manager() first."
        )
    return _calendar_manager


def get_settings() -> Settings:
    """Get the settings the application was started with.

    Falls back to loading them from the environment if the app has not been
    initialized (e.g. a route exercised with a stubbed manager).
    """
    global _settings

    if _settings is None:
        _settings = load_settings()
    return _settings


def initialize_calendar_manager(settings: Optional[Settings] = None) -> CalendarManager:
    """Initialize the shared CalendarManager instance.

    This should be called once when the FastAPI app starts up. When the
    settings name a default calendar, it is created and made active.

    Args:
        settings: Settings to use; loaded from the environment if omitted.

    Returns:
        The newly created CalendarManager instance.
    """
    global _calendar_manager, _settings

    _settings = settings or load_settings()
    _calendar_manager = CalendarManager()

    if _settings.default_calendar_name:
        _calendar_manager.create_calendar(
            _settings.default_calendar_name, _settings.default_timezone
        )
        _calendar_manager.use_calendar(_settings.default_calendar_name)

    return _calendar_manager


def shutdown_calendar_manager() -> None:
    """Drop the shared CalendarManager.

    Calendars live only in memory, so shutting down discards them.
    """
    global _calendar_manager

    if _calendar_manager is not None:
        logger.info(
            f"Discarding {len(_calendar_manager.list_calendars())} in-memory calendar(s)"
        )
    _calendar_manager = None


# Type aliases for dependency injection
CalendarManagerDep = Annotated[CalendarManager, Depends(get_calendar_manager)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_active_calendar(manager: CalendarManagerDep) -> Calendar:
    """Resolve the active calendar for routes that act on it.

    Raises:
        NoActiveCalendarError: If no calendar is active.
    """
    return manager.require_active_calendar()


ActiveCalendarDep = Annotated[Calendar, Depends(get_active_calendar)]
