"""Main entry point for the Calendar Manager FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API for managing calendars, recurring series and cross-calendar copies.

To run the development server:
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import initialize_calendar_manager, shutdown_calendar_manager
from api.exceptions import EXCEPTION_HANDLERS
from api.routes import calendars as calendar_routes
from api.routes import copy as copy_routes
from api.routes import events as event_routes
from api.routes import export as export_routes
from config import load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Configure the root logger format and level."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Startup loads settings, configures logging and creates the shared
    CalendarManager with its default calendar. Shutdown discards it.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = load_settings()
    configure_logging(settings.log_level)

    logger.info("Starting calendar service - initializing CalendarManager")
    initialize_calendar_manager(settings)

    yield  # App runs and handles requests here

    logger.info("Shutting down calendar service")
    shutdown_calendar_manager()


# Create the FastAPI application instance
app = FastAPI(
    title="Calendar Manager",
    description="API for managing calendars, recurring event series and cross-calendar copies",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Handlers are matched by exception class, most specific first
for exception_class, handler in EXCEPTION_HANDLERS:
    app.add_exception_handler(exception_class, handler)

# Register route modules
app.include_router(calendar_routes.router)
app.include_router(event_routes.router)
app.include_router(copy_routes.router)
app.include_router(export_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Calendar Manager API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
