"""Export endpoint.

Writes the active calendar to a CSV or iCalendar file in the configured
export directory.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import ActiveCalendarDep, SettingsDep
from api.models import ExportResponse
from exporters import export_format, get_exporter, resolve_export_path
from models.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/export",
    tags=["export"],
)


class ExportRequest(BaseModel):
    """Request to export the active calendar.

    Args:
        filename: Bare file name; .csv is appended when the extension is not
            .csv, .ics or .ical.
    """

    filename: str = Field(description="Export file name")


@router.post("", response_model=ExportResponse)
async def export_calendar(
    request: ExportRequest, calendar: ActiveCalendarDep, settings: SettingsDep
):
    """Export the active calendar to a file.

    The format follows the file extension. Existing files are overwritten.

    Args:
        request: Target file name.
        calendar: The active calendar (injected by FastAPI).
        settings: Application settings (injected by FastAPI).

    Returns:
        Absolute path, format and number of exported events.

    Raises:
        InvalidArgumentError: If the file name is blank or contains a path.
    """
    filename = request.filename.strip()
    if filename and Path(filename).name != filename:
        raise InvalidArgumentError("File name must not contain directories")

    path = resolve_export_path(filename, settings.export_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    events = calendar.get_all_events()
    written = get_exporter(path.name).export(events, path, calendar)
    logger.info(f"Exported {len(events)} event(s) from '{calendar.name}' to {written}")

    return ExportResponse(path=written, format=export_format(path.name), event_count=len(events))
