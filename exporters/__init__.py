"""File exporters for calendar events.

Pick an exporter by file name with get_exporter(); resolve_export_path()
applies the default .csv extension used by the export command.
"""

from pathlib import Path
from typing import Optional, Union

from exporters.base import Exporter
from exporters.csv_exporter import CsvExporter
from exporters.ical_exporter import IcalExporter
from models.exceptions import InvalidArgumentError

EXPORTERS: dict[str, type[Exporter]] = {
    ".ical": IcalExporter,
    ".ics": IcalExporter,
    ".csv": CsvExporter,
}

DEFAULT_EXTENSION = ".csv"


def is_supported_format(filename: Optional[str]) -> bool:
    """Check whether the file name ends with a supported extension."""
    if filename is None:
        return False
    return filename.lower().endswith(tuple(EXPORTERS))


def get_exporter(filename: str) -> Exporter:
    """Create the exporter for a file name.

    Args:
        filename: Target file name; the extension picks the format.

    Returns:
        An exporter instance; CSV when the extension is not recognised.

    Raises:
        InvalidArgumentError: If the file name is blank.
    """
    if not filename or not filename.strip():
        raise InvalidArgumentError("File name cannot be empty")
    lowered = filename.lower()
    for extension, exporter_cls in EXPORTERS.items():
        if lowered.endswith(extension):
            return exporter_cls()
    return CsvExporter()


def export_format(filename: str) -> str:
    """Return the format name ("csv" or "ical") get_exporter() would use."""
    return "ical" if isinstance(get_exporter(filename), IcalExporter) else "csv"


def resolve_export_path(filename: str, directory: Union[str, Path, None] = None) -> Path:
    """Turn a requested file name into the path to write.

    Appends .csv when the name has no supported extension and places it in
    directory when one is given.

    Raises:
        InvalidArgumentError: If the file name is blank.
    """
    if not filename or not filename.strip():
        raise InvalidArgumentError("File name cannot be empty")
    filename = filename.strip()
    if not is_supported_format(filename):
        filename += DEFAULT_EXTENSION
    if directory is None:
        return Path(filename)
    return Path(directory) / filename


__all__ = [
    "Exporter",
    "CsvExporter",
    "IcalExporter",
    "EXPORTERS",
    "get_exporter",
    "export_format",
    "is_supported_format",
    "resolve_export_path",
]
