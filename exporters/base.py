"""Abstract base class for calendar exporters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from models.calendar import Calendar
from models.event import Event


class Exporter(ABC):
    """Writes a calendar's events to a file in one format."""

    @abstractmethod
    def export(self, events: list[Event], path: Union[str, Path], calendar: Calendar) -> str:
        """Write events to path.

        Args:
            events: Events to write, in the order they should appear.
            path: Destination file; overwritten if it exists.
            calendar: Calendar the events belong to (name and time zone).

        Returns:
            Absolute path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
