"""Time zone helpers shared by calendars and the calendar manager."""

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from models.exceptions import InvalidArgumentError


def resolve_zone(zone: "str | ZoneInfo") -> ZoneInfo:
    """Resolve an IANA zone name (or pass through a ZoneInfo).

    Args:
        zone: Zone name such as "America/New_York", or a ZoneInfo instance.

    Returns:
        The matching ZoneInfo.

    Raises:
        InvalidArgumentError: If the zone is blank or unknown.
    """
    if isinstance(zone, ZoneInfo):
        return zone
    if not isinstance(zone, str) or not zone.strip():
        raise InvalidArgumentError("Time zone cannot be blank")
    try:
        return ZoneInfo(zone.strip())
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidArgumentError(f"Unknown time zone: {zone}") from e


def convert_wall_time(value: datetime, from_zone: ZoneInfo, to_zone: ZoneInfo) -> datetime:
    """Convert a naive wall-clock datetime between zones.

    The value is read as local time in from_zone and the result is the naive
    local time of the same instant in to_zone.

    Args:
        value: Naive datetime in from_zone.
        from_zone: Zone the value is expressed in.
        to_zone: Zone to express the result in.

    Returns:
        Naive datetime in to_zone.
    """
    if from_zone.key == to_zone.key:
        return value
    return value.replace(tzinfo=from_zone).astimezone(to_zone).replace(tzinfo=None)
