"""
Date, unit and time zone helpers.
Normalises the unit names and date inputs that the accessor layer and
the CLI receive, and resolves IANA zones from coordinates.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union
import re

from timezonefinder import TimezoneFinder

_tf = TimezoneFinder()

UNITS = {
    "y": "year",
    "M": "month",
    "d": "day",
    "D": "date",
    "h": "hour",
    "m": "minute",
    "s": "second",
    "ms": "millisecond",
    "w": "week",
}

# YYYY[-/]MM[-/]DD[T ]hh:mm:ss.SSS, everything after the year optional
REGEX_PARSE = re.compile(
    r"^(\d{4})[-/]?(\d{1,2})?[-/]?(\d{0,2})[Tt\s]*(\d{1,2})?:?(\d{1,2})?:?(\d{1,2})?[.:]?(\d+)?$"
)

DateParam = Union[None, datetime, date, str, int, float]


def pretty_unit(unit: Optional[str]) -> str:
    """
    Normalise a date unit name.

    Short aliases are case sensitive ("M" is month, "m" minute); anything
    else is lower-cased with a trailing plural "s" dropped.
    """
    if not unit:
        return ""
    unit = unit.strip()
    if unit in UNITS:
        return UNITS[unit]
    return re.sub(r"s$", "", unit.lower())


def parse_date(value: DateParam = None) -> datetime:
    """
    Convert a date-ish value to a datetime.

    Args:
        value: None (now), datetime, date, POSIX timestamp (read as
            a UTC instant), or a string in
            "YYYY-MM-DD hh:mm:ss.SSS" form (any trailing part optional).
            Strings ending in "Z" and other ISO forms go through
            datetime.fromisoformat.

    Raises:
        ValueError: if a string cannot be parsed.
    """
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if not isinstance(value, str):
        raise ValueError(f"Cannot parse date from {value!r}")

    value = value.strip()
    if not value.upper().endswith("Z"):
        match = REGEX_PARSE.match(value)
        if match:
            year, month, day, hour, minute, second, fraction = match.groups()
            ms = int((fraction or "0")[:3].ljust(3, "0"))
            return datetime(
                int(year), int(month or 1), int(day or 1),
                int(hour or 0), int(minute or 0), int(second or 0),
                ms * 1000,
            )
    else:
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def pad_zone_str(moment: datetime) -> str:
    """
    Format the UTC offset of ``moment`` as "+HH:MM" / "-HH:MM".

    Naive datetimes are treated as UTC.
    """
    offset = moment.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hour_offset, minute_offset = divmod(abs(minutes), 60)
    return f"{sign}{hour_offset:02d}:{minute_offset:02d}"


def timezone_for(latitude: float, longitude: float) -> str:
    """
    Determine the IANA time zone name at the given coordinates.

    Raises:
        ValueError: if no zone covers the coordinates.
    """
    tz_name = _tf.timezone_at(lat=latitude, lng=longitude)
    if tz_name is None:
        raise ValueError(f"Could not determine timezone for ({latitude}, {longitude})")
    return tz_name
