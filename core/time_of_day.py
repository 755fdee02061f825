"""
Time-of-day conversions

Wake times travel as seconds since local midnight. These helpers move
between that representation, 'HH:MM' strings and timezone-aware datetimes.
"""

from datetime import datetime
from typing import Optional, Union
import pytz

from core.exceptions import InvalidInput
from core.parameters import SECONDS_PER_DAY, SECONDS_PER_HOUR

CLOCK_24H = "24h"
CLOCK_12H = "12h"


def seconds_from_hhmm(text: str) -> int:
    """
    Parse 'HH:MM' (24-hour) into seconds since midnight.
    Example: '07:00' -> 25200
    """
    if not isinstance(text, str):
        raise InvalidInput('wake_time', text, "expected an 'HH:MM' string")

    parts = text.strip().split(':')
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidInput('wake_time', text, "expected 'HH:MM'")

    hh, mm = int(parts[0]), int(parts[1])
    if not (0 <= hh < 24) or not (0 <= mm < 60):
        raise InvalidInput('wake_time', text, "hour or minute out of range")
    return hh * SECONDS_PER_HOUR + mm * 60


def seconds_from_datetime(
    moment: datetime,
    timezone: Optional[Union[str, pytz.BaseTzInfo]] = None
) -> int:
    """
    Seconds since midnight of the wall-clock reading of `moment`.

    A picker usually hands back a full datetime; only hour and minute
    matter. Aware datetimes are first converted to `timezone` when given.
    """
    if timezone is not None:
        tz = pytz.timezone(timezone) if isinstance(timezone, str) else timezone
        if moment.tzinfo is None:
            moment = tz.localize(moment)
        else:
            moment = moment.astimezone(tz)
    return moment.hour * SECONDS_PER_HOUR + moment.minute * 60


def round_to_minute(seconds: float) -> int:
    """Wrap into one day and round to the nearest whole minute (in minutes)."""
    wrapped = seconds % SECONDS_PER_DAY
    return int(round(wrapped / 60.0)) % (SECONDS_PER_DAY // 60)


def format_time_of_day(seconds: float, clock: str = CLOCK_24H) -> str:
    """Format seconds since midnight as '23:05' or '11:05 PM'."""
    minutes = round_to_minute(seconds)
    hh, mm = divmod(minutes, 60)

    if clock == CLOCK_24H:
        return f"{hh:02d}:{mm:02d}"
    if clock == CLOCK_12H:
        suffix = "AM" if hh < 12 else "PM"
        return f"{(hh % 12) or 12}:{mm:02d} {suffix}"
    raise ValueError(f"Unknown clock format: {clock!r}")
