# utils/time_utils.py

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from utils.exceptions import MalformedInput

HHMM_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


class SystemClock:
    """Wall clock, always in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """A clock pinned to one instant; tests move it with ``set``."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        self.instant = instant


def parse_hhmm(value: str) -> Optional[Tuple[int, int]]:
    """Return (hour, minute) for a valid "HH:MM" string, otherwise None."""
    if not isinstance(value, str):
        return None
    match = HHMM_PATTERN.match(value)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def local_date(instant: datetime, tz: ZoneInfo) -> date:
    return instant.astimezone(tz).date()


def parse_date_str(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise MalformedInput(f"Invalid date '{value}', expected YYYY-MM-DD")


def zoned_instant(day: date, hour: int, minute: int, tz: ZoneInfo) -> datetime:
    """The absolute instant of a wall-clock time on ``day`` in zone ``tz``."""
    return datetime.combine(day, time(hour, minute), tzinfo=tz)


def instant_from_hhmm(day: date, value: str, tz: ZoneInfo) -> datetime:
    parsed = parse_hhmm(value)
    if parsed is None:
        raise MalformedInput(f"Invalid time '{value}', expected HH:mm")
    return zoned_instant(day, parsed[0], parsed[1], tz)


def whole_minutes(delta: timedelta) -> int:
    """Floor of a duration in minutes."""
    return int(delta.total_seconds() // 60)


def display_time(instant: Optional[datetime], tz: ZoneInfo) -> str:
    if instant is None:
        return "-"
    return instant.astimezone(tz).strftime("%I:%M %p")


def format_duration(minutes: int) -> str:
    if minutes <= 0:
        return "0 min"
    hrs, mins = divmod(int(minutes), 60)
    if hrs == 0:
        return f"{mins} min"
    return f"{hrs} hr {mins} min"
