# utils/calendar_utils.py

import math
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Tuple

from utils.exceptions import MalformedInput

SUNDAY = 6
SATURDAY = 5
HOLIDAY_SATURDAYS = (2, 4)


def saturday_ordinal(day: date) -> int:
    """Which occurrence of its weekday ``day`` is within the month (1-5)."""
    return math.ceil(day.day / 7)


def resolve_day(day: date, overrides: Optional[Mapping[str, Dict]] = None) -> Tuple[bool, str]:
    """
    Classify a calendar day as (is_holiday, label).

    Sundays and the 2nd/4th Saturday of a month are off by default. An
    override for the date wins: type "working" forces a working day, any
    other type forces a holiday labelled with the override's name.
    """
    is_holiday = day.weekday() == SUNDAY
    label = "Sunday"

    if day.weekday() == SATURDAY and saturday_ordinal(day) in HOLIDAY_SATURDAYS:
        is_holiday = True
        label = "Saturday Holiday"

    override = (overrides or {}).get(day.isoformat())
    if override:
        if override.get("type") == "working":
            is_holiday = False
        else:
            is_holiday = True
            label = override.get("name") or "Holiday"

    return is_holiday, label


def pay_period(year: int, month: int) -> Tuple[date, date]:
    """
    The 21st-to-20th period ending in ``month`` (0-indexed, Jan=0).

    For January the period starts on 21 December of the previous year.
    """
    if not 0 <= month <= 11:
        raise MalformedInput(f"Invalid month {month}, expected 0-11")
    if month == 0:
        start = date(year - 1, 12, 21)
    else:
        start = date(year, month, 21)
    return start, date(year, month + 1, 20)


def dates_between(start: date, end: date) -> List[date]:
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days
