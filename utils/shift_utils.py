# utils/shift_utils.py

from dataclasses import dataclass
from typing import Optional

from utils.time_utils import parse_hhmm

DEFAULT_SHIFT = "10:00"


@dataclass(frozen=True)
class ShiftConfig:
    start_hour: int
    start_minute: int
    grace_period_minutes: int
    shift_duration_hours: float

    @property
    def shift_duration_minutes(self) -> float:
        return self.shift_duration_hours * 60


@dataclass(frozen=True)
class ShiftRule:
    hour: int
    minute: Optional[int]  # None matches any minute of the hour
    grace_period_minutes: int
    shift_duration_hours: float

    def matches(self, hour: int, minute: int) -> bool:
        return self.hour == hour and (self.minute is None or self.minute == minute)


# First match wins. 10:00 is the regular shift and the only one with grace.
SHIFT_RULES = (
    ShiftRule(10, 0, 10, 9),
    ShiftRule(10, 30, 0, 9),
    ShiftRule(13, None, 0, 6.5),
)
DEFAULT_GRACE_MINUTES = 0
DEFAULT_DURATION_HOURS = 9


def resolve_shift(label: Optional[str]) -> ShiftConfig:
    """
    Derive the shift configuration from a shift label such as "10:30".

    Missing or malformed labels fall back to the regular 10:00 shift; this
    never raises.
    """
    parsed = parse_hhmm(label) if label else None
    hour, minute = parsed if parsed else (10, 0)

    for rule in SHIFT_RULES:
        if rule.matches(hour, minute):
            return ShiftConfig(hour, minute, rule.grace_period_minutes, rule.shift_duration_hours)
    return ShiftConfig(hour, minute, DEFAULT_GRACE_MINUTES, DEFAULT_DURATION_HOURS)


def is_valid_shift_label(label: str) -> bool:
    return parse_hhmm(label) is not None
