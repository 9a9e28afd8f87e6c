from __future__ import annotations

import re
from enum import IntEnum
from typing import NamedTuple

from .errors import InvalidDayToken, InvalidTimeFormat

TIME_24_RE = re.compile(r"^([0-9]{1,2})(?::([0-9]{2}))?$")
TIME_12_RE = re.compile(r"^([0-9]{1,2})(?::([0-9]{2}))?\s*([ap]m)$", re.IGNORECASE)

HOURS_PER_DAY = 24


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


class ParsedHour(NamedTuple):
    hour: int
    minutes_ignored: bool


def _to_24_hour(hour: int, meridian: str) -> int:
    if hour < 1 or hour > 12:
        raise InvalidTimeFormat("12-hour times must use an hour between 1 and 12")
    if meridian.lower() == "am":
        return 0 if hour == 12 else hour
    return 12 if hour == 12 else hour + 12


def parse_hour(text: str, end_of_day: bool = False) -> ParsedHour:
    """Parse ``16``, ``16:00``, ``4PM`` or ``4:30 pm`` into an hour of the day.

    Minutes never reach the bitmap: a non-zero minutes part is dropped and
    reported through ``minutes_ignored``. With ``end_of_day`` the literal
    ``24``/``24:00`` is accepted so that a range can run until midnight.
    """
    value = text.strip()
    match = TIME_12_RE.match(value)
    if match:
        hour = _to_24_hour(int(match.group(1)), match.group(3))
    else:
        match = TIME_24_RE.match(value)
        if not match:
            raise InvalidTimeFormat(f"Invalid time {text!r}. Example: 16, 16:00 or 4PM")
        hour = int(match.group(1))
    minutes = match.group(2)
    if minutes is not None and int(minutes) > 59:
        raise InvalidTimeFormat(f"Invalid minutes in time {text!r}")
    if hour == HOURS_PER_DAY and end_of_day:
        if minutes not in (None, "00"):
            raise InvalidTimeFormat(f"Invalid time {text!r}. 24:00 is the latest end time")
    elif hour >= HOURS_PER_DAY:
        raise InvalidTimeFormat(f"Invalid hour in time {text!r}")
    return ParsedHour(hour, minutes is not None and minutes != "00")


def format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


DAY_ALIASES = {
    "su": Weekday.SUNDAY,
    "sun": Weekday.SUNDAY,
    "sunday": Weekday.SUNDAY,
    "m": Weekday.MONDAY,
    "mon": Weekday.MONDAY,
    "monday": Weekday.MONDAY,
    "t": Weekday.TUESDAY,
    "tue": Weekday.TUESDAY,
    "tuesday": Weekday.TUESDAY,
    "w": Weekday.WEDNESDAY,
    "wed": Weekday.WEDNESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "th": Weekday.THURSDAY,
    "thu": Weekday.THURSDAY,
    "thursday": Weekday.THURSDAY,
    "f": Weekday.FRIDAY,
    "fri": Weekday.FRIDAY,
    "friday": Weekday.FRIDAY,
    "sa": Weekday.SATURDAY,
    "sat": Weekday.SATURDAY,
    "saturday": Weekday.SATURDAY,
}


def _lookup_day(name: str) -> Weekday:
    day = DAY_ALIASES.get(name.strip().lower())
    if day is None:
        raise InvalidDayToken(f"Invalid day {name.strip()!r}. Example: M, Th, Sa or Friday")
    return day


def resolve_days(token: str) -> tuple[Weekday, ...]:
    """Resolve ``M``, ``M-F`` or a wrapping range such as ``F-M`` to weekdays."""
    parts = token.strip().split("-")
    if len(parts) == 1:
        return (_lookup_day(parts[0]),)
    if len(parts) != 2:
        raise InvalidDayToken(f"Invalid day range {token.strip()!r}. Example: M-F")
    first, last = _lookup_day(parts[0]), _lookup_day(parts[1])
    if first <= last:
        indexes = list(range(first, last + 1))
    else:
        indexes = [*range(first, len(Weekday)), *range(0, last + 1)]
    return tuple(Weekday(index) for index in indexes)
