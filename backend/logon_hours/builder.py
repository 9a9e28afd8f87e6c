from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterator

from . import bitmap, time_utils
from .errors import IndexOutOfRange, InvalidTimeOrder
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScheduleEntry:
    day_token: str
    start_hour: int
    end_hour: int
    weekdays: tuple[time_utils.Weekday, ...] = ()
    advisories: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.weekdays:
            object.__setattr__(self, "weekdays", time_utils.resolve_days(self.day_token))

    @property
    def hours(self) -> range:
        return range(self.start_hour, self.end_hour)

    def describe(self) -> str:
        return (
            f"{self.day_token} {time_utils.format_hour(self.start_hour)}"
            f"-{time_utils.format_hour(self.end_hour)}"
        )


class ScheduleBuilder:
    """Ordered list of day/hour ranges for one configuration session.

    The HTTP layer may call one session from several worker threads, so the
    list is only touched while holding ``_lock``.
    """

    def __init__(self) -> None:
        self._entries: list[ScheduleEntry] = []
        self._lock = threading.Lock()

    def add_range(self, day_token: str, start_text: str, end_text: str) -> ScheduleEntry:
        """Validate and append one range.

        ``end_text`` is the only input that may be ``24``/``24:00``, which
        lets a range cover the last hour of the day; start hours stay 0-23.
        """
        weekdays = time_utils.resolve_days(day_token)
        start = time_utils.parse_hour(start_text)
        end = time_utils.parse_hour(end_text, end_of_day=True)
        if start.hour >= end.hour:
            raise InvalidTimeOrder(
                f"Start time {start_text.strip()!r} must be before end time {end_text.strip()!r}"
            )
        advisories = []
        for label, text, parsed in (("start", start_text, start), ("end", end_text, end)):
            if parsed.minutes_ignored:
                message = (
                    f"Minutes in {label} time {text.strip()!r} were ignored; "
                    f"using {time_utils.format_hour(parsed.hour)}"
                )
                logger.warning(message)
                advisories.append(message)
        entry = ScheduleEntry(
            day_token=day_token.strip(),
            start_hour=start.hour,
            end_hour=end.hour,
            weekdays=weekdays,
            advisories=tuple(advisories),
        )
        with self._lock:
            self._entries.append(entry)
        logger.info("Added range %s", entry.describe())
        return entry

    def remove_range(self, index: int) -> ScheduleEntry:
        if index < 0:
            raise IndexOutOfRange(f"No range at position {index}")
        with self._lock:
            try:
                entry = self._entries.pop(index)
            except IndexError:
                raise IndexOutOfRange(f"No range at position {index}") from None
        logger.info("Removed range %s", entry.describe())
        return entry

    def list(self) -> tuple[ScheduleEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def encode(self) -> bitmap.WeeklyBitmap:
        return bitmap.encode(self.list())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self.list())
