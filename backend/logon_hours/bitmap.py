from __future__ import annotations

from typing import Iterable, Protocol

from .time_utils import HOURS_PER_DAY, Weekday

BITMAP_BITS = len(Weekday) * HOURS_PER_DAY
BITMAP_BYTES = BITMAP_BITS // 8


class HourRange(Protocol):
    weekdays: tuple[Weekday, ...]
    start_hour: int
    end_hour: int


def bit_position(weekday: int, hour: int) -> tuple[int, int]:
    """Return ``(byte_index, bit_offset)`` of an hour in the logonHours layout."""
    if not (0 <= weekday < len(Weekday)) or not (0 <= hour < HOURS_PER_DAY):
        raise ValueError(f"hour out of range: weekday={weekday} hour={hour}")
    index = weekday * HOURS_PER_DAY + hour
    return index // 8, index % 8


class WeeklyBitmap:
    """The 21-byte logonHours value; a set bit allows logon during that hour."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if data is None:
            data = bytes(BITMAP_BYTES)
        if len(data) != BITMAP_BYTES:
            raise ValueError(f"bitmap must be exactly {BITMAP_BYTES} bytes, got {len(data)}")
        self._data = bytes(data)

    @classmethod
    def from_hex(cls, value: str) -> "WeeklyBitmap":
        return cls(bytes.fromhex(value))

    def hex(self) -> str:
        return self._data.hex()

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeeklyBitmap):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"WeeklyBitmap({self.hex()!r})"

    def is_allowed(self, weekday: int, hour: int) -> bool:
        byte_index, bit_offset = bit_position(weekday, hour)
        return bool((self._data[byte_index] >> bit_offset) & 1)

    @property
    def is_empty(self) -> bool:
        return not any(self._data)

    @property
    def allowed_hour_count(self) -> int:
        return sum(bin(value).count("1") for value in self._data)

    def covered_hours(self) -> set[tuple[Weekday, int]]:
        return {
            (day, hour)
            for day in Weekday
            for hour in range(HOURS_PER_DAY)
            if self.is_allowed(day, hour)
        }

    def to_ranges(self) -> dict[Weekday, list[tuple[int, int]]]:
        """Merge consecutive allowed hours into ``(start, end)`` ranges per weekday."""
        ranges: dict[Weekday, list[tuple[int, int]]] = {}
        for day in Weekday:
            start = None
            for hour in range(HOURS_PER_DAY + 1):
                allowed = hour < HOURS_PER_DAY and self.is_allowed(day, hour)
                if allowed and start is None:
                    start = hour
                elif not allowed and start is not None:
                    ranges.setdefault(day, []).append((start, hour))
                    start = None
        return ranges


def encode(entries: Iterable[HourRange]) -> WeeklyBitmap:
    """Union every entry's hours into a fresh bitmap; overlapping entries are harmless."""
    data = bytearray(BITMAP_BYTES)
    for entry in entries:
        for day in entry.weekdays:
            for hour in range(entry.start_hour, entry.end_hour):
                byte_index, bit_offset = bit_position(day, hour)
                data[byte_index] |= 1 << bit_offset
    return WeeklyBitmap(data)
