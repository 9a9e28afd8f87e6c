import pytest

from logon_hours import time_utils
from logon_hours.errors import InvalidDayToken, InvalidTimeFormat
from logon_hours.time_utils import Weekday


def test_parse_hour_twelve_hour_clock():
    assert time_utils.parse_hour("12AM").hour == 0
    assert time_utils.parse_hour("12PM").hour == 12
    assert time_utils.parse_hour("1AM").hour == 1
    assert time_utils.parse_hour("11PM").hour == 23
    assert time_utils.parse_hour(" 4 pm ").hour == 16
    assert time_utils.parse_hour("9:00am") == (9, False)


def test_parse_hour_twenty_four_hour_clock():
    assert time_utils.parse_hour("16:00") == (16, False)
    assert time_utils.parse_hour("0") == (0, False)
    assert time_utils.parse_hour("7") == (7, False)
    assert time_utils.parse_hour("23:00") == (23, False)


def test_parse_hour_flags_discarded_minutes():
    parsed = time_utils.parse_hour("4:30PM")
    assert parsed.hour == 16
    assert parsed.minutes_ignored is True

    parsed = time_utils.parse_hour("08:45")
    assert parsed.hour == 8
    assert parsed.minutes_ignored is True


@pytest.mark.parametrize(
    "text",
    ["", "noon", "25", "24", "13PM", "0AM", "9:5", "9:60", "9:00 XM", "9-17", "-1", "\u0669", "\u0661\u0662AM", "1\u0660:00"],
)
def test_parse_hour_rejects_malformed_times(text):
    with pytest.raises(InvalidTimeFormat):
        time_utils.parse_hour(text)


def test_parse_hour_end_of_day():
    assert time_utils.parse_hour("24", end_of_day=True) == (24, False)
    assert time_utils.parse_hour("24:00", end_of_day=True) == (24, False)
    with pytest.raises(InvalidTimeFormat):
        time_utils.parse_hour("24:30", end_of_day=True)
    with pytest.raises(InvalidTimeFormat):
        time_utils.parse_hour("25", end_of_day=True)


def test_resolve_days_ranges():
    assert set(time_utils.resolve_days("M-F")) == {1, 2, 3, 4, 5}
    assert set(time_utils.resolve_days("Sa-Su")) == {6, 0}
    assert time_utils.resolve_days("Th") == (Weekday.THURSDAY,)
    assert time_utils.resolve_days("T-T") == (Weekday.TUESDAY,)


def test_resolve_days_wraps_past_saturday():
    days = time_utils.resolve_days("F-M")
    assert set(days) == {5, 6, 0, 1}
    assert days == (Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY, Weekday.MONDAY)


def test_resolve_days_accepts_names_case_insensitively():
    assert time_utils.resolve_days("monday-FRIDAY") == time_utils.resolve_days("M-F")
    assert time_utils.resolve_days(" sun ") == (Weekday.SUNDAY,)
    assert time_utils.resolve_days("sa") == (Weekday.SATURDAY,)


@pytest.mark.parametrize("token", ["", "X", "Lunes", "M-", "-F", "M-W-F", "Mo", "M,W"])
def test_resolve_days_rejects_unknown_tokens(token):
    with pytest.raises(InvalidDayToken):
        time_utils.resolve_days(token)
