"""Tests for Julian Day and calendar conversion across the Gregorian reform."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from almanac_tools import time_utils
from almanac_tools.errors import InvalidCalendarDate
from almanac_tools.time_utils import (
    CalendarDate,
    JulianDay,
    days_in_month,
    is_leap_year,
    to_calendar_date,
    to_julian_day,
)


@pytest.mark.parametrize(
    ('date', 'expected'),
    [
        (CalendarDate(2000, 1, 1, 12), 2451545.0),
        (CalendarDate(1957, 10, 4, 19, 26, 24), 2436116.31),
        (CalendarDate(2016, 9, 17), 2457648.5),
        (CalendarDate(333, 1, 27, 12), 1842713.0),
        (CalendarDate(1582, 10, 4), 2299159.5),
        (CalendarDate(1582, 10, 15), 2299160.5),
        (CalendarDate(-1000, 7, 12, 12), 1356001.0),
        (CalendarDate(-4712, 1, 1, 12), 0.0),
    ],
)
def test_to_julian_day_reference_dates(date: CalendarDate, expected: float) -> None:
    """Julian Day of well-known dates in both calendars."""

    assert to_julian_day(date).value == pytest.approx(expected, abs=1e-8)


def test_to_julian_day_with_fractional_seconds() -> None:
    """Sub-second time of day contributes to the day fraction."""

    jd = JulianDay.from_components(1916, 9, 17, 2, 3, 4, 500_000)

    assert jd.value == pytest.approx(2421123.5854687, abs=1e-7)


def test_to_calendar_date_rounds_to_microseconds() -> None:
    """Inverse conversion recovers the time of day to the microsecond."""

    date = to_calendar_date(2421123.585469)

    assert (date.year, date.month, date.day) == (1916, 9, 17)
    assert (date.hour, date.minute, date.second) == (2, 3, 4)
    assert date.microsecond == pytest.approx(521_600, abs=100)


def test_to_calendar_date_sputnik() -> None:
    """JD 2436116.31 is 1957 October 4.81."""

    date = to_calendar_date(JulianDay(2436116.31))

    assert (date.year, date.month, date.day) == (1957, 10, 4)
    expected = datetime(1957, 10, 4, 19, 26, 24, tzinfo=timezone.utc)
    assert abs(date.to_datetime() - expected) < timedelta(milliseconds=1)


def test_to_calendar_date_negative_julian_day() -> None:
    """Proleptic dates before JD 0 are handled without clamping."""

    date = to_calendar_date(-1.0)

    assert date == CalendarDate(-4713, 12, 31, 12)
    assert to_julian_day(date).value == pytest.approx(-1.0, abs=1e-9)


def test_reform_days_are_consecutive() -> None:
    """1582-10-04 (Julian) is followed directly by 1582-10-15 (Gregorian)."""

    last_julian = to_julian_day(CalendarDate(1582, 10, 4))
    first_gregorian = to_julian_day(CalendarDate(1582, 10, 15))

    assert first_gregorian - last_julian == pytest.approx(1.0)
    assert to_calendar_date(last_julian + 1.0) == CalendarDate(1582, 10, 15)


@pytest.mark.parametrize('day', [5, 10, 14])
def test_reform_gap_dates_rejected(day: int) -> None:
    """Dates that never existed raise InvalidCalendarDate."""

    with pytest.raises(InvalidCalendarDate):
        CalendarDate(1582, 10, day)


@pytest.mark.parametrize(
    'kwargs',
    [
        {'year': 2001, 'month': 2, 'day': 29},
        {'year': 2000, 'month': 13, 'day': 1},
        {'year': 2000, 'month': 1, 'day': 0},
        {'year': 2000, 'month': 1, 'day': 1, 'hour': 24},
        {'year': 2000, 'month': 1, 'day': 1, 'minute': 60},
        {'year': 2000, 'month': 1, 'day': 1, 'second': 60},
        {'year': 2000, 'month': 1, 'day': 1, 'microsecond': 1_000_000},
        {'year': 2000, 'month': 1, 'day': 1.5},
        {'year': 2000, 'month': True, 'day': 1},
    ],
)
def test_invalid_components_rejected(kwargs: dict[str, object]) -> None:
    """Out-of-range or non-integer components fail fast."""

    with pytest.raises(InvalidCalendarDate):
        CalendarDate(**kwargs)


def test_invalid_calendar_date_is_value_error() -> None:
    """InvalidCalendarDate can be caught as ValueError."""

    with pytest.raises(ValueError):
        CalendarDate(1900, 2, 29)


def test_leap_year_rules_switch_at_reform() -> None:
    """1500 and 1300 are Julian leap years; 1700 and 1900 are not Gregorian ones."""

    assert days_in_month(1500, 2) == 29
    assert days_in_month(1300, 2) == 29
    assert days_in_month(1700, 2) == 28
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert is_leap_year(1900, gregorian=False) is True
    assert is_leap_year(1900, gregorian=True) is False


@pytest.mark.parametrize(
    'date',
    [
        CalendarDate(-4712, 1, 1, 0, 0, 0),
        CalendarDate(-584, 5, 28, 6, 30, 15, 250_000),
        CalendarDate(0, 2, 29, 23, 59, 59, 999_000),
        CalendarDate(1066, 10, 14, 9, 0, 0),
        CalendarDate(1582, 10, 4, 23, 59, 59),
        CalendarDate(1582, 10, 15, 0, 0, 1),
        CalendarDate(1932, 2, 29, 18, 45, 3, 123_000),
        CalendarDate(1980, 6, 30, 12, 0, 0),
        CalendarDate(2016, 12, 31, 23, 59, 59, 500_000),
        CalendarDate(2400, 3, 1, 1, 2, 3),
    ],
)
def test_calendar_round_trip_within_one_millisecond(date: CalendarDate) -> None:
    """to_calendar_date(to_julian_day(d)) recovers d within 1 ms in both calendars."""

    back = to_calendar_date(to_julian_day(date))

    assert (back.year, back.month, back.day) == (date.year, date.month, date.day)
    original_us = ((date.hour * 60 + date.minute) * 60 + date.second) * 1_000_000
    original_us += date.microsecond
    back_us = ((back.hour * 60 + back.minute) * 60 + back.second) * 1_000_000 + back.microsecond
    assert abs(back_us - original_us) <= 1_000


def test_julian_day_is_monotonic_in_calendar_order() -> None:
    """Dates at least a millisecond apart map to increasing Julian Days across the reform."""

    dates = [
        CalendarDate(-100, 12, 31, 23, 59, 59),
        CalendarDate(-99, 1, 1),
        CalendarDate(1582, 10, 4, 23, 59, 59, 998_000),
        CalendarDate(1582, 10, 15),
        CalendarDate(1582, 10, 15, 0, 0, 0, 1_000),
        CalendarDate(1999, 12, 31, 23, 59, 59),
        CalendarDate(2000, 1, 1),
        CalendarDate(2000, 1, 1, 0, 0, 0, 1_000),
    ]
    values = [to_julian_day(d).value for d in dates]

    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_julian_day_arithmetic_and_ordering() -> None:
    """Adding days gives a JulianDay; subtracting two gives a float."""

    jd = JulianDay(2451545.0)
    later = jd + 1.25

    assert isinstance(later, JulianDay)
    assert later.value == 2451546.25
    assert later - jd == pytest.approx(1.25)
    assert isinstance(later - 0.25, JulianDay)
    assert jd < later
    assert float(later) == 2451546.25


def test_julian_day_derived_quantities() -> None:
    """MJD, centuries since J2000 and preceding midnight."""

    jd = JulianDay(2451545.0)

    assert jd.modified == pytest.approx(51544.5)
    assert jd.centuries_since_j2000() == 0.0
    assert jd.midnight().value == 2451544.5
    assert JulianDay(2451544.4).midnight().value == 2451543.5


def test_fractional_year() -> None:
    """Fraction of the calendar year elapsed, including the short year 1582."""

    assert JulianDay.from_components(2000, 1, 1).fractional_year() == pytest.approx(2000.0)
    mid_2001 = JulianDay.from_components(2001, 7, 2, 12)
    assert mid_2001.fractional_year() == pytest.approx(2001.5, abs=1e-9)
    start = JulianDay.from_components(1582, 1, 1).value
    end = JulianDay.from_components(1583, 1, 1).value
    assert end - start == pytest.approx(355.0)


def test_datetime_conversion_round_trip() -> None:
    """Aware datetimes convert through UTC; results are UTC-aware."""

    eastern = timezone(timedelta(hours=-5))
    value = datetime(2016, 12, 1, 9, 15, 3, tzinfo=eastern)

    jd = JulianDay.from_datetime(value)
    back = jd.to_datetime()

    assert back.tzinfo == timezone.utc
    assert abs(back - value) < timedelta(milliseconds=1)
    date = jd.calendar_date()
    assert (date.year, date.month, date.day, date.hour) == (2016, 12, 1, 14)


def test_julian_calendar_date_has_no_datetime() -> None:
    """Dates before the reform cannot be expressed as Python datetimes."""

    with pytest.raises(InvalidCalendarDate):
        CalendarDate(1500, 3, 1).to_datetime()


def test_ensure_leapsecs_sets_spice_ut_model(monkeypatch: pytest.MonkeyPatch) -> None:
    """Leap-second init uses the SPICE-compatible UT model."""

    calls: list[tuple[str, tuple[object, ...]]] = []

    def _set_ut_model(model: str, future: object = None) -> None:
        del future
        calls.append(('set_ut_model', (model,)))

    def _load_lsk(path: str | None = None) -> None:
        calls.append(('load_lsk', (path,)))

    monkeypatch.setattr('julian.set_ut_model', _set_ut_model)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('almanac_tools.time_utils.get_leapsecs_path', lambda: 'dummy.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert calls == [('set_ut_model', ('SPICE',)), ('load_lsk', ('dummy.tls',))]


def test_ensure_leapsecs_falls_back_to_bundled_kernel(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unreadable configured LSK falls back to the rms-julian bundled one."""

    loaded: list[str | None] = []

    def _load_lsk(path: str | None = None) -> None:
        if path is not None:
            raise FileNotFoundError(path)
        loaded.append(path)

    monkeypatch.setattr('julian.set_ut_model', lambda model, future=None: None)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('almanac_tools.time_utils.get_leapsecs_path', lambda: '/missing.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert loaded == [None]
    assert time_utils._leapsecs_loaded is True


def test_tdb_seconds_from_julian_day_uses_julian(monkeypatch: pytest.MonkeyPatch) -> None:
    """UT Julian Day goes through TAI to TDB seconds."""

    monkeypatch.setattr(time_utils, '_leapsecs_loaded', True)
    monkeypatch.setattr('julian.tai_from_jd', lambda jd: (jd - 2451545.0) * 86400.0 + 32.0)
    monkeypatch.setattr('julian.tdb_from_tai', lambda tai: tai + 32.184)

    assert time_utils.tdb_seconds_from_julian_day(JulianDay(2451546.0)) == pytest.approx(
        86400.0 + 64.184
    )
