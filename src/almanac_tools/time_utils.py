"""Julian Day and calendar conversion across the 1582 reform, plus TDB via rms-julian."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import julian

from almanac_tools.config import get_leapsecs_path
from almanac_tools.constants import (
    DAYS_PER_JULIAN_CENTURY,
    FIRST_GREGORIAN_DATE,
    GREGORIAN_REFORM_DAY_NUMBER,
    J2000,
    LAST_JULIAN_DATE,
    MICROSECONDS_PER_DAY,
    MJD_OFFSET,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from almanac_tools.errors import InvalidCalendarDate

logger = logging.getLogger(__name__)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_gregorian_date(year: int, month: int, day: int) -> bool:
    """Return True if the date falls on or after the Gregorian reform (1582-10-15)."""
    return (year, month, day) >= FIRST_GREGORIAN_DATE


def is_leap_year(year: int, gregorian: bool) -> bool:
    """Return True if year is a leap year under the given calendar rules.

    Parameters:
        year: Astronomical year (year 0 = 1 BC).
        gregorian: Apply Gregorian century rules; otherwise every fourth year.

    Returns:
        True for leap years.
    """
    if not gregorian:
        return year % 4 == 0
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in the month, using the calendar in force that year.

    October 1582 still reports 31 days: its missing days are rejected by
    CalendarDate rather than shortening the month.
    """
    if month == 2:
        gregorian = year > FIRST_GREGORIAN_DATE[0]
        return 29 if is_leap_year(year, gregorian) else 28
    return _DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True)
class CalendarDate:
    """Calendar date and UT time of day, validated on construction.

    Dates before 1582-10-05 follow the Julian calendar, dates from 1582-10-15
    the Gregorian calendar; the ten days in between do not exist. Years use
    astronomical numbering (0 = 1 BC, negative years allowed).
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0

    def __post_init__(self) -> None:
        for name in ('year', 'month', 'day', 'hour', 'minute', 'second', 'microsecond'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCalendarDate(f'{name} must be an integer, got {value!r}')
        if not 1 <= self.month <= 12:
            raise InvalidCalendarDate(f'month must be 1-12, got {self.month}')
        ndays = days_in_month(self.year, self.month)
        if not 1 <= self.day <= ndays:
            raise InvalidCalendarDate(
                f'day must be 1-{ndays} for {self.year}-{self.month:02d}, got {self.day}'
            )
        if LAST_JULIAN_DATE < (self.year, self.month, self.day) < FIRST_GREGORIAN_DATE:
            raise InvalidCalendarDate(
                f'{self.year}-{self.month:02d}-{self.day:02d} falls in the Gregorian reform '
                'gap (1582-10-05 to 1582-10-14)'
            )
        if not 0 <= self.hour <= 23:
            raise InvalidCalendarDate(f'hour must be 0-23, got {self.hour}')
        if not 0 <= self.minute <= 59:
            raise InvalidCalendarDate(f'minute must be 0-59, got {self.minute}')
        if not 0 <= self.second <= 59:
            raise InvalidCalendarDate(f'second must be 0-59, got {self.second}')
        if not 0 <= self.microsecond <= 999_999:
            raise InvalidCalendarDate(f'microsecond must be 0-999999, got {self.microsecond}')

    @property
    def is_gregorian(self) -> bool:
        """True if the date is expressed in the Gregorian calendar."""
        return is_gregorian_date(self.year, self.month, self.day)

    @property
    def day_fraction(self) -> float:
        """Elapsed fraction of the day since 0h UT."""
        seconds = (
            self.hour * SECONDS_PER_HOUR
            + self.minute * SECONDS_PER_MINUTE
            + self.second
            + self.microsecond / 1e6
        )
        return seconds / SECONDS_PER_DAY

    @classmethod
    def from_datetime(cls, value: datetime) -> CalendarDate:
        """Build from a datetime; aware values are converted to UTC, naive ones taken as UT.

        Python datetimes are proleptic Gregorian, so values before the reform
        are rejected rather than silently relabelled.
        """
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        if not is_gregorian_date(value.year, value.month, value.day):
            raise InvalidCalendarDate(
                f'datetime {value.isoformat()} precedes the Gregorian reform'
            )
        return cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
        )

    def to_datetime(self) -> datetime:
        """Return an aware UTC datetime (Gregorian dates within datetime's range only)."""
        if not self.is_gregorian:
            raise InvalidCalendarDate(
                f'{self} is a Julian calendar date and has no datetime equivalent'
            )
        if not 1 <= self.year <= 9999:
            raise InvalidCalendarDate(f'year {self.year} is outside the datetime range')
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.microsecond,
            tzinfo=timezone.utc,
        )

    def __str__(self) -> str:
        return (
            f'{self.year:04d}-{self.month:02d}-{self.day:02d} '
            f'{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.microsecond:06d}'
        )


def _day_number_of_month_start(year: int, month: int, gregorian: bool) -> float:
    """Julian Day at 0h of day 0 of the month (Meeus chapter 7 with floor semantics)."""
    if month <= 2:
        year -= 1
        month += 12
    b = 0
    if gregorian:
        a = math.floor(year / 100)
        b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + b - 1524.5


def to_julian_day(date: CalendarDate) -> JulianDay:
    """Convert a calendar date (UT) to a Julian Day.

    Parameters:
        date: Validated calendar date.

    Returns:
        JulianDay; negative for dates before -4712-01-01 12:00.
    """
    base = _day_number_of_month_start(date.year, date.month, date.is_gregorian)
    return JulianDay(base + date.day + date.day_fraction)


def to_calendar_date(jd: JulianDay | float) -> CalendarDate:
    """Convert a Julian Day to a calendar date (UT), rounded to the microsecond.

    Parameters:
        jd: JulianDay or plain float day count.

    Returns:
        CalendarDate in the Julian calendar before the reform, Gregorian after.
    """
    value = jd.value if isinstance(jd, JulianDay) else float(jd)
    shifted = value + 0.5
    z = math.floor(shifted)
    micro = round((shifted - z) * MICROSECONDS_PER_DAY)
    if micro >= MICROSECONDS_PER_DAY:
        z += 1
        micro -= MICROSECONDS_PER_DAY

    if z < GREGORIAN_REFORM_DAY_NUMBER:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)
    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    seconds, microsecond = divmod(micro, 1_000_000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return CalendarDate(
        int(year), int(month), int(day), int(hour), int(minute), int(second), int(microsecond)
    )


@dataclass(frozen=True, order=True)
class JulianDay:
    """Continuous day count from -4712-01-01 12:00 UT; immutable and ordered.

    A float near present-day epochs resolves about 40 microseconds, so
    calendar instants less than a millisecond apart may share one value.
    Ordering is strict only at that resolution.
    """

    value: float

    @classmethod
    def from_calendar(cls, date: CalendarDate) -> JulianDay:
        """Julian Day of a calendar date (see to_julian_day)."""
        return to_julian_day(date)

    @classmethod
    def from_components(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
    ) -> JulianDay:
        """Julian Day of the given calendar components (validated)."""
        return to_julian_day(CalendarDate(year, month, day, hour, minute, second, microsecond))

    @classmethod
    def from_datetime(cls, value: datetime) -> JulianDay:
        """Julian Day of a Gregorian datetime (aware values converted to UTC)."""
        return to_julian_day(CalendarDate.from_datetime(value))

    def calendar_date(self) -> CalendarDate:
        """Calendar date of this Julian Day (see to_calendar_date)."""
        return to_calendar_date(self)

    def to_datetime(self) -> datetime:
        """Aware UTC datetime of this Julian Day (Gregorian range only)."""
        return self.calendar_date().to_datetime()

    @property
    def modified(self) -> float:
        """Modified Julian Day (JD - 2400000.5)."""
        return self.value - MJD_OFFSET

    def centuries_since_j2000(self) -> float:
        """Julian centuries elapsed since J2000.0."""
        return (self.value - J2000) / DAYS_PER_JULIAN_CENTURY

    def midnight(self) -> JulianDay:
        """Julian Day of the preceding 0h UT."""
        return JulianDay(math.floor(self.value - 0.5) + 0.5)

    def fractional_year(self) -> float:
        """Year plus the elapsed fraction of that calendar year.

        Year length is measured between consecutive January 1sts, so 1582 is
        355 days long.
        """
        year = self.calendar_date().year
        start = to_julian_day(CalendarDate(year, 1, 1)).value
        end = to_julian_day(CalendarDate(year + 1, 1, 1)).value
        return year + (self.value - start) / (end - start)

    def __add__(self, days: float) -> JulianDay:
        if isinstance(days, JulianDay):
            return NotImplemented
        return JulianDay(self.value + float(days))

    def __sub__(self, other: JulianDay | float) -> JulianDay | float:
        if isinstance(other, JulianDay):
            return self.value - other.value
        return JulianDay(self.value - float(other))

    def __float__(self) -> float:
        return self.value


# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load the leap seconds kernel for rms-julian if not already loaded.

    If the configured file is missing or unreadable, falls back to the
    rms-julian bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    # Match UTC handling used by SPICE.
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        julian.load_lsk(path)
    except (OSError, KeyError, ValueError) as e:
        logger.info('Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e)
        julian.load_lsk()
    _leapsecs_loaded = True


def tdb_seconds_from_julian_day(jd: JulianDay | float) -> float:
    """Convert a UT Julian Day to TDB seconds past J2000 (SPICE ephemeris time).

    Parameters:
        jd: JulianDay or plain float day count (UTC based).

    Returns:
        TDB in seconds.
    """
    _ensure_leapsecs()
    value = jd.value if isinstance(jd, JulianDay) else float(jd)
    tai = julian.tai_from_jd(value)
    return float(julian.tdb_from_tai(tai))