"""Tests for Greenwich and local sidereal time."""

from __future__ import annotations

import pytest

from almanac_tools.coordinates import GeographicCoordinates
from almanac_tools.sidereal import (
    apparent_greenwich_sidereal_time,
    apparent_local_sidereal_time,
    mean_greenwich_sidereal_time,
    mean_local_sidereal_time,
)
from almanac_tools.time_utils import JulianDay

_ONE_MS_HOURS = 0.001 / 3600.0


def _hours(h: int, m: int, s: float) -> float:
    return h + m / 60.0 + s / 3600.0


def test_mean_sidereal_time_at_midnight() -> None:
    """1987 April 10 0h UT: 13h 10m 46.3668s."""

    jd = JulianDay.from_components(1987, 4, 10)

    assert mean_greenwich_sidereal_time(jd) == pytest.approx(
        _hours(13, 10, 46.3668), abs=_ONE_MS_HOURS
    )


def test_mean_sidereal_time_with_time_of_day() -> None:
    """1987 April 10 19h21m UT: 8h 34m 57.0898s."""

    jd = JulianDay.from_components(1987, 4, 10, 19, 21)

    assert mean_greenwich_sidereal_time(jd) == pytest.approx(
        _hours(8, 34, 57.0898), abs=_ONE_MS_HOURS
    )


def test_apparent_sidereal_time_includes_equation_of_equinoxes() -> None:
    """1987 April 10 0h UT: apparent time 13h 10m 46.1351s."""

    jd = JulianDay.from_components(1987, 4, 10)

    assert apparent_greenwich_sidereal_time(jd) == pytest.approx(
        _hours(13, 10, 46.1351), abs=0.05 / 3600.0
    )


def test_local_sidereal_time_east_longitude() -> None:
    """Moscow (37.615559 E, west-positive -37.615559) on 2016-12-01 14:15:03 UT."""

    jd = JulianDay.from_components(2016, 12, 1, 14, 15, 3)

    lmst = mean_local_sidereal_time(jd, -37.615559)

    assert lmst == pytest.approx(_hours(21, 28, 59.0), abs=1.0 / 3600.0)


def test_local_sidereal_time_accepts_geographic_coordinates() -> None:
    """A GeographicCoordinates observer uses its west-positive longitude."""

    jd = JulianDay.from_components(1987, 4, 10, 19, 21)
    observer = GeographicCoordinates(longitude=77.065556, latitude=38.921389)

    assert mean_local_sidereal_time(jd, observer) == pytest.approx(
        mean_local_sidereal_time(jd, 77.065556)
    )
    assert apparent_local_sidereal_time(jd, observer) == pytest.approx(
        (apparent_greenwich_sidereal_time(jd) - 77.065556 / 15.0) % 24.0
    )


def test_sidereal_time_range() -> None:
    """Results are always in [0, 24) hours."""

    for offset in range(0, 400, 7):
        jd = 2451545.0 + offset + 0.123
        for value in (
            mean_greenwich_sidereal_time(jd),
            apparent_greenwich_sidereal_time(jd),
            mean_local_sidereal_time(jd, 170.0),
            apparent_local_sidereal_time(jd, -170.0),
        ):
            assert 0.0 <= value < 24.0
