"""Tests for angle reduction and sexagesimal formatting."""

from __future__ import annotations

import pytest

from almanac_tools.angle_utils import (
    dms_string,
    hms_string,
    reduce_degrees,
    reduce_hours,
    reduce_signed_degrees,
    sexagesimal_string,
)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [(0.0, 0.0), (360.0, 0.0), (-30.0, 330.0), (725.5, 5.5), (-1e-17, 0.0)],
)
def test_reduce_degrees(value: float, expected: float) -> None:
    """Angles land in [0, 360)."""

    result = reduce_degrees(value)

    assert result == pytest.approx(expected)
    assert 0.0 <= result < 360.0


def test_reduce_hours_and_signed_degrees() -> None:
    """Hours wrap into [0, 24); signed degrees into (-180, 180]."""

    assert reduce_hours(-1.5) == pytest.approx(22.5)
    assert reduce_hours(49.0) == pytest.approx(1.0)
    assert reduce_signed_degrees(190.0) == pytest.approx(-170.0)
    assert reduce_signed_degrees(180.0) == pytest.approx(180.0)
    assert reduce_signed_degrees(-180.0) == pytest.approx(180.0)


def test_hms_string_sidereal_time() -> None:
    """13.17954630 h formats as 13h 10m 46.367s."""

    assert hms_string(13.179546300) == '13h 10m 46.367s'


def test_dms_string_negative_small_angle() -> None:
    """Negative angles under one degree keep their sign."""

    assert dms_string(-0.5) == '-0d 30m 00.000s'


def test_seconds_rounding_carries_into_minutes() -> None:
    """59.9996 s rounds up into the next minute instead of printing 60."""

    value = 10.0 + 59.0 / 60.0 + 59.9996 / 3600.0

    assert dms_string(value) == '11d 00m 00.000s'


def test_sexagesimal_string_blank_separator_and_no_decimals() -> None:
    """Short separators fall back to blanks."""

    assert sexagesimal_string(1.5, separator='', ndecimal=0) == '1  30  00'
