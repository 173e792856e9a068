"""Angle reduction and sexagesimal formatting."""

from __future__ import annotations

import math

from almanac_tools.constants import DEGREES_PER_CIRCLE, HALF_CIRCLE_DEGREES, HOURS_PER_DAY


def reduce_degrees(value: float) -> float:
    """Reduce an angle to [0, 360) degrees."""
    reduced = math.fmod(value, DEGREES_PER_CIRCLE)
    if reduced < 0.0:
        reduced += DEGREES_PER_CIRCLE
    # fmod of a tiny negative number plus 360 rounds to 360 exactly.
    if reduced >= DEGREES_PER_CIRCLE:
        reduced = 0.0
    return reduced


def reduce_hours(value: float) -> float:
    """Reduce a time-like angle to [0, 24) hours."""
    reduced = math.fmod(value, HOURS_PER_DAY)
    if reduced < 0.0:
        reduced += HOURS_PER_DAY
    if reduced >= HOURS_PER_DAY:
        reduced = 0.0
    return reduced


def reduce_signed_degrees(value: float) -> float:
    """Reduce an angle to (-180, 180] degrees."""
    reduced = reduce_degrees(value)
    if reduced > HALF_CIRCLE_DEGREES:
        reduced -= DEGREES_PER_CIRCLE
    return reduced


def sexagesimal_string(
    value: float,
    separator: str = 'dms',
    ndecimal: int = 3,
) -> str:
    """Format an angle as degrees/hours, minutes and seconds.

    Parameters:
        value: Angle in degrees (or hours for right ascension and sidereal time).
        separator: 3-character string of unit marks (e.g. 'hms' or 'dms');
            anything shorter separates the fields with blanks.
        ndecimal: Decimal places for seconds (0 to 6).

    Returns:
        Formatted string (e.g. '13h 10m 46.367s' or '-0d 30m 00.000s').
    """
    if len(separator) < 3:
        sep1 = sep2 = sep3 = ' '
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    negative = value < 0
    ntens = 10**ndecimal
    # Round once in integer units of the last decimal so carries propagate.
    units = round(abs(value) * 3600.0 * ntens)
    isec, frac = divmod(units, ntens)
    imin, isec = divmod(isec, 60)
    ideg, imin = divmod(imin, 60)
    sign = '-' if negative and units > 0 else ''
    if ndecimal > 0:
        seconds = f'{isec:02d}.{frac:0{ndecimal}d}'
    else:
        seconds = f'{isec:02d}'
    return f'{sign}{ideg}{sep1} {imin:02d}{sep2} {seconds}{sep3}'.rstrip()


def hms_string(hours: float, ndecimal: int = 3) -> str:
    """Format hours as 'HHh MMm SS.sss s' (e.g. sidereal time or right ascension)."""
    return sexagesimal_string(hours, 'hms', ndecimal)


def dms_string(degrees: float, ndecimal: int = 3) -> str:
    """Format degrees as 'DDd MMm SS.sss s'."""
    return sexagesimal_string(degrees, 'dms', ndecimal)
