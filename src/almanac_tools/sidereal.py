"""Greenwich and local sidereal time (hours) from a UT Julian Day."""

from __future__ import annotations

import math

from almanac_tools.angle_utils import reduce_degrees, reduce_hours
from almanac_tools.constants import (
    ARCSEC_PER_DEGREE,
    DAYS_PER_JULIAN_CENTURY,
    DEGREES_PER_HOUR_RA,
    HOURS_PER_DAY,
    J2000,
    SIDEREAL_RATE,
)
from almanac_tools.coordinates import GeographicCoordinates, nutation, true_obliquity


def mean_greenwich_sidereal_time(jd: float) -> float:
    """Mean sidereal time at Greenwich (hours, [0, 24)).

    The IAU 1982 polynomial is evaluated at the preceding 0h UT and the
    elapsed UT is scaled by the sidereal rate, which keeps the large linear
    term away from the time-of-day fraction.

    Parameters:
        jd: UT Julian Day (float or JulianDay).

    Returns:
        Greenwich mean sidereal time in hours.
    """
    value = float(jd)
    midnight = math.floor(value - 0.5) + 0.5
    t = (midnight - J2000) / DAYS_PER_JULIAN_CENTURY
    theta0 = (
        100.46061837
        + 36000.770053608 * t
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    elapsed_hours = (value - midnight) * HOURS_PER_DAY
    theta = reduce_degrees(theta0) + elapsed_hours * SIDEREAL_RATE * DEGREES_PER_HOUR_RA
    return reduce_degrees(theta) / DEGREES_PER_HOUR_RA


def apparent_greenwich_sidereal_time(jd: float) -> float:
    """Apparent sidereal time at Greenwich (hours): mean time plus the equation of the equinoxes."""
    dpsi = nutation(jd).longitude
    eps = math.radians(true_obliquity(jd))
    correction_hours = dpsi * math.cos(eps) / ARCSEC_PER_DEGREE / DEGREES_PER_HOUR_RA
    return reduce_hours(mean_greenwich_sidereal_time(jd) + correction_hours)


def _local(greenwich_hours: float, longitude: GeographicCoordinates | float) -> float:
    if isinstance(longitude, GeographicCoordinates):
        longitude = longitude.longitude
    # West-positive longitude: local time runs behind Greenwich.
    return reduce_hours(greenwich_hours - longitude / DEGREES_PER_HOUR_RA)


def mean_local_sidereal_time(jd: float, longitude: GeographicCoordinates | float) -> float:
    """Mean local sidereal time (hours) for a west-positive longitude in degrees."""
    return _local(mean_greenwich_sidereal_time(jd), longitude)


def apparent_local_sidereal_time(jd: float, longitude: GeographicCoordinates | float) -> float:
    """Apparent local sidereal time (hours) for a west-positive longitude in degrees."""
    return _local(apparent_greenwich_sidereal_time(jd), longitude)
