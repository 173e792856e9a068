"""Fixed constants: reference epochs, unit factors, body tags and NAIF IDs."""

from __future__ import annotations

from enum import Enum

# Reference epochs (Julian Day)
J2000 = 2451545.0
MJD_OFFSET = 2400000.5
DAYS_PER_JULIAN_CENTURY = 36525.0

# Calendar reform: last Julian date and first Gregorian date, and the Julian
# Day number (noon-based) of 1582-10-15.
LAST_JULIAN_DATE = (1582, 10, 4)
FIRST_GREGORIAN_DATE = (1582, 10, 15)
GREGORIAN_REFORM_DAY_NUMBER = 2299161

# Time: seconds per unit
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
MICROSECONDS_PER_DAY = 86_400_000_000
HOURS_PER_DAY = 24.0

# Angle: degrees per circle and sexagesimal
DEGREES_PER_CIRCLE = 360.0
HALF_CIRCLE_DEGREES = 180.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360 deg / 24 h

# Sidereal rate: sidereal seconds per UT second
SIDEREAL_RATE = 1.00273790935

# Distances. AU_KM is the only conversion factor between the two units.
AU_KM = 149597870.7
EARTH_EQUATORIAL_RADIUS_KM = 6378.14
MOON_DIAMETER_KM = 3476.0

# Constant of annual aberration (arcsec)
ABERRATION_CONSTANT_ARCSEC = 20.49552

# Mean obliquity of the ecliptic at J2000 (degrees)
J2000_OBLIQUITY = 23.4392911

# Light travel time for 1 AU (days)
LIGHT_TIME_DAYS_PER_AU = 0.0057755183

# Mean altitude of the lunar centre at rise/set (degrees)
MOON_RISE_SET_ALTITUDE = 0.125


class BodyTag(Enum):
    """Explicit identity of a solar-system body."""

    SUN = 'sun'
    MOON = 'moon'
    MERCURY = 'mercury'
    VENUS = 'venus'
    EARTH = 'earth'
    MARS = 'mars'
    JUPITER = 'jupiter'
    SATURN = 'saturn'
    URANUS = 'uranus'
    NEPTUNE = 'neptune'

    @property
    def is_planet(self) -> bool:
        """True for Mercury through Neptune, Earth included."""
        return self not in (BodyTag.SUN, BodyTag.MOON)


# Body IDs (NAIF)
SUN_ID = 10
EARTH_ID = 399
MOON_ID = 301

NAIF_IDS: dict[BodyTag, int] = {
    BodyTag.SUN: SUN_ID,
    BodyTag.MOON: MOON_ID,
    BodyTag.MERCURY: 199,
    BodyTag.VENUS: 299,
    BodyTag.EARTH: EARTH_ID,
    # Outer planets resolve to their system barycentres in the DE kernels.
    BodyTag.MARS: 4,
    BodyTag.JUPITER: 5,
    BodyTag.SATURN: 6,
    BodyTag.URANUS: 7,
    BodyTag.NEPTUNE: 8,
}

SATURN_ID = 699
SATURN_MOON_IDS = (601, 602, 603, 604, 605, 606, 607, 608)
SATURN_MOON_NAMES = (
    'Mimas',
    'Enceladus',
    'Tethys',
    'Dione',
    'Rhea',
    'Titan',
    'Hyperion',
    'Iapetus',
)
SATURN_EQUATORIAL_RADIUS_KM = 60268.0
SATURN_POLAR_RADIUS_KM = 54364.0
