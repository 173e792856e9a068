"""Positions, physical states and event epochs of solar-system bodies.

This package provides:
- Time representations: Julian Day, calendar dates across the 1582 reform,
  sidereal time
- Coordinate frames: ecliptic, equatorial, horizontal, geographic and
  selenographic values with pure transforms between them
- Celestial bodies: Sun, Moon and planets sharing one contract over
  body-specific physics

Raw series evaluation is delegated to an ephemeris engine: the analytic engine
needs nothing but the standard math library; the SPICE engine uses cspyce and
rms-julian.
"""

from almanac_tools.bodies import Moon, MoonPhase, Planet, Sun, make_body
from almanac_tools.constants import BodyTag
from almanac_tools.coordinates import (
    EclipticCoordinates,
    EquatorialCoordinates,
    GeographicCoordinates,
    HorizontalCoordinates,
    SelenographicCoordinates,
)
from almanac_tools.errors import (
    AlmanacError,
    EngineEvaluationFailure,
    InvalidBodyVariant,
    InvalidCalendarDate,
)
from almanac_tools.time_utils import CalendarDate, JulianDay, to_calendar_date, to_julian_day

__all__: list[str] = [
    'AlmanacError',
    'BodyTag',
    'CalendarDate',
    'EclipticCoordinates',
    'EngineEvaluationFailure',
    'EquatorialCoordinates',
    'GeographicCoordinates',
    'HorizontalCoordinates',
    'InvalidBodyVariant',
    'InvalidCalendarDate',
    'JulianDay',
    'Moon',
    'MoonPhase',
    'Planet',
    'SelenographicCoordinates',
    'Sun',
    'make_body',
    'to_calendar_date',
    'to_julian_day',
]
