"""Celestial bodies sharing one contract: Sun, Moon and the planets."""

from __future__ import annotations

from almanac_tools.bodies.base import CelestialBody, search_event
from almanac_tools.bodies.moon import Moon, MoonPhase
from almanac_tools.bodies.planet import PLANET_CONFIGS, Planet, PlanetConfig
from almanac_tools.bodies.sun import Sun
from almanac_tools.constants import BodyTag
from almanac_tools.engine import EphemerisEngine
from almanac_tools.errors import InvalidBodyVariant
from almanac_tools.time_utils import JulianDay

__all__ = [
    'PLANET_CONFIGS',
    'CelestialBody',
    'Moon',
    'MoonPhase',
    'Planet',
    'PlanetConfig',
    'Sun',
    'make_body',
    'search_event',
]


def make_body(
    tag: BodyTag,
    jd: JulianDay | float,
    high_precision: bool = True,
    engine: EphemerisEngine | None = None,
) -> CelestialBody:
    """Build the body variant for a tag.

    Parameters:
        tag: Body identity.
        jd: Epoch (UT).
        high_precision: Precision mode.
        engine: Ephemeris engine; defaults to the configured engine.

    Returns:
        Sun, Moon or Planet instance.

    Raises:
        InvalidBodyVariant: If tag is not a BodyTag.
    """
    if not isinstance(tag, BodyTag):
        raise InvalidBodyVariant(f'Expected a BodyTag, got {tag!r}')
    if tag is BodyTag.SUN:
        return Sun(jd, high_precision, engine)
    if tag is BodyTag.MOON:
        return Moon(jd, high_precision, engine)
    return Planet(tag, jd, high_precision, engine)
