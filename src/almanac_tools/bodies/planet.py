"""Planets: heliocentric position from the engine, light-time corrected geocentric view."""

from __future__ import annotations

import math
from dataclasses import dataclass

from almanac_tools.bodies.base import BodyPosition, CelestialBody, illumination, search_event
from almanac_tools.constants import LIGHT_TIME_DAYS_PER_AU, NAIF_IDS, BodyTag
from almanac_tools.coordinates import EclipticCoordinates
from almanac_tools.engine import EphemerisEngine, RawPositionRecord, SatelliteDetails
from almanac_tools.engine.planetary import rectangular_to_spherical, spherical_to_rectangular
from almanac_tools.errors import InvalidBodyVariant
from almanac_tools.time_utils import JulianDay


@dataclass(frozen=True)
class PlanetConfig:
    """Identity and per-planet constants.

    Perihelion number k counts orbits from reference_year; the epoch of
    perihelion k is perihelion_series[0] + [1] * k + [2] * k**2 (JDE) and
    aphelion falls at k + 0.5. Visual magnitude is
    magnitude_series[0] + 5 log10(r * delta) + [1] i + [2] i**2 + [3] i**3
    with the phase angle i in degrees.
    """

    tag: BodyTag
    name: str
    naif_id: int
    orbits_per_year: float
    reference_year: float
    perihelion_series: tuple[float, float, float]
    magnitude_series: tuple[float, float, float, float] | None = None


PLANET_CONFIGS: dict[BodyTag, PlanetConfig] = {
    BodyTag.MERCURY: PlanetConfig(
        BodyTag.MERCURY,
        'Mercury',
        NAIF_IDS[BodyTag.MERCURY],
        4.15201,
        2000.12,
        (2451590.257, 87.96934963, 0.0),
        (-0.42, 0.0380, -0.000273, 0.000002),
    ),
    BodyTag.VENUS: PlanetConfig(
        BodyTag.VENUS,
        'Venus',
        NAIF_IDS[BodyTag.VENUS],
        1.62549,
        2000.53,
        (2451738.233, 224.7008188, -0.0000000327),
        (-4.40, 0.0009, 0.000239, -0.00000065),
    ),
    BodyTag.EARTH: PlanetConfig(
        BodyTag.EARTH,
        'Earth',
        NAIF_IDS[BodyTag.EARTH],
        0.99997,
        2000.01,
        (2451547.507, 365.2596358, 0.0000000156),
    ),
    BodyTag.MARS: PlanetConfig(
        BodyTag.MARS,
        'Mars',
        NAIF_IDS[BodyTag.MARS],
        0.53166,
        2001.78,
        (2452195.026, 686.9957857, -0.0000001187),
        (-1.52, 0.016, 0.0, 0.0),
    ),
    BodyTag.JUPITER: PlanetConfig(
        BodyTag.JUPITER,
        'Jupiter',
        NAIF_IDS[BodyTag.JUPITER],
        0.08430,
        2011.20,
        (2455636.936, 4332.897065, 0.0001367),
        (-9.40, 0.005, 0.0, 0.0),
    ),
    # Ring tilt contribution is not modelled.
    BodyTag.SATURN: PlanetConfig(
        BodyTag.SATURN,
        'Saturn',
        NAIF_IDS[BodyTag.SATURN],
        0.03393,
        2003.52,
        (2452830.12, 10764.21676, 0.000827),
        (-8.88, 0.044, 0.0, 0.0),
    ),
    BodyTag.URANUS: PlanetConfig(
        BodyTag.URANUS,
        'Uranus',
        NAIF_IDS[BodyTag.URANUS],
        0.01190,
        2051.1,
        (2470213.5, 30694.8767, -0.00541),
        (-7.19, 0.0, 0.0, 0.0),
    ),
    BodyTag.NEPTUNE: PlanetConfig(
        BodyTag.NEPTUNE,
        'Neptune',
        NAIF_IDS[BodyTag.NEPTUNE],
        0.00607,
        2047.5,
        (2468895.1, 60190.33, 0.03429),
        (-6.87, 0.0, 0.0, 0.0),
    ),
}


def planet_config(tag: BodyTag) -> PlanetConfig:
    """Return the configuration for a planet tag.

    Raises:
        InvalidBodyVariant: If the tag is not a planet.
    """
    try:
        return PLANET_CONFIGS[tag]
    except KeyError as e:
        raise InvalidBodyVariant(f'{tag!r} is not a planet') from e


class Planet(CelestialBody):
    """A major planet, Mercury to Neptune.

    Earth is accepted for heliocentric quantities (longitude, latitude,
    radius vector, perihelion, aphelion); its geocentric quantities raise
    InvalidBodyVariant.

    Parameters:
        tag: Planet identity.
        jd: Epoch (UT).
        high_precision: Precision mode passed to the engine.
        engine: Ephemeris engine; defaults to the configured engine.
    """

    def __init__(
        self,
        tag: BodyTag,
        jd: JulianDay | float,
        high_precision: bool = True,
        engine: EphemerisEngine | None = None,
    ) -> None:
        self.config = planet_config(tag)
        self.tag = tag
        self._heliocentric: RawPositionRecord | None = None
        self._geocentric_distance: float | None = None
        super().__init__(jd, high_precision, engine)

    def _compute_position(self) -> BodyPosition | None:
        jd = self._jd.value
        helio = self._engine.evaluate(jd, self.tag, self._high_precision)
        self._heliocentric = helio
        if self.tag is BodyTag.EARTH:
            return None

        earth = self._engine.evaluate(jd, BodyTag.EARTH, self._high_precision)
        earth_xyz = spherical_to_rectangular(earth.longitude, earth.latitude, earth.radius_au)
        lon, lat, delta = self._geocentric_from(helio, earth_xyz)
        # One light-time iteration: the planet as it was when the light left it.
        retarded = self._engine.evaluate(
            jd - LIGHT_TIME_DAYS_PER_AU * delta, self.tag, self._high_precision
        )
        lon, lat, delta = self._geocentric_from(retarded, earth_xyz)
        self._geocentric_distance = delta

        r = retarded.radius_au
        big_r = earth.radius_au
        cos_i = (r * r + delta * delta - big_r * big_r) / (2.0 * r * delta)
        phase = math.degrees(math.acos(max(-1.0, min(1.0, cos_i))))
        return BodyPosition(
            ecliptic=self._mean_ecliptic(lon, lat),
            radius_vector=delta,
            phase_angle=phase,
            illuminated_fraction=illumination(phase),
        )

    @staticmethod
    def _geocentric_from(
        helio: RawPositionRecord,
        earth_xyz: tuple[float, float, float],
    ) -> tuple[float, float, float]:
        x, y, z = spherical_to_rectangular(helio.longitude, helio.latitude, helio.radius_au)
        return rectangular_to_spherical(x - earth_xyz[0], y - earth_xyz[1], z - earth_xyz[2])

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def ecliptic_longitude(self) -> float:
        """Heliocentric ecliptic longitude (degrees, mean equinox of date)."""
        return self._heliocentric.longitude

    @property
    def ecliptic_latitude(self) -> float:
        """Heliocentric ecliptic latitude (degrees)."""
        return self._heliocentric.latitude

    @property
    def radius_vector(self) -> float:
        """Heliocentric distance in AU."""
        return self._heliocentric.radius_au

    @property
    def heliocentric_ecliptic_coordinates(self) -> EclipticCoordinates:
        """Heliocentric ecliptic position referred to the mean obliquity of date."""
        return self._mean_ecliptic(self._heliocentric.longitude, self._heliocentric.latitude)

    @property
    def geocentric_distance(self) -> float:
        """Light-time corrected distance from the Earth in AU."""
        return self._require_position().radius_vector

    @property
    def magnitude(self) -> float:
        """Visual magnitude from heliocentric/geocentric distance and phase angle."""
        position = self._require_position()
        a0, a1, a2, a3 = self.config.magnitude_series
        i = position.phase_angle
        return (
            a0
            + 5.0 * math.log10(self.radius_vector * position.radius_vector)
            + a1 * i
            + a2 * i * i
            + a3 * i * i * i
        )

    def _apsis(self, forward: bool, offset: float) -> JulianDay:
        config = self.config
        c0, c1, c2 = config.perihelion_series
        years = self._jd.fractional_year() - config.reference_year
        k = round(years * config.orbits_per_year) + offset
        _, jd = search_event(self._jd, k, lambda n: c0 + c1 * n + c2 * n * n, forward)
        return jd

    def perihelion(self, forward: bool = True) -> JulianDay:
        """Time of the next (forward) or previous perihelion."""
        return self._apsis(forward, 0.0)

    def aphelion(self, forward: bool = True) -> JulianDay:
        """Time of the next (forward) or previous aphelion."""
        return self._apsis(forward, 0.5)

    def satellites(self) -> tuple[SatelliteDetails, ...]:
        """Geometry of the major satellites; Saturn only.

        Raises:
            InvalidBodyVariant: For planets other than Saturn.
            EngineEvaluationFailure: If the engine cannot compute satellites.
        """
        if self.tag is not BodyTag.SATURN:
            raise InvalidBodyVariant(f'No satellite model for {self.name}')
        return self._engine.saturn_moons(self._jd.value, self._high_precision)
