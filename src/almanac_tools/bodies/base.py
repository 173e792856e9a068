"""Shared celestial-body contract and the event search used by apsis/phase lookups."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from almanac_tools.constants import ARCSEC_PER_DEGREE, BodyTag
from almanac_tools.coordinates import (
    EclipticCoordinates,
    EquatorialCoordinates,
    GeographicCoordinates,
    HorizontalCoordinates,
    annual_aberration,
    equatorial_to_horizontal,
    mean_obliquity,
    nutation,
    true_obliquity,
)
from almanac_tools.engine import EphemerisEngine, get_default_engine
from almanac_tools.errors import EngineEvaluationFailure, InvalidBodyVariant
from almanac_tools.sidereal import apparent_greenwich_sidereal_time
from almanac_tools.time_utils import JulianDay

logger = logging.getLogger(__name__)

# Refinement steps allowed after the nominal event index.
MAX_SEARCH_STEPS = 2


def search_event(
    epoch: JulianDay,
    k: float,
    evaluate: Callable[[float], float],
    forward: bool,
    max_steps: int = MAX_SEARCH_STEPS,
) -> tuple[float, JulianDay]:
    """Find the first event at or after (forward) or at or before epoch.

    Parameters:
        epoch: Reference epoch.
        k: Nominal event index (already including the event offset).
        evaluate: Maps an event index to its Julian Day.
        forward: Search direction.
        max_steps: Maximum number of +-1 steps on k.

    Returns:
        (k, JulianDay) of the event found.

    Raises:
        EngineEvaluationFailure: If no candidate satisfies the direction
            within max_steps.
    """
    direction = 1 if forward else -1
    reference = epoch.value

    def satisfied(candidate: float) -> bool:
        return candidate >= reference if forward else candidate <= reference

    candidate = evaluate(k)
    steps = 0
    while not satisfied(candidate):
        if steps == max_steps:
            raise EngineEvaluationFailure(
                f'Event search from JD {reference} did not converge (k={k})'
            )
        k += direction
        steps += 1
        candidate = evaluate(k)
    if steps:
        logger.debug('Event search from JD %s stepped %d time(s) to k=%s', reference, steps, k)
    else:
        # Nearest in the requested direction: the preceding index may qualify too.
        earlier = evaluate(k - direction)
        if satisfied(earlier):
            return (k - direction, JulianDay(earlier))
    return (k, JulianDay(candidate))


@dataclass(frozen=True)
class BodyPosition:
    """Geocentric geometric position and illumination computed at construction."""

    ecliptic: EclipticCoordinates
    radius_vector: float
    phase_angle: float
    illuminated_fraction: float


class CelestialBody:
    """A solar-system body bound to an epoch, a precision mode and an engine.

    Core outputs are computed eagerly in __init__; instances are read-only
    afterwards and safe to share between threads.

    Parameters:
        jd: Epoch as a JulianDay or float (UT).
        high_precision: Use the full series (default) or truncated series.
        engine: Ephemeris engine; defaults to the configured engine.
    """

    tag: BodyTag

    def __init__(
        self,
        jd: JulianDay | float,
        high_precision: bool = True,
        engine: EphemerisEngine | None = None,
    ) -> None:
        self._jd = jd if isinstance(jd, JulianDay) else JulianDay(float(jd))
        self._high_precision = bool(high_precision)
        self._engine = engine if engine is not None else get_default_engine()
        self._position = self._compute_position()
        if self._position is not None:
            self._apparent_ecliptic = self._compute_apparent(self._position.ecliptic)
            self._equatorial = self._position.ecliptic.to_equatorial()
            self._apparent_equatorial = self._apparent_ecliptic.to_equatorial()

    def _compute_position(self) -> BodyPosition | None:
        raise NotImplementedError

    def _compute_apparent(self, ecliptic: EclipticCoordinates) -> EclipticCoordinates:
        """Apparent position: annual aberration plus nutation in longitude, true obliquity."""
        dlam, dbeta = annual_aberration(ecliptic, self._jd)
        dpsi = nutation(self._jd).longitude / ARCSEC_PER_DEGREE
        return EclipticCoordinates(
            ecliptic.longitude + dlam + dpsi,
            ecliptic.latitude + dbeta,
            true_obliquity(self._jd),
        )

    def _mean_ecliptic(self, longitude: float, latitude: float) -> EclipticCoordinates:
        return EclipticCoordinates(longitude, latitude, mean_obliquity(self._jd))

    def _require_position(self) -> BodyPosition:
        if self._position is None:
            raise InvalidBodyVariant(f'{self.name} has no geocentric position')
        return self._position

    def __repr__(self) -> str:
        return f'{type(self).__name__}(jd={self._jd.value!r}, high_precision={self._high_precision})'

    @property
    def name(self) -> str:
        """Display name of the body."""
        return self.tag.name.capitalize()

    @property
    def julian_day(self) -> JulianDay:
        """Epoch the body is bound to."""
        return self._jd

    @property
    def high_precision(self) -> bool:
        return self._high_precision

    @property
    def engine(self) -> EphemerisEngine:
        return self._engine

    @property
    def ecliptic_coordinates(self) -> EclipticCoordinates:
        """Geocentric geometric ecliptic coordinates (mean equinox and obliquity of date)."""
        return self._require_position().ecliptic

    @property
    def apparent_ecliptic_coordinates(self) -> EclipticCoordinates:
        """Apparent geocentric ecliptic coordinates referred to the true obliquity."""
        self._require_position()
        return self._apparent_ecliptic

    @property
    def equatorial_coordinates(self) -> EquatorialCoordinates:
        """Geometric equatorial coordinates (mean equator and equinox of date)."""
        self._require_position()
        return self._equatorial

    @property
    def apparent_equatorial_coordinates(self) -> EquatorialCoordinates:
        """Apparent equatorial coordinates (true equator and equinox of date)."""
        self._require_position()
        return self._apparent_equatorial

    def horizontal_coordinates(self, geographic: GeographicCoordinates) -> HorizontalCoordinates:
        """Azimuth (from south) and altitude for an observer, from the apparent position."""
        return equatorial_to_horizontal(
            self.apparent_equatorial_coordinates,
            geographic,
            apparent_greenwich_sidereal_time(self._jd),
        )

    @property
    def radius_vector(self) -> float:
        """Distance from the Earth in AU (heliocentric distance for planets)."""
        return self._require_position().radius_vector

    @property
    def phase_angle(self) -> float:
        """Sun-body-Earth angle in degrees, [0, 180]."""
        return self._require_position().phase_angle

    @property
    def illuminated_fraction(self) -> float:
        """Illuminated fraction of the disk, [0, 1]."""
        return self._require_position().illuminated_fraction

    def perihelion(self, forward: bool = True) -> JulianDay:
        """Time of perihelion; only planets orbit the Sun on their own elements."""
        raise InvalidBodyVariant(f'{self.name} has no heliocentric orbit')

    def aphelion(self, forward: bool = True) -> JulianDay:
        """Time of aphelion; only planets orbit the Sun on their own elements."""
        raise InvalidBodyVariant(f'{self.name} has no heliocentric orbit')


def illumination(phase_angle: float) -> float:
    """Illuminated fraction of a sphere seen at the given phase angle (degrees)."""
    return min(1.0, max(0.0, (1.0 + math.cos(math.radians(phase_angle))) / 2.0))
