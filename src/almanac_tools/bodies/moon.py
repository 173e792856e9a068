"""The Moon: position, physical ephemeris and lunar event times."""

from __future__ import annotations

import math
from enum import Enum

from almanac_tools.bodies.base import BodyPosition, CelestialBody, illumination, search_event
from almanac_tools.bodies.sun import Sun
from almanac_tools.constants import (
    ARCSEC_PER_DEGREE,
    AU_KM,
    MOON_DIAMETER_KM,
    MOON_RISE_SET_ALTITUDE,
    BodyTag,
)
from almanac_tools.coordinates import (
    EclipticCoordinates,
    GeographicCoordinates,
    SelenographicCoordinates,
    horizontal_parallax_from_distance,
    nutation,
    true_obliquity,
)
from almanac_tools.engine import LunarEclipseDetails, LunarMeanElements
from almanac_tools.errors import EngineEvaluationFailure
from almanac_tools.time_utils import JulianDay

# Atmospheric refraction at the horizon (degrees)
_HORIZON_REFRACTION = 34.0 / 60.0

# Event counts per year and the epoch (fractional year) of event k = 0
_LUNATIONS_PER_YEAR = 12.3685
_LUNATION_EPOCH = 2000.0
_ANOMALISTIC_MONTHS_PER_YEAR = 13.2555
_APSIS_EPOCH = 1999.97
_DRACONIC_MONTHS_PER_YEAR = 13.4223
_NODE_EPOCH = 2000.05
_TROPICAL_MONTHS_PER_YEAR = 13.3686
_DECLINATION_EPOCH = 2000.03

# Full moons scanned when looking for the next lunar eclipse
_ECLIPSE_SEARCH_LUNATIONS = 14


class MoonPhase(Enum):
    """Principal lunar phases; the value is the fractional part of the lunation number."""

    NEW = 0.0
    FIRST_QUARTER = 0.25
    FULL = 0.5
    LAST_QUARTER = 0.75


class Moon(CelestialBody):
    """Geocentric Moon.

    ``distance`` is in kilometres and ``radius_vector`` in AU; the two are
    related by AU_KM only. Event methods return Julian Ephemeris Days as
    JulianDay values.
    """

    tag = BodyTag.MOON

    def _compute_position(self) -> BodyPosition:
        jd = self._jd.value
        raw = self._engine.evaluate(jd, self.tag, self._high_precision)
        self._distance_km = raw.radius_au * AU_KM
        self._sun = Sun(self._jd, self._high_precision, self._engine)
        self._mean_elements = self._engine.lunar_mean_elements(jd)

        sun_ecl = self._sun.ecliptic_coordinates
        beta = math.radians(raw.latitude)
        dlon = math.radians(raw.longitude - sun_ecl.longitude)
        cos_psi = math.cos(beta) * math.cos(dlon)
        psi = math.acos(max(-1.0, min(1.0, cos_psi)))
        sun_km = self._sun.radius_vector * AU_KM
        phase = math.degrees(
            math.atan2(sun_km * math.sin(psi), self._distance_km - sun_km * math.cos(psi))
        )
        self._elongation = math.degrees(psi)
        return BodyPosition(
            ecliptic=self._mean_ecliptic(raw.longitude, raw.latitude),
            radius_vector=raw.radius_au,
            phase_angle=phase,
            illuminated_fraction=illumination(phase),
        )

    def _compute_apparent(self, ecliptic: EclipticCoordinates) -> EclipticCoordinates:
        """Nutation in longitude only; the Moon's aberration is folded into its theory."""
        dpsi = nutation(self._jd).longitude / ARCSEC_PER_DEGREE
        return EclipticCoordinates(
            ecliptic.longitude + dpsi,
            ecliptic.latitude,
            true_obliquity(self._jd),
        )

    # --- Position ------------------------------------------------------

    @property
    def distance(self) -> float:
        """Earth-Moon centre distance in kilometres."""
        return self._distance_km

    @property
    def horizontal_parallax(self) -> float:
        """Equatorial horizontal parallax in degrees."""
        return horizontal_parallax_from_distance(self._distance_km)

    @property
    def equatorial_semidiameter(self) -> float:
        """Geocentric semidiameter across the lunar equator in degrees."""
        return math.degrees(math.asin(0.5 * MOON_DIAMETER_KM / self._distance_km))

    @property
    def polar_semidiameter(self) -> float:
        """Geocentric semidiameter along the lunar rotation axis in degrees.

        The lunar figure is treated as a sphere, so this equals the
        equatorial value.
        """
        return self.equatorial_semidiameter

    @property
    def semidiameter(self) -> float:
        """Geocentric semidiameter in degrees (equatorial)."""
        return self.equatorial_semidiameter

    def rise_set_altitude(self, mean: bool = False) -> float:
        """Geometric altitude of the lunar centre at rise or set (degrees).

        Parameters:
            mean: Return the conventional mean value instead of the value for
                this epoch's parallax.

        Returns:
            Standard altitude h0 for rise/set computations.
        """
        if mean:
            return MOON_RISE_SET_ALTITUDE
        return 0.7275 * self.horizontal_parallax - _HORIZON_REFRACTION

    @property
    def geocentric_elongation(self) -> float:
        """Angular distance from the Sun (degrees)."""
        return self._elongation

    @property
    def position_angle_of_bright_limb(self) -> float:
        """Position angle of the midpoint of the illuminated limb (degrees from north)."""
        moon = self.apparent_equatorial_coordinates
        sun = self._sun.apparent_equatorial_coordinates
        a0 = math.radians(sun.right_ascension_degrees)
        d0 = math.radians(sun.declination)
        a = math.radians(moon.right_ascension_degrees)
        d = math.radians(moon.declination)
        chi = math.atan2(
            math.cos(d0) * math.sin(a0 - a),
            math.sin(d0) * math.cos(d) - math.cos(d0) * math.sin(d) * math.cos(a0 - a),
        )
        return math.degrees(chi) % 360.0

    # --- Mean elements -------------------------------------------------

    @property
    def mean_elements(self) -> LunarMeanElements:
        """All mean lunar arguments at this epoch."""
        return self._mean_elements

    @property
    def mean_longitude(self) -> float:
        return self._mean_elements.mean_longitude

    @property
    def mean_elongation(self) -> float:
        return self._mean_elements.mean_elongation

    @property
    def mean_anomaly(self) -> float:
        return self._mean_elements.mean_anomaly

    @property
    def argument_of_latitude(self) -> float:
        return self._mean_elements.argument_of_latitude

    @property
    def mean_perigee_longitude(self) -> float:
        return self._mean_elements.mean_perigee_longitude

    def ascending_node_longitude(self, mean: bool = True) -> float:
        """Longitude of the ascending node, mean or true (degrees)."""
        if mean:
            return self._mean_elements.mean_ascending_node
        return self._mean_elements.true_ascending_node

    # --- Physical ephemeris --------------------------------------------

    def geocentric_libration(self) -> SelenographicCoordinates:
        """Total libration in longitude and latitude as seen from the Earth's centre."""
        details = self._engine.moon_libration(self._jd.value, self._high_precision)
        return SelenographicCoordinates(details.longitude, details.latitude)

    def topocentric_libration(self, geographic: GeographicCoordinates) -> SelenographicCoordinates:
        """Total libration seen by an observer on the Earth's surface."""
        details = self._engine.moon_topocentric_libration(
            self._jd.value, geographic.longitude, geographic.latitude, self._high_precision
        )
        return SelenographicCoordinates(details.longitude, details.latitude)

    @property
    def rotation_axis_position_angle(self) -> float:
        """Position angle of the Moon's rotation axis (degrees)."""
        return self._engine.moon_libration(self._jd.value, self._high_precision).position_angle

    @property
    def selenographic_position_of_sun(self) -> SelenographicCoordinates:
        """Selenographic longitude and latitude of the subsolar point."""
        details = self._engine.selenographic_sun(self._jd.value, self._high_precision)
        return SelenographicCoordinates(details.longitude, details.latitude)

    def altitude_of_sun(self, selenographic: SelenographicCoordinates) -> float:
        """Altitude of the Sun (degrees) above the horizon of a lunar surface point."""
        return self._engine.lunar_sun_altitude(
            self._jd.value, selenographic.longitude, selenographic.latitude, self._high_precision
        )

    def time_of_sunrise(self, selenographic: SelenographicCoordinates) -> JulianDay:
        """Sunrise nearest this epoch at a lunar surface point."""
        return JulianDay(
            self._engine.lunar_sunrise(
                self._jd.value,
                selenographic.longitude,
                selenographic.latitude,
                self._high_precision,
            )
        )

    def time_of_sunset(self, selenographic: SelenographicCoordinates) -> JulianDay:
        """Sunset nearest this epoch at a lunar surface point."""
        return JulianDay(
            self._engine.lunar_sunset(
                self._jd.value,
                selenographic.longitude,
                selenographic.latitude,
                self._high_precision,
            )
        )

    # --- Events --------------------------------------------------------

    def _nominal_k(self, per_year: float, epoch_year: float) -> int:
        return round((self._jd.fractional_year() - epoch_year) * per_year)

    def time_of_phase(
        self,
        phase: MoonPhase,
        forward: bool = True,
        mean: bool = False,
    ) -> JulianDay:
        """Time of the next (forward) or previous occurrence of a lunar phase.

        Parameters:
            phase: Phase to look for.
            forward: Search after (True) or before (False) this epoch.
            mean: Mean phase instead of the true phase.

        Returns:
            JulianDay of the phase.
        """
        k = self._nominal_k(_LUNATIONS_PER_YEAR, _LUNATION_EPOCH) + phase.value
        _, jd = search_event(self._jd, k, lambda n: self._engine.moon_phase(n, mean), forward)
        return jd

    def _apsis(self, forward: bool, mean: bool, apogee: bool) -> tuple[float, JulianDay]:
        k = self._nominal_k(_ANOMALISTIC_MONTHS_PER_YEAR, _APSIS_EPOCH)
        if apogee:
            return search_event(
                self._jd, k + 0.5, lambda n: self._engine.moon_apogee(n, mean), forward
            )
        return search_event(self._jd, k, lambda n: self._engine.moon_perigee(n, mean), forward)

    def perigee(self, forward: bool = True, mean: bool = False) -> JulianDay:
        """Time of the next (forward) or previous perigee."""
        return self._apsis(forward, mean, apogee=False)[1]

    def apogee(self, forward: bool = True, mean: bool = False) -> JulianDay:
        """Time of the next (forward) or previous apogee."""
        return self._apsis(forward, mean, apogee=True)[1]

    def perigee_parallax(self, forward: bool = True) -> float:
        """Equatorial horizontal parallax (degrees) at the next or previous perigee."""
        k, _ = self._apsis(forward, False, apogee=False)
        return self._engine.moon_perigee_parallax(k)

    def apogee_parallax(self, forward: bool = True) -> float:
        """Equatorial horizontal parallax (degrees) at the next or previous apogee."""
        k, _ = self._apsis(forward, False, apogee=True)
        return self._engine.moon_apogee_parallax(k)

    def passage_through_node(self, ascending: bool = True, forward: bool = True) -> JulianDay:
        """Time the Moon next (or last) crosses its ascending or descending node."""
        k = self._nominal_k(_DRACONIC_MONTHS_PER_YEAR, _NODE_EPOCH) + (0.0 if ascending else 0.5)
        _, jd = search_event(self._jd, k, self._engine.moon_node_passage, forward)
        return jd

    def _declination_event(
        self,
        northern: bool,
        forward: bool,
        mean: bool,
    ) -> tuple[float, JulianDay]:
        k = self._nominal_k(_TROPICAL_MONTHS_PER_YEAR, _DECLINATION_EPOCH)
        return search_event(
            self._jd,
            k,
            lambda n: self._engine.moon_greatest_declination(n, northern, mean),
            forward,
        )

    def time_of_greatest_declination(
        self,
        northern: bool = True,
        forward: bool = True,
        mean: bool = False,
    ) -> JulianDay:
        """Time of the next (or previous) greatest northern or southern declination."""
        return self._declination_event(northern, forward, mean)[1]

    def greatest_declination(
        self,
        northern: bool = True,
        forward: bool = True,
        mean: bool = False,
    ) -> float:
        """Declination (degrees, negative when southern) at that greatest-declination event."""
        k, _ = self._declination_event(northern, forward, mean)
        return self._engine.moon_greatest_declination_value(k, northern, mean)

    def lunar_eclipse(self, forward: bool = True) -> LunarEclipseDetails:
        """Circumstances of the next (or previous) lunar eclipse.

        Raises:
            EngineEvaluationFailure: If no eclipse occurs within a year of
                full moons.
        """
        k, _ = search_event(
            self._jd,
            self._nominal_k(_LUNATIONS_PER_YEAR, _LUNATION_EPOCH) + MoonPhase.FULL.value,
            lambda n: self._engine.moon_phase(n, True),
            forward,
        )
        step = 1 if forward else -1
        for _ in range(_ECLIPSE_SEARCH_LUNATIONS):
            details = self._engine.lunar_eclipse(k)
            if details.eclipse:
                return details
            k += step
        raise EngineEvaluationFailure(
            f'No lunar eclipse found within {_ECLIPSE_SEARCH_LUNATIONS} lunations of '
            f'JD {self._jd.value}'
        )
