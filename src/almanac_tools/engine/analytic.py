"""Closed-form ephemeris engine built on truncated series; needs no data files."""

from __future__ import annotations

from almanac_tools.angle_utils import reduce_degrees
from almanac_tools.constants import AU_KM, DAYS_PER_JULIAN_CENTURY, J2000, BodyTag
from almanac_tools.engine import eclipses, lunar, physical, planetary
from almanac_tools.engine.base import (
    LibrationDetails,
    LunarEclipseDetails,
    LunarMeanElements,
    RawPositionRecord,
    SatelliteDetails,
    SelenographicSunDetails,
)
from almanac_tools.errors import EngineEvaluationFailure


class AnalyticEngine:
    """Ephemeris engine evaluating truncated analytical theories.

    Positions are referred to the mean ecliptic and equinox of date. The
    Sun follows the low-precision solar theory, the Moon a truncated ELP
    series and the planets mean Keplerian orbits precessed from J2000. In
    low-precision mode the lunar series keep their leading terms and the
    planetary orbits use the equation of the centre instead of Kepler's
    equation.
    """

    name = 'analytic'

    def evaluate(self, jd: float, body: BodyTag, high_precision: bool) -> RawPositionRecord:
        """Ecliptic position of date; heliocentric for planets, geocentric for Sun and Moon.

        Parameters:
            jd: Julian Day (treated as TD).
            body: Body to evaluate.
            high_precision: Precision mode.

        Returns:
            RawPositionRecord with radius in AU.
        """
        jd = float(jd)
        if body is BodyTag.SUN:
            lon, lat, r = planetary.sun_geocentric(jd)
            return RawPositionRecord(lon, lat, r, heliocentric=False)
        if body is BodyTag.MOON:
            lon, lat, dist_km = lunar.moon_position(jd, high_precision)
            return RawPositionRecord(lon, lat, dist_km / AU_KM, heliocentric=False)
        if body is BodyTag.EARTH:
            lon, lat, r = planetary.sun_geocentric(jd)
            return RawPositionRecord(reduce_degrees(lon + 180.0), -lat, r, heliocentric=True)
        if body not in planetary.PLANET_ELEMENTS:
            raise EngineEvaluationFailure(f'Analytic engine has no theory for {body.name}')
        t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY
        x, y, z = planetary.heliocentric_j2000(body, t, high_precision)
        lon, lat, r = planetary.rectangular_to_spherical(x, y, z)
        lon, lat = planetary.precess_from_j2000(lon, lat, t)
        return RawPositionRecord(lon, lat, r, heliocentric=True)

    def lunar_mean_elements(self, jd: float) -> LunarMeanElements:
        return lunar.lunar_mean_elements(float(jd))

    def moon_phase(self, k: float, mean: bool) -> float:
        return lunar.mean_phase(k) if mean else lunar.true_phase(k)

    def moon_perigee(self, k: float, mean: bool) -> float:
        return lunar.mean_apsis(k) if mean else lunar.true_perigee(k)

    def moon_apogee(self, k: float, mean: bool) -> float:
        return lunar.mean_apsis(k) if mean else lunar.true_apogee(k)

    def moon_perigee_parallax(self, k: float) -> float:
        return lunar.perigee_parallax(k)

    def moon_apogee_parallax(self, k: float) -> float:
        return lunar.apogee_parallax(k)

    def moon_node_passage(self, k: float) -> float:
        return lunar.node_passage(k)

    def moon_greatest_declination(self, k: float, northern: bool, mean: bool) -> float:
        return lunar.greatest_declination_epoch(k, northern, mean)

    def moon_greatest_declination_value(self, k: float, northern: bool, mean: bool) -> float:
        return lunar.greatest_declination_value(k, northern, mean)

    def moon_libration(self, jd: float, high_precision: bool) -> LibrationDetails:
        return physical.moon_libration(float(jd), high_precision)

    def moon_topocentric_libration(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> LibrationDetails:
        return physical.moon_topocentric_libration(float(jd), longitude, latitude, high_precision)

    def selenographic_sun(self, jd: float, high_precision: bool) -> SelenographicSunDetails:
        return physical.selenographic_sun(float(jd), high_precision)

    def lunar_sun_altitude(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> float:
        return physical.lunar_sun_altitude(float(jd), longitude, latitude, high_precision)

    def lunar_sunrise(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> float:
        return physical.lunar_sunrise(float(jd), longitude, latitude, high_precision)

    def lunar_sunset(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> float:
        return physical.lunar_sunset(float(jd), longitude, latitude, high_precision)

    def lunar_eclipse(self, k: float) -> LunarEclipseDetails:
        return eclipses.lunar_eclipse(k)

    def saturn_moons(self, jd: float, high_precision: bool) -> tuple[SatelliteDetails, ...]:
        """Not available analytically; use SpiceEngine."""
        raise EngineEvaluationFailure(
            'Saturn satellite geometry requires SPICE kernels (ALMANAC_ENGINE=spice)'
        )
