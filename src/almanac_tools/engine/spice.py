"""SPICE-kernel backed ephemeris engine (cspyce), with Saturn satellite geometry."""

from __future__ import annotations

import logging
import math

import cspyce
import numpy as np

from almanac_tools.constants import (
    AU_KM,
    DAYS_PER_JULIAN_CENTURY,
    EARTH_ID,
    J2000,
    NAIF_IDS,
    SATURN_EQUATORIAL_RADIUS_KM,
    SATURN_ID,
    SATURN_MOON_IDS,
    SATURN_MOON_NAMES,
    SATURN_POLAR_RADIUS_KM,
    SUN_ID,
    BodyTag,
)
from almanac_tools.engine.analytic import AnalyticEngine
from almanac_tools.engine.base import RawPositionRecord, SatelliteDetails
from almanac_tools.engine.load import load_kernels
from almanac_tools.engine.planetary import precess_from_j2000
from almanac_tools.errors import EngineEvaluationFailure
from almanac_tools.time_utils import tdb_seconds_from_julian_day

logger = logging.getLogger(__name__)


def _sky_frame(line_of_sight: np.ndarray, pole: np.ndarray) -> np.ndarray:
    """Rows x (west), y (pole projected on the sky), z (along the line of sight)."""
    z = line_of_sight / np.linalg.norm(line_of_sight)
    y = pole - np.dot(pole, z) * z
    y = y / np.linalg.norm(y)
    x = np.cross(z, y)
    return np.array([x, y, z])


def _on_disk(coords: np.ndarray) -> bool:
    """True if a sky-plane position (equatorial radii) falls on Saturn's ellipse."""
    y_scaled = coords[1] * SATURN_EQUATORIAL_RADIUS_KM / SATURN_POLAR_RADIUS_KM
    return bool(coords[0] ** 2 + y_scaled**2 < 1.0)


class SpiceEngine(AnalyticEngine):
    """Ephemeris engine reading positions from SPICE kernels.

    Positions come from cspyce in the ECLIPJ2000 frame and are precessed to
    the mean equinox of date. Kernels are loaded on first use (see
    engine.load). The lunar event series and physical ephemeris are shared
    with AnalyticEngine.
    """

    name = 'spice'

    def _ephemeris_time(self, jd: float) -> float:
        load_kernels()
        return tdb_seconds_from_julian_day(float(jd))

    def _position(
        self,
        target: int,
        et: float,
        frame: str,
        abcorr: str,
        observer: int,
    ) -> np.ndarray:
        try:
            pos, _ = cspyce.spkezp(target, et, frame, abcorr, observer)
        except Exception as e:
            raise EngineEvaluationFailure(
                f'SPICE could not evaluate body {target} from {observer} at ET {et}: {e}'
            ) from e
        return np.asarray(pos, dtype=np.float64)

    def evaluate(self, jd: float, body: BodyTag, high_precision: bool) -> RawPositionRecord:
        """Geometric ecliptic position of date from the loaded kernels.

        Parameters:
            jd: UT Julian Day.
            body: Body to evaluate.
            high_precision: Ignored; kernels are always evaluated exactly.

        Returns:
            RawPositionRecord, heliocentric for planets, geocentric for the
            Sun and the Moon.
        """
        et = self._ephemeris_time(jd)
        if body is BodyTag.SUN:
            target, observer, heliocentric = SUN_ID, EARTH_ID, False
        elif body is BodyTag.MOON:
            target, observer, heliocentric = NAIF_IDS[BodyTag.MOON], EARTH_ID, False
        else:
            target, observer, heliocentric = NAIF_IDS[body], SUN_ID, True
        pos = self._position(target, et, 'ECLIPJ2000', 'NONE', observer)
        radius, lon, lat = cspyce.reclat(pos.tolist())
        t = (float(jd) - J2000) / DAYS_PER_JULIAN_CENTURY
        lon_date, lat_date = precess_from_j2000(math.degrees(lon), math.degrees(lat), t)
        return RawPositionRecord(lon_date, lat_date, radius / AU_KM, heliocentric)

    def saturn_moons(self, jd: float, high_precision: bool) -> tuple[SatelliteDetails, ...]:
        """Sky-plane geometry of Saturn's eight major moons as seen from Earth.

        Coordinates are in Saturn equatorial radii. Transit and occultation
        flags use the Earth line of sight; eclipse and shadow-transit flags
        use the Sun's.
        """
        et = self._ephemeris_time(jd)
        saturn = self._position(SATURN_ID, et, 'J2000', 'LT', EARTH_ID)
        light_time = float(np.linalg.norm(saturn)) / cspyce.clight()
        saturn_et = et - light_time
        try:
            rotation = np.asarray(cspyce.pxform('IAU_SATURN', 'J2000', saturn_et))
        except Exception as e:
            raise EngineEvaluationFailure(f'SPICE has no orientation for Saturn: {e}') from e
        pole = rotation @ np.array([0.0, 0.0, 1.0])
        earth_frame = _sky_frame(saturn, pole)
        sun = self._position(SUN_ID, saturn_et, 'J2000', 'LT', SATURN_ID)
        sun_frame = _sky_frame(-sun, pole)

        moons = []
        for moon_id, name in zip(SATURN_MOON_IDS, SATURN_MOON_NAMES):
            relative = self._position(moon_id, saturn_et, 'J2000', 'NONE', SATURN_ID)
            apparent = self._position(moon_id, et, 'J2000', 'LT', EARTH_ID) - saturn
            true_xyz = earth_frame @ relative / SATURN_EQUATORIAL_RADIUS_KM
            apparent_xyz = earth_frame @ apparent / SATURN_EQUATORIAL_RADIUS_KM
            solar_xyz = sun_frame @ relative / SATURN_EQUATORIAL_RADIUS_KM
            moons.append(
                SatelliteDetails(
                    name=name,
                    true_coordinates=tuple(float(v) for v in true_xyz),
                    apparent_coordinates=tuple(float(v) for v in apparent_xyz),
                    in_transit=bool(apparent_xyz[2] < 0.0) and _on_disk(apparent_xyz),
                    in_occultation=bool(apparent_xyz[2] > 0.0) and _on_disk(apparent_xyz),
                    in_eclipse=bool(solar_xyz[2] > 0.0) and _on_disk(solar_xyz),
                    in_shadow_transit=bool(solar_xyz[2] < 0.0) and _on_disk(solar_xyz),
                )
            )
        logger.debug('Computed Saturn satellite geometry at JD %s', jd)
        return tuple(moons)
