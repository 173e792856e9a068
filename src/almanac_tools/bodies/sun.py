"""The Sun as seen from the Earth."""

from __future__ import annotations

from almanac_tools.bodies.base import BodyPosition, CelestialBody
from almanac_tools.constants import BodyTag


class Sun(CelestialBody):
    """Geocentric Sun. Its radius vector is the Earth-Sun distance in AU."""

    tag = BodyTag.SUN

    def _compute_position(self) -> BodyPosition:
        raw = self._engine.evaluate(self._jd.value, self.tag, self._high_precision)
        return BodyPosition(
            ecliptic=self._mean_ecliptic(raw.longitude, raw.latitude),
            radius_vector=raw.radius_au,
            phase_angle=0.0,
            illuminated_fraction=1.0,
        )
