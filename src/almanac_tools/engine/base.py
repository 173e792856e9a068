"""Ephemeris engine contract: raw records and the protocol the body layer consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from almanac_tools.constants import BodyTag


@dataclass(frozen=True)
class RawPositionRecord:
    """Raw spherical position from the engine.

    Longitude/latitude are ecliptic degrees referred to the mean equinox of
    date; heliocentric for planets (Earth included), geocentric for the Sun
    and the Moon.
    """

    longitude: float
    latitude: float
    radius_au: float
    heliocentric: bool


@dataclass(frozen=True)
class LunarMeanElements:
    """Mean lunar arguments (degrees)."""

    mean_longitude: float
    mean_elongation: float
    sun_mean_anomaly: float
    mean_anomaly: float
    argument_of_latitude: float
    mean_perigee_longitude: float
    mean_ascending_node: float
    true_ascending_node: float


@dataclass(frozen=True)
class LibrationDetails:
    """Total librations and position angle of the rotation axis (degrees).

    optical_longitude/optical_latitude hold the optical part only; longitude
    and latitude add the physical librations.
    """

    longitude: float
    latitude: float
    optical_longitude: float
    optical_latitude: float
    position_angle: float


@dataclass(frozen=True)
class SelenographicSunDetails:
    """Selenographic position of the subsolar point and its colongitude (degrees)."""

    longitude: float
    latitude: float
    colongitude: float


@dataclass(frozen=True)
class LunarEclipseDetails:
    """Circumstances of a lunar eclipse at a full moon.

    Magnitudes are fractions of the lunar diameter; semidurations are in
    minutes and zero when the corresponding phase does not occur.
    """

    k: float
    eclipse: bool
    time_of_maximum: float
    gamma: float
    u: float
    penumbral_radius: float
    umbral_radius: float
    penumbral_magnitude: float
    umbral_magnitude: float
    partial_semiduration: float
    total_semiduration: float
    penumbral_semiduration: float


@dataclass(frozen=True)
class SatelliteDetails:
    """Apparent geometry of one satellite relative to its planet.

    Rectangular coordinates are in units of the planet's equatorial radius:
    x positive toward the west on the sky, y toward the planet's north pole,
    z away from the observer.
    """

    name: str
    true_coordinates: tuple[float, float, float]
    apparent_coordinates: tuple[float, float, float]
    in_transit: bool
    in_occultation: bool
    in_eclipse: bool
    in_shadow_transit: bool


class EphemerisEngine(Protocol):
    """Pure numerical oracle evaluated with (epoch, body, precision)."""

    def evaluate(self, jd: float, body: BodyTag, high_precision: bool) -> RawPositionRecord:
        """Ecliptic position of a body (see RawPositionRecord for the centre)."""
        ...

    def lunar_mean_elements(self, jd: float) -> LunarMeanElements:
        """Mean lunar arguments at jd."""
        ...

    def moon_phase(self, k: float, mean: bool) -> float:
        """Julian Ephemeris Day of the lunar phase with lunation number k."""
        ...

    def moon_perigee(self, k: float, mean: bool) -> float:
        """Julian Ephemeris Day of perigee number k."""
        ...

    def moon_apogee(self, k: float, mean: bool) -> float:
        """Julian Ephemeris Day of apogee number k (k ends in .5)."""
        ...

    def moon_perigee_parallax(self, k: float) -> float:
        """Equatorial horizontal parallax at perigee k (degrees)."""
        ...

    def moon_apogee_parallax(self, k: float) -> float:
        """Equatorial horizontal parallax at apogee k (degrees)."""
        ...

    def moon_node_passage(self, k: float) -> float:
        """Julian Ephemeris Day of node passage k (integer ascending, .5 descending)."""
        ...

    def moon_greatest_declination(self, k: float, northern: bool, mean: bool) -> float:
        """Julian Ephemeris Day of greatest northern/southern declination k."""
        ...

    def moon_greatest_declination_value(self, k: float, northern: bool, mean: bool) -> float:
        """Greatest declination value (degrees, signed) for event k."""
        ...

    def moon_libration(self, jd: float, high_precision: bool) -> LibrationDetails:
        """Geocentric librations and axis position angle."""
        ...

    def moon_topocentric_libration(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> LibrationDetails:
        """Librations for an observer at west-positive longitude and latitude (degrees)."""
        ...

    def selenographic_sun(self, jd: float, high_precision: bool) -> SelenographicSunDetails:
        """Selenographic position of the Sun."""
        ...

    def lunar_sun_altitude(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> float:
        """Altitude of the Sun (degrees) above the horizon of a lunar surface point."""
        ...

    def lunar_sunrise(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> float:
        """Julian Day of the sunrise nearest jd at a lunar surface point."""
        ...

    def lunar_sunset(
        self,
        jd: float,
        longitude: float,
        latitude: float,
        high_precision: bool,
    ) -> float:
        """Julian Day of the sunset nearest jd at a lunar surface point."""
        ...

    def lunar_eclipse(self, k: float) -> LunarEclipseDetails:
        """Circumstances of the possible lunar eclipse at full moon k."""
        ...

    def saturn_moons(self, jd: float, high_precision: bool) -> tuple[SatelliteDetails, ...]:
        """Geometry of Saturn's eight major moons as seen from Earth."""
        ...
