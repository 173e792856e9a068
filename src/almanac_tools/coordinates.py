"""Coordinate value types and pure frame transforms (obliquity, nutation, aberration, parallax)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from almanac_tools.angle_utils import (
    dms_string,
    hms_string,
    reduce_degrees,
    reduce_hours,
    reduce_signed_degrees,
)
from almanac_tools.constants import (
    ABERRATION_CONSTANT_ARCSEC,
    ARCSEC_PER_DEGREE,
    DAYS_PER_JULIAN_CENTURY,
    DEGREES_PER_HOUR_RA,
    EARTH_EQUATORIAL_RADIUS_KM,
    J2000,
    J2000_OBLIQUITY,
)

# Latitudes computed through asin/atan2 can overshoot +-90 by a few ulps.
_POLE_TOLERANCE = 1e-9


def _check_latitude(name: str, value: float) -> float:
    if math.isnan(value) or abs(value) > 90.0 + _POLE_TOLERANCE:
        raise ValueError(f'{name} must be within [-90, 90] degrees, got {value!r}')
    return max(-90.0, min(90.0, value))


@dataclass(frozen=True)
class EclipticCoordinates:
    """Ecliptic longitude/latitude (degrees) referred to an obliquity (degrees)."""

    longitude: float
    latitude: float
    obliquity: float = J2000_OBLIQUITY

    def __post_init__(self) -> None:
        object.__setattr__(self, 'longitude', reduce_degrees(self.longitude))
        object.__setattr__(self, 'latitude', _check_latitude('latitude', self.latitude))

    def to_equatorial(self) -> EquatorialCoordinates:
        """Rotate into the equatorial frame using this value's obliquity."""
        return ecliptic_to_equatorial(self)

    def with_obliquity(self, obliquity: float) -> EclipticCoordinates:
        """Same longitude/latitude referred to another obliquity."""
        return EclipticCoordinates(self.longitude, self.latitude, obliquity)


@dataclass(frozen=True)
class EquatorialCoordinates:
    """Right ascension (hours) and declination (degrees)."""

    right_ascension: float
    declination: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'right_ascension', reduce_hours(self.right_ascension))
        object.__setattr__(self, 'declination', _check_latitude('declination', self.declination))

    @property
    def right_ascension_degrees(self) -> float:
        """Right ascension in degrees."""
        return self.right_ascension * DEGREES_PER_HOUR_RA

    def to_ecliptic(self, obliquity: float = J2000_OBLIQUITY) -> EclipticCoordinates:
        """Rotate into the ecliptic frame of the given obliquity."""
        return equatorial_to_ecliptic(self, obliquity)

    def __str__(self) -> str:
        return f'RA {hms_string(self.right_ascension)}, Dec {dms_string(self.declination)}'


@dataclass(frozen=True)
class HorizontalCoordinates:
    """Azimuth (degrees, measured westward from south) and altitude (degrees)."""

    azimuth: float
    altitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'azimuth', reduce_degrees(self.azimuth))
        object.__setattr__(self, 'altitude', _check_latitude('altitude', self.altitude))

    @property
    def azimuth_from_north(self) -> float:
        """Azimuth measured eastward from north (navigation convention)."""
        return reduce_degrees(self.azimuth + 180.0)


@dataclass(frozen=True)
class GeographicCoordinates:
    """Observer location: longitude positive WEST of Greenwich, latitude positive north."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'longitude', reduce_signed_degrees(self.longitude))
        object.__setattr__(self, 'latitude', _check_latitude('latitude', self.latitude))

    @classmethod
    def from_east_longitude(cls, east_longitude: float, latitude: float) -> GeographicCoordinates:
        """Build from the common east-positive longitude convention."""
        return cls(-east_longitude, latitude)

    @property
    def east_longitude(self) -> float:
        """Longitude positive east of Greenwich."""
        return reduce_signed_degrees(-self.longitude)


@dataclass(frozen=True)
class SelenographicCoordinates:
    """Position on the lunar surface (degrees); longitude positive toward Mare Crisium."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'latitude', _check_latitude('latitude', self.latitude))

    @property
    def colongitude(self) -> float:
        """Colongitude: (450 - longitude) reduced to [0, 360)."""
        return reduce_degrees(450.0 - self.longitude)


class Nutation(NamedTuple):
    """Nutation in longitude and in obliquity (arcseconds)."""

    longitude: float
    obliquity: float


def _centuries(jd: float) -> float:
    return (float(jd) - J2000) / DAYS_PER_JULIAN_CENTURY


def mean_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic (degrees), IAU 1980 polynomial in centuries since J2000."""
    t = _centuries(jd)
    arcsec = 21.448 - 46.8150 * t - 0.00059 * t * t + 0.001813 * t * t * t
    return 23.0 + 26.0 / 60.0 + arcsec / ARCSEC_PER_DEGREE


def nutation(jd: float) -> Nutation:
    """Nutation in longitude and obliquity from the four leading terms (~0.5 arcsec).

    Parameters:
        jd: Julian Day (float or JulianDay).

    Returns:
        Nutation(longitude, obliquity) in arcseconds.
    """
    t = _centuries(jd)
    omega = math.radians(125.04452 - 1934.136261 * t + 0.0020708 * t * t + t**3 / 450000.0)
    sun = math.radians(280.4665 + 36000.7698 * t)
    moon = math.radians(218.3165 + 481267.8813 * t)
    dpsi = (
        -17.20 * math.sin(omega)
        - 1.32 * math.sin(2.0 * sun)
        - 0.23 * math.sin(2.0 * moon)
        + 0.21 * math.sin(2.0 * omega)
    )
    deps = (
        9.20 * math.cos(omega)
        + 0.57 * math.cos(2.0 * sun)
        + 0.10 * math.cos(2.0 * moon)
        - 0.09 * math.cos(2.0 * omega)
    )
    return Nutation(dpsi, deps)


def true_obliquity(jd: float) -> float:
    """True obliquity of the ecliptic (degrees): mean obliquity plus nutation in obliquity."""
    return mean_obliquity(jd) + nutation(jd).obliquity / ARCSEC_PER_DEGREE


def ecliptic_to_equatorial(ecliptic: EclipticCoordinates) -> EquatorialCoordinates:
    """Rotate ecliptic coordinates by their obliquity into equatorial coordinates."""
    lam = math.radians(ecliptic.longitude)
    beta = math.radians(ecliptic.latitude)
    eps = math.radians(ecliptic.obliquity)
    alpha = math.atan2(
        math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps),
        math.cos(lam),
    )
    delta = math.asin(
        math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    )
    return EquatorialCoordinates(math.degrees(alpha) / DEGREES_PER_HOUR_RA, math.degrees(delta))


def equatorial_to_ecliptic(
    equatorial: EquatorialCoordinates,
    obliquity: float = J2000_OBLIQUITY,
) -> EclipticCoordinates:
    """Rotate equatorial coordinates into the ecliptic frame of the given obliquity (degrees)."""
    alpha = math.radians(equatorial.right_ascension_degrees)
    delta = math.radians(equatorial.declination)
    eps = math.radians(obliquity)
    lam = math.atan2(
        math.sin(alpha) * math.cos(eps) + math.tan(delta) * math.sin(eps),
        math.cos(alpha),
    )
    beta = math.asin(
        math.sin(delta) * math.cos(eps) - math.cos(delta) * math.sin(eps) * math.sin(alpha)
    )
    return EclipticCoordinates(math.degrees(lam), math.degrees(beta), obliquity)


def hour_angle(
    equatorial: EquatorialCoordinates,
    geographic: GeographicCoordinates,
    sidereal_hours: float,
) -> float:
    """Local hour angle (degrees) from Greenwich sidereal time and a west-positive longitude."""
    return reduce_degrees(
        sidereal_hours * DEGREES_PER_HOUR_RA
        - geographic.longitude
        - equatorial.right_ascension_degrees
    )


def equatorial_to_horizontal(
    equatorial: EquatorialCoordinates,
    geographic: GeographicCoordinates,
    sidereal_hours: float,
) -> HorizontalCoordinates:
    """Convert to azimuth/altitude for an observer.

    Parameters:
        equatorial: Equatorial coordinates (same equinox as the sidereal time).
        geographic: Observer location (longitude positive west).
        sidereal_hours: Greenwich sidereal time (hours); apparent sidereal time
            pairs with apparent equatorial coordinates.

    Returns:
        HorizontalCoordinates, azimuth measured westward from south.
    """
    h = math.radians(hour_angle(equatorial, geographic, sidereal_hours))
    delta = math.radians(equatorial.declination)
    phi = math.radians(geographic.latitude)
    azimuth = math.atan2(
        math.sin(h),
        math.cos(h) * math.sin(phi) - math.tan(delta) * math.cos(phi),
    )
    altitude = math.asin(
        math.sin(phi) * math.sin(delta) + math.cos(phi) * math.cos(delta) * math.cos(h)
    )
    return HorizontalCoordinates(math.degrees(azimuth), math.degrees(altitude))


def sun_true_longitude(jd: float) -> float:
    """Geometric longitude of the Sun (degrees) from the low-precision solar theory."""
    t = _centuries(jd)
    l0 = 280.46646 + 36000.76983 * t + 0.0003032 * t * t
    m = math.radians(357.52911 + 35999.05029 * t - 0.0001537 * t * t)
    c = (
        (1.914602 - 0.004817 * t - 0.000014 * t * t) * math.sin(m)
        + (0.019993 - 0.000101 * t) * math.sin(2.0 * m)
        + 0.000289 * math.sin(3.0 * m)
    )
    return reduce_degrees(l0 + c)


def earth_orbit_eccentricity(jd: float) -> float:
    """Eccentricity of the Earth's orbit."""
    t = _centuries(jd)
    return 0.016708634 - 0.000042037 * t - 0.0000001267 * t * t


def annual_aberration(ecliptic: EclipticCoordinates, jd: float) -> tuple[float, float]:
    """Displacement of a body's ecliptic position by the annual aberration.

    Parameters:
        ecliptic: True (geometric) ecliptic coordinates of the target.
        jd: Julian Day of the observation.

    Returns:
        (delta_longitude, delta_latitude) in degrees, to be added to the input.
    """
    t = _centuries(jd)
    kappa = ABERRATION_CONSTANT_ARCSEC / ARCSEC_PER_DEGREE
    e = earth_orbit_eccentricity(jd)
    perihelion = math.radians(102.93735 + 1.71946 * t + 0.00046 * t * t)
    sun = math.radians(sun_true_longitude(jd))
    lam = math.radians(ecliptic.longitude)
    beta = math.radians(ecliptic.latitude)
    dlam = (
        -kappa * math.cos(sun - lam) + e * kappa * math.cos(perihelion - lam)
    ) / math.cos(beta)
    dbeta = -kappa * math.sin(beta) * (math.sin(sun - lam) - e * math.sin(perihelion - lam))
    return (dlam, dbeta)


def correct_for_aberration(ecliptic: EclipticCoordinates, jd: float) -> EclipticCoordinates:
    """Return new ecliptic coordinates corrected for the annual aberration at jd."""
    dlam, dbeta = annual_aberration(ecliptic, jd)
    return EclipticCoordinates(
        ecliptic.longitude + dlam,
        ecliptic.latitude + dbeta,
        ecliptic.obliquity,
    )


def horizontal_parallax_from_distance(
    distance_km: float,
    equatorial_radius_km: float = EARTH_EQUATORIAL_RADIUS_KM,
) -> float:
    """Equatorial horizontal parallax (degrees) of a body at the given geocentric distance."""
    return math.degrees(math.asin(equatorial_radius_km / distance_km))


def distance_from_horizontal_parallax(
    parallax_deg: float,
    equatorial_radius_km: float = EARTH_EQUATORIAL_RADIUS_KM,
) -> float:
    """Geocentric distance (km) of a body with the given equatorial horizontal parallax."""
    return equatorial_radius_km / math.sin(math.radians(parallax_deg))


def angular_separation(first: EquatorialCoordinates, second: EquatorialCoordinates) -> float:
    """Angular distance between two equatorial positions (degrees), stable at small angles."""
    a1 = math.radians(first.right_ascension_degrees)
    d1 = math.radians(first.declination)
    a2 = math.radians(second.right_ascension_degrees)
    d2 = math.radians(second.declination)
    x = math.cos(d1) * math.sin(d2) - math.sin(d1) * math.cos(d2) * math.cos(a2 - a1)
    y = math.cos(d2) * math.sin(a2 - a1)
    z = math.sin(d1) * math.sin(d2) + math.cos(d1) * math.cos(d2) * math.cos(a2 - a1)
    return math.degrees(math.atan2(math.hypot(x, y), z))
