"""Solar theory, mean Keplerian planetary orbits and ecliptic precession."""

from __future__ import annotations

import math
from dataclasses import dataclass

from almanac_tools.angle_utils import reduce_degrees
from almanac_tools.constants import ARCSEC_PER_DEGREE, DAYS_PER_JULIAN_CENTURY, J2000, BodyTag
from almanac_tools.coordinates import earth_orbit_eccentricity, sun_true_longitude


@dataclass(frozen=True)
class OrbitalElements:
    """Mean elements at J2000 and their rates per Julian century.

    Angles are degrees referred to the ecliptic and equinox of J2000: semi-major
    axis a (AU), eccentricity e, inclination i, mean longitude L, longitude of
    perihelion and longitude of the ascending node.
    """

    a: float
    e: float
    inclination: float
    mean_longitude: float
    perihelion_longitude: float
    node_longitude: float
    a_rate: float
    e_rate: float
    inclination_rate: float
    mean_longitude_rate: float
    perihelion_longitude_rate: float
    node_longitude_rate: float


# Standish mean elements, valid 1800-2050.
PLANET_ELEMENTS: dict[BodyTag, OrbitalElements] = {
    BodyTag.MERCURY: OrbitalElements(
        0.38709927, 0.20563593, 7.00497902, 252.25032350, 77.45779628, 48.33076593,
        0.00000037, 0.00001906, -0.00594749, 149472.67411175, 0.16047689, -0.12534081,
    ),
    BodyTag.VENUS: OrbitalElements(
        0.72333566, 0.00677672, 3.39467605, 181.97909950, 131.60246718, 76.67984255,
        0.00000390, -0.00004107, -0.00078890, 58517.81538729, 0.00268329, -0.27769418,
    ),
    BodyTag.MARS: OrbitalElements(
        1.52371034, 0.09339410, 1.84969142, -4.55343205, -23.94362959, 49.55953891,
        0.00001847, 0.00007882, -0.00813131, 19140.30268499, 0.44441088, -0.29257343,
    ),
    BodyTag.JUPITER: OrbitalElements(
        5.20288700, 0.04838624, 1.30439695, 34.39644051, 14.72847983, 100.47390909,
        -0.00011607, -0.00013253, -0.00183714, 3034.74612775, 0.21252668, 0.20469106,
    ),
    BodyTag.SATURN: OrbitalElements(
        9.53667594, 0.05386179, 2.48599187, 49.95424423, 92.59887831, 113.66242448,
        -0.00125060, -0.00050991, 0.00193609, 1222.49362201, -0.41897216, -0.28867794,
    ),
    BodyTag.URANUS: OrbitalElements(
        19.18916464, 0.04725744, 0.77263783, 313.23810451, 170.95427630, 74.01692503,
        -0.00196176, -0.00004397, -0.00242939, 428.48202785, 0.40805281, 0.04240589,
    ),
    BodyTag.NEPTUNE: OrbitalElements(
        30.06992276, 0.00859048, 1.77004347, -55.12002969, 44.96476227, 131.78422574,
        0.00026291, 0.00005105, 0.00035372, 218.45945325, -0.32241464, -0.01262724,
    ),
}

_KEPLER_TOLERANCE = 1e-12
_KEPLER_MAX_ITERATIONS = 30


def solve_kepler(mean_anomaly: float, e: float) -> float:
    """Eccentric anomaly (radians) for a mean anomaly (radians) by Newton iteration."""
    ecc = mean_anomaly + e * math.sin(mean_anomaly)
    for _ in range(_KEPLER_MAX_ITERATIONS):
        delta = (ecc - e * math.sin(ecc) - mean_anomaly) / (1.0 - e * math.cos(ecc))
        ecc -= delta
        if abs(delta) < _KEPLER_TOLERANCE:
            break
    return ecc


def _true_anomaly_series(mean_anomaly: float, e: float) -> float:
    """True anomaly (radians) from the equation of the centre to third order in e."""
    m = mean_anomaly
    return (
        m
        + (2.0 * e - e**3 / 4.0) * math.sin(m)
        + 1.25 * e * e * math.sin(2.0 * m)
        + 13.0 / 12.0 * e**3 * math.sin(3.0 * m)
    )


def heliocentric_j2000(body: BodyTag, t: float, high_precision: bool) -> tuple[float, float, float]:
    """Heliocentric rectangular ecliptic J2000 position (AU) of a planet.

    Parameters:
        body: Mercury..Neptune, Earth excluded.
        t: Julian centuries since J2000 (TD).
        high_precision: Solve Kepler's equation exactly; otherwise use the
            third-order equation of the centre.

    Returns:
        (x, y, z) in AU.
    """
    el = PLANET_ELEMENTS[body]
    a = el.a + el.a_rate * t
    e = el.e + el.e_rate * t
    inc = math.radians(el.inclination + el.inclination_rate * t)
    mean_lon = el.mean_longitude + el.mean_longitude_rate * t
    peri = el.perihelion_longitude + el.perihelion_longitude_rate * t
    node = math.radians(el.node_longitude + el.node_longitude_rate * t)
    omega = math.radians(peri) - node
    m = math.radians(reduce_degrees(mean_lon - peri))
    if m > math.pi:
        m -= 2.0 * math.pi

    if high_precision:
        ecc = solve_kepler(m, e)
        xp = a * (math.cos(ecc) - e)
        yp = a * math.sqrt(1.0 - e * e) * math.sin(ecc)
    else:
        nu = _true_anomaly_series(m, e)
        r = a * (1.0 - e * e) / (1.0 + e * math.cos(nu))
        xp = r * math.cos(nu)
        yp = r * math.sin(nu)

    cw, sw = math.cos(omega), math.sin(omega)
    cn, sn = math.cos(node), math.sin(node)
    ci, si = math.cos(inc), math.sin(inc)
    x = (cw * cn - sw * sn * ci) * xp + (-sw * cn - cw * sn * ci) * yp
    y = (cw * sn + sw * cn * ci) * xp + (-sw * sn + cw * cn * ci) * yp
    z = sw * si * xp + cw * si * yp
    return (x, y, z)


def rectangular_to_spherical(x: float, y: float, z: float) -> tuple[float, float, float]:
    """(longitude deg [0,360), latitude deg, radius) of a rectangular vector."""
    r = math.sqrt(x * x + y * y + z * z)
    lon = reduce_degrees(math.degrees(math.atan2(y, x)))
    lat = math.degrees(math.asin(z / r)) if r > 0.0 else 0.0
    return (lon, lat, r)


def spherical_to_rectangular(lon: float, lat: float, r: float) -> tuple[float, float, float]:
    """Rectangular vector of a spherical position (degrees, any distance unit)."""
    lam = math.radians(lon)
    beta = math.radians(lat)
    return (
        r * math.cos(beta) * math.cos(lam),
        r * math.cos(beta) * math.sin(lam),
        r * math.sin(beta),
    )


def precess_from_j2000(longitude: float, latitude: float, t: float) -> tuple[float, float]:
    """Refer J2000 ecliptic coordinates to the mean ecliptic and equinox of date.

    Parameters:
        longitude: Ecliptic longitude at J2000 (degrees).
        latitude: Ecliptic latitude at J2000 (degrees).
        t: Julian centuries from J2000 to the target epoch.

    Returns:
        (longitude, latitude) of date in degrees.
    """
    eta = math.radians((47.0029 * t - 0.03302 * t * t + 0.000060 * t**3) / ARCSEC_PER_DEGREE)
    pi_ = 174.876384 + (-869.8089 * t + 0.03536 * t * t) / ARCSEC_PER_DEGREE
    p = (5029.0966 * t + 1.11113 * t * t - 0.000006 * t**3) / ARCSEC_PER_DEGREE
    lam0 = math.radians(longitude)
    beta0 = math.radians(latitude)
    pir = math.radians(pi_)
    a = math.cos(eta) * math.cos(beta0) * math.sin(pir - lam0) - math.sin(eta) * math.sin(beta0)
    b = math.cos(beta0) * math.cos(pir - lam0)
    c = math.cos(eta) * math.sin(beta0) + math.sin(eta) * math.cos(beta0) * math.sin(pir - lam0)
    lam = p + pi_ - math.degrees(math.atan2(a, b))
    beta = math.degrees(math.asin(max(-1.0, min(1.0, c))))
    return (reduce_degrees(lam), beta)


def sun_geocentric(jd: float) -> tuple[float, float, float]:
    """Geometric geocentric Sun: (longitude of date deg, latitude deg, distance AU)."""
    t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY
    lon = sun_true_longitude(jd)
    m = 357.52911 + 35999.05029 * t - 0.0001537 * t * t
    l0 = 280.46646 + 36000.76983 * t + 0.0003032 * t * t
    nu = math.radians(m + (lon - reduce_degrees(l0)))
    e = earth_orbit_eccentricity(jd)
    r = 1.000001018 * (1.0 - e * e) / (1.0 + e * math.cos(nu))
    return (lon, 0.0, r)
