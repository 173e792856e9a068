"""Physical ephemeris of the Moon: librations, axis position angle, selenographic Sun."""

from __future__ import annotations

import math

from almanac_tools.angle_utils import reduce_degrees, reduce_signed_degrees
from almanac_tools.constants import ARCSEC_PER_DEGREE, AU_KM, DAYS_PER_JULIAN_CENTURY, J2000
from almanac_tools.coordinates import (
    EclipticCoordinates,
    GeographicCoordinates,
    ecliptic_to_equatorial,
    horizontal_parallax_from_distance,
    hour_angle,
    nutation,
    true_obliquity,
)
from almanac_tools.engine import lunar, planetary
from almanac_tools.engine.base import LibrationDetails, SelenographicSunDetails
from almanac_tools.errors import EngineEvaluationFailure
from almanac_tools.sidereal import apparent_greenwich_sidereal_time

# Inclination of the mean lunar equator to the ecliptic (degrees)
LUNAR_EQUATOR_INCLINATION = 1.54242

# Mean daily motion of the solar colongitude (degrees per day)
COLONGITUDE_RATE = 12.19075

_SUNRISE_TOLERANCE_DAYS = 1e-6
_SUNRISE_MAX_ITERATIONS = 12


def _physical_terms(t: float) -> tuple[float, float, float, float, float, float]:
    """Physical libration quantities rho, sigma, tau (degrees) plus F, Omega, E."""
    d = math.radians(lunar.mean_elongation(t))
    m = math.radians(lunar.sun_mean_anomaly(t))
    mp = math.radians(lunar.mean_anomaly(t))
    f = math.radians(lunar.argument_of_latitude(t))
    omega = math.radians(lunar.mean_ascending_node(t))
    e = 1.0 - 0.002516 * t - 0.0000074 * t * t
    k1 = math.radians(119.75 + 131.849 * t)
    k2 = math.radians(72.56 + 20.186 * t)
    sin, cos = math.sin, math.cos

    rho = (
        -0.02752 * cos(mp)
        - 0.02245 * sin(f)
        + 0.00684 * cos(mp - 2 * f)
        - 0.00293 * cos(2 * f)
        - 0.00085 * cos(2 * f - 2 * d)
        - 0.00054 * cos(mp - 2 * d)
        - 0.00020 * sin(mp + f)
        - 0.00020 * cos(mp + 2 * f)
        - 0.00020 * cos(mp - f)
        + 0.00014 * cos(mp + 2 * f - 2 * d)
    )
    sigma = (
        -0.02816 * sin(mp)
        + 0.02244 * cos(f)
        - 0.00682 * sin(mp - 2 * f)
        - 0.00279 * sin(2 * f)
        - 0.00083 * sin(2 * f - 2 * d)
        + 0.00069 * sin(mp - 2 * d)
        + 0.00040 * cos(mp + f)
        - 0.00025 * sin(2 * mp)
        - 0.00023 * sin(mp + 2 * f)
        + 0.00020 * cos(mp - f)
        + 0.00019 * sin(mp - f)
        + 0.00013 * sin(mp + 2 * f - 2 * d)
        - 0.00010 * cos(mp - 3 * f)
    )
    tau = (
        0.02520 * e * sin(m)
        + 0.00473 * sin(2 * mp - 2 * f)
        - 0.00467 * sin(mp)
        + 0.00396 * sin(k1)
        + 0.00276 * sin(2 * mp - 2 * d)
        + 0.00196 * sin(omega)
        - 0.00183 * cos(mp - f)
        + 0.00115 * sin(mp - 2 * d)
        - 0.00096 * sin(mp - d)
        + 0.00046 * sin(2 * f - 2 * d)
        - 0.00039 * sin(mp - f)
        - 0.00032 * sin(mp - m - d)
        + 0.00027 * sin(2 * mp - m - 2 * d)
        + 0.00023 * sin(k2)
        - 0.00014 * sin(2 * d)
        + 0.00014 * cos(2 * mp - 2 * f)
        - 0.00012 * sin(mp - 2 * f)
        - 0.00012 * sin(2 * mp)
        + 0.00011 * sin(2 * mp - 2 * m - 2 * d)
    )
    return (rho, sigma, tau, math.degrees(f), math.degrees(omega), e)


def _librations(
    longitude: float,
    latitude: float,
    t: float,
    dpsi: float,
) -> tuple[float, float, float, float, float, float, float]:
    """Optical and total librations for an apparent ecliptic direction.

    Returns:
        (l, b, l_optical, b_optical, rho, sigma, omega) in degrees.
    """
    rho, sigma, tau, f, omega, _ = _physical_terms(t)
    inc = math.radians(LUNAR_EQUATOR_INCLINATION)
    w = math.radians(longitude - dpsi - omega)
    beta = math.radians(latitude)
    a = math.degrees(
        math.atan2(
            math.sin(w) * math.cos(beta) * math.cos(inc) - math.sin(beta) * math.sin(inc),
            math.cos(w) * math.cos(beta),
        )
    )
    l_optical = reduce_signed_degrees(a - f)
    b_optical = math.degrees(
        math.asin(-math.sin(w) * math.cos(beta) * math.sin(inc) - math.sin(beta) * math.cos(inc))
    )
    ar = math.radians(a)
    l_physical = -tau + (rho * math.cos(ar) + sigma * math.sin(ar)) * math.tan(
        math.radians(b_optical)
    )
    b_physical = sigma * math.cos(ar) - rho * math.sin(ar)
    return (
        reduce_signed_degrees(l_optical + l_physical),
        b_optical + b_physical,
        l_optical,
        b_optical,
        rho,
        sigma,
        omega,
    )


def _apparent_moon(jd: float, high_precision: bool) -> tuple[float, float, float, float]:
    """Apparent longitude/latitude, distance (km) and nutation in longitude (degrees)."""
    lon, lat, dist = lunar.moon_position(jd, high_precision)
    dpsi = nutation(jd).longitude / ARCSEC_PER_DEGREE
    return (reduce_degrees(lon + dpsi), lat, dist, dpsi)


def moon_libration(jd: float, high_precision: bool) -> LibrationDetails:
    """Geocentric librations and position angle of the Moon's axis (Meeus chapter 53)."""
    t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY
    lon, lat, _, dpsi = _apparent_moon(jd, high_precision)
    total_l, total_b, l_opt, b_opt, rho, sigma, omega = _librations(lon, lat, t, dpsi)

    eps = true_obliquity(jd)
    equatorial = ecliptic_to_equatorial(EclipticCoordinates(lon, lat, eps))
    inc = math.radians(LUNAR_EQUATOR_INCLINATION)
    v = math.radians(omega + dpsi + sigma / math.sin(inc))
    x = math.sin(inc + math.radians(rho)) * math.sin(v)
    y = math.sin(inc + math.radians(rho)) * math.cos(v) * math.cos(math.radians(eps)) - math.cos(
        inc + math.radians(rho)
    ) * math.sin(math.radians(eps))
    w = math.atan2(x, y)
    sin_p = (
        math.sqrt(x * x + y * y)
        * math.cos(math.radians(equatorial.right_ascension_degrees) - w)
        / math.cos(math.radians(total_b))
    )
    position_angle = reduce_degrees(math.degrees(math.asin(max(-1.0, min(1.0, sin_p)))))
    return LibrationDetails(total_l, total_b, l_opt, b_opt, position_angle)


def moon_topocentric_libration(
    jd: float,
    longitude: float,
    latitude: float,
    high_precision: bool,
) -> LibrationDetails:
    """Librations as seen by an observer (west-positive longitude, degrees).

    The geocentric values are corrected for the observer's displacement by
    the parallax in the direction of the local vertical.
    """
    geocentric = moon_libration(jd, high_precision)
    lon, lat, dist, _ = _apparent_moon(jd, high_precision)
    eps = true_obliquity(jd)
    equatorial = ecliptic_to_equatorial(EclipticCoordinates(lon, lat, eps))
    observer = GeographicCoordinates(longitude, latitude)
    h = math.radians(hour_angle(equatorial, observer, apparent_greenwich_sidereal_time(jd)))
    delta = math.radians(equatorial.declination)
    phi = math.radians(observer.latitude)

    q = math.atan2(
        math.cos(phi) * math.sin(h),
        math.cos(delta) * math.sin(phi) - math.sin(delta) * math.cos(phi) * math.cos(h),
    )
    z = math.acos(
        max(
            -1.0,
            min(
                1.0,
                math.sin(delta) * math.sin(phi)
                + math.cos(delta) * math.cos(phi) * math.cos(h),
            ),
        )
    )
    parallax = horizontal_parallax_from_distance(dist)
    pi_prime = parallax * (math.sin(z) + 0.0084 * math.sin(2.0 * z))

    p = math.radians(geocentric.position_angle)
    b = math.radians(geocentric.latitude)
    dl = -pi_prime * math.sin(q - p) / math.cos(b)
    db = pi_prime * math.cos(q - p)
    dp = dl * math.sin(b + math.radians(db)) - pi_prime * math.sin(q) * math.tan(delta)
    return LibrationDetails(
        longitude=reduce_signed_degrees(geocentric.longitude + dl),
        latitude=geocentric.latitude + db,
        optical_longitude=geocentric.optical_longitude,
        optical_latitude=geocentric.optical_latitude,
        position_angle=reduce_degrees(geocentric.position_angle + dp),
    )


def selenographic_sun(jd: float, high_precision: bool) -> SelenographicSunDetails:
    """Selenographic longitude/latitude of the subsolar point and the colongitude."""
    t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY
    moon_lon, moon_lat, moon_dist, dpsi = _apparent_moon(jd, high_precision)
    sun_lon, _, sun_r = planetary.sun_geocentric(jd)
    sun_lon = reduce_degrees(sun_lon + dpsi)
    ratio = moon_dist / (sun_r * AU_KM)
    heliocentric_lon = (
        sun_lon
        + 180.0
        + math.degrees(
            ratio * math.cos(math.radians(moon_lat)) * math.sin(math.radians(sun_lon - moon_lon))
        )
    )
    heliocentric_lat = ratio * moon_lat
    longitude, latitude, _, _, _, _, _ = _librations(heliocentric_lon, heliocentric_lat, t, dpsi)
    return SelenographicSunDetails(
        longitude=longitude,
        latitude=latitude,
        colongitude=reduce_degrees(450.0 - longitude),
    )


def lunar_sun_altitude(
    jd: float,
    longitude: float,
    latitude: float,
    high_precision: bool,
) -> float:
    """Altitude of the Sun (degrees) at a selenographic longitude/latitude."""
    sun = selenographic_sun(jd, high_precision)
    b0 = math.radians(sun.latitude)
    theta = math.radians(latitude)
    sin_h = math.sin(b0) * math.sin(theta) + math.cos(b0) * math.cos(theta) * math.sin(
        math.radians(sun.colongitude + longitude)
    )
    return math.degrees(math.asin(max(-1.0, min(1.0, sin_h))))


def _terminator_crossing(
    jd: float,
    longitude: float,
    latitude: float,
    high_precision: bool,
    sunrise: bool,
) -> float:
    """Nearest epoch at which the Sun's centre crosses the lunar horizon."""
    cos_lat = math.cos(math.radians(latitude))
    if cos_lat < 1e-6:
        raise EngineEvaluationFailure(
            f'No lunar sunrise/sunset defined at selenographic latitude {latitude}'
        )
    # Sunrise when colongitude + longitude passes 0, sunset when it passes 180.
    target = 0.0 if sunrise else 180.0
    colongitude = selenographic_sun(jd, high_precision).colongitude
    estimate = jd - reduce_signed_degrees(colongitude + longitude - target) / COLONGITUDE_RATE
    sign = 1.0 if sunrise else -1.0
    for _ in range(_SUNRISE_MAX_ITERATIONS):
        altitude = lunar_sun_altitude(estimate, longitude, latitude, high_precision)
        step = -sign * altitude / (COLONGITUDE_RATE * cos_lat)
        estimate += step
        if abs(step) < _SUNRISE_TOLERANCE_DAYS:
            return estimate
    raise EngineEvaluationFailure(
        f'Lunar {"sunrise" if sunrise else "sunset"} iteration did not converge near JD {jd}'
    )


def lunar_sunrise(jd: float, longitude: float, latitude: float, high_precision: bool) -> float:
    """Julian Day of the lunar sunrise nearest jd at a selenographic point."""
    return _terminator_crossing(jd, longitude, latitude, high_precision, sunrise=True)


def lunar_sunset(jd: float, longitude: float, latitude: float, high_precision: bool) -> float:
    """Julian Day of the lunar sunset nearest jd at a selenographic point."""
    return _terminator_crossing(jd, longitude, latitude, high_precision, sunrise=False)
