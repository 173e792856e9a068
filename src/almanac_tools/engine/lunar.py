"""Truncated lunar theory and lunar event series (Meeus chapters 47, 49-52).

All epochs are treated as Julian Ephemeris Days; the difference between UT
and TD (about a minute at present) is below the accuracy of these series.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from almanac_tools.angle_utils import reduce_degrees
from almanac_tools.constants import DAYS_PER_JULIAN_CENTURY, J2000
from almanac_tools.engine.base import LunarMeanElements

# (D, M, M', F, longitude 1e-6 deg, distance 1e-3 km)
_LONGITUDE_DISTANCE_TERMS: tuple[tuple[int, int, int, int, int, int], ...] = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
    (0, 1, 2, 0, -2120, 5751),
    (0, 2, 0, 0, -2069, 0),
    (2, -2, -1, 0, 2048, -4950),
    (2, 0, 1, -2, -1773, 4130),
    (2, 0, 0, 2, -1595, 0),
    (4, -1, -1, 0, 1215, -3958),
    (0, 0, 2, 2, -1110, 0),
    (3, 0, -1, 0, -892, 3258),
    (2, 1, 1, 0, -810, 2616),
    (4, -1, -2, 0, 759, -1897),
    (0, 2, -1, 0, -713, -2117),
    (2, 2, -1, 0, -700, 2354),
    (2, 1, -2, 0, 691, 0),
    (2, -1, 0, -2, 596, 0),
    (4, 0, 1, 0, 549, -1423),
    (0, 0, 4, 0, 537, -1117),
    (4, -1, 0, 0, 520, -1571),
    (1, 0, -2, 0, -487, -1739),
    (2, 1, 0, -2, -399, 0),
    (0, 0, 2, -2, -381, -4421),
    (1, 1, 1, 0, 351, 0),
    (3, 0, -2, 0, -340, 0),
    (4, 0, -3, 0, 330, 0),
    (2, -1, 2, 0, 327, 0),
    (0, 2, 1, 0, -323, 1165),
    (1, 1, -1, 0, 299, 0),
    (2, 0, 3, 0, 294, 0),
    (2, 0, -1, -2, 0, 8752),
)

# (D, M, M', F, latitude 1e-6 deg)
_LATITUDE_TERMS: tuple[tuple[int, int, int, int, int], ...] = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)

# Leading terms kept when low precision is requested.
LOW_PRECISION_TERMS = 20

MEAN_DISTANCE_KM = 385000.56


def _centuries(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_JULIAN_CENTURY


def _eccentricity_factor(t: float) -> float:
    """Decrease of the Earth's orbital eccentricity, applied to terms in M."""
    return 1.0 - 0.002516 * t - 0.0000074 * t * t


def mean_longitude(t: float) -> float:
    """Moon's mean longitude L' (degrees) at t centuries from J2000."""
    return reduce_degrees(
        218.3164477 + 481267.88123421 * t - 0.0015786 * t**2 + t**3 / 538841.0 - t**4 / 65194000.0
    )


def mean_elongation(t: float) -> float:
    """Mean elongation D (degrees)."""
    return reduce_degrees(
        297.8501921 + 445267.1114034 * t - 0.0018819 * t**2 + t**3 / 545868.0 - t**4 / 113065000.0
    )


def sun_mean_anomaly(t: float) -> float:
    """Sun's mean anomaly M (degrees)."""
    return reduce_degrees(357.5291092 + 35999.0502909 * t - 0.0001536 * t**2 + t**3 / 24490000.0)


def mean_anomaly(t: float) -> float:
    """Moon's mean anomaly M' (degrees)."""
    return reduce_degrees(
        134.9633964 + 477198.8675055 * t + 0.0087414 * t**2 + t**3 / 69699.0 - t**4 / 14712000.0
    )


def argument_of_latitude(t: float) -> float:
    """Moon's argument of latitude F (degrees)."""
    return reduce_degrees(
        93.2720950 + 483202.0175233 * t - 0.0036539 * t**2 - t**3 / 3526000.0 + t**4 / 863310000.0
    )


def mean_ascending_node(t: float) -> float:
    """Longitude of the mean ascending node (degrees)."""
    return reduce_degrees(
        125.0445479 - 1934.1362891 * t + 0.0020754 * t**2 + t**3 / 467441.0 - t**4 / 60616000.0
    )


def mean_perigee_longitude(t: float) -> float:
    """Longitude of the mean perigee (degrees)."""
    return reduce_degrees(
        83.3532465 + 4069.0137287 * t - 0.0103200 * t**2 - t**3 / 80053.0 + t**4 / 18999000.0
    )


def lunar_mean_elements(jd: float) -> LunarMeanElements:
    """Mean lunar arguments at jd, including the true ascending node."""
    t = _centuries(jd)
    d = mean_elongation(t)
    m = sun_mean_anomaly(t)
    mp = mean_anomaly(t)
    f = argument_of_latitude(t)
    node = mean_ascending_node(t)
    dr, mr, mpr, fr = (math.radians(x) for x in (d, m, mp, f))
    true_node = reduce_degrees(
        node
        - 1.4979 * math.sin(2.0 * (dr - fr))
        - 0.1500 * math.sin(mr)
        - 0.1226 * math.sin(2.0 * dr)
        + 0.1176 * math.sin(2.0 * fr)
        - 0.0801 * math.sin(2.0 * (mpr - fr))
    )
    return LunarMeanElements(
        mean_longitude=mean_longitude(t),
        mean_elongation=d,
        sun_mean_anomaly=m,
        mean_anomaly=mp,
        argument_of_latitude=f,
        mean_perigee_longitude=mean_perigee_longitude(t),
        mean_ascending_node=node,
        true_ascending_node=true_node,
    )


def moon_position(jd: float, high_precision: bool) -> tuple[float, float, float]:
    """Geocentric ecliptic position of the Moon (mean equinox of date).

    Parameters:
        jd: Julian Day.
        high_precision: Use every tabulated term; otherwise the leading
            LOW_PRECISION_TERMS of each series.

    Returns:
        (longitude deg, latitude deg, distance km).
    """
    t = _centuries(jd)
    lp = mean_longitude(t)
    d = math.radians(mean_elongation(t))
    m = math.radians(sun_mean_anomaly(t))
    mp = math.radians(mean_anomaly(t))
    f = math.radians(argument_of_latitude(t))
    e = _eccentricity_factor(t)
    a1 = math.radians(119.75 + 131.849 * t)
    a2 = math.radians(53.09 + 479264.290 * t)
    a3 = math.radians(313.45 + 481266.484 * t)

    lr_terms: Sequence[tuple[int, int, int, int, int, int]] = _LONGITUDE_DISTANCE_TERMS
    b_terms: Sequence[tuple[int, int, int, int, int]] = _LATITUDE_TERMS
    if not high_precision:
        lr_terms = lr_terms[:LOW_PRECISION_TERMS]
        b_terms = b_terms[:LOW_PRECISION_TERMS]

    sum_l = 0.0
    sum_r = 0.0
    for cd, cm, cmp_, cf, sl, sr in lr_terms:
        arg = cd * d + cm * m + cmp_ * mp + cf * f
        factor = e ** abs(cm)
        sum_l += sl * factor * math.sin(arg)
        sum_r += sr * factor * math.cos(arg)
    sum_b = 0.0
    for cd, cm, cmp_, cf, sb in b_terms:
        arg = cd * d + cm * m + cmp_ * mp + cf * f
        sum_b += sb * e ** abs(cm) * math.sin(arg)

    lpr = math.radians(lp)
    sum_l += 3958.0 * math.sin(a1) + 1962.0 * math.sin(lpr - f) + 318.0 * math.sin(a2)
    sum_b += (
        -2235.0 * math.sin(lpr)
        + 382.0 * math.sin(a3)
        + 175.0 * math.sin(a1 - f)
        + 175.0 * math.sin(a1 + f)
        + 127.0 * math.sin(lpr - mp)
        - 115.0 * math.sin(lpr + mp)
    )
    longitude = reduce_degrees(lp + sum_l / 1e6)
    latitude = sum_b / 1e6
    distance = MEAN_DISTANCE_KM + sum_r / 1000.0
    return (longitude, latitude, distance)


# --- Phases (chapter 49) -------------------------------------------------

# Sine coefficients of the planetary arguments A1..A14 (days).
_PHASE_PLANETARY = (
    (299.77, 0.107408, 0.000325),
    (251.88, 0.016321, 0.000165),
    (251.83, 26.651886, 0.000164),
    (349.42, 36.412478, 0.000126),
    (84.66, 18.206239, 0.000110),
    (141.74, 53.303771, 0.000062),
    (207.14, 2.453732, 0.000060),
    (154.84, 7.306860, 0.000056),
    (34.52, 27.261239, 0.000047),
    (207.19, 0.121824, 0.000042),
    (291.34, 1.844379, 0.000040),
    (161.72, 24.198154, 0.000037),
    (239.56, 25.513099, 0.000035),
    (331.55, 3.592518, 0.000023),
)


def mean_phase(k: float) -> float:
    """Julian Ephemeris Day of the mean phase k (integer new moon, +0.25 per quarter)."""
    t = k / 1236.85
    return (
        2451550.09766
        + 29.530588861 * k
        + 0.00015437 * t**2
        - 0.000000150 * t**3
        + 0.00000000073 * t**4
    )


def true_phase(k: float) -> float:
    """Julian Ephemeris Day of the true phase k, periodic terms included."""
    t = k / 1236.85
    e = _eccentricity_factor(t)
    m = math.radians(2.5534 + 29.10535670 * k - 0.0000014 * t**2 - 0.00000011 * t**3)
    mp = math.radians(
        201.5643
        + 385.81693528 * k
        + 0.0107582 * t**2
        + 0.00001238 * t**3
        - 0.000000058 * t**4
    )
    f = math.radians(
        160.7108 + 390.67050284 * k - 0.0016118 * t**2 - 0.00000227 * t**3 + 0.000000011 * t**4
    )
    omega = math.radians(124.7746 - 1.56375588 * k + 0.0020672 * t**2 + 0.00000215 * t**3)

    fraction = round((k - math.floor(k)) * 4.0) % 4
    sin = math.sin
    if fraction in (0, 2):
        if fraction == 0:
            c = (-0.40720, 0.17241, 0.01608, 0.01039, 0.00739, -0.00514, 0.00208)
        else:
            c = (-0.40614, 0.17302, 0.01614, 0.01043, 0.00734, -0.00515, 0.00209)
        correction = (
            c[0] * sin(mp)
            + c[1] * e * sin(m)
            + c[2] * sin(2 * mp)
            + c[3] * sin(2 * f)
            + c[4] * e * sin(mp - m)
            + c[5] * e * sin(mp + m)
            + c[6] * e * e * sin(2 * m)
            - 0.00111 * sin(mp - 2 * f)
            - 0.00057 * sin(mp + 2 * f)
            + 0.00056 * e * sin(2 * mp + m)
            - 0.00042 * sin(3 * mp)
            + 0.00042 * e * sin(m + 2 * f)
            + 0.00038 * e * sin(m - 2 * f)
            - 0.00024 * e * sin(2 * mp - m)
            - 0.00017 * sin(omega)
            - 0.00007 * sin(mp + 2 * m)
            + 0.00004 * sin(2 * mp - 2 * f)
            + 0.00004 * sin(3 * m)
            + 0.00003 * sin(mp + m - 2 * f)
            + 0.00003 * sin(2 * mp + 2 * f)
            - 0.00003 * sin(mp + m + 2 * f)
            + 0.00003 * sin(mp - m + 2 * f)
            - 0.00002 * sin(mp - m - 2 * f)
            - 0.00002 * sin(3 * mp + m)
            + 0.00002 * sin(4 * mp)
        )
    else:
        correction = (
            -0.62801 * sin(mp)
            + 0.17172 * e * sin(m)
            - 0.01183 * e * sin(mp + m)
            + 0.00862 * sin(2 * mp)
            + 0.00804 * sin(2 * f)
            + 0.00454 * e * sin(mp - m)
            + 0.00204 * e * e * sin(2 * m)
            - 0.00180 * sin(mp - 2 * f)
            - 0.00070 * sin(mp + 2 * f)
            - 0.00040 * sin(3 * mp)
            - 0.00034 * e * sin(2 * mp - m)
            + 0.00032 * e * sin(m + 2 * f)
            + 0.00032 * e * sin(m - 2 * f)
            - 0.00028 * e * e * sin(mp + 2 * m)
            + 0.00027 * e * sin(2 * mp + m)
            - 0.00017 * sin(omega)
            - 0.00005 * sin(mp - m - 2 * f)
            + 0.00004 * sin(2 * mp + 2 * f)
            - 0.00004 * sin(mp + m + 2 * f)
            + 0.00004 * sin(mp - 2 * m)
            + 0.00003 * sin(mp + m - 2 * f)
            + 0.00003 * sin(3 * m)
            + 0.00002 * sin(2 * mp - 2 * f)
            + 0.00002 * sin(mp - m + 2 * f)
            - 0.00002 * sin(3 * mp + m)
        )
        w = (
            0.00306
            - 0.00038 * e * math.cos(m)
            + 0.00026 * math.cos(mp)
            - 0.00002 * math.cos(mp - m)
            + 0.00002 * math.cos(mp + m)
            + 0.00002 * math.cos(2 * f)
        )
        correction += w if fraction == 1 else -w

    planetary = 0.0
    for index, (base, rate, coefficient) in enumerate(_PHASE_PLANETARY):
        angle = base + rate * k
        if index == 0:
            angle -= 0.009173 * t * t
        planetary += coefficient * math.sin(math.radians(angle))
    return mean_phase(k) + correction + planetary


# --- Perigee and apogee (chapter 50) --------------------------------------

# (coefficient, D, M, F) sine terms
_PERIGEE_TERMS: tuple[tuple[float, int, int, int], ...] = (
    (-1.6769, 2, 0, 0),
    (0.4589, 4, 0, 0),
    (-0.1856, 6, 0, 0),
    (0.0883, 8, 0, 0),
    (-0.0460, 10, 0, 0),
    (-0.0256, 6, -1, 0),
    (0.0253, 12, 0, 0),
    (0.0237, 1, 0, 0),
    (0.0162, 8, -1, 0),
    (-0.0145, 14, 0, 0),
    (0.0129, 0, 0, 2),
    (-0.0112, 3, 0, 0),
    (-0.0104, 10, -1, 0),
    (0.0086, 16, 0, 0),
    (0.0069, 12, -1, 0),
    (0.0066, 5, 0, 0),
    (-0.0053, 2, 0, 2),
    (-0.0052, 18, 0, 0),
    (-0.0046, 14, -1, 0),
    (-0.0041, 7, 0, 0),
    (0.0040, 2, 1, 0),
    (0.0032, 20, 0, 0),
    (-0.0032, 1, 1, 0),
    (0.0031, 16, -1, 0),
    (-0.0029, 4, 1, 0),
    (0.0027, 9, 0, 0),
    (0.0027, 4, 0, 2),
    (-0.0027, 2, -2, 0),
    (0.0024, 4, -2, 0),
    (-0.0021, 6, -2, 0),
    (-0.0021, 22, 0, 0),
    (-0.0021, 18, -1, 0),
    (0.0019, 6, 1, 0),
    (-0.0018, 11, 0, 0),
    (-0.0014, 8, 1, 0),
    (-0.0014, 4, 0, -2),
    (-0.0014, 6, 0, 2),
    (0.0014, 3, 1, 0),
    (-0.0014, 5, 1, 0),
    (0.0013, 13, 0, 0),
    (0.0013, 20, -1, 0),
    (0.0011, 3, 2, 0),
    (-0.0011, 4, -2, 2),
    (-0.0010, 1, 2, 0),
    (-0.0009, 22, -1, 0),
    (-0.0008, 0, 0, 4),
    (0.0008, 6, 0, -2),
    (0.0008, 2, 1, -2),
    (0.0007, 0, 2, 0),
    (0.0007, 0, -1, 2),
    (0.0007, 2, 0, 4),
    (-0.0006, 0, -2, 2),
    (-0.0006, 2, 2, -2),
    (0.0006, 24, 0, 0),
    (0.0005, 4, 0, -4),
    (0.0005, 2, 2, 0),
    (-0.0004, 1, -1, 0),
)

_APOGEE_TERMS: tuple[tuple[float, int, int, int], ...] = (
    (0.4392, 2, 0, 0),
    (0.0684, 4, 0, 0),
    (0.0212, 0, 0, 2),
    (-0.0189, 1, 0, 0),
    (0.0144, 6, 0, 0),
    (0.0113, 4, -1, 0),
    (0.0047, 2, 0, 2),
    (0.0036, 1, 1, 0),
    (0.0035, 8, 0, 0),
    (0.0034, 6, -1, 0),
    (-0.0034, 2, 0, -2),
    (0.0022, 2, -2, 0),
    (-0.0017, 3, 0, 0),
    (0.0013, 4, 0, 2),
    (0.0011, 8, -1, 0),
    (0.0010, 4, -2, 0),
    (0.0009, 10, 0, 0),
    (0.0007, 3, 1, 0),
    (0.0006, 0, 2, 0),
    (0.0005, 2, 1, 0),
    (0.0005, 2, 2, 0),
    (0.0004, 6, 0, 2),
    (0.0004, 6, -2, 0),
    (0.0004, 10, -1, 0),
    (-0.0004, 5, 0, 0),
    (-0.0004, 4, 0, -2),
    (0.0003, 0, 1, 2),
    (0.0003, 12, 0, 0),
    (0.0003, 2, -1, 2),
    (-0.0003, 1, -1, 0),
)

# (coefficient arcsec, D, M, F) cosine terms
_PERIGEE_PARALLAX_TERMS: tuple[tuple[float, int, int, int], ...] = (
    (63.224, 2, 0, 0),
    (-6.990, 4, 0, 0),
    (1.927, 6, 0, 0),
    (-1.263, 1, 0, 0),
    (-0.702, 8, 0, 0),
    (-0.690, 0, 0, 2),
    (-0.392, 2, 0, -2),
    (0.297, 10, 0, 0),
    (0.260, 6, -1, 0),
    (0.201, 3, 0, 0),
    (-0.161, 2, 1, 0),
    (0.157, 1, 1, 0),
    (-0.138, 12, 0, 0),
    (-0.127, 8, -1, 0),
    (0.104, 2, 0, 2),
    (0.104, 2, -2, 0),
    (-0.079, 5, 0, 0),
    (0.068, 14, 0, 0),
    (0.067, 10, -1, 0),
    (0.054, 4, 1, 0),
    (-0.038, 12, -1, 0),
    (-0.038, 4, -2, 0),
    (0.037, 7, 0, 0),
    (-0.037, 4, 0, 2),
    (-0.035, 16, 0, 0),
    (-0.030, 3, 1, 0),
    (0.029, 1, -1, 0),
    (-0.025, 6, 1, 0),
    (0.023, 0, 2, 0),
    (0.023, 14, -1, 0),
    (-0.023, 2, 2, 0),
    (0.022, 6, -2, 0),
    (-0.021, 2, -1, -2),
    (-0.020, 9, 0, 0),
    (0.019, 18, 0, 0),
    (0.017, 6, 0, 2),
    (0.014, 0, -1, 2),
    (-0.014, 16, -1, 0),
    (0.013, 4, 0, -2),
    (0.012, 8, 1, 0),
    (0.011, 11, 0, 0),
    (0.010, 5, 1, 0),
    (-0.010, 20, 0, 0),
)

_APOGEE_PARALLAX_TERMS: tuple[tuple[float, int, int, int], ...] = (
    (-9.147, 2, 0, 0),
    (-0.841, 1, 0, 0),
    (0.697, 0, 0, 2),
    (0.355, 4, 0, 0),
    (0.159, 2, -1, 0),
    (0.127, 1, 1, 0),
    (0.065, 4, -1, 0),
    (0.052, 6, 0, 0),
    (0.043, 2, 1, 0),
    (0.031, 2, 0, 2),
    (-0.023, 2, 0, -2),
    (0.022, 2, -2, 0),
    (0.019, 2, 2, 0),
    (-0.016, 0, 2, 0),
    (0.014, 6, -1, 0),
    (0.010, 8, 0, 0),
)


def _apsis_arguments(k: float) -> tuple[float, float, float, float]:
    """(T, D, M, F) for apsis number k, angles in radians."""
    t = k / 1325.55
    d = 171.9179 + 335.9106046 * k - 0.0100383 * t**2 - 0.00001156 * t**3 + 0.000000055 * t**4
    m = 347.3477 + 27.1577721 * k - 0.0008130 * t**2 - 0.0000010 * t**3
    f = 316.6109 + 364.5287911 * k - 0.0125053 * t**2 - 0.0000148 * t**3
    return (t, math.radians(d), math.radians(m), math.radians(f))


def mean_apsis(k: float) -> float:
    """Julian Ephemeris Day of the mean perigee (integer k) or apogee (k + 0.5)."""
    t = k / 1325.55
    return (
        2451534.6698
        + 27.55454989 * k
        - 0.0006691 * t**2
        - 0.000001098 * t**3
        + 0.0000000052 * t**4
    )


def _trig_sum(
    terms: Sequence[tuple[float, int, int, int]],
    d: float,
    m: float,
    f: float,
    trig: str,
) -> float:
    func = math.sin if trig == 'sin' else math.cos
    return sum(c * func(cd * d + cm * m + cf * f) for c, cd, cm, cf in terms)


def true_perigee(k: float) -> float:
    """Julian Ephemeris Day of perigee k with periodic terms."""
    t, d, m, f = _apsis_arguments(k)
    correction = (
        _trig_sum(_PERIGEE_TERMS, d, m, f, 'sin')
        + (-0.0773 + 0.00019 * t) * math.sin(2 * d - m)
        + (0.0502 - 0.00013 * t) * math.sin(m)
        + (0.0422 - 0.00011 * t) * math.sin(4 * d - m)
    )
    return mean_apsis(k) + correction


def true_apogee(k: float) -> float:
    """Julian Ephemeris Day of apogee k (k ends in .5) with periodic terms."""
    t, d, m, f = _apsis_arguments(k)
    correction = (
        _trig_sum(_APOGEE_TERMS, d, m, f, 'sin')
        + (0.0456 - 0.00011 * t) * math.sin(m)
        + (0.0426 - 0.00011 * t) * math.sin(2 * d - m)
    )
    return mean_apsis(k) + correction


def perigee_parallax(k: float) -> float:
    """Equatorial horizontal parallax of the Moon at perigee k (degrees)."""
    t, d, m, f = _apsis_arguments(k)
    arcsec = (
        3629.215
        + _trig_sum(_PERIGEE_PARALLAX_TERMS, d, m, f, 'cos')
        + (2.834 - 0.0071 * t) * math.cos(2 * d - m)
        + (0.696 - 0.0017 * t) * math.cos(m)
        + (-0.629 + 0.0016 * t) * math.cos(4 * d - m)
    )
    return arcsec / 3600.0


def apogee_parallax(k: float) -> float:
    """Equatorial horizontal parallax of the Moon at apogee k (degrees)."""
    t, d, m, f = _apsis_arguments(k)
    arcsec = (
        3245.251
        + _trig_sum(_APOGEE_PARALLAX_TERMS, d, m, f, 'cos')
        + (-0.656 + 0.0016 * t) * math.cos(m)
    )
    return arcsec / 3600.0


# --- Node passages (chapter 51) -------------------------------------------


def node_passage(k: float) -> float:
    """Julian Ephemeris Day of passage through the ascending (integer k) or descending node."""
    t = k / 1342.23
    d = math.radians(
        183.6380 + 331.73735682 * k + 0.0014852 * t**2 + 0.00000209 * t**3 - 0.000000010 * t**4
    )
    m = math.radians(17.4006 + 26.82037250 * k + 0.0001186 * t**2 + 0.00000006 * t**3)
    mp = math.radians(
        38.3776 + 355.52747313 * k + 0.0123499 * t**2 + 0.000014627 * t**3 - 0.000000069 * t**4
    )
    omega_deg = (
        123.9767 - 1.44098956 * k + 0.0020608 * t**2 + 0.00000214 * t**3 - 0.000000016 * t**4
    )
    omega = math.radians(omega_deg)
    v = math.radians(299.75 + 132.85 * t - 0.009173 * t**2)
    p = math.radians(omega_deg + 272.75 - 2.3 * t)
    e = _eccentricity_factor(t)
    sin = math.sin
    return (
        2451565.1619
        + 27.212220817 * k
        + 0.0002762 * t**2
        + 0.000000021 * t**3
        - 0.000000000088 * t**4
        - 0.4721 * sin(mp)
        - 0.1649 * sin(2 * d)
        - 0.0868 * sin(2 * d - mp)
        + 0.0084 * sin(2 * d + mp)
        - 0.0083 * e * sin(2 * d - m)
        - 0.0039 * e * sin(2 * d - m - mp)
        + 0.0034 * sin(2 * mp)
        - 0.0031 * sin(2 * d - 2 * mp)
        + 0.0030 * e * sin(2 * d + m)
        + 0.0028 * e * sin(m - mp)
        + 0.0026 * e * sin(m)
        + 0.0025 * sin(4 * d)
        + 0.0024 * sin(d)
        + 0.0022 * e * sin(m + mp)
        + 0.0017 * sin(omega)
        + 0.0014 * sin(4 * d - mp)
        + 0.0005 * e * sin(2 * d + m - mp)
        + 0.0004 * e * sin(2 * d - m + mp)
        - 0.0003 * e * sin(2 * d - 2 * m)
        + 0.0003 * e * sin(4 * d - m)
        + 0.0003 * sin(v)
        + 0.0003 * sin(p)
    )


# --- Greatest declinations (chapter 52) -------------------------------------

# (coefficient, trig, D, M, M', F); terms in M carry the eccentricity factor.
_Term = tuple[float, str, int, int, int, int]

_NORTH_EPOCH_TERMS: tuple[_Term, ...] = (
    (0.8975, 'cos', 0, 0, 0, 1),
    (-0.4726, 'sin', 0, 0, 1, 0),
    (-0.1030, 'sin', 0, 0, 0, 2),
    (-0.0976, 'sin', 2, 0, -1, 0),
    (-0.0462, 'cos', 0, 0, 1, -1),
    (-0.0461, 'cos', 0, 0, 1, 1),
    (-0.0438, 'sin', 2, 0, 0, 0),
    (0.0162, 'sin', 0, 1, 0, 0),
    (-0.0157, 'cos', 0, 0, 0, 3),
    (0.0145, 'sin', 0, 0, 1, 2),
    (0.0136, 'cos', 2, 0, 0, -1),
    (-0.0095, 'cos', 2, 0, -1, -1),
    (-0.0091, 'cos', 2, 0, -1, 1),
    (-0.0089, 'cos', 2, 0, 0, 1),
    (0.0075, 'sin', 0, 0, 2, 0),
    (-0.0068, 'sin', 0, 0, 1, -2),
    (0.0061, 'cos', 0, 0, 2, -1),
    (-0.0047, 'sin', 0, 0, 1, 3),
    (-0.0043, 'sin', 2, -1, -1, 0),
    (-0.0040, 'cos', 0, 0, 1, -2),
    (-0.0037, 'sin', 2, 0, -2, 0),
    (0.0031, 'sin', 0, 0, 0, 1),
    (0.0030, 'sin', 2, 0, 1, 0),
    (-0.0029, 'cos', 0, 0, 1, 2),
    (-0.0029, 'sin', 2, -1, 0, 0),
    (-0.0027, 'sin', 0, 0, 1, 1),
    (0.0024, 'sin', 0, 1, -1, 0),
    (-0.0021, 'sin', 0, 0, 1, -3),
    (0.0019, 'sin', 0, 0, 2, 1),
    (0.0018, 'cos', 2, 0, -2, -1),
    (0.0018, 'sin', 0, 0, 0, 3),
    (0.0017, 'cos', 0, 0, 1, 3),
    (0.0017, 'cos', 0, 0, 2, 0),
    (-0.0014, 'cos', 2, 0, -1, 0),
    (0.0013, 'cos', 2, 0, 1, 1),
    (0.0013, 'cos', 0, 0, 1, 0),
    (0.0012, 'sin', 0, 0, 3, 1),
    (0.0011, 'sin', 2, 0, -1, 1),
    (-0.0011, 'cos', 2, 0, -2, 0),
    (0.0010, 'cos', 1, 0, 0, 1),
    (0.0010, 'sin', 0, 1, 1, 0),
    (-0.0009, 'sin', 2, 0, 0, -2),
    (0.0007, 'cos', 0, 0, 2, 1),
    (-0.0007, 'cos', 0, 0, 3, 1),
)

_SOUTH_EPOCH_TERMS: tuple[_Term, ...] = (
    (-0.8975, 'cos', 0, 0, 0, 1),
    (-0.4726, 'sin', 0, 0, 1, 0),
    (-0.1030, 'sin', 0, 0, 0, 2),
    (-0.0976, 'sin', 2, 0, -1, 0),
    (0.0541, 'cos', 0, 0, 1, -1),
    (0.0516, 'cos', 0, 0, 1, 1),
    (-0.0438, 'sin', 2, 0, 0, 0),
    (0.0112, 'sin', 0, 1, 0, 0),
    (0.0157, 'cos', 0, 0, 0, 3),
    (0.0023, 'sin', 0, 0, 1, 2),
    (-0.0136, 'cos', 2, 0, 0, -1),
    (0.0110, 'cos', 2, 0, -1, -1),
    (0.0091, 'cos', 2, 0, -1, 1),
    (0.0089, 'cos', 2, 0, 0, 1),
    (0.0075, 'sin', 0, 0, 2, 0),
    (-0.0030, 'sin', 0, 0, 1, -2),
    (-0.0061, 'cos', 0, 0, 2, -1),
    (-0.0047, 'sin', 0, 0, 1, 3),
    (-0.0043, 'sin', 2, -1, -1, 0),
    (0.0040, 'cos', 0, 0, 1, -2),
    (-0.0037, 'sin', 2, 0, -2, 0),
    (-0.0031, 'sin', 0, 0, 0, 1),
    (0.0030, 'sin', 2, 0, 1, 0),
    (0.0029, 'cos', 0, 0, 1, 2),
    (-0.0029, 'sin', 2, -1, 0, 0),
    (-0.0027, 'sin', 0, 0, 1, 1),
    (0.0024, 'sin', 0, 1, -1, 0),
    (-0.0021, 'sin', 0, 0, 1, -3),
    (-0.0019, 'sin', 0, 0, 2, 1),
    (-0.0006, 'cos', 2, 0, -2, -1),
    (-0.0018, 'sin', 0, 0, 0, 3),
    (-0.0017, 'cos', 0, 0, 1, 3),
    (0.0017, 'cos', 0, 0, 2, 0),
    (0.0014, 'cos', 2, 0, -1, 0),
    (-0.0013, 'cos', 2, 0, 1, 1),
    (-0.0013, 'cos', 0, 0, 1, 0),
    (0.0012, 'sin', 0, 0, 3, 1),
    (0.0011, 'sin', 2, 0, -1, 1),
    (0.0011, 'cos', 2, 0, -2, 0),
    (0.0010, 'cos', 1, 0, 0, 1),
    (0.0010, 'sin', 0, 1, 1, 0),
    (-0.0009, 'sin', 2, 0, 0, -2),
    (-0.0007, 'cos', 0, 0, 2, 1),
    (-0.0007, 'cos', 0, 0, 3, 1),
)

_NORTH_VALUE_TERMS: tuple[_Term, ...] = (
    (5.1093, 'sin', 0, 0, 0, 1),
    (0.2658, 'cos', 0, 0, 0, 2),
    (0.1448, 'sin', 2, 0, 0, -1),
    (-0.0322, 'sin', 0, 0, 0, 3),
    (0.0133, 'cos', 2, 0, 0, -2),
    (0.0125, 'cos', 2, 0, 0, 0),
    (-0.0124, 'sin', 0, 0, 1, -1),
    (-0.0101, 'sin', 0, 0, 1, 2),
    (0.0097, 'cos', 0, 0, 0, 1),
    (-0.0087, 'sin', 2, 1, 0, -1),
    (0.0074, 'sin', 0, 0, 1, 3),
    (0.0067, 'sin', 1, 0, 0, 1),
    (0.0063, 'sin', 0, 0, 1, -2),
    (0.0060, 'sin', 2, -1, 0, -1),
    (-0.0057, 'sin', 2, 0, -1, -1),
    (-0.0056, 'cos', 0, 0, 1, 1),
    (0.0052, 'cos', 0, 0, 1, 2),
    (0.0041, 'cos', 0, 0, 2, 1),
    (-0.0040, 'cos', 0, 0, 1, -3),
    (0.0038, 'cos', 0, 0, 2, -1),
    (-0.0034, 'cos', 0, 0, 1, -2),
    (-0.0029, 'sin', 0, 0, 2, 0),
    (0.0029, 'sin', 0, 0, 3, 1),
    (-0.0028, 'cos', 0, 1, 1, 1),
    (-0.0028, 'cos', 0, 0, 1, -1),
    (-0.0023, 'cos', 0, 0, 0, 3),
    (-0.0021, 'sin', 2, 0, 0, 1),
    (0.0019, 'cos', 0, 0, 1, 3),
    (0.0018, 'cos', 1, 0, 0, 1),
    (0.0017, 'sin', 0, 0, 2, -1),
    (0.0015, 'cos', 0, 0, 3, 1),
    (0.0014, 'cos', 2, 0, 2, 1),
    (-0.0012, 'sin', 2, 0, -2, -1),
    (-0.0012, 'cos', 0, 0, 2, 0),
    (-0.0010, 'cos', 0, 0, 1, 0),
    (-0.0010, 'sin', 0, 0, 0, 2),
    (0.0006, 'sin', 0, 0, 1, 1),
)

_SOUTH_VALUE_TERMS: tuple[_Term, ...] = (
    (-5.1093, 'sin', 0, 0, 0, 1),
    (0.2658, 'cos', 0, 0, 0, 2),
    (-0.1448, 'sin', 2, 0, 0, -1),
    (0.0322, 'sin', 0, 0, 0, 3),
    (0.0133, 'cos', 2, 0, 0, -2),
    (0.0125, 'cos', 2, 0, 0, 0),
    (-0.0015, 'sin', 0, 0, 1, -1),
    (0.0101, 'sin', 0, 0, 1, 2),
    (-0.0097, 'cos', 0, 0, 0, 1),
    (0.0087, 'sin', 2, 1, 0, -1),
    (0.0074, 'sin', 0, 0, 1, 3),
    (0.0067, 'sin', 1, 0, 0, 1),
    (-0.0063, 'sin', 0, 0, 1, -2),
    (-0.0060, 'sin', 2, -1, 0, -1),
    (0.0057, 'sin', 2, 0, -1, -1),
    (-0.0056, 'cos', 0, 0, 1, 1),
    (-0.0052, 'cos', 0, 0, 1, 2),
    (-0.0041, 'cos', 0, 0, 2, 1),
    (-0.0040, 'cos', 0, 0, 1, -3),
    (-0.0038, 'cos', 0, 0, 2, -1),
    (0.0034, 'cos', 0, 0, 1, -2),
    (-0.0029, 'sin', 0, 0, 2, 0),
    (0.0029, 'sin', 0, 0, 3, 1),
    (0.0028, 'cos', 0, 1, 1, 1),
    (-0.0028, 'cos', 0, 0, 1, -1),
    (0.0023, 'cos', 0, 0, 0, 3),
    (0.0021, 'sin', 2, 0, 0, 1),
    (0.0019, 'cos', 0, 0, 1, 3),
    (0.0018, 'cos', 1, 0, 0, 1),
    (-0.0017, 'sin', 0, 0, 2, -1),
    (0.0015, 'cos', 0, 0, 3, 1),
    (0.0014, 'cos', 2, 0, 2, 1),
    (0.0012, 'sin', 2, 0, -2, -1),
    (-0.0012, 'cos', 0, 0, 2, 0),
    (0.0010, 'cos', 0, 0, 1, 0),
    (-0.0010, 'sin', 0, 0, 0, 2),
    (0.0037, 'sin', 0, 0, 1, 1),
)


def _declination_arguments(k: float, northern: bool) -> tuple[float, float, float, float, float]:
    """(T, D, M, M', F) for declination event k, angles in radians."""
    t = k / 1336.86
    if northern:
        d0, m0, mp0, f0 = 152.2029, 14.8591, 4.6881, 325.8867
    else:
        d0, m0, mp0, f0 = 345.6676, 1.3951, 186.2100, 145.1633
    d = d0 + 333.0705546 * k - 0.0004214 * t**2 + 0.00000011 * t**3
    m = m0 + 26.9281592 * k - 0.0000355 * t**2 - 0.00000010 * t**3
    mp = mp0 + 356.9562794 * k + 0.0103066 * t**2 + 0.00001251 * t**3
    f = f0 + 1.4467807 * k - 0.0020690 * t**2 - 0.00000215 * t**3
    return (t, math.radians(d), math.radians(m), math.radians(mp), math.radians(f))


def _declination_series(
    terms: Sequence[_Term],
    e: float,
    d: float,
    m: float,
    mp: float,
    f: float,
) -> float:
    total = 0.0
    for c, trig, cd, cm, cmp_, cf in terms:
        arg = cd * d + cm * m + cmp_ * mp + cf * f
        value = math.sin(arg) if trig == 'sin' else math.cos(arg)
        total += c * e ** abs(cm) * value
    return total


def greatest_declination_epoch(k: float, northern: bool, mean: bool) -> float:
    """Julian Ephemeris Day of the greatest northern or southern declination k."""
    t, d, m, mp, f = _declination_arguments(k, northern)
    base = 2451562.5897 if northern else 2451548.9289
    jde = base + 27.321582247 * k + 0.000119804 * t**2 - 0.000000141 * t**3
    if mean:
        return jde
    terms = _NORTH_EPOCH_TERMS if northern else _SOUTH_EPOCH_TERMS
    return jde + _declination_series(terms, _eccentricity_factor(t), d, m, mp, f)


def greatest_declination_value(k: float, northern: bool, mean: bool) -> float:
    """Greatest declination (degrees); negative for southern events."""
    t, d, m, mp, f = _declination_arguments(k, northern)
    value = 23.6961 - 0.013004 * t
    if not mean:
        terms = _NORTH_VALUE_TERMS if northern else _SOUTH_VALUE_TERMS
        value += _declination_series(terms, _eccentricity_factor(t), d, m, mp, f)
    return value if northern else -value
