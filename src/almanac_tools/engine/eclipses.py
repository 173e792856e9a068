"""Lunar eclipse circumstances at a full moon (Meeus chapter 54)."""

from __future__ import annotations

import math

from almanac_tools.engine import lunar
from almanac_tools.engine.base import LunarEclipseDetails

# Eclipses are impossible when |sin F| exceeds this limit.
_NODE_DISTANCE_LIMIT = 0.36


def _semiduration(radius: float, gamma: float, n: float) -> float:
    """Semiduration (minutes) of a phase bounded by the given shadow radius."""
    if radius * radius <= gamma * gamma:
        return 0.0
    return 60.0 / n * math.sqrt(radius * radius - gamma * gamma)


def lunar_eclipse(k: float) -> LunarEclipseDetails:
    """Circumstances of the eclipse that may occur at full moon k.

    Parameters:
        k: Lunation number ending in .5 (full moon).

    Returns:
        LunarEclipseDetails; ``eclipse`` is False when the Moon misses the
        penumbra, in which case the magnitudes are negative.
    """
    t = k / 1236.85
    e = 1.0 - 0.002516 * t - 0.0000074 * t * t
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
    f1 = f - math.radians(0.02665) * math.sin(omega)
    a1 = math.radians(299.77 + 0.107408 * k - 0.009173 * t * t)
    sin, cos = math.sin, math.cos

    maximum = (
        lunar.mean_phase(k)
        - 0.4065 * sin(mp)
        + 0.1727 * e * sin(m)
        + 0.0161 * sin(2 * mp)
        - 0.0097 * sin(2 * f1)
        + 0.0073 * e * sin(mp - m)
        - 0.0050 * e * sin(mp + m)
        - 0.0023 * sin(mp - 2 * f1)
        + 0.0021 * e * sin(2 * m)
        + 0.0012 * sin(mp + 2 * f1)
        + 0.0006 * e * sin(2 * mp + m)
        - 0.0004 * sin(3 * mp)
        - 0.0003 * e * sin(m + 2 * f1)
        + 0.0003 * sin(a1)
        - 0.0002 * e * sin(m - 2 * f1)
        - 0.0002 * e * sin(2 * mp - m)
        - 0.0002 * sin(omega)
    )

    p = (
        0.2070 * e * sin(m)
        + 0.0024 * e * sin(2 * m)
        - 0.0392 * sin(mp)
        + 0.0116 * sin(2 * mp)
        - 0.0073 * e * sin(mp + m)
        + 0.0067 * e * sin(mp - m)
        + 0.0118 * sin(2 * f1)
    )
    q = (
        5.2207
        - 0.0048 * e * cos(m)
        + 0.0020 * e * cos(2 * m)
        - 0.3299 * cos(mp)
        - 0.0060 * e * cos(mp + m)
        + 0.0041 * e * cos(mp - m)
    )
    w = abs(cos(f1))
    gamma = (p * cos(f1) + q * sin(f1)) * (1.0 - 0.0048 * w)
    u = 0.0059 + 0.0046 * e * cos(m) - 0.0182 * cos(mp) + 0.0004 * cos(2 * mp) - 0.0005 * cos(m + mp)

    penumbral_magnitude = (1.5573 + u - abs(gamma)) / 0.5450
    umbral_magnitude = (1.0128 - u - abs(gamma)) / 0.5450
    n = 0.5458 + 0.0400 * cos(mp)
    eclipse = abs(sin(f)) <= _NODE_DISTANCE_LIMIT and penumbral_magnitude > 0.0

    return LunarEclipseDetails(
        k=k,
        eclipse=eclipse,
        time_of_maximum=maximum,
        gamma=gamma,
        u=u,
        penumbral_radius=1.2848 + u,
        umbral_radius=0.7403 - u,
        penumbral_magnitude=penumbral_magnitude,
        umbral_magnitude=umbral_magnitude,
        partial_semiduration=_semiduration(1.0128 - u, gamma, n) if eclipse else 0.0,
        total_semiduration=_semiduration(0.4678 - u, gamma, n) if eclipse else 0.0,
        penumbral_semiduration=_semiduration(1.5573 + u, gamma, n) if eclipse else 0.0,
    )
