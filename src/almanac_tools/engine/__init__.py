"""Ephemeris engines: the protocol consumed by the body layer and its implementations."""

from __future__ import annotations

import logging

from almanac_tools.config import get_engine_name
from almanac_tools.engine.analytic import AnalyticEngine
from almanac_tools.engine.base import (
    EphemerisEngine,
    LibrationDetails,
    LunarEclipseDetails,
    LunarMeanElements,
    RawPositionRecord,
    SatelliteDetails,
    SelenographicSunDetails,
)

logger = logging.getLogger(__name__)

__all__ = [
    'AnalyticEngine',
    'EphemerisEngine',
    'LibrationDetails',
    'LunarEclipseDetails',
    'LunarMeanElements',
    'RawPositionRecord',
    'SatelliteDetails',
    'SelenographicSunDetails',
    'get_default_engine',
]


def get_default_engine() -> EphemerisEngine:
    """Return a new engine of the configured kind (ALMANAC_ENGINE).

    Returns:
        SpiceEngine when 'spice' is configured, otherwise AnalyticEngine.
    """
    name = get_engine_name()
    logger.debug('Using %s ephemeris engine', name)
    if name == 'spice':
        from almanac_tools.engine.spice import SpiceEngine

        return SpiceEngine()
    return AnalyticEngine()
