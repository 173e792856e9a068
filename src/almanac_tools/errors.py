"""Error kinds raised by the time, coordinate and body layers."""

from __future__ import annotations


class AlmanacError(Exception):
    """Base class for all almanac-tools errors."""


class InvalidCalendarDate(AlmanacError, ValueError):
    """Calendar components out of range or inside the 1582 reform gap."""


class InvalidBodyVariant(AlmanacError, ValueError):
    """Operation requested on a body that lacks the required physical model."""


class EngineEvaluationFailure(AlmanacError, RuntimeError):
    """Ephemeris engine unavailable or unable to evaluate a request."""
