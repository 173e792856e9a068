"""Tests for the bounded event-index search shared by phase and apsis lookups."""

from __future__ import annotations

import pytest

from almanac_tools.bodies import search_event
from almanac_tools.errors import EngineEvaluationFailure
from almanac_tools.time_utils import JulianDay


def _every_ten_days(n: float) -> float:
    return 10.0 * n


@pytest.mark.parametrize(
    ('k', 'forward', 'expected'),
    [
        (2, True, (3, 30.0)),
        (3, True, (3, 30.0)),
        (4, True, (3, 30.0)),
        (3, False, (2, 20.0)),
        (2, False, (2, 20.0)),
        (1, False, (2, 20.0)),
    ],
)
def test_search_event_finds_nearest_in_direction(
    k: int, forward: bool, expected: tuple[int, float]
) -> None:
    """The result is the nearest event on the requested side of the epoch."""

    found_k, jd = search_event(JulianDay(25.0), k, _every_ten_days, forward)

    assert (found_k, jd.value) == expected
    assert isinstance(jd, JulianDay)


def test_search_event_accepts_event_at_epoch() -> None:
    """An event exactly at the epoch satisfies both directions."""

    assert search_event(JulianDay(25.0), 2.5, _every_ten_days, True)[1].value == 25.0
    assert search_event(JulianDay(25.0), 2.5, _every_ten_days, False)[1].value == 25.0


def test_search_event_gives_up_after_max_steps() -> None:
    """A nominal index too far from the epoch raises EngineEvaluationFailure."""

    with pytest.raises(EngineEvaluationFailure, match='did not converge'):
        search_event(JulianDay(25.0), -5, _every_ten_days, True)


def test_search_event_respects_custom_step_limit() -> None:
    """max_steps bounds the number of index adjustments."""

    assert search_event(JulianDay(25.0), -5, _every_ten_days, True, max_steps=8)[0] == 3
    with pytest.raises(EngineEvaluationFailure):
        search_event(JulianDay(25.0), 1, _every_ten_days, True, max_steps=1)
