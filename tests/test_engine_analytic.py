"""Tests for the analytic ephemeris engine against published worked examples."""

from __future__ import annotations

import math

import pytest

from almanac_tools.constants import AU_KM, BodyTag
from almanac_tools.engine import AnalyticEngine, lunar, physical, planetary
from almanac_tools.errors import EngineEvaluationFailure

_MOON_EPOCH = 2448724.5  # 1992 April 12, 0h
_SUN_EPOCH = 2448908.5  # 1992 October 13, 0h
_VENUS_EPOCH = 2448976.5  # 1992 December 20, 0h


@pytest.fixture
def engine() -> AnalyticEngine:
    return AnalyticEngine()


def test_sun_geometric_position(engine: AnalyticEngine) -> None:
    """Geometric Sun on 1992 October 13: longitude 199.90988, R 0.99766 AU."""

    record = engine.evaluate(_SUN_EPOCH, BodyTag.SUN, True)

    assert record.longitude == pytest.approx(199.90988, abs=1e-4)
    assert record.latitude == 0.0
    assert record.radius_au == pytest.approx(0.99766, abs=1e-5)
    assert record.heliocentric is False


def test_earth_is_opposite_the_sun(engine: AnalyticEngine) -> None:
    """Heliocentric Earth is the geocentric Sun reversed."""

    sun = engine.evaluate(_SUN_EPOCH, BodyTag.SUN, True)
    earth = engine.evaluate(_SUN_EPOCH, BodyTag.EARTH, True)

    assert earth.longitude == pytest.approx((sun.longitude + 180.0) % 360.0)
    assert earth.radius_au == sun.radius_au
    assert earth.heliocentric is True


def test_moon_position(engine: AnalyticEngine) -> None:
    """Moon on 1992 April 12: lambda 133.162655, beta -3.229126, 368409.7 km."""

    record = engine.evaluate(_MOON_EPOCH, BodyTag.MOON, True)

    assert record.longitude == pytest.approx(133.162655, abs=0.01)
    assert record.latitude == pytest.approx(-3.229126, abs=0.01)
    assert record.radius_au * AU_KM == pytest.approx(368409.7, abs=20.0)


def test_moon_low_precision_is_close(engine: AnalyticEngine) -> None:
    """Leading terms only stay within 0.1 degree of the full series."""

    high = engine.evaluate(_MOON_EPOCH, BodyTag.MOON, True)
    low = engine.evaluate(_MOON_EPOCH, BodyTag.MOON, False)

    assert low.longitude == pytest.approx(high.longitude, abs=0.1)
    assert low.latitude == pytest.approx(high.latitude, abs=0.1)
    assert low.radius_au * AU_KM == pytest.approx(high.radius_au * AU_KM, abs=300.0)
    assert low != high


def test_venus_heliocentric(engine: AnalyticEngine) -> None:
    """Venus on 1992 December 20: L 26.11428, R 0.724603."""

    record = engine.evaluate(_VENUS_EPOCH, BodyTag.VENUS, True)

    assert record.longitude == pytest.approx(26.11428, abs=0.05)
    assert record.latitude == pytest.approx(-2.62070, abs=0.05)
    assert record.radius_au == pytest.approx(0.724603, abs=1e-3)
    assert record.heliocentric is True


@pytest.mark.parametrize('body', [BodyTag.MERCURY, BodyTag.MARS, BodyTag.SATURN, BodyTag.NEPTUNE])
def test_planet_precision_modes_agree(engine: AnalyticEngine, body: BodyTag) -> None:
    """The equation of the centre tracks Kepler's equation to a fraction of a degree."""

    high = engine.evaluate(_VENUS_EPOCH, body, True)
    low = engine.evaluate(_VENUS_EPOCH, body, False)

    assert low.longitude == pytest.approx(high.longitude, abs=0.5)
    assert low.radius_au == pytest.approx(high.radius_au, rel=1e-2)


def test_evaluate_is_deterministic(engine: AnalyticEngine) -> None:
    """Identical inputs give identical records."""

    for body in BodyTag:
        assert engine.evaluate(_MOON_EPOCH, body, True) == engine.evaluate(
            _MOON_EPOCH, body, True
        )


def test_solve_kepler() -> None:
    """M = 5 degrees, e = 0.1 gives E = 5.554589 degrees."""

    ecc = planetary.solve_kepler(math.radians(5.0), 0.1)

    assert math.degrees(ecc) == pytest.approx(5.554589, abs=1e-6)


def test_moon_phases(engine: AnalyticEngine) -> None:
    """New moon k = -283 (1977 February): true 2443192.65118, mean 2443192.94102."""

    assert engine.moon_phase(-283, mean=False) == pytest.approx(2443192.65118, abs=5e-4)
    assert engine.moon_phase(-283, mean=True) == pytest.approx(2443192.94102, abs=1e-5)


def test_last_quarter_2044(engine: AnalyticEngine) -> None:
    """Last quarter k = 544.75 (2044 January): 2467636.49186."""

    assert engine.moon_phase(544.75, mean=False) == pytest.approx(2467636.49186, abs=5e-4)


def test_apogee_and_parallax(engine: AnalyticEngine) -> None:
    """Apogee k = -148.5 (1988 October): 2447442.3543, parallax 3240.679 arcsec."""

    assert engine.moon_apogee(-148.5, mean=False) == pytest.approx(2447442.3543, abs=0.01)
    assert engine.moon_apogee_parallax(-148.5) == pytest.approx(3240.679 / 3600.0, abs=1e-3)
    assert engine.moon_apogee(-148.5, mean=True) == pytest.approx(
        lunar.mean_apsis(-148.5)
    )


def test_perigee_parallax_exceeds_apogee(engine: AnalyticEngine) -> None:
    """The Moon is always closer (larger parallax) at perigee."""

    for k in range(-10, 10):
        assert engine.moon_perigee_parallax(k) > engine.moon_apogee_parallax(k + 0.5)
        assert engine.moon_perigee(k, mean=False) < engine.moon_apogee(k + 0.5, mean=False)


def test_node_passage(engine: AnalyticEngine) -> None:
    """Ascending node k = -170 (1987 May): 2446938.76803."""

    assert engine.moon_node_passage(-170) == pytest.approx(2446938.76803, abs=1e-3)


def test_greatest_declination(engine: AnalyticEngine) -> None:
    """Northern extreme k = -148 (1988 December): 2447518.3346 at 28.1562 degrees."""

    assert engine.moon_greatest_declination(-148, True, False) == pytest.approx(
        2447518.3346, abs=0.01
    )
    assert engine.moon_greatest_declination_value(-148, True, False) == pytest.approx(
        28.1562, abs=0.01
    )
    assert engine.moon_greatest_declination_value(-148, False, True) < 0.0


def test_lunar_mean_elements(engine: AnalyticEngine) -> None:
    """Mean elements at J2000 match the series constants."""

    elements = engine.lunar_mean_elements(2451545.0)

    assert elements.mean_longitude == pytest.approx(218.3164477)
    assert elements.mean_elongation == pytest.approx(297.8501921)
    assert elements.mean_anomaly == pytest.approx(134.9633964)
    assert elements.argument_of_latitude == pytest.approx(93.2720950)
    assert elements.mean_ascending_node == pytest.approx(125.0445479)
    assert abs(elements.true_ascending_node - elements.mean_ascending_node) < 2.0


def test_libration(engine: AnalyticEngine) -> None:
    """1992 April 12: optical l' -1.206, b' +4.194; total l -1.23, b +4.20; P 15.08."""

    details = engine.moon_libration(_MOON_EPOCH, True)

    assert details.optical_longitude == pytest.approx(-1.206, abs=0.01)
    assert details.optical_latitude == pytest.approx(4.194, abs=0.01)
    assert details.longitude == pytest.approx(-1.23, abs=0.02)
    assert details.latitude == pytest.approx(4.20, abs=0.02)
    assert details.position_angle == pytest.approx(15.08, abs=0.05)


def test_topocentric_libration_differs_by_parallax(engine: AnalyticEngine) -> None:
    """Topocentric librations stay within one lunar parallax of geocentric ones."""

    geocentric = engine.moon_libration(_MOON_EPOCH, True)
    topocentric = engine.moon_topocentric_libration(_MOON_EPOCH, -10.0, 50.0, True)

    assert abs(topocentric.longitude - geocentric.longitude) < 1.1
    assert abs(topocentric.latitude - geocentric.latitude) < 1.1
    assert topocentric.optical_longitude == geocentric.optical_longitude


def test_selenographic_sun(engine: AnalyticEngine) -> None:
    """1992 April 12: l0 67.89, b0 1.46, colongitude 22.11."""

    sun = engine.selenographic_sun(_MOON_EPOCH, True)

    assert sun.longitude == pytest.approx(67.89, abs=0.02)
    assert sun.latitude == pytest.approx(1.46, abs=0.02)
    assert sun.colongitude == pytest.approx(22.11, abs=0.02)


def test_lunar_sunrise_and_sunset(engine: AnalyticEngine) -> None:
    """At the crossing the Sun's altitude is zero, rising after sunrise."""

    lon, lat = 20.0, 10.0

    sunrise = engine.lunar_sunrise(_MOON_EPOCH, lon, lat, True)
    sunset = engine.lunar_sunset(_MOON_EPOCH, lon, lat, True)

    assert abs(sunrise - _MOON_EPOCH) < 16.0
    assert abs(sunset - _MOON_EPOCH) < 16.0
    assert engine.lunar_sun_altitude(sunrise, lon, lat, True) == pytest.approx(0.0, abs=1e-3)
    assert engine.lunar_sun_altitude(sunset, lon, lat, True) == pytest.approx(0.0, abs=1e-3)
    assert engine.lunar_sun_altitude(sunrise + 0.5, lon, lat, True) > 0.0
    assert engine.lunar_sun_altitude(sunset + 0.5, lon, lat, True) < 0.0


def test_lunar_sunrise_undefined_at_pole(engine: AnalyticEngine) -> None:
    """Sunrise at a lunar pole raises EngineEvaluationFailure."""

    with pytest.raises(EngineEvaluationFailure):
        engine.lunar_sunrise(_MOON_EPOCH, 0.0, 90.0, True)


def test_colongitude_rate_matches_synodic_month() -> None:
    """The Sun sweeps 360 degrees of colongitude in one synodic month."""

    assert 360.0 / physical.COLONGITUDE_RATE == pytest.approx(29.53, abs=0.01)


def test_lunar_eclipse_january_2000(engine: AnalyticEngine) -> None:
    """Full moon k = 0.5 is the total eclipse of 2000 January 21."""

    details = engine.lunar_eclipse(0.5)

    assert details.eclipse is True
    assert details.time_of_maximum == pytest.approx(2451564.698, abs=0.02)
    assert details.gamma == pytest.approx(-0.296, abs=0.01)
    assert details.umbral_magnitude > 1.0
    assert details.penumbral_magnitude > details.umbral_magnitude
    assert details.total_semiduration > 0.0
    assert details.partial_semiduration > details.total_semiduration
    assert details.penumbral_semiduration > details.partial_semiduration


def test_no_lunar_eclipse_far_from_node(engine: AnalyticEngine) -> None:
    """The full moon of 2000 April misses the shadow entirely."""

    details = engine.lunar_eclipse(3.5)

    assert details.eclipse is False
    assert details.partial_semiduration == 0.0
    assert details.penumbral_semiduration == 0.0
