"""Tests for coordinate types and frame transforms."""

from __future__ import annotations

import math

import pytest

from almanac_tools.coordinates import (
    EclipticCoordinates,
    EquatorialCoordinates,
    GeographicCoordinates,
    HorizontalCoordinates,
    SelenographicCoordinates,
    angular_separation,
    annual_aberration,
    correct_for_aberration,
    distance_from_horizontal_parallax,
    ecliptic_to_equatorial,
    equatorial_to_ecliptic,
    equatorial_to_horizontal,
    horizontal_parallax_from_distance,
    mean_obliquity,
    nutation,
    true_obliquity,
)
from almanac_tools.time_utils import JulianDay

_POLLUX = EquatorialCoordinates(7.0 + 45.0 / 60.0 + 18.946 / 3600.0, 28.0 + 1.0 / 60.0 + 34.26 / 3600.0)


def test_equatorial_to_ecliptic_pollux() -> None:
    """Pollux at J2000 obliquity: lambda 113.215630, beta 6.684170."""

    ecliptic = equatorial_to_ecliptic(_POLLUX, 23.4392911)

    assert ecliptic.longitude == pytest.approx(113.215630, abs=1e-5)
    assert ecliptic.latitude == pytest.approx(6.684170, abs=1e-5)
    assert ecliptic.obliquity == 23.4392911


def test_ecliptic_to_equatorial_pollux() -> None:
    """The inverse rotation recovers Pollux's right ascension and declination."""

    equatorial = ecliptic_to_equatorial(EclipticCoordinates(113.215630, 6.684170, 23.4392911))

    assert equatorial.right_ascension == pytest.approx(_POLLUX.right_ascension, abs=1e-6)
    assert equatorial.declination == pytest.approx(_POLLUX.declination, abs=1e-5)


@pytest.mark.parametrize(
    ('longitude', 'latitude'),
    [(0.0, 0.0), (45.0, 30.0), (179.9, -60.0), (270.0, 89.5), (359.99, -89.5), (123.4, 0.01)],
)
def test_frame_round_trip(longitude: float, latitude: float) -> None:
    """ecliptic -> equatorial -> ecliptic returns the input within 1e-9 degrees."""

    eps = 23.44
    start = EclipticCoordinates(longitude, latitude, eps)

    back = start.to_equatorial().to_ecliptic(eps)

    dlon = (back.longitude - start.longitude + 180.0) % 360.0 - 180.0
    assert abs(dlon) * math.cos(math.radians(latitude)) < 1e-9
    assert back.latitude == pytest.approx(start.latitude, abs=1e-9)


def test_with_obliquity_keeps_position_and_changes_frame() -> None:
    """The summer solstice point has a declination equal to whichever obliquity it refers to."""

    solstice = EclipticCoordinates(90.0, 0.0)
    of_date = solstice.with_obliquity(23.0)

    assert (of_date.longitude, of_date.latitude) == (90.0, 0.0)
    assert of_date.obliquity == 23.0
    assert solstice.obliquity == pytest.approx(23.4392911)
    assert solstice.to_equatorial().declination == pytest.approx(23.4392911, abs=1e-9)
    assert of_date.to_equatorial().declination == pytest.approx(23.0, abs=1e-9)
    assert of_date.to_equatorial().right_ascension == pytest.approx(6.0, abs=1e-9)


def test_value_types_normalize_ranges() -> None:
    """Longitudes and right ascensions are reduced; latitudes are validated."""

    assert EclipticCoordinates(-10.0, 0.0).longitude == pytest.approx(350.0)
    assert EquatorialCoordinates(25.0, 0.0).right_ascension == pytest.approx(1.0)
    assert EquatorialCoordinates(1.0, 0.0).right_ascension_degrees == pytest.approx(15.0)
    assert HorizontalCoordinates(-90.0, 10.0).azimuth == pytest.approx(270.0)
    assert HorizontalCoordinates(0.0, 10.0).azimuth_from_north == pytest.approx(180.0)
    assert GeographicCoordinates(270.0, 0.0).longitude == pytest.approx(-90.0)
    with pytest.raises(ValueError):
        EclipticCoordinates(0.0, 91.0)
    with pytest.raises(ValueError):
        EquatorialCoordinates(0.0, float('nan'))


def test_geographic_east_longitude_convention() -> None:
    """Longitudes are stored west-positive."""

    moscow = GeographicCoordinates.from_east_longitude(37.615559, 55.75)

    assert moscow.longitude == pytest.approx(-37.615559)
    assert moscow.east_longitude == pytest.approx(37.615559)


def test_selenographic_colongitude() -> None:
    """Colongitude is 450 minus longitude, reduced."""

    assert SelenographicCoordinates(67.89, 1.46).colongitude == pytest.approx(22.11)
    assert SelenographicCoordinates(-30.0, 0.0).colongitude == pytest.approx(120.0)


def test_equatorial_to_horizontal_venus_at_washington() -> None:
    """Venus from the US Naval Observatory, 1987 April 10 19:21 UT."""

    venus = EquatorialCoordinates(347.3193375 / 15.0, -6.719892)
    observer = GeographicCoordinates(77.0 + 3.0 / 60.0 + 56.0 / 3600.0, 38.0 + 55.0 / 60.0 + 17.0 / 3600.0)
    sidereal = 8.0 + 34.0 / 60.0 + 56.853 / 3600.0

    horizontal = equatorial_to_horizontal(venus, observer, sidereal)

    assert horizontal.azimuth == pytest.approx(68.0337, abs=1e-3)
    assert horizontal.altitude == pytest.approx(15.1249, abs=1e-3)


def test_nutation_and_obliquity_1987() -> None:
    """1987 April 10 0h TD: dpsi -3.788", deps +9.443", eps0 23 26 27.407."""

    jd = JulianDay.from_components(1987, 4, 10)

    dpsi, deps = nutation(jd)

    assert dpsi == pytest.approx(-3.788, abs=0.5)
    assert deps == pytest.approx(9.443, abs=0.2)
    assert mean_obliquity(jd) == pytest.approx(23.0 + 26.0 / 60.0 + 27.407 / 3600.0, abs=1e-6)
    assert true_obliquity(jd) == pytest.approx(23.0 + 26.0 / 60.0 + 36.850 / 3600.0, abs=0.2 / 3600.0)


def test_annual_aberration_is_bounded() -> None:
    """Aberration in longitude never exceeds about 20.5 arcsec / cos(beta)."""

    jd = 2448908.5
    for longitude in range(0, 360, 30):
        ecliptic = EclipticCoordinates(float(longitude), 20.0)
        dlam, dbeta = annual_aberration(ecliptic, jd)
        assert abs(dlam) * 3600.0 <= 20.5 * 1.02 / math.cos(math.radians(20.0))
        assert abs(dbeta) * 3600.0 <= 20.5 * 1.02


def test_aberration_of_the_sun_is_about_minus_20_arcsec() -> None:
    """A body at the Sun's longitude is displaced backward by about 20.5 arcsec."""

    jd = 2448908.5
    sun = EclipticCoordinates(199.90988, 0.0)

    corrected = correct_for_aberration(sun, jd)

    assert (corrected.longitude - sun.longitude) * 3600.0 == pytest.approx(-20.5, abs=0.4)
    assert corrected.latitude == pytest.approx(0.0, abs=1e-12)
    assert corrected.obliquity == sun.obliquity


def test_horizontal_parallax_round_trip() -> None:
    """The Moon at 368409.7 km has parallax 0.991990 degrees."""

    parallax = horizontal_parallax_from_distance(368409.7)

    assert parallax == pytest.approx(0.991990, abs=1e-5)
    assert distance_from_horizontal_parallax(parallax) == pytest.approx(368409.7, rel=1e-9)


def test_angular_separation_arcturus_spica() -> None:
    """Arcturus to Spica is 32.7930 degrees."""

    arcturus = EquatorialCoordinates(213.9154 / 15.0, 19.1825)
    spica = EquatorialCoordinates(201.2983 / 15.0, -11.1614)

    assert angular_separation(arcturus, spica) == pytest.approx(32.7930, abs=1e-3)
    assert angular_separation(spica, spica) == pytest.approx(0.0, abs=1e-9)
