"""Tests for the geocentric Moon and the barycenter offset."""

from __future__ import annotations

import math

import numpy as np
import pytest

from kepler_tools.constants import ARCSEC_PER_CIRCLE, EMRAT, J2000, STR
from kepler_tools.mean_elements import ELONGATION_SLOT, mean_elements
from kepler_tools.moon import embofs, gmoon
from kepler_tools.obliquity import epsiln
from kepler_tools.orbit import PlanetTable
from kepler_tools.precession import precess

_NO_HARMONICS = (0,) * 19
MOON_DISTANCE = 0.0025696

LON_RAD = PlanetTable(
    0, _NO_HARMONICS, 0, (0, 0, -1), (0.0,), rad_tbl=(0.0,), distance=MOON_DISTANCE
)
LAT = PlanetTable(0, _NO_HARMONICS, 0, (0, 0, -1), (0.0,))


def test_gmoon_longitude_wraps_to_half_circle() -> None:
    """Mean longitude past 645000 arc seconds is wrapped negative."""
    moon = gmoon(J2000, LON_RAD, LAT)
    lp = mean_elements(J2000).lp_equinox
    assert lp > 645000.0
    assert moon.longitude == pytest.approx(STR * (lp - ARCSEC_PER_CIRCLE))
    assert moon.latitude == 0.0
    assert moon.distance == pytest.approx(MOON_DISTANCE)


def test_gmoon_rect_is_equatorial_of_date() -> None:
    """The rectangular vector is the polar position rotated by the obliquity of date."""
    jd = 2457000.5
    moon = gmoon(jd, LON_RAD, LAT)
    _, coseps, sineps = epsiln(jd)
    lon = moon.longitude
    expected = MOON_DISTANCE * np.array(
        [math.cos(lon), coseps * math.sin(lon), sineps * math.sin(lon)]
    )
    np.testing.assert_allclose(moon.rect, expected, atol=1e-15)
    assert np.linalg.norm(moon.rect) == pytest.approx(moon.distance)


def test_gmoon_series_terms() -> None:
    """Periodic radius and latitude terms over D scale distance and latitude."""
    harmonics = [0] * 19
    harmonics[ELONGATION_SLOT] = 1
    lon_rad = PlanetTable(
        18,
        tuple(harmonics),
        0,
        (1, 1, ELONGATION_SLOT + 1, 0, -1),
        (0.0, 0.0),
        rad_tbl=(1000.0, 0.0),
        distance=MOON_DISTANCE,
    )
    lat = PlanetTable(18, tuple(harmonics), 0, (1, 1, ELONGATION_SLOT + 1, 0, -1), (0.0, 3600.0))
    jd = 2458000.5
    d = float(mean_elements(jd).args[ELONGATION_SLOT])
    moon = gmoon(jd, lon_rad, lat)
    assert moon.distance == pytest.approx((1.0 + STR * 1000.0 * math.cos(d)) * MOON_DISTANCE)
    assert moon.latitude == pytest.approx(STR * 3600.0 * math.sin(d))


def test_gmoon_without_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Missing lunar tables raise LookupError naming the table."""
    monkeypatch.setattr('kepler_tools.moon.get_table', lambda name: None)
    with pytest.raises(LookupError, match='mlr404'):
        gmoon(J2000)
    with pytest.raises(LookupError, match='mlat404'):
        gmoon(J2000, lon_rad_table=LON_RAD)


def test_gmoon_uses_registered_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Default tables come from the registry."""
    tables = {'mlr404': LON_RAD, 'mlat404': LAT}
    monkeypatch.setattr('kepler_tools.moon.get_table', tables.get)
    assert gmoon(J2000).distance == pytest.approx(MOON_DISTANCE)


def test_embofs_offset_magnitude() -> None:
    """The Earth sits 1/(EMRAT+1) of the Moon's distance from the barycenter."""
    emb = np.array([-0.18, 0.89, 0.39])
    for jd in (2440000.5, J2000, 2460000.5):
        earth, dist = embofs(jd, emb, LON_RAD, LAT)
        shift = np.linalg.norm(earth - emb)
        assert shift == pytest.approx(MOON_DISTANCE / (EMRAT + 1.0), rel=1e-9)
        assert shift <= 3.15e-5
        assert dist == pytest.approx(np.linalg.norm(earth))


def test_embofs_subtracts_precessed_moon() -> None:
    """The Moon vector is precessed to J2000 before scaling."""
    jd = 2440000.5
    emb = np.zeros(3)
    earth, _ = embofs(jd, emb, LON_RAD, LAT)
    moon = gmoon(jd, LON_RAD, LAT)
    np.testing.assert_allclose(earth, -precess(moon.rect, jd, 1) / (EMRAT + 1.0), atol=1e-18)
