"""Tests for the Kepler solvers and kepler_calc."""

from __future__ import annotations

import dataclasses
import logging
import math

import numpy as np
import pytest

from kepler_tools import kepler
from kepler_tools.constants import EMRAT, J2000
from kepler_tools.kepler import kepler_calc, solve_elliptic, solve_hyperbolic, solve_parabolic
from kepler_tools.orbit import KeplerResult, Orbit, OrbitRegime, PlanetTable
from kepler_tools.planets import EARTH, JUPITER, MARS, MERCURY, NEPTUNE, PLUTO, VENUS
from kepler_tools.precession import moshier_precession

_NO_HARMONICS = (0,) * 19
CERES = Orbit.elliptical(
    'Ceres', J2000, 2.7675, 0.0758, 10.5868, 80.3932, 73.5977, 77.372
)


def _angle(a: np.ndarray, b: np.ndarray) -> float:
    cosang = float(a @ b) / (np.linalg.norm(a) * np.linalg.norm(b))
    return math.degrees(math.acos(min(1.0, max(-1.0, cosang))))


@pytest.mark.parametrize('ecc', [0.0, 0.1, 0.5, 0.9, 0.95])
def test_solve_elliptic_satisfies_kepler_equation(ecc: float) -> None:
    """E - e*sin(E) reproduces M."""
    for m in (0.1, 1.0, 2.5, 4.0, 6.0):
        sol = solve_elliptic(m, ecc)
        assert sol.converged
        assert abs(sol.anomaly - ecc * math.sin(sol.anomaly) - m) < 1e-10


def test_solve_parabolic_satisfies_barker() -> None:
    """E**3 + 3*E reproduces W."""
    sol = solve_parabolic(2.0)
    assert sol.converged
    assert sol.anomaly**3 + 3.0 * sol.anomaly == pytest.approx(2.0, abs=1e-9)
    assert solve_parabolic(0.0).anomaly == 0.0


def test_solve_hyperbolic_satisfies_kepler_equation() -> None:
    """e*sinh(E) - E reproduces W."""
    sol = solve_hyperbolic(1.5, 1.5)
    assert sol.converged
    assert 1.5 * math.sinh(sol.anomaly) - sol.anomaly == pytest.approx(1.5, abs=1e-9)


def test_iteration_cap_reports_non_convergence(caplog: pytest.LogCaptureFixture) -> None:
    """Hitting the cap returns converged=False and logs a warning."""
    with caplog.at_level(logging.WARNING, logger='kepler_tools.kepler'):
        sol = solve_elliptic(1.0, 0.5, max_iterations=1)
    assert not sol.converged
    assert sol.iterations == 1
    assert 'did not converge' in caplog.text


def test_iteration_cap_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """KEPLER_MAX_ITERATIONS applies when no cap is passed."""
    monkeypatch.setenv('KEPLER_MAX_ITERATIONS', '2')
    sol = solve_elliptic(1.0, 0.9)
    assert sol.iterations == 2
    assert not sol.converged


def test_earth_distance_at_j2000(caplog: pytest.LogCaptureFixture) -> None:
    """Earth is near perihelion (0.9833 AU); without lunar tables no correction is made."""
    with caplog.at_level(logging.WARNING, logger='kepler_tools.kepler'):
        result = kepler_calc(J2000, EARTH)
    assert np.linalg.norm(result.position) == pytest.approx(0.9833, rel=5e-3)
    assert result.barycenter_corrected is False
    assert result.equinox == J2000
    assert 'barycenter correction skipped' in caplog.text


def test_mercury_distance_at_j2000() -> None:
    """Mercury is near aphelion (0.4665 AU) at J2000."""
    result = kepler_calc(J2000, MERCURY)
    assert result.converged
    assert result.radius == pytest.approx(0.4665, rel=5e-3)
    assert np.linalg.norm(result.position) == pytest.approx(result.radius, rel=1e-12)


@pytest.mark.parametrize(
    ('orbit', 'low', 'high'),
    [(VENUS, 0.718, 0.729), (MARS, 1.381, 1.666), (NEPTUNE, 29.8, 30.4)],
)
def test_tabled_planet_distances(orbit: Orbit, low: float, high: float) -> None:
    """Series radii stay between perihelion and aphelion."""
    assert orbit.regime is OrbitRegime.PERTURBED
    for jd in (J2000, 2415020.0, 2488070.0):
        result = kepler_calc(jd, orbit)
        assert low <= result.radius <= high
        assert np.linalg.norm(result.position) == pytest.approx(result.radius, rel=1e-12)


@pytest.mark.parametrize('orbit', [VENUS, MARS, NEPTUNE])
def test_series_agree_with_elements_at_their_epoch(orbit: Orbit) -> None:
    """Series and osculating elements point the same way at the element epoch.

    The 1987 elements are read as J2000 coordinates, which costs about 0.18
    degrees of precession in longitude.
    """
    jd = orbit.epoch
    tabled = kepler_calc(jd, orbit).position
    two_body = kepler_calc(jd, dataclasses.replace(orbit, table=None)).position
    assert _angle(tabled, two_body) < 0.75


def test_venus_series_and_elements_at_j2000() -> None:
    """Thirteen years from the element epoch Venus still agrees within a degree and a quarter."""
    tabled = kepler_calc(J2000, VENUS).position
    two_body = kepler_calc(J2000, dataclasses.replace(VENUS, table=None)).position
    assert _angle(tabled, two_body) < 1.25


@pytest.mark.parametrize(
    ('orbit', 'lon', 'lat', 'radius', 'radius_tol'),
    [
        (VENUS, 182.6029, 3.2646, 0.720213, 1e-6),
        (MARS, 359.4473, -1.4197, 1.391207, 1e-6),
        (NEPTUNE, 303.9288, 0.2420, 30.12061, 1e-5),
    ],
)
def test_series_ecliptic_coordinates_at_j2000(
    orbit: Orbit, lon: float, lat: float, radius: float, radius_tol: float
) -> None:
    """Heliocentric ecliptic L, B, R from the bundled series match DE-based values."""
    result = kepler_calc(J2000, orbit)
    assert math.degrees(result.longitude) % 360.0 == pytest.approx(lon, abs=2e-4)
    assert math.degrees(result.latitude) == pytest.approx(lat, abs=2e-4)
    assert result.radius == pytest.approx(radius, abs=radius_tol)


def test_mean_longitude_is_consistent_with_perihelion_argument() -> None:
    """Supplying L = w + node + M0 gives the same position and advances L."""
    lon0 = CERES.arg_perihelion + CERES.node + CERES.mean_anomaly
    with_l = dataclasses.replace(CERES, mean_longitude=lon0)
    jd = J2000 + 400.0
    a = kepler_calc(jd, CERES)
    b = kepler_calc(jd, with_l)
    np.testing.assert_allclose(a.position, b.position, atol=1e-12)
    assert a.mean_longitude is None
    dm = 0.9856076686 / (CERES.semi_major_axis * math.sqrt(CERES.semi_major_axis))
    assert b.mean_longitude == pytest.approx((lon0 + dm * 400.0) % 360.0)


def test_elliptical_radius_at_epoch() -> None:
    """r = a(1 - e^2)/(1 + e cos v) at the element epoch."""
    result = kepler_calc(J2000, CERES)
    a, e = CERES.semi_major_axis, CERES.eccentricity
    assert a * (1.0 - e) <= result.radius <= a * (1.0 + e)


def test_parabolic_and_hyperbolic_at_perihelion() -> None:
    """At perihelion passage the radius is the perihelion distance."""
    para = Orbit.parabolic('C/Para', 2455000.5, 0.8, 40.0, 120.0, 30.0)
    hyper = Orbit.hyperbolic('C/Hyper', 2455000.5, 1.2, 1.3, 40.0, 120.0, 30.0)
    assert kepler_calc(2455000.5, para).radius == pytest.approx(0.8, rel=1e-12)
    assert kepler_calc(2455000.5, hyper).radius == pytest.approx(1.2, rel=1e-12)
    later = kepler_calc(2455100.5, para)
    assert later.converged
    assert later.radius > 0.8


def test_equinox_of_elements_is_precessed() -> None:
    """Elements referred to B1950 land in the same place once precessed."""
    b1950 = 2433282.423
    result_j2000 = kepler_calc(J2000, CERES)
    moved = dataclasses.replace(CERES, equinox=b1950)
    result_b1950 = kepler_calc(J2000, moved)
    assert _angle(result_j2000.position, result_b1950.position) > 0.5
    assert result_b1950.equinox == J2000


def test_internal_precessor_is_interchangeable() -> None:
    """moshier_precession gives nearly the same answer as the default."""
    moved = dataclasses.replace(CERES, equinox=2446800.5)
    a = kepler_calc(J2000, moved).position
    b = kepler_calc(J2000, moved, precessor=moshier_precession).position
    np.testing.assert_allclose(a, b, atol=5e-6)


def test_static_planets_are_not_precessed() -> None:
    """The static orbits are J2000 coordinates, so no precession is applied."""

    def _refuse(jd1: float, pos: np.ndarray, jd2: float) -> np.ndarray:
        raise AssertionError('precessor called')

    for orbit in (MERCURY, EARTH, JUPITER, PLUTO):
        assert orbit.equinox == J2000
        kepler_calc(J2000, orbit, precessor=_refuse)


def _assert_all_nan(result: KeplerResult) -> None:
    assert np.isnan(result.position).all()
    assert math.isnan(result.radius)


def test_nan_daily_motion_gives_nan() -> None:
    """A NaN daily motion propagates to the output instead of raising."""
    result = kepler_calc(J2000 + 10.0, dataclasses.replace(CERES, daily_motion=math.nan))
    _assert_all_nan(result)
    assert result.converged is False


def test_negative_eccentricity_gives_nan() -> None:
    """e < 0 gives NaN output instead of a math domain error."""
    _assert_all_nan(kepler_calc(J2000 + 10.0, dataclasses.replace(CERES, eccentricity=-2.0)))


def test_zero_semi_major_axis_gives_nan() -> None:
    """a = 0 with the daily motion derived from it gives NaN output."""
    result = kepler_calc(J2000 + 10.0, dataclasses.replace(CERES, semi_major_axis=0.0))
    _assert_all_nan(result)
    assert result.converged is False


def test_perturbed_requires_a_table() -> None:
    """Evaluating the series branch without a table is an error."""
    with pytest.raises(ValueError, match='no perturbation table'):
        kepler._perturbed(J2000, CERES)


def test_earth_barycenter_correction(monkeypatch: pytest.MonkeyPatch) -> None:
    """With lunar tables the Earth moves off the barycenter by a/(EMRAT+1)."""
    moon_distance = 0.00257
    tables = {
        'mlr404': PlanetTable(
            0, _NO_HARMONICS, 0, (0, 0, -1), (0.0,), rad_tbl=(0.0,), distance=moon_distance
        ),
        'mlat404': PlanetTable(0, _NO_HARMONICS, 0, (0, 0, -1), (0.0,)),
    }
    monkeypatch.setattr('kepler_tools.moon.get_table', tables.get)
    corrected = kepler_calc(J2000, EARTH)
    monkeypatch.setattr('kepler_tools.moon.get_table', lambda name: None)
    plain = kepler_calc(J2000, EARTH)

    assert corrected.barycenter_corrected is True
    shift = np.linalg.norm(corrected.position - plain.position)
    assert shift == pytest.approx(moon_distance / (EMRAT + 1.0), rel=1e-9)
    assert shift < 3.2e-5
    assert corrected.radius == pytest.approx(np.linalg.norm(corrected.position))


def test_earth_table_uses_g3plan(monkeypatch: pytest.MonkeyPatch) -> None:
    """A tabled Earth is evaluated with g3plan and body index 3."""
    calls: list[int] = []

    def _g3plan(jd: float, table: PlanetTable, body_index: int) -> tuple[float, float, float]:
        calls.append(body_index)
        return (0.0, 0.0, 1.0)

    monkeypatch.setattr(kepler, 'g3plan', _g3plan)
    monkeypatch.setattr('kepler_tools.moon.get_table', lambda name: None)
    table = PlanetTable(9, _NO_HARMONICS, 0, (0, 0, -1), (0.0,), (0.0,), (0.0,), distance=1.0)
    result = kepler_calc(J2000, dataclasses.replace(EARTH, table=table))
    assert calls == [3]
    np.testing.assert_allclose(result.position, [1.0, 0.0, 0.0], atol=1e-15)
