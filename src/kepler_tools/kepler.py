"""Heliocentric positions from orbital elements or perturbation series.

kepler_calc is the central routine. Tabled bodies are positioned by the
DE404 series (g3plan for Earth, gplan otherwise); all others by solving
Kepler's equation in the elliptical, parabolic (Barker) or hyperbolic
form. Both branches end in ecliptic polar coordinates that are rotated to
the equator of the elements' equinox, precessed to J2000.0 and, for Earth,
shifted from the Earth-Moon barycenter to the geocenter.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from kepler_tools.angle_utils import atan4, mod360, mod_two_pi
from kepler_tools.config import get_max_iterations
from kepler_tools.constants import (
    DAILY_MOTION_1AU,
    DTR,
    EARTH_NAME,
    GAUSS_K,
    J2000,
    KEPLER_TOLERANCE,
    PARABOLIC_MOTION,
)
from kepler_tools.moon import embofs
from kepler_tools.obliquity import ecliptic_to_equatorial
from kepler_tools.orbit import KeplerResult, Orbit, OrbitRegime
from kepler_tools.precession import Precessor, novas_precession
from kepler_tools.series import g3plan, gplan

logger = logging.getLogger(__name__)

EARTH_BODY_INDEX = 3


@dataclass(frozen=True)
class AnomalySolution:
    """Result of one Newton solve.

    anomaly is the eccentric anomaly (elliptical), the hyperbolic anomaly,
    or tan(v/2) for a parabola. residual is the last correction tested
    against the tolerance.
    """

    anomaly: float
    iterations: int
    converged: bool
    residual: float


def _capped(max_iterations: int | None) -> int:
    return get_max_iterations() if max_iterations is None else max(1, max_iterations)


def _not_converged(
    regime: OrbitRegime,
    ecc: float,
    anomaly: float,
    iterations: int,
    residual: float,
) -> AnomalySolution:
    logger.warning(
        '%s Kepler solve did not converge in %d iterations (e=%.9g, residual=%.3g)',
        regime.value,
        iterations,
        ecc,
        residual,
    )
    return AnomalySolution(float(anomaly), iterations, False, float(residual))


def solve_elliptic(mean_anomaly: float, ecc: float, max_iterations: int | None = None) -> AnomalySolution:
    """Solve E - e*sin(E) = M by Newton's method starting from E = M.

    Parameters:
        mean_anomaly: M in radians.
        ecc: Eccentricity, 0 <= e < 1.
        max_iterations: Iteration cap; None reads KEPLER_MAX_ITERATIONS.

    Returns:
        AnomalySolution with the eccentric anomaly in radians. NaN input
        or a zero derivative ends the loop early with converged=False.
    """
    cap = _capped(max_iterations)
    e_anom = mean_anomaly
    residual = math.inf
    with np.errstate(all='ignore'):
        for i in range(1, cap + 1):
            residual = e_anom - ecc * np.sin(e_anom) - mean_anomaly
            e_anom -= residual / (1.0 - ecc * np.cos(e_anom))
            if abs(residual) <= KEPLER_TOLERANCE:
                return AnomalySolution(float(e_anom), i, True, float(residual))
            if not math.isfinite(e_anom):
                return _not_converged(OrbitRegime.ELLIPTICAL, ecc, e_anom, i, residual)
    return _not_converged(OrbitRegime.ELLIPTICAL, ecc, e_anom, cap, residual)


def solve_parabolic(w: float, max_iterations: int | None = None) -> AnomalySolution:
    """Solve Barker's equation E**3 + 3*E = W for E = tan(v/2).

    Newton's method in fixed-point form from E = 0; the tested quantity is
    the relative change of E.

    Parameters:
        w: 3*k*(t - T)/(sqrt(2)*q**1.5).
        max_iterations: Iteration cap; None reads KEPLER_MAX_ITERATIONS.
    """
    cap = _capped(max_iterations)
    e_anom = 0.0
    residual = math.inf
    with np.errstate(all='ignore'):
        for i in range(1, cap + 1):
            e2 = e_anom * e_anom
            nxt = (2.0 * e_anom * e2 + w) / (3.0 * (1.0 + e2))
            residual = nxt - e_anom
            if nxt != 0.0:
                residual /= nxt
            e_anom = nxt
            if abs(residual) <= KEPLER_TOLERANCE:
                return AnomalySolution(float(e_anom), i, True, float(residual))
            if not math.isfinite(e_anom):
                return _not_converged(OrbitRegime.PARABOLIC, 1.0, e_anom, i, residual)
    return _not_converged(OrbitRegime.PARABOLIC, 1.0, e_anom, cap, residual)


def solve_hyperbolic(w: float, ecc: float, max_iterations: int | None = None) -> AnomalySolution:
    """Solve e*sinh(E) - E = W by Newton's method starting from W/(e - 1).

    Parameters:
        w: Mean anomaly k*(t - T)/a**1.5 in radians.
        ecc: Eccentricity, e > 1.
        max_iterations: Iteration cap; None reads KEPLER_MAX_ITERATIONS.
    """
    cap = _capped(max_iterations)
    residual = math.inf
    with np.errstate(all='ignore'):
        e_anom = np.float64(w) / (ecc - 1.0)
        for i in range(1, cap + 1):
            residual = -e_anom + ecc * np.sinh(e_anom) - w
            e_anom += residual / (1.0 - ecc * np.cosh(e_anom))
            if abs(residual) <= KEPLER_TOLERANCE:
                return AnomalySolution(float(e_anom), i, True, float(residual))
            if not math.isfinite(e_anom):
                return _not_converged(OrbitRegime.HYPERBOLIC, ecc, e_anom, i, residual)
    return _not_converged(OrbitRegime.HYPERBOLIC, ecc, e_anom, cap, residual)


@dataclass(frozen=True)
class _Polar:
    longitude: float
    latitude: float
    radius: float
    equinox: float
    mean_longitude: float | None = None
    converged: bool = True


def _perturbed(jd: float, orbit: Orbit) -> _Polar:
    if orbit.table is None:
        raise ValueError(f'{orbit.name!r} has no perturbation table')
    if _is_earth(orbit):
        logger.debug('%s: g3plan series, body %d', orbit.name, EARTH_BODY_INDEX)
        lon, lat, r = g3plan(jd, orbit.table, EARTH_BODY_INDEX)
    else:
        logger.debug('%s: gplan series', orbit.name)
        lon, lat, r = gplan(jd, orbit.table)
    return _Polar(lon, lat, r, J2000)


def _from_elements(jd: float, orbit: Orbit, max_iterations: int | None) -> _Polar:
    # numpy scalars so that malformed elements (a = 0, e < 0, NaN motion)
    # propagate NaN/inf instead of raising.
    regime = orbit.regime
    ecc = np.float64(orbit.eccentricity)
    mean_longitude = None
    logger.debug('%s: %s two-body solve (e=%g)', orbit.name, regime.value, ecc)

    with np.errstate(all='ignore'):
        if regime is OrbitRegime.PARABOLIC:
            q = np.float64(orbit.perihelion_distance)
            w = PARABOLIC_MOTION * (jd - orbit.epoch) / (q * np.sqrt(q))
            sol = solve_parabolic(w, max_iterations)
            r = q * (1.0 + sol.anomaly * sol.anomaly)
            alat = 2.0 * np.arctan(sol.anomaly) + DTR * orbit.arg_perihelion
        elif regime is OrbitRegime.HYPERBOLIC:
            a = orbit.perihelion_distance / (ecc - 1.0)
            w = GAUSS_K * (jd - orbit.epoch) / (a * np.sqrt(a))
            sol = solve_hyperbolic(w, ecc, max_iterations)
            r = a * (-1.0 + ecc * np.cosh(sol.anomaly))
            v = 2.0 * np.arctan(np.sqrt((ecc + 1.0) / (ecc - 1.0)) * np.tanh(0.5 * sol.anomaly))
            alat = v + DTR * orbit.arg_perihelion
        else:
            a = np.float64(orbit.semi_major_axis)
            dm = orbit.daily_motion
            if dm == 0.0:
                dm = DAILY_MOTION_1AU / (a * np.sqrt(a))
            dt = jd - orbit.epoch
            m = mod_two_pi(DTR * (orbit.mean_anomaly + dm * dt))
            sol = solve_elliptic(m, ecc, max_iterations)
            half_v = np.arctan(np.sqrt((1.0 + ecc) / (1.0 - ecc)) * np.tan(0.5 * sol.anomaly))
            v = mod_two_pi(2.0 * half_v)
            r = a * (1.0 - ecc * ecc) / (1.0 + ecc * np.cos(v))
            if orbit.mean_longitude != 0.0:
                mean_longitude = float(mod360(orbit.mean_longitude + dm * dt))
                # Uses M at jd rather than M0, so alat equals w + v.
                alat = DTR * mean_longitude - m + v - DTR * orbit.node
            else:
                alat = v + DTR * orbit.arg_perihelion

        inc = DTR * orbit.inclination
        sin_alat = np.sin(alat)
        lon = atan4(np.cos(alat), sin_alat * np.cos(inc)) + DTR * orbit.node
        lat = np.arcsin(sin_alat * np.sin(inc))
    return _Polar(float(lon), float(lat), float(r), orbit.equinox, mean_longitude, sol.converged)


def _is_earth(orbit: Orbit) -> bool:
    return orbit.name.strip().lower() == EARTH_NAME.lower()


def kepler_calc(
    jd: float,
    orbit: Orbit,
    precessor: Precessor = novas_precession,
    max_iterations: int | None = None,
) -> KeplerResult:
    """Heliocentric equatorial J2000 position of a body at Julian date jd.

    Parameters:
        jd: Julian date (TT).
        orbit: Elements, or a perturbation table.
        precessor: (from_jd, vector, to_jd) rotation from the equinox of the
            elements to J2000.0; moshier_precession is interchangeable with
            the default.
        max_iterations: Newton cap; None reads KEPLER_MAX_ITERATIONS.

    Returns:
        KeplerResult. Non-convergence is reported in result.converged, not
        raised. Malformed elements give NaN or meaningless output.
    """
    if orbit.regime is OrbitRegime.PERTURBED:
        polar = _perturbed(jd, orbit)
    else:
        polar = _from_elements(jd, orbit, max_iterations)

    cos_b = math.cos(polar.latitude)
    ecliptic = np.array(
        [
            polar.radius * cos_b * math.cos(polar.longitude),
            polar.radius * cos_b * math.sin(polar.longitude),
            polar.radius * math.sin(polar.latitude),
        ],
        dtype=np.float64,
    )
    position = ecliptic_to_equatorial(ecliptic, polar.equinox)
    if polar.equinox != J2000:
        position = np.asarray(precessor(polar.equinox, position, J2000), dtype=np.float64)

    radius = polar.radius
    corrected = False
    if _is_earth(orbit):
        try:
            position, radius = embofs(jd, position)
            corrected = True
        except LookupError as e:
            logger.warning('Earth-Moon barycenter correction skipped: %s', e)

    return KeplerResult(
        position=position,
        longitude=polar.longitude,
        latitude=polar.latitude,
        radius=radius,
        equinox=J2000,
        mean_longitude=polar.mean_longitude,
        converged=polar.converged,
        barycenter_corrected=corrected,
    )
