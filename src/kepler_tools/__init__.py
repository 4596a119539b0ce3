"""Heliocentric planet, comet and asteroid positions from Moshier's DE404 series.

This package provides:
- Kepler solver: positions from osculating elements (elliptical, parabolic, hyperbolic)
- Perturbation series: DE404 trigonometric fits for tabled planets and the Moon
- Reductions: obliquity, precession to J2000.0, Earth-Moon barycenter offset
- Ephemeris front end: position and velocity for major planets, minor planets, comets

Time conversions use rms-julian; cross-checks against JPL kernels use cspyce.
"""

from kepler_tools.ephemeris import BodyType, Ephemeris
from kepler_tools.kepler import kepler_calc
from kepler_tools.orbit import KeplerResult, Orbit, OrbitRegime, PlanetTable

__all__ = [
    'BodyType',
    'Ephemeris',
    'KeplerResult',
    'Orbit',
    'OrbitRegime',
    'PlanetTable',
    'kepler_calc',
]
