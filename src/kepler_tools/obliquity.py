"""Mean obliquity of the ecliptic (DE403 fit) and ecliptic/equatorial rotation."""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from kepler_tools.constants import DAYS_PER_JULIAN_MILLENNIUM, J2000, STR

# Arc seconds; highest power of T (Julian millennia) first.
_EPS_COEFFS = (
    2.45e-10,
    5.79e-9,
    2.787e-7,
    7.12e-7,
    -3.905e-5,
    -2.4967e-3,
    -5.138e-3,
    1.9989,
    -0.0175,
    -468.3396,
    84381.406173,
)


class Obliquity(NamedTuple):
    """Obliquity in radians with its cosine and sine."""

    eps: float
    coseps: float
    sineps: float


def epsiln(jd: float) -> Obliquity:
    """Mean obliquity of the ecliptic at Julian date jd.

    Polynomial in T = (jd - J2000) / 365250 (Julian millennia).
    """
    t = (jd - J2000) / DAYS_PER_JULIAN_MILLENNIUM
    eps = _EPS_COEFFS[0]
    for c in _EPS_COEFFS[1:]:
        eps = eps * t + c
    eps *= STR
    return Obliquity(eps, math.cos(eps), math.sin(eps))


def ecliptic_to_equatorial(vec: np.ndarray | list[float], jd: float) -> np.ndarray:
    """Rotate an ecliptic rectangular vector about x into the equator of jd."""
    _, coseps, sineps = epsiln(jd)
    return np.array(
        [
            vec[0],
            coseps * vec[1] - sineps * vec[2],
            sineps * vec[1] + coseps * vec[2],
        ],
        dtype=np.float64,
    )
