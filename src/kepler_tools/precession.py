"""Precession of rectangular equatorial vectors between an epoch and J2000.0.

precess() is Moshier's rotation sequence with Laskar's expansions as
corrected in DE403 (J. G. Williams, Astron. J. 108, 711-724, 1994).
novas_precession() is the IAU 2006 (Capitaine et al. 2003) rotation used
by NOVAS 3.1; kepler_calc uses it by default for the final reduction to
J2000.0. Both accept any epoch inside a multi-millennium span.
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from kepler_tools.constants import DAYS_PER_JULIAN_CENTURY, J2000, STR
from kepler_tools.obliquity import epsiln

# (from_jd, vector, to_jd) -> vector
Precessor = Callable[[float, np.ndarray, float], np.ndarray]

# Arc seconds; highest power of T (thousands of years) first.
_PA_COEFFS = (
    -8.66e-10,
    -4.759e-8,
    2.424e-7,
    1.3095e-5,
    1.7451e-4,
    -1.8055e-3,
    -0.235316,
    0.076,
    110.5414,
    50287.91959,
)

# Radians.
_NODE_COEFFS = (
    6.6402e-16,
    -2.69151e-15,
    -1.547021e-12,
    7.521313e-12,
    1.9e-10,
    -3.54e-9,
    -1.8103e-7,
    1.26e-7,
    7.436169e-5,
    -0.04207794833,
    3.052115282424,
)

# Radians.
_INCL_COEFFS = (
    1.2147e-16,
    7.3759e-17,
    -8.26287e-14,
    2.50341e-13,
    2.4650839e-11,
    -5.4000441e-11,
    1.32115526e-9,
    -6.012e-7,
    -1.62442e-5,
    2.27850649e-3,
    0.0,
)


def _horner(coeffs: tuple[float, ...], t: float) -> float:
    value = coeffs[0]
    for c in coeffs[1:]:
        value = value * t + c
    return value


def precess(r: np.ndarray | list[float], jd: float, direction: int) -> np.ndarray:
    """Precess a rectangular equatorial vector between epoch jd and J2000.0.

    Parameters:
        r: 3-vector.
        jd: Julian date of the other epoch.
        direction: 1 for jd -> J2000, -1 for J2000 -> jd.

    Returns:
        New precessed 3-vector. jd exactly equal to J2000 returns an
        unrotated copy.
    """
    vec = np.array(r[:3], dtype=np.float64)
    if jd == J2000:
        return vec

    t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY

    # Equator of the starting epoch to its ecliptic.
    _, coseps, sineps = epsiln(jd if direction == 1 else J2000)
    x0 = vec[0]
    x1 = coseps * vec[1] + sineps * vec[2]
    x2 = -sineps * vec[1] + coseps * vec[2]

    t /= 10.0  # thousands of years
    # Precession in longitude.
    p_a = _horner(_PA_COEFFS, t) * STR * t
    # Node of the moving ecliptic on the J2000 ecliptic.
    node = _horner(_NODE_COEFFS, t)

    # Rotate about z to the node.
    z = node + p_a if direction == 1 else node
    b = math.cos(z)
    a = math.sin(z)
    x0, x1 = b * x0 + a * x1, -a * x0 + b * x1

    # Rotate about the new x axis by the inclination of the moving ecliptic.
    z = _horner(_INCL_COEFFS, t)
    if direction == 1:
        z = -z
    b = math.cos(z)
    a = math.sin(z)
    x1, x2 = b * x1 + a * x2, -a * x1 + b * x2

    # Rotate about the new z axis back from the node.
    z = -node if direction == 1 else -node - p_a
    b = math.cos(z)
    a = math.sin(z)
    x0, x1 = b * x0 + a * x1, -a * x0 + b * x1

    # Ecliptic to the equator of the final epoch.
    _, coseps, sineps = epsiln(J2000 if direction == 1 else jd)
    return np.array(
        [x0, coseps * x1 - sineps * x2, sineps * x1 + coseps * x2],
        dtype=np.float64,
    )


def moshier_precession(jd1: float, pos1: np.ndarray | list[float], jd2: float) -> np.ndarray:
    """precess() in the (from, vector, to) form of novas_precession.

    Neither epoch has to be J2000.0; the vector passes through J2000.0.
    """
    vec = np.array(pos1[:3], dtype=np.float64)
    if jd1 != J2000:
        vec = precess(vec, jd1, 1)
    if jd2 != J2000:
        vec = precess(vec, jd2, -1)
    return vec


def novas_precession(jd_tdb1: float, pos1: np.ndarray | list[float], jd_tdb2: float) -> np.ndarray:
    """Precess an equatorial vector from jd_tdb1 to jd_tdb2 (IAU 2006).

    One of the two epochs must be J2000.0.

    Parameters:
        jd_tdb1: TDB Julian date of the input equator and equinox.
        pos1: 3-vector.
        jd_tdb2: TDB Julian date of the output equator and equinox.

    Returns:
        New 3-vector.

    Raises:
        ValueError: If neither epoch is J2000.0.
    """
    if jd_tdb1 != J2000 and jd_tdb2 != J2000:
        raise ValueError(f'precession must be to or from J2000.0, got {jd_tdb1} -> {jd_tdb2}')

    t = (jd_tdb1 - J2000) if jd_tdb2 == J2000 else (jd_tdb2 - J2000)
    t /= DAYS_PER_JULIAN_CENTURY

    eps0 = 84381.406
    psia = ((((-9.51e-8 * t + 1.32851e-4) * t - 1.14045e-3) * t - 1.0790069) * t + 5038.481507) * t
    omegaa = (
        (((3.337e-7 * t - 4.67e-7) * t - 7.72503e-3) * t + 0.0512623) * t - 0.025754
    ) * t + eps0
    chia = ((((-5.6e-8 * t + 1.70663e-4) * t - 1.21197e-3) * t - 2.3814292) * t + 10.556403) * t

    eps0 *= STR
    psia *= STR
    omegaa *= STR
    chia *= STR

    sa = math.sin(eps0)
    ca = math.cos(eps0)
    sb = math.sin(-psia)
    cb = math.cos(-psia)
    sc = math.sin(-omegaa)
    cc = math.cos(-omegaa)
    sd = math.sin(chia)
    cd = math.cos(chia)

    xx = cd * cb - sb * sd * cc
    yx = cd * sb * ca + sd * cc * cb * ca - sa * sd * sc
    zx = cd * sb * sa + sd * cc * cb * sa + ca * sd * sc
    xy = -sd * cb - sb * cd * cc
    yy = -sd * sb * ca + cd * cc * cb * ca - sa * cd * sc
    zy = -sd * sb * sa + cd * cc * cb * sa + ca * cd * sc
    xz = sb * sc
    yz = -sc * cb * ca - sa * cc
    zz = -sc * cb * sa + cc * ca

    p = np.asarray(pos1, dtype=np.float64)
    if jd_tdb2 == J2000:
        return np.array(
            [
                xx * p[0] + xy * p[1] + xz * p[2],
                yx * p[0] + yy * p[1] + yz * p[2],
                zx * p[0] + zy * p[1] + zz * p[2],
            ],
            dtype=np.float64,
        )
    return np.array(
        [
            xx * p[0] + yx * p[1] + zx * p[2],
            xy * p[0] + yy * p[1] + zy * p[2],
            xz * p[0] + yz * p[1] + zz * p[2],
        ],
        dtype=np.float64,
    )
