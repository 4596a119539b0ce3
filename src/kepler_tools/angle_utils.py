"""Angle reduction helpers and the four-quadrant arctangent used by the Kepler solver."""

from __future__ import annotations

import math

from kepler_tools.constants import ARCSEC_PER_CIRCLE, PI, TPI


def mod_two_pi(x: float) -> float:
    """Reduce an angle in radians to [0, 2*pi); NaN or infinite input gives NaN."""
    if not math.isfinite(x):
        return math.nan
    y = x - math.floor(x / TPI) * TPI
    while y < 0.0:
        y += TPI
    while y >= TPI:
        y -= TPI
    return y


def mod360(x: float) -> float:
    """Reduce an angle in degrees to [0, 360].

    The nearest multiple of 360 is removed first (round half to even), so
    mod360(360.0) is 0.0. The upper bound is still inclusive: a tiny
    negative remainder pushed up by 360 rounds to exactly 360.0, and only
    values strictly above 360 are reduced again.
    """
    if not math.isfinite(x):
        return math.nan
    k = round(x / 360.0)
    y = x - k * 360.0
    while y < 0.0:
        y += 360.0
    while y > 360.0:
        y -= 360.0
    return y


def mods3600(x: float) -> float:
    """Reduce arc seconds to [0, 1296000)."""
    if not math.isfinite(x):
        return math.nan
    return x - ARCSEC_PER_CIRCLE * math.floor(x / ARCSEC_PER_CIRCLE)


def atan4(x: float, y: float) -> float:
    """Four-quadrant arctangent of y/x in [0, 2*pi).

    Not atan2: exact zeros are resolved by a fixed table. With x == 0 the
    result is 1.5*pi for negative y, 0 for y == 0 and 0.5*pi otherwise.
    With y == 0 (and x nonzero) the result is pi for negative x and 0
    otherwise.

    Parameters:
        x: Cosine-like component.
        y: Sine-like component.

    Returns:
        Angle in radians.
    """
    code = 0
    if x < 0.0:
        code = 2
    if y < 0.0:
        code |= 1

    if x == 0.0:
        if code & 1:
            return 1.5 * PI
        if y == 0.0:
            return 0.0
        return 0.5 * PI

    if y == 0.0:
        if code & 2:
            return PI
        return 0.0

    if code == 1:
        w = TPI
    elif code in (2, 3):
        w = PI
    else:
        w = 0.0
    return w + math.atan(y / x)
