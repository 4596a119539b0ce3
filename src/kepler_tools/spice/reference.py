"""Sun-centred J2000 reference positions from SPICE and their angular separation from kepler_calc."""

from __future__ import annotations

import cspyce
import numpy as np

from kepler_tools.constants import AU_KM, SPICE_TARGETS
from kepler_tools.kepler import kepler_calc
from kepler_tools.planets import get_orbit
from kepler_tools.time_utils import et_from_jd


def _target(body: str) -> str:
    for name, target in SPICE_TARGETS.items():
        if name.lower() == body.strip().lower():
            return target
    raise ValueError(f'no SPICE target for body {body!r}')


def reference_position(body: str, jd: float) -> np.ndarray:
    """Geometric heliocentric J2000 position of body from loaded SPK kernels.

    Parameters:
        body: Major planet name, e.g. 'Mars'.
        jd: Julian date (TDB).

    Returns:
        Position in AU.

    Raises:
        ValueError: If the body has no SPICE target.
    """
    pos, _ = cspyce.spkpos(_target(body), et_from_jd(jd), 'J2000', 'NONE', 'SUN')
    return np.asarray(pos, dtype=np.float64) / AU_KM


def angular_error(body: str, jd: float) -> float:
    """Angle (radians) between kepler_calc and SPICE directions of a major planet.

    Raises:
        ValueError: If the body is not a known major planet.
    """
    orbit = get_orbit(body)
    if orbit is None:
        raise ValueError(f'unknown major planet {body!r}')
    computed = kepler_calc(jd, orbit).position
    return float(cspyce.vsep(computed.tolist(), reference_position(body, jd).tolist()))
