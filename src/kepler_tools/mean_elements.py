"""Mean planetary longitudes and lunar arguments at a Julian date.

Planet longitudes from Simon et al. (1994) with 0.047" removed from the
constant term for the DE403 origin; lunar arguments from the DE404 lunar
theory; free librations from Moshier's aa54e.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from kepler_tools.angle_utils import mods3600
from kepler_tools.constants import ARG_SLOTS, DAYS_PER_JULIAN_CENTURY, J2000, STR

# Argument slot indices
ELONGATION_SLOT = 9  # D
NODE_DISTANCE_SLOT = 10  # F
SUN_ANOMALY_SLOT = 11  # l'
MOON_ANOMALY_SLOT = 12  # l
MOON_LONGITUDE_SLOT = 13  # L


@dataclass
class MeanArguments:
    """Argument angles (radians) by slot, plus the lunar mean longitude in arc seconds.

    Slots 0-7 are Mercury..Neptune, 9-13 the lunar D, F, l', l, L, 14-15 the
    free librations and 17 libration W. Slots 8 and 16 are never assigned
    and stay 0.0. lp_equinox is the lunar mean longitude referred to the
    mean equinox of date, before conversion to radians.
    """

    args: np.ndarray = field(default_factory=lambda: np.zeros(ARG_SLOTS))
    lp_equinox: float = 0.0


def mean_elements(jd: float) -> MeanArguments:
    """Compute mean elements at Julian date jd.

    Parameters:
        jd: Julian date (TT).

    Returns:
        Fresh MeanArguments; nothing is cached between calls.
    """
    out = MeanArguments()
    args = out.args
    t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY
    t2 = t * t

    # Mercury
    x = mods3600(538101628.68898189 * t + 908103.213)
    x += (6.39e-6 * t - 0.0192789) * t2
    args[0] = STR * x

    # Venus
    x = mods3600(210664136.43354821 * t + 655127.236)
    x += (-6.27e-6 * t + 0.0059381) * t2
    args[1] = STR * x

    # Earth
    x = mods3600(129597742.283429 * t + 361679.198)
    x += (-5.23e-6 * t - 0.0204411) * t2
    args[2] = STR * x

    # Mars
    x = mods3600(68905077.493988 * t + 1279558.751)
    x += (-1.043e-5 * t + 0.0094264) * t2
    args[3] = STR * x

    # Jupiter
    x = mods3600(10925660.377991 * t + 123665.42)
    x += ((((-3.4e-10 * t + 5.91e-8) * t + 4.667e-6) * t + 5.706e-5) * t - 0.3060378) * t2
    args[4] = STR * x

    # Saturn
    x = mods3600(4399609.855372 * t + 180278.752)
    x += ((((8.3e-10 * t - 1.452e-7) * t - 1.1484e-5) * t - 1.6618e-4) * t + 0.7561614) * t2
    args[5] = STR * x

    # Uranus
    x = mods3600(1542481.193933 * t + 1130597.971) + (2.156e-5 * t - 0.0175083) * t2
    args[6] = STR * x

    # Neptune
    x = mods3600(786550.320744 * t + 1095655.149) + (-8.95e-6 * t + 0.0021103) * t2
    args[7] = STR * x

    # Mean elongation of the moon, D
    x = mods3600(1602961600.9939659 * t + 1072261.2202445078)
    x += (
        (
            (
                ((-3.207663637426e-13 * t + 2.555243317839e-11) * t + 2.560078201452e-9) * t
                - 3.702060118571e-5
            )
            * t
            + 6.9492746836058421e-3
        )
        * t
        - 6.7352202374457519
    ) * t2
    args[ELONGATION_SLOT] = STR * x

    # Mean distance of the moon from its ascending node, F
    x = mods3600(1739527262.8437717 * t + 335779.5141288474)
    x += (
        (
            (
                ((4.474984866301e-13 * t + 4.189032191814e-11) * t - 2.790392351314e-9) * t
                - 2.165750777942e-6
            )
            * t
            - 7.5311878482337989e-4
        )
        * t
        - 13.117809789650071
    ) * t2
    args[NODE_DISTANCE_SLOT] = STR * x

    # Mean anomaly of the sun, l' (J. Laskar)
    x = mods3600(129596581.0230432 * t + 1287102.7407441526)
    x += (
        (
            (
                (
                    (
                        (((1.62e-20 * t - 1.039e-17) * t - 3.83508e-15) * t + 4.237343e-13) * t
                        + 8.8555011e-11
                    )
                    * t
                    - 4.77258489e-8
                )
                * t
                - 1.1297037031e-5
            )
            * t
            + 8.74737173673247e-5
        )
        * t
        - 0.55281306421783094
    ) * t2
    args[SUN_ANOMALY_SLOT] = STR * x

    # Mean anomaly of the moon, l
    x = mods3600(1717915922.8846793 * t + 485868.17465825332)
    x += (
        (
            (
                ((-1.755312760154e-12 * t + 3.452144225877e-11) * t - 2.506365935364e-8) * t
                - 2.536291235258e-4
            )
            * t
            + 5.2099641302735818e-2
        )
        * t
        + 31.501359071894147
    ) * t2
    args[MOON_ANOMALY_SLOT] = STR * x

    # Mean longitude of the moon, re mean ecliptic and equinox of date, L
    x = mods3600(1732564372.0442266 * t + 785939.8092105242)
    x += (
        (
            (
                ((7.200592540556e-14 * t + 2.235210987108e-10) * t - 1.024222633731e-8) * t
                - 6.073960534117e-5
            )
            * t
            + 6.901724852838049e-3
        )
        * t
        - 5.65504600274714
    ) * t2
    out.lp_equinox = x
    args[MOON_LONGITUDE_SLOT] = STR * x

    # Free librations: longitudinal 2.891725 years, P 24.2 years
    args[14] = STR * mods3600(44817540.9 * t + 806045.7)
    args[15] = STR * mods3600(5364867.87 * t - 391702.8)

    # Libration W, 74.7 years
    args[17] = STR * mods3600(1735730.0 * t)
    return out
