"""Static major-planet orbits and the coefficient-table registry."""

import dataclasses
import logging

from kepler_tools.orbit import Orbit, PlanetTable
from kepler_tools.planets.load import load_table_file, load_tables, table_from_dict
from kepler_tools.planets.mar404 import MAR404
from kepler_tools.planets.nep404 import NEP404
from kepler_tools.planets.registry import (
    BODY_TABLES,
    get_table,
    register_table,
    table_names,
    unregister_table,
)
from kepler_tools.planets.ven404 import VEN404

logger = logging.getLogger(__name__)

_EPOCH_1987 = 2446800.5  # 1987 Jan 5.0


def _planet(
    name: str,
    epoch: float,
    inclination: float,
    node: float,
    arg_perihelion: float,
    semi_major_axis: float,
    daily_motion: float,
    eccentricity: float,
    mean_anomaly: float,
    magnitude: float,
    semi_diameter: float,
    table: PlanetTable | None = None,
) -> Orbit:
    orbit = Orbit.elliptical(
        name,
        epoch,
        semi_major_axis,
        eccentricity,
        inclination,
        node,
        arg_perihelion,
        mean_anomaly,
        daily_motion=daily_motion,
        magnitude=magnitude,
        semi_diameter=semi_diameter,
    )
    if table is not None:
        orbit = dataclasses.replace(orbit, table=table)
    return orbit


# Osculating elements, referred to the J2000 ecliptic and equinox, and the
# bundled DE404 fits.
MERCURY = _planet(
    'Mercury', _EPOCH_1987, 7.0048, 48.177, 29.074, 0.387098, 4.09236, 0.205628, 198.7199, -0.42, 3.36
)
VENUS = _planet(
    'Venus', _EPOCH_1987, 3.3946, 76.561, 54.889, 0.723329, 1.60214, 0.006757, 9.0369, -4.40, 8.34,
    VEN404,
)
EARTH = _planet(
    'Earth', _EPOCH_1987, 0.0, 0.0, 102.884, 0.999999, 0.985611, 0.016713, 1.1791, -3.86, 0.0
)
MARS = _planet(
    'Mars', _EPOCH_1987, 1.8498, 49.457, 286.343, 1.52371, 0.524023, 0.093472, 53.1893, -1.52, 4.68,
    MAR404,
)
JUPITER = _planet(
    'Jupiter', _EPOCH_1987, 1.3051, 100.358, 275.129, 5.20265, 0.0830948, 0.0481, 344.5086, -9.40, 98.44
)
SATURN = _planet(
    'Saturn', _EPOCH_1987, 2.4858, 113.555, 337.969, 9.5405, 0.033451, 0.052786, 159.6327, -8.88, 82.73
)
URANUS = _planet(
    'Uranus', _EPOCH_1987, 0.7738, 73.994, 98.746, 19.2233, 0.0116943, 0.045682, 84.8516, -7.19, 35.02
)
NEPTUNE = _planet(
    'Neptune', _EPOCH_1987, 1.7697, 131.677, 250.623, 30.1631, 0.00594978, 0.009019, 254.2568, -6.87, 33.50,
    NEP404,
)
PLUTO = _planet(
    'Pluto', 2446640.5, 17.1346, 110.204, 114.21, 39.4633, 0.0039757, 0.248662, 355.0554, -1.0, 2.07
)

_ORBITS: dict[str, Orbit] = {
    o.name.lower(): o
    for o in (MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN, URANUS, NEPTUNE, PLUTO)
}

for _name, _table in (('ven404', VEN404), ('mar404', MAR404), ('nep404', NEP404)):
    register_table(_name, _table)


def planet_names() -> list[str]:
    """Names of the static orbits, Sun outward."""
    return [o.name for o in _ORBITS.values()]


def get_orbit(name: str) -> Orbit | None:
    """Return the static orbit for a major planet (case-insensitive), or None.

    A table registered under the body's DE404 name (e.g. 'jup404') replaces
    whatever the static record carries; bodies with neither fall back to
    their osculating elements.

    Parameters:
        name: Planet name, e.g. 'Mars'.

    Returns:
        Orbit, or None for an unknown name.
    """
    key = name.strip().lower()
    orbit = _ORBITS.get(key)
    if orbit is None:
        logger.debug('No static orbit for %r', name)
        return None
    table = get_table(BODY_TABLES[key])
    if table is not None and table is not orbit.table:
        orbit = dataclasses.replace(orbit, table=table)
    return orbit


__all__ = [
    'BODY_TABLES',
    'EARTH',
    'JUPITER',
    'MAR404',
    'MARS',
    'MERCURY',
    'NEP404',
    'NEPTUNE',
    'PLUTO',
    'SATURN',
    'URANUS',
    'VEN404',
    'VENUS',
    'get_orbit',
    'get_table',
    'load_table_file',
    'load_tables',
    'planet_names',
    'register_table',
    'table_from_dict',
    'table_names',
    'unregister_table',
]
