"""Geocentric Moon from the DE404 lunar series, and the Earth-Moon barycenter offset."""

from __future__ import annotations

import math
from dataclasses import dataclass

import cspyce
import numpy as np

from kepler_tools.constants import ARCSEC_HALF_WRAP, ARCSEC_PER_CIRCLE, EMRAT, STR
from kepler_tools.mean_elements import mean_elements
from kepler_tools.obliquity import epsiln
from kepler_tools.orbit import PlanetTable
from kepler_tools.planets import get_table
from kepler_tools.precession import precess
from kepler_tools.series import g1plan, g2plan

MOON_LON_RAD_TABLE = 'mlr404'
MOON_LAT_TABLE = 'mlat404'


@dataclass(frozen=True)
class LunarPosition:
    """Geocentric Moon: equatorial rectangular (AU, equator of date) and ecliptic polar."""

    rect: np.ndarray
    longitude: float  # radians, ecliptic and equinox of date
    latitude: float  # radians
    distance: float  # AU


def _lunar_tables(
    lon_rad_table: PlanetTable | None,
    lat_table: PlanetTable | None,
) -> tuple[PlanetTable, PlanetTable]:
    """Resolve lunar tables from arguments or the table registry.

    Raises:
        LookupError: If a table is neither supplied nor registered.
    """
    lr = lon_rad_table if lon_rad_table is not None else get_table(MOON_LON_RAD_TABLE)
    if lr is None:
        raise LookupError(f'lunar longitude/radius table {MOON_LON_RAD_TABLE!r} is not registered')
    lat = lat_table if lat_table is not None else get_table(MOON_LAT_TABLE)
    if lat is None:
        raise LookupError(f'lunar latitude table {MOON_LAT_TABLE!r} is not registered')
    return lr, lat


def gmoon(
    jd: float,
    lon_rad_table: PlanetTable | None = None,
    lat_table: PlanetTable | None = None,
) -> LunarPosition:
    """Geocentric position of the Moon at Julian date jd.

    Parameters:
        jd: Julian date (TT).
        lon_rad_table: Longitude/radius series (default: registered 'mlr404').
        lat_table: Latitude series (default: registered 'mlat404').

    Returns:
        LunarPosition referred to the mean ecliptic and equinox of date.

    Raises:
        LookupError: If a lunar table is missing.
    """
    lr, lat_tbl = _lunar_tables(lon_rad_table, lat_table)
    mean = mean_elements(jd)
    sl, sr = g2plan(jd, lr, mean)
    x = sl + mean.lp_equinox
    if x < -ARCSEC_HALF_WRAP:
        x += ARCSEC_PER_CIRCLE
    if x > ARCSEC_HALF_WRAP:
        x -= ARCSEC_PER_CIRCLE
    lon = STR * x
    lat = STR * g1plan(jd, lat_tbl, mean)
    dist = (1.0 + STR * sr) * lr.distance

    # Ecliptic polar to equatorial rectangular.
    _, coseps, sineps = epsiln(jd)
    cos_b = math.cos(lat)
    sin_b = math.sin(lat)
    cos_l = math.cos(lon)
    sin_l = math.sin(lon)
    rect = np.array(
        [
            cos_b * cos_l * dist,
            (coseps * cos_b * sin_l - sineps * sin_b) * dist,
            (sineps * cos_b * sin_l + coseps * sin_b) * dist,
        ],
        dtype=np.float64,
    )
    return LunarPosition(rect=rect, longitude=lon, latitude=lat, distance=dist)


def embofs(
    jd: float,
    ea: np.ndarray | list[float],
    lon_rad_table: PlanetTable | None = None,
    lat_table: PlanetTable | None = None,
) -> tuple[np.ndarray, float]:
    """Shift an Earth-Moon barycenter position to the center of the Earth.

    Parameters:
        jd: Julian date (TT).
        ea: Heliocentric equatorial J2000 rectangular position of the EMB (AU).
        lon_rad_table: Lunar longitude/radius series override.
        lat_table: Lunar latitude series override.

    Returns:
        (Earth position, Sun-Earth distance in AU).

    Raises:
        LookupError: If a lunar table is missing.
    """
    moon = gmoon(jd, lon_rad_table, lat_table)
    pm = precess(moon.rect, jd, 1)
    a = 1.0 / (EMRAT + 1.0)
    earth = np.asarray(ea, dtype=np.float64)[:3] - a * pm
    return earth, float(cspyce.vnorm(earth.tolist()))
