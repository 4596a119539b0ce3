"""Trigonometric series evaluation over packed perturbation tables.

gplan, g3plan, g2plan and g1plan walk the parsed terms of a PlanetTable
and accumulate periodic and polynomial contributions for three, three,
two and one output axes. Multiple-angle sines and cosines are prepared
by sscc in a SeriesWorkspace owned by the caller (one per evaluation), so
concurrent evaluations never share scratch space.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from kepler_tools.angle_utils import mods3600
from kepler_tools.constants import ARG_SLOTS, J2000, MAX_HARMONICS, NARGS, STR
from kepler_tools.mean_elements import MeanArguments, mean_elements
from kepler_tools.orbit import PeriodicTerm, PlanetTable, PolynomialTerm

# Simon et al. (1994) mean-longitude rates (arc seconds per 10000 Julian
# years) and phases (arc seconds) for Mercury..Pluto, used by gplan.
FREQS = (
    53810162868.8982,
    21066413643.3548,
    12959774228.3429,
    6890507749.3988,
    1092566037.7991,
    439960985.5372,
    154248119.3933,
    78655032.0744,
    52272245.1795,
)
PHASES = (
    252.25090552 * 3600.0,
    181.97980085 * 3600.0,
    100.46645683 * 3600.0,
    355.43299958 * 3600.0,
    34.35151874 * 3600.0,
    50.0774443 * 3600.0,
    314.05500511 * 3600.0,
    304.34866548 * 3600.0,
    860492.1546,
)


@dataclass
class SeriesWorkspace:
    """sin(k*angle) and cos(k*angle) by argument slot; column k-1 holds multiple k."""

    ss: np.ndarray = field(default_factory=lambda: np.zeros((ARG_SLOTS, MAX_HARMONICS)))
    cc: np.ndarray = field(default_factory=lambda: np.zeros((ARG_SLOTS, MAX_HARMONICS)))


def sscc(workspace: SeriesWorkspace, slot: int, arg: float, n: int) -> None:
    """Fill row slot with sin and cos of k*arg for k = 1..n.

    sin/cos are evaluated once; multiple 2 uses the double-angle identities
    and higher multiples the angle-addition recurrence. Multiples 1 and 2
    are always filled.

    Parameters:
        workspace: Tables to fill.
        slot: Argument slot (row).
        arg: Base angle in radians.
        n: Highest multiple needed.
    """
    ss = workspace.ss[slot]
    cc = workspace.cc[slot]
    su = math.sin(arg)
    cu = math.cos(arg)
    ss[0] = su
    cc[0] = cu
    sv = 2.0 * su * cu
    cv = cu * cu - su * su
    ss[1] = sv
    cc[1] = cv
    for i in range(2, n):
        s = su * cv + cu * sv
        cv = cu * cv - su * sv
        sv = s
        ss[i] = sv
        cc[i] = cv


def _polynomial(tbl: Sequence[float], offset: int, degree: int, ti: float) -> float:
    """Horner evaluation of degree+1 coefficients starting at offset."""
    cu = tbl[offset]
    for i in range(offset + 1, offset + degree + 1):
        cu = cu * ti + tbl[i]
    return cu


def _amplitudes(tbl: Sequence[float], offset: int, degree: int, ti: float) -> tuple[float, float]:
    """Horner evaluation of interleaved (cosine, sine) amplitude polynomials."""
    cu = tbl[offset]
    su = tbl[offset + 1]
    for i in range(offset + 2, offset + 2 * degree + 2, 2):
        cu = cu * ti + tbl[i]
        su = su * ti + tbl[i + 1]
    return cu, su


def _combined_angle(workspace: SeriesWorkspace, term: PeriodicTerm) -> tuple[float, float]:
    """Cosine and sine of the sum of harmonic * angle over the term's pairs.

    Zero harmonics are skipped; a term with no nonzero harmonic yields (0, 0).
    """
    started = False
    cv = 0.0
    sv = 0.0
    for harmonic, slot in term.harmonics:
        if harmonic == 0:
            continue
        k = abs(harmonic) - 1
        su = float(workspace.ss[slot, k])
        if harmonic < 0:
            su = -su
        cu = float(workspace.cc[slot, k])
        if not started:
            sv = su
            cv = cu
            started = True
        else:
            t = su * cv + cu * sv
            cv = cu * cv - su * sv
            sv = t
    return cv, sv


def _accumulate(
    table: PlanetTable,
    workspace: SeriesWorkspace,
    ti: float,
    axes: Sequence[Sequence[float]],
    *,
    reduce_polynomial_longitude: bool = False,
) -> list[float]:
    """Sum every term of table for each coefficient axis.

    Parameters:
        table: Parsed coefficient table.
        workspace: Prepared multiple-angle tables.
        ti: Time in units of table.timescale from J2000.
        axes: Coefficient sequences to sum (first one is longitude).
        reduce_polynomial_longitude: Reduce polynomial longitude terms
            modulo 1296000 arc seconds.

    Returns:
        One accumulated sum per axis.
    """
    sums = [0.0] * len(axes)
    for term in table.terms:
        if isinstance(term, PolynomialTerm):
            for i, tbl in enumerate(axes):
                value = _polynomial(tbl, term.offset, term.degree, ti)
                if i == 0 and reduce_polynomial_longitude:
                    value = mods3600(value)
                sums[i] += value
            continue
        cv, sv = _combined_angle(workspace, term)
        for i, tbl in enumerate(axes):
            cu, su = _amplitudes(tbl, term.offset, term.degree, ti)
            sums[i] += cu * cv + su * sv
    return sums


def _prepare_from_mean(
    table: PlanetTable,
    mean: MeanArguments,
    nslots: int,
) -> SeriesWorkspace:
    """Workspace filled from mean-element arguments for the first nslots slots."""
    workspace = SeriesWorkspace()
    for i in range(min(nslots, len(table.max_harmonic))):
        j = table.max_harmonic[i]
        if j > 0:
            sscc(workspace, i, float(mean.args[i]), j)
    return workspace


def gplan(jd: float, table: PlanetTable) -> tuple[float, float, float]:
    """Heliocentric ecliptic polar position of a planet from its own table angles.

    Angles are the Simon et al. mean longitudes computed from FREQS and
    PHASES at the table's timescale, not the mean_elements set.

    Parameters:
        jd: Julian date (TT).
        table: Planet coefficient table (max_args <= 9).

    Returns:
        (longitude rad, latitude rad, radius AU), ecliptic and equinox J2000.
    """
    if table.max_args > len(FREQS):
        raise ValueError(f'gplan supports at most {len(FREQS)} arguments, table has {table.max_args}')
    ti = (jd - J2000) / table.timescale
    workspace = SeriesWorkspace()
    for i in range(min(table.max_args, len(table.max_harmonic))):
        j = table.max_harmonic[i]
        if j > 0:
            angle = (mods3600(FREQS[i] * ti) + PHASES[i]) * STR
            sscc(workspace, i, angle, j)
    sl, sb, sr = _accumulate(
        table,
        workspace,
        ti,
        (table.lon_tbl, table.lat_tbl, table.rad_tbl),
        reduce_polynomial_longitude=True,
    )
    return (STR * sl, STR * sb, STR * table.distance * sr + table.distance)


def g3plan(
    jd: float,
    table: PlanetTable,
    body_index: int,
    mean: MeanArguments | None = None,
) -> tuple[float, float, float]:
    """Three-axis series over mean-element arguments (used for Earth).

    Parameters:
        jd: Julian date (TT).
        table: Coefficient table.
        body_index: 1-based slot whose mean longitude is added to the longitude sum.
        mean: Precomputed mean elements at jd; computed when None.

    Returns:
        (longitude rad, latitude rad, radius AU).
    """
    if mean is None:
        mean = mean_elements(jd)
    ti = (jd - J2000) / table.timescale
    workspace = _prepare_from_mean(table, mean, table.max_args)
    sl, sb, sr = _accumulate(table, workspace, ti, (table.lon_tbl, table.lat_tbl, table.rad_tbl))
    t = table.trunclvl
    return (
        float(mean.args[body_index - 1]) + STR * t * sl,
        STR * t * sb,
        table.distance * (1.0 + STR * t * sr),
    )


def g2plan(
    jd: float,
    table: PlanetTable,
    mean: MeanArguments | None = None,
) -> tuple[float, float]:
    """Two-axis series (longitude, radius) over mean-element arguments.

    Parameters:
        jd: Julian date (TT).
        table: Coefficient table with longitude and radius coefficients.
        mean: Precomputed mean elements at jd; computed when None.

    Returns:
        (longitude sum, radius sum) in table units (arc seconds), scaled by trunclvl.
    """
    if mean is None:
        mean = mean_elements(jd)
    ti = (jd - J2000) / table.timescale
    workspace = _prepare_from_mean(table, mean, table.max_args)
    sl, sr = _accumulate(table, workspace, ti, (table.lon_tbl, table.rad_tbl))
    t = table.trunclvl
    return (t * sl, t * sr)


def g1plan(jd: float, table: PlanetTable, mean: MeanArguments | None = None) -> float:
    """One-axis series over all mean-element arguments.

    Parameters:
        jd: Julian date (TT).
        table: Coefficient table (only lon_tbl is read).
        mean: Precomputed mean elements at jd; computed when None.

    Returns:
        Sum in table units (arc seconds), scaled by trunclvl.
    """
    if mean is None:
        mean = mean_elements(jd)
    ti = (jd - J2000) / table.timescale
    workspace = _prepare_from_mean(table, mean, NARGS)
    (sl,) = _accumulate(table, workspace, ti, (table.lon_tbl,))
    return table.trunclvl * sl
