"""Orbit and coefficient-table records for the Kepler engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING

from kepler_tools.constants import ARG_SLOTS, J2000, MAX_HARMONICS

if TYPE_CHECKING:
    import numpy as np


@dataclass(frozen=True)
class PolynomialTerm:
    """Polynomial in time of the given degree; coefficients start at offset."""

    degree: int
    offset: int


@dataclass(frozen=True)
class PeriodicTerm:
    """Trigonometric term: (harmonic, slot) pairs and amplitude polynomial degree.

    Slots are zero-based argument indices. A negative harmonic combines the
    angle clockwise. Amplitudes are interleaved (cosine, sine) pairs starting
    at offset.
    """

    harmonics: tuple[tuple[int, int], ...]
    degree: int
    offset: int


SeriesTerm = PolynomialTerm | PeriodicTerm


@dataclass(frozen=True)
class PlanetTable:
    """Packed trigonometric series for one body (Moshier plantbl layout).

    arg_tbl is a flat integer stream. Each term starts with the number of
    periodic arguments np: 0 marks a polynomial term followed by its degree;
    np > 0 is followed by np (harmonic, 1-based slot) pairs and then the
    amplitude degree; a negative np ends the table. lon_tbl, lat_tbl and
    rad_tbl hold the coefficients consumed in the same order.
    """

    max_args: int
    max_harmonic: tuple[int, ...]
    max_power_of_t: int
    arg_tbl: tuple[int, ...]
    lon_tbl: tuple[float, ...]
    lat_tbl: tuple[float, ...] = ()
    rad_tbl: tuple[float, ...] = ()
    distance: float = 0.0
    timescale: float = 3652500.0
    trunclvl: float = 1.0

    @cached_property
    def terms(self) -> tuple[SeriesTerm, ...]:
        """Parsed term list (computed once, bounds-checked)."""
        return parse_arg_table(self)

    @cached_property
    def coefficient_count(self) -> int:
        """Number of coefficients each series axis consumes."""
        if not self.terms:
            return 0
        last = self.terms[-1]
        if isinstance(last, PolynomialTerm):
            return last.offset + last.degree + 1
        return last.offset + 2 * (last.degree + 1)


def parse_arg_table(table: PlanetTable) -> tuple[SeriesTerm, ...]:
    """Decode the flat argument stream of a table into term records.

    Parameters:
        table: Coefficient table.

    Returns:
        Tuple of PolynomialTerm / PeriodicTerm in table order.

    Raises:
        ValueError: If the stream has no end marker, refers to a slot or
            harmonic outside the series workspace, or the longitude
            coefficients run short.
    """
    if len(table.max_harmonic) > ARG_SLOTS:
        raise ValueError(f'max_harmonic has {len(table.max_harmonic)} slots; limit is {ARG_SLOTS}')
    if len(table.max_harmonic) < table.max_args:
        raise ValueError(
            f'max_harmonic has {len(table.max_harmonic)} slots; table uses {table.max_args} arguments'
        )
    if any(h < 0 or h > MAX_HARMONICS for h in table.max_harmonic):
        raise ValueError(f'max_harmonic values must be within 0..{MAX_HARMONICS}')
    stream = table.arg_tbl
    terms: list[SeriesTerm] = []
    p = 0
    offset = 0
    try:
        while True:
            np_args = stream[p]
            p += 1
            if np_args < 0:
                break
            if np_args == 0:
                degree = stream[p]
                p += 1
                terms.append(PolynomialTerm(degree=degree, offset=offset))
                offset += degree + 1
                continue
            pairs: list[tuple[int, int]] = []
            for _ in range(np_args):
                harmonic = stream[p]
                slot = stream[p + 1] - 1
                p += 2
                if harmonic != 0:
                    if not 0 <= slot < ARG_SLOTS:
                        raise ValueError(f'argument slot {slot + 1} out of range at index {p - 1}')
                    if abs(harmonic) > MAX_HARMONICS:
                        raise ValueError(f'harmonic {harmonic} out of range at index {p - 2}')
                pairs.append((harmonic, slot))
            degree = stream[p]
            p += 1
            terms.append(PeriodicTerm(harmonics=tuple(pairs), degree=degree, offset=offset))
            offset += 2 * (degree + 1)
    except IndexError:
        raise ValueError(f'argument table ends without a terminator after {p} entries') from None
    if offset > len(table.lon_tbl):
        raise ValueError(f'longitude table has {len(table.lon_tbl)} coefficients; terms need {offset}')
    return tuple(terms)


class OrbitRegime(enum.Enum):
    """How kepler_calc positions a body."""

    PERTURBED = 'perturbed'
    ELLIPTICAL = 'elliptical'
    PARABOLIC = 'parabolic'
    HYPERBOLIC = 'hyperbolic'


@dataclass(frozen=True)
class Orbit:
    """Osculating elements of one body, or a link to its perturbation table.

    Angles are in degrees, distances in AU, daily motion in degrees per day.
    For e < 1, epoch is the epoch of the elements and semi_major_axis is
    used. For e >= 1, epoch is the perihelion-passage date and
    perihelion_distance is used. Prefer the elliptical(), parabolic(),
    hyperbolic() and from_table() constructors, which fill the right fields.
    """

    name: str = ''
    epoch: float = 0.0
    inclination: float = 0.0
    node: float = 0.0
    arg_perihelion: float = 0.0
    semi_major_axis: float = 0.0
    perihelion_distance: float = 0.0
    daily_motion: float = 0.0  # 0 => Kepler's third law
    eccentricity: float = 0.0
    mean_anomaly: float = 0.0
    equinox: float = J2000
    magnitude: float = 0.0
    semi_diameter: float = 0.0  # arc seconds at 1 AU
    table: PlanetTable | None = field(default=None, repr=False)
    mean_longitude: float = 0.0  # 0 => not supplied

    @classmethod
    def elliptical(
        cls,
        name: str,
        epoch: float,
        semi_major_axis: float,
        eccentricity: float,
        inclination: float,
        node: float,
        arg_perihelion: float,
        mean_anomaly: float,
        *,
        daily_motion: float = 0.0,
        mean_longitude: float = 0.0,
        equinox: float = J2000,
        magnitude: float = 0.0,
        semi_diameter: float = 0.0,
    ) -> Orbit:
        """Elliptical orbit (0 <= e < 1) from elements at epoch."""
        return cls(
            name=name,
            epoch=epoch,
            inclination=inclination,
            node=node,
            arg_perihelion=arg_perihelion,
            semi_major_axis=semi_major_axis,
            perihelion_distance=semi_major_axis * (1.0 - eccentricity),
            daily_motion=daily_motion,
            eccentricity=eccentricity,
            mean_anomaly=mean_anomaly,
            equinox=equinox,
            magnitude=magnitude,
            semi_diameter=semi_diameter,
            mean_longitude=mean_longitude,
        )

    @classmethod
    def parabolic(
        cls,
        name: str,
        perihelion_time: float,
        perihelion_distance: float,
        inclination: float,
        node: float,
        arg_perihelion: float,
        *,
        equinox: float = J2000,
        magnitude: float = 0.0,
    ) -> Orbit:
        """Parabolic orbit (e == 1) from perihelion passage and distance."""
        return cls(
            name=name,
            epoch=perihelion_time,
            inclination=inclination,
            node=node,
            arg_perihelion=arg_perihelion,
            perihelion_distance=perihelion_distance,
            eccentricity=1.0,
            equinox=equinox,
            magnitude=magnitude,
        )

    @classmethod
    def hyperbolic(
        cls,
        name: str,
        perihelion_time: float,
        perihelion_distance: float,
        eccentricity: float,
        inclination: float,
        node: float,
        arg_perihelion: float,
        *,
        equinox: float = J2000,
        magnitude: float = 0.0,
    ) -> Orbit:
        """Hyperbolic orbit (e > 1) from perihelion passage and distance."""
        return cls(
            name=name,
            epoch=perihelion_time,
            inclination=inclination,
            node=node,
            arg_perihelion=arg_perihelion,
            perihelion_distance=perihelion_distance,
            eccentricity=eccentricity,
            equinox=equinox,
            magnitude=magnitude,
        )

    @classmethod
    def from_table(
        cls,
        name: str,
        table: PlanetTable,
        *,
        magnitude: float = 0.0,
        semi_diameter: float = 0.0,
    ) -> Orbit:
        """Body positioned entirely by its perturbation series."""
        return cls(name=name, table=table, magnitude=magnitude, semi_diameter=semi_diameter)

    @property
    def regime(self) -> OrbitRegime:
        """Branch kepler_calc takes for this orbit."""
        if self.table is not None:
            return OrbitRegime.PERTURBED
        if self.eccentricity == 1.0:
            return OrbitRegime.PARABOLIC
        if self.eccentricity > 1.0:
            return OrbitRegime.HYPERBOLIC
        return OrbitRegime.ELLIPTICAL


@dataclass(frozen=True)
class KeplerResult:
    """Output of kepler_calc.

    position is heliocentric equatorial rectangular (AU) referred to J2000.
    longitude/latitude (radians) and radius (AU) are the heliocentric
    ecliptic polar coordinates before the equatorial rotation; for Earth
    with the barycenter correction applied, radius is the corrected
    Sun-Earth distance. mean_longitude (degrees) is set only when the orbit
    supplied one.
    """

    position: np.ndarray
    longitude: float
    latitude: float
    radius: float
    equinox: float = J2000
    mean_longitude: float | None = None
    converged: bool = True
    barycenter_corrected: bool = False
