"""Element-driven ephemeris front end: position and velocity of one body."""

from __future__ import annotations

import enum
import logging
import math

import numpy as np

from kepler_tools.constants import J2000, VELOCITY_STEP_DAYS
from kepler_tools.kepler import kepler_calc
from kepler_tools.orbit import Orbit
from kepler_tools.planets import get_orbit

logger = logging.getLogger(__name__)


class BodyType(enum.IntEnum):
    """Kind of body an Ephemeris describes."""

    MAJOR_PLANET = 0
    MINOR_PLANET = 1
    COMET = 2


class Ephemeris:
    """Mutable set of orbital elements with a position/velocity query.

    Major planets are looked up by name. Minor planets and comets use the
    elements set on the instance: angles in degrees, distances in AU,
    epoch as a TT Julian date (perihelion passage when e >= 1).

    The semimajor axis and perihelion distance are tracked separately;
    each reads 0.0 until set. For a comet on an elliptical orbit the
    missing one is derived from the other when the position is computed.
    A minor planet uses whichever distance was set last.
    """

    def __init__(self) -> None:
        self._name: str | None = None
        self._body_type: BodyType | None = None
        self.epoch = J2000
        self.inclination = 0.0
        self.node = 0.0
        self.perihelion_argument = 0.0
        self.mean_anomaly = 0.0
        self.daily_motion = 0.0
        self._eccentricity = 0.0
        self._eccentricity_set = False
        self._semi_major_axis = math.nan
        self._perihelion_distance = math.nan
        self._distance = 0.0  # last value set through a, q or 1/a

    @property
    def name(self) -> str:
        """Body name; must be set before use."""
        if self._name is None:
            raise ValueError('name has not been set')
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def body_type(self) -> BodyType:
        if self._body_type is None:
            raise ValueError('body type has not been set')
        return self._body_type

    @body_type.setter
    def body_type(self, value: BodyType | int) -> None:
        self._body_type = BodyType(value)

    @property
    def eccentricity(self) -> float:
        return self._eccentricity

    @eccentricity.setter
    def eccentricity(self, value: float) -> None:
        self._eccentricity = value
        self._eccentricity_set = True

    @property
    def semi_major_axis(self) -> float:
        """Semimajor axis in AU (0.0 while unset)."""
        return 0.0 if math.isnan(self._semi_major_axis) else self._semi_major_axis

    @semi_major_axis.setter
    def semi_major_axis(self, value: float) -> None:
        self._semi_major_axis = value
        self._distance = value

    @property
    def perihelion_distance(self) -> float:
        """Perihelion distance in AU (0.0 while unset)."""
        return 0.0 if math.isnan(self._perihelion_distance) else self._perihelion_distance

    @perihelion_distance.setter
    def perihelion_distance(self, value: float) -> None:
        self._perihelion_distance = value
        self._distance = value

    @property
    def reciprocal_semi_major_axis(self) -> float:
        """1/a in 1/AU, from the last distance set."""
        return 1.0 / self._distance

    @reciprocal_semi_major_axis.setter
    def reciprocal_semi_major_axis(self, value: float) -> None:
        self._distance = 1.0 / value

    def _resolve_comet_distance(self) -> float:
        """Distance for a comet orbit (a when e < 1, q otherwise).

        Raises:
            ValueError: If the distance needed is missing, q is set without
                e, or a semimajor axis is set for an open orbit.
        """
        if self._eccentricity >= 1.0:
            if not math.isnan(self._semi_major_axis):
                raise ValueError(
                    f'eccentricity {self._eccentricity} is not elliptical but a semimajor axis is set'
                )
            if math.isnan(self._perihelion_distance):
                raise ValueError('comet on an open orbit needs a perihelion distance')
            return self._perihelion_distance
        if math.isnan(self._semi_major_axis):
            if math.isnan(self._perihelion_distance):
                raise ValueError('comet needs a semimajor axis or a perihelion distance')
            if not self._eccentricity_set:
                raise ValueError('comet needs an eccentricity to derive the semimajor axis')
            self._semi_major_axis = self._perihelion_distance / (1.0 - self._eccentricity)
            logger.debug('Derived semimajor axis %.9g AU from q', self._semi_major_axis)
        elif math.isnan(self._perihelion_distance) and self._eccentricity_set:
            self._perihelion_distance = self._semi_major_axis * (1.0 - self._eccentricity)
        self._distance = self._semi_major_axis
        return self._semi_major_axis

    def orbit(self) -> Orbit:
        """Orbit record for the current body.

        Raises:
            ValueError: If the body type or name is missing, the planet is
                unknown, or comet elements are inconsistent.
        """
        body_type = self.body_type
        if body_type is BodyType.MAJOR_PLANET:
            orbit = get_orbit(self.name)
            if orbit is None:
                raise ValueError(f'unknown major planet {self.name!r}')
            return orbit

        if body_type is BodyType.COMET:
            distance = self._resolve_comet_distance()
        else:
            distance = self._distance
        ecc = self._eccentricity
        name = self._name or ''
        if ecc == 1.0:
            return Orbit.parabolic(
                name, self.epoch, distance, self.inclination, self.node, self.perihelion_argument
            )
        if ecc > 1.0:
            return Orbit.hyperbolic(
                name, self.epoch, distance, ecc, self.inclination, self.node, self.perihelion_argument
            )
        return Orbit.elliptical(
            name,
            self.epoch,
            distance,
            ecc,
            self.inclination,
            self.node,
            self.perihelion_argument,
            self.mean_anomaly,
            daily_motion=self.daily_motion,
        )

    def position_and_velocity(self, jd: float) -> np.ndarray:
        """Heliocentric J2000 equatorial position (AU) and velocity (AU/day).

        Velocity is the central difference of positions 0.01 day either side.

        Parameters:
            jd: Julian date (TT).

        Returns:
            Array [x, y, z, vx, vy, vz].
        """
        orbit = self.orbit()
        before, here, after = (
            kepler_calc(jd + k * VELOCITY_STEP_DAYS, orbit).position for k in (-1, 0, 1)
        )
        velocity = (after - before) / (2.0 * VELOCITY_STEP_DAYS)
        return np.concatenate([here, velocity])
