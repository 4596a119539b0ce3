"""Tests for mean planetary and lunar arguments."""

from __future__ import annotations

import numpy as np
import pytest

from kepler_tools.constants import J2000, STR
from kepler_tools.mean_elements import MOON_LONGITUDE_SLOT, mean_elements


def test_mean_elements_is_repeatable() -> None:
    """Two calls at the same date give identical, independent results."""
    a = mean_elements(2460000.5)
    b = mean_elements(2460000.5)
    assert a is not b
    assert a.args is not b.args
    np.testing.assert_array_equal(a.args, b.args)
    assert a.lp_equinox == b.lp_equinox


def test_unassigned_slots_stay_zero() -> None:
    """Slots 8 and 16 are never assigned."""
    args = mean_elements(2440000.5).args
    assert args[8] == 0.0
    assert args[16] == 0.0


def test_values_at_j2000() -> None:
    """At J2000 every argument is its constant term."""
    m = mean_elements(J2000)
    assert m.args[2] == pytest.approx(361679.198 * STR)
    assert m.lp_equinox == pytest.approx(785939.8092105242)
    assert m.args[MOON_LONGITUDE_SLOT] == pytest.approx(STR * m.lp_equinox)
    assert m.args[17] == 0.0


def test_earth_mean_motion() -> None:
    """Earth's mean longitude advances about 0.9856 degrees per day."""
    a = mean_elements(J2000).args[2]
    b = mean_elements(J2000 + 10.0).args[2]
    assert np.degrees(b - a) == pytest.approx(9.856, abs=1e-3)
