"""Tests for angle reduction and the four-quadrant arctangent."""

from __future__ import annotations

import math

import pytest

from kepler_tools.angle_utils import atan4, mod360, mod_two_pi, mods3600


@pytest.mark.parametrize(
    ('x', 'y', 'expected'),
    [
        (0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0),
        (-1.0, 0.0, math.pi),
        (0.0, 1.0, 0.5 * math.pi),
        (0.0, -1.0, 1.5 * math.pi),
        (1.0, 1.0, 0.25 * math.pi),
        (-1.0, 1.0, 0.75 * math.pi),
        (-1.0, -1.0, 1.25 * math.pi),
        (1.0, -1.0, 1.75 * math.pi),
    ],
)
def test_atan4_quadrants_and_axes(x: float, y: float, expected: float) -> None:
    """Axes resolve by the fixed table, quadrants land in [0, 2*pi)."""
    assert atan4(x, y) == pytest.approx(expected, abs=1e-15)


def test_atan4_matches_atan2_off_axis() -> None:
    """Away from the axes atan4 is atan2 reduced to [0, 2*pi)."""
    for angle in (0.3, 1.9, 3.5, 5.1):
        assert atan4(math.cos(angle), math.sin(angle)) == pytest.approx(angle, abs=1e-12)


def test_mod360_reduces_full_turns() -> None:
    """Whole turns are removed; 360 itself reduces to 0."""
    assert mod360(725.0) == pytest.approx(5.0)
    assert mod360(-10.0) == pytest.approx(350.0)
    assert mod360(360.0) == 0.0
    assert mod360(0.0) == 0.0


def test_mod360_upper_bound_is_inclusive() -> None:
    """A tiny negative angle wraps up to exactly 360.0."""
    assert mod360(-1e-14) == 360.0


def test_mods3600_range() -> None:
    """Arc seconds reduce to [0, 1296000)."""
    assert mods3600(-1.0) == pytest.approx(1295999.0)
    assert mods3600(1296000.0) == 0.0
    assert mods3600(1296000.0 * 7 + 12.5) == pytest.approx(12.5)


def test_mod_two_pi_range() -> None:
    """Radians reduce to [0, 2*pi)."""
    assert mod_two_pi(2.0 * math.pi) == 0.0
    assert mod_two_pi(-0.5) == pytest.approx(2.0 * math.pi - 0.5)
    assert 0.0 <= mod_two_pi(-1e-18) < 2.0 * math.pi


@pytest.mark.parametrize('value', [math.nan, math.inf, -math.inf])
def test_reductions_return_nan_for_non_finite(value: float) -> None:
    """Non-finite angles reduce to NaN rather than raising."""
    assert math.isnan(mod_two_pi(value))
    assert math.isnan(mod360(value))
    assert math.isnan(mods3600(value))
