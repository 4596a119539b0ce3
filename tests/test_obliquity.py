"""Tests for the mean obliquity of the ecliptic."""

from __future__ import annotations

import math

import numpy as np
import pytest

from kepler_tools.constants import J2000, STR
from kepler_tools.obliquity import ecliptic_to_equatorial, epsiln


def test_epsiln_at_j2000() -> None:
    """Obliquity at J2000 is the constant term, with matching cos and sin."""
    eps, coseps, sineps = epsiln(J2000)
    assert eps == pytest.approx(84381.406173 * STR, abs=1e-9)
    assert eps == pytest.approx(0.4090926, abs=1e-7)
    assert coseps == pytest.approx(math.cos(eps))
    assert sineps == pytest.approx(math.sin(eps))


def test_epsiln_decreases_near_j2000() -> None:
    """Obliquity falls steadily from 3000 BC to AD 7000."""
    dates = J2000 + np.linspace(-5000.0, 5000.0, 201) * 365.25
    values = [epsiln(float(jd)).eps for jd in dates]
    assert all(b < a for a, b in zip(values, values[1:]))


def test_epsiln_rate() -> None:
    """Rate near J2000 is about -46.8 arc seconds per century."""
    rate = (epsiln(J2000 + 36525.0).eps - epsiln(J2000).eps) / STR
    assert rate == pytest.approx(-46.8, abs=0.1)


def test_ecliptic_to_equatorial_rotates_about_x() -> None:
    """The ecliptic pole maps to (0, -sin eps, cos eps)."""
    _, coseps, sineps = epsiln(J2000)
    out = ecliptic_to_equatorial([0.0, 0.0, 1.0], J2000)
    np.testing.assert_allclose(out, [0.0, -sineps, coseps], atol=1e-15)
