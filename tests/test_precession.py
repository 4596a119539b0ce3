"""Tests for precession to and from J2000."""

from __future__ import annotations

import numpy as np
import pytest

from kepler_tools.constants import J2000
from kepler_tools.precession import moshier_precession, novas_precession, precess

JD_1900 = J2000 - 36525.0
JD_2150 = J2000 + 1.5 * 36525.0


def test_precess_round_trip() -> None:
    """Forward then backward precession restores the vector."""
    v = np.array([0.3, -0.8, 0.52])
    for jd in (JD_1900, JD_2150, 2000000.5):
        out = precess(precess(v, jd, 1), jd, -1)
        np.testing.assert_allclose(out, v, atol=1e-9)


def test_precess_at_j2000_is_a_copy() -> None:
    """Epoch exactly J2000 leaves the vector unrotated, in a new array."""
    v = np.array([1.0, 2.0, 3.0])
    out = precess(v, J2000, 1)
    np.testing.assert_array_equal(out, v)
    assert out is not v


def test_precess_preserves_length_and_moves_vector() -> None:
    """A century of precession rotates by about 1.4 degrees."""
    v = np.array([1.0, 0.0, 0.0])
    out = precess(v, JD_1900, 1)
    assert np.linalg.norm(out) == pytest.approx(1.0, abs=1e-14)
    angle = np.degrees(np.arccos(np.clip(out @ v, -1.0, 1.0)))
    assert 1.2 < angle < 1.5


def test_novas_identity_at_j2000() -> None:
    """Both epochs at J2000 is the identity."""
    v = np.array([0.1, 0.2, 0.3])
    np.testing.assert_allclose(novas_precession(J2000, v, J2000), v, atol=1e-15)


def test_novas_requires_j2000() -> None:
    """Neither epoch at J2000 is rejected."""
    with pytest.raises(ValueError):
        novas_precession(JD_1900, [1.0, 0.0, 0.0], JD_2150)


def test_novas_round_trip() -> None:
    """To J2000 and back restores the vector."""
    v = np.array([0.6, 0.0, -0.8])
    there = novas_precession(JD_2150, v, J2000)
    np.testing.assert_allclose(novas_precession(J2000, there, JD_2150), v, atol=1e-12)


def test_models_agree() -> None:
    """Moshier and IAU 2006 precession agree to well under an arc second."""
    v = np.array([0.267, 0.891, -0.367])
    a = moshier_precession(JD_1900, v, J2000)
    b = novas_precession(JD_1900, v, J2000)
    np.testing.assert_allclose(a, b, atol=2e-6)


def test_moshier_precession_between_two_dates() -> None:
    """moshier_precession passes through J2000 when neither epoch is J2000."""
    v = np.array([0.0, 0.6, 0.8])
    direct = moshier_precession(JD_1900, v, JD_2150)
    via = precess(precess(v, JD_1900, 1), JD_2150, -1)
    np.testing.assert_allclose(direct, via, atol=1e-15)
