"""Tests for SPICE kernel loading and reference positions."""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
import pytest

from kepler_tools.constants import AU_KM, J2000
from kepler_tools.kepler import kepler_calc
from kepler_tools.planets import get_orbit
from kepler_tools.spice import angular_error, get_state, load_kernels, reference_position


@pytest.fixture(autouse=True)
def _reset_state() -> None:
    get_state().reset()


def test_load_kernels_furnishes_each_file_once(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Kernels are furnished once and recorded in the shared state."""
    spk = tmp_path / 'de440s.bsp'
    spk.touch()
    furnished: list[str] = []
    monkeypatch.setattr('cspyce.furnsh', furnished.append)

    assert load_kernels([spk]) == (True, None)
    assert load_kernels([spk]) == (True, None)

    assert furnished == [str(spk)]
    state = get_state()
    assert state.loaded is True
    assert state.kernels == [str(spk)]


def test_load_kernels_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """With no argument KEPLER_SPICE_KERNELS is used; missing files are skipped."""
    spk = tmp_path / 'planets.bsp'
    spk.touch()
    monkeypatch.setenv('KEPLER_SPICE_KERNELS', os.pathsep.join([str(tmp_path / 'gone.bsp'), str(spk)]))
    monkeypatch.setattr('cspyce.furnsh', lambda path: None)
    assert load_kernels() == (True, None)
    assert get_state().kernels == [str(spk)]


def test_load_kernels_failures(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """No configured or loadable kernels report a reason."""
    monkeypatch.delenv('KEPLER_SPICE_KERNELS', raising=False)
    ok, reason = load_kernels()
    assert ok is False
    assert reason is not None and 'KEPLER_SPICE_KERNELS' in reason

    bad = tmp_path / 'bad.bsp'
    bad.touch()

    def _furnsh(path: str) -> None:
        raise RuntimeError('SPICE(BADFILE)')

    monkeypatch.setattr('cspyce.furnsh', _furnsh)
    ok, reason = load_kernels([bad])
    assert ok is False
    assert reason is not None and 'bad.bsp' in reason


def test_reference_position_converts_to_au(monkeypatch: pytest.MonkeyPatch) -> None:
    """spkpos is asked for the Sun-centred geometric J2000 position."""
    calls: list[tuple[object, ...]] = []

    def _spkpos(
        target: str, et: float, ref: str, abcorr: str, obs: str
    ) -> tuple[list[float], float]:
        calls.append((target, et, ref, abcorr, obs))
        return ([AU_KM, -2.0 * AU_KM, 0.5 * AU_KM], 0.0)

    monkeypatch.setattr('cspyce.spkpos', _spkpos)
    pos = reference_position('mars', J2000 + 1.0)
    np.testing.assert_allclose(pos, [1.0, -2.0, 0.5])
    assert calls == [('MARS BARYCENTER', 86400.0, 'J2000', 'NONE', 'SUN')]


def test_reference_position_unknown_body() -> None:
    """Bodies without a SPICE target are rejected."""
    with pytest.raises(ValueError):
        reference_position('Vulcan', J2000)


def test_angular_error_is_zero_for_matching_reference(monkeypatch: pytest.MonkeyPatch) -> None:
    """A reference equal to kepler_calc gives zero separation."""
    venus = get_orbit('Venus')
    assert venus is not None
    expected = kepler_calc(J2000, venus).position

    monkeypatch.setattr(
        'cspyce.spkpos', lambda *args: ((expected * AU_KM).tolist(), 0.0)
    )
    assert angular_error('Venus', J2000) == pytest.approx(0.0, abs=1e-9)
