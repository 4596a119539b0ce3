"""Tests for environment-driven configuration."""

from __future__ import annotations

import logging
import os

import pytest

from kepler_tools import config
from kepler_tools.constants import DEFAULT_MAX_ITERATIONS


def test_max_iterations_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variable gives the default cap."""
    monkeypatch.delenv('KEPLER_MAX_ITERATIONS', raising=False)
    assert config.get_max_iterations() == DEFAULT_MAX_ITERATIONS


@pytest.mark.parametrize('raw', ['many', '0', '-3', '2.5'])
def test_max_iterations_invalid(
    raw: str, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Invalid values warn and fall back to the default."""
    monkeypatch.setenv('KEPLER_MAX_ITERATIONS', raw)
    with caplog.at_level(logging.WARNING, logger='kepler_tools.config'):
        assert config.get_max_iterations() == DEFAULT_MAX_ITERATIONS
    assert 'KEPLER_MAX_ITERATIONS' in caplog.text


def test_max_iterations_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """A positive integer is used as is."""
    monkeypatch.setenv('KEPLER_MAX_ITERATIONS', ' 7 ')
    assert config.get_max_iterations() == 7


def test_table_and_leapsecs_paths(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank paths read as None."""
    monkeypatch.setenv('KEPLER_TABLE_PATH', '   ')
    monkeypatch.delenv('JULIAN_LEAPSECS', raising=False)
    assert config.get_table_path() is None
    assert config.get_leapsecs_path() is None
    monkeypatch.setenv('KEPLER_TABLE_PATH', '/data/tables')
    monkeypatch.setenv('JULIAN_LEAPSECS', '/data/naif0012.tls')
    assert config.get_table_path() == '/data/tables'
    assert config.get_leapsecs_path() == '/data/naif0012.tls'


def test_spice_kernels_split_on_pathsep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Kernel list is split on os.pathsep with blanks dropped."""
    monkeypatch.setenv('KEPLER_SPICE_KERNELS', os.pathsep.join(['a.bsp', ' ', 'b.tls ']))
    assert config.get_spice_kernels() == ['a.bsp', 'b.tls']
    monkeypatch.delenv('KEPLER_SPICE_KERNELS')
    assert config.get_spice_kernels() == []


def test_configure_logging_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """KEPLER_TOOLS_LOG overrides the verbose flag."""
    levels: list[int] = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: levels.append(kwargs['level']))
    monkeypatch.delenv('KEPLER_TOOLS_LOG', raising=False)
    config.configure_logging()
    config.configure_logging(verbose=True)
    monkeypatch.setenv('KEPLER_TOOLS_LOG', 'info')
    config.configure_logging(verbose=True)
    assert levels == [logging.WARNING, logging.DEBUG, logging.INFO]
