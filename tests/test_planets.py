"""Tests for static orbits, the table registry and JSON table loading."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from kepler_tools.constants import J2000
from kepler_tools.orbit import OrbitRegime, PlanetTable
from kepler_tools.planets import (
    MAR404,
    NEP404,
    VEN404,
    get_orbit,
    get_table,
    load_table_file,
    load_tables,
    planet_names,
    register_table,
    table_names,
    unregister_table,
)

_SMALL_TABLE = {
    'max_args': 9,
    'max_harmonic': [1, 0, 0, 0, 0, 0, 0, 0, 0],
    'max_power_of_t': 1,
    'arg_tbl': [0, 1, 1, 1, 1, 0, -1],
    'lon_tbl': [1.0, 2.0, 3.0, 4.0],
    'lat_tbl': [0.0, 0.0, 0.0, 0.0],
    'rad_tbl': [0.0, 0.0, 0.0, 0.0],
    'distance': 5.2,
}


@pytest.fixture
def cleanup_tables() -> Iterator[list[str]]:
    """Unregister tables a test adds."""
    added: list[str] = []
    yield added
    for name in added:
        unregister_table(name)


@pytest.mark.parametrize(('table', 'terms'), [(VEN404, 108), (MAR404, None), (NEP404, None)])
def test_bundled_tables_are_consistent(table: PlanetTable, terms: int | None) -> None:
    """Every coefficient array is consumed exactly by the argument stream."""
    assert table.coefficient_count == len(table.lon_tbl)
    assert len(table.lat_tbl) == len(table.lon_tbl)
    assert len(table.rad_tbl) == len(table.lon_tbl)
    assert table.arg_tbl[-1] < 0
    if terms is not None:
        assert len(table.terms) == terms


def test_bundled_tables_are_registered() -> None:
    """The three DE404 fits are registered at import."""
    assert {'ven404', 'mar404', 'nep404'} <= set(table_names())
    assert get_table('VEN404') is VEN404


def test_get_orbit_lookup() -> None:
    """Lookup is case-insensitive; unknown names give None."""
    mars = get_orbit('mars')
    assert mars is not None
    assert mars.table is MAR404
    assert mars.regime is OrbitRegime.PERTURBED
    mercury = get_orbit(' MERCURY ')
    assert mercury is not None
    assert mercury.regime is OrbitRegime.ELLIPTICAL
    assert mercury.epoch == 2446800.5
    assert mercury.equinox == J2000
    assert get_orbit('Vulcan') is None
    assert planet_names()[0] == 'Mercury'
    assert planet_names()[-1] == 'Pluto'


def test_registered_table_replaces_elements(cleanup_tables: list[str]) -> None:
    """A table registered under jup404 is used for Jupiter."""
    table = PlanetTable(9, (0,) * 9, 0, (0, 0, -1), (0.0,), (0.0,), (0.0,), distance=5.2)
    register_table('jup404', table)
    cleanup_tables.append('jup404')
    jupiter = get_orbit('Jupiter')
    assert jupiter is not None
    assert jupiter.table is table


def test_register_rejects_malformed_table() -> None:
    """Malformed tables are never registered."""
    bad = PlanetTable(9, (0,) * 9, 0, (0, 0), (0.0,))
    with pytest.raises(ValueError):
        register_table('bad404', bad)
    assert get_table('bad404') is None


def test_load_tables_from_directory(tmp_path: Path, cleanup_tables: list[str]) -> None:
    """Valid JSON tables are registered under their file stem; bad files are skipped."""
    (tmp_path / 'tst404.json').write_text(json.dumps(_SMALL_TABLE), encoding='utf-8')
    (tmp_path / 'broken.json').write_text('{not json', encoding='utf-8')
    extra = {**_SMALL_TABLE, 'color': 'red'}
    (tmp_path / 'extra.json').write_text(json.dumps(extra), encoding='utf-8')
    cleanup_tables.append('tst404')

    ok, reason = load_tables(tmp_path)

    assert ok is True
    assert reason is None
    table = get_table('tst404')
    assert table is not None
    assert table.max_harmonic == (1, 0, 0, 0, 0, 0, 0, 0, 0)
    assert table.lon_tbl == (1.0, 2.0, 3.0, 4.0)
    assert table.distance == 5.2
    assert get_table('broken') is None
    assert get_table('extra') is None


def test_load_tables_uses_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, cleanup_tables: list[str]
) -> None:
    """With no path argument KEPLER_TABLE_PATH is scanned."""
    (tmp_path / 'env404.json').write_text(json.dumps(_SMALL_TABLE), encoding='utf-8')
    cleanup_tables.append('env404')
    monkeypatch.setenv('KEPLER_TABLE_PATH', str(tmp_path))
    assert load_tables() == (True, None)
    assert get_table('env404') is not None


def test_load_tables_failures(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Missing directory, empty directory and unset variable report a reason."""
    ok, reason = load_tables(tmp_path / 'missing')
    assert ok is False
    assert reason is not None and 'does not exist' in reason

    ok, reason = load_tables(tmp_path)
    assert ok is False
    assert reason is not None

    monkeypatch.delenv('KEPLER_TABLE_PATH', raising=False)
    ok, reason = load_tables()
    assert ok is False
    assert reason == 'KEPLER_TABLE_PATH is not set'


def test_load_table_file_rejects_incomplete(tmp_path: Path) -> None:
    """A table without its argument stream is a ValueError."""
    data = {k: v for k, v in _SMALL_TABLE.items() if k != 'arg_tbl'}
    path = tmp_path / 'partial.json'
    path.write_text(json.dumps(data), encoding='utf-8')
    with pytest.raises(ValueError):
        load_table_file(path)
