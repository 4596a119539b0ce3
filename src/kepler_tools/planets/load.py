"""Coefficient-table loading from JSON files (<table>.json, PlanetTable field names as keys)."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

from kepler_tools.config import get_table_path
from kepler_tools.orbit import PlanetTable
from kepler_tools.planets.registry import register_table

logger = logging.getLogger(__name__)

_INT_LIST_FIELDS = ('max_harmonic', 'arg_tbl')
_FLOAT_LIST_FIELDS = ('lon_tbl', 'lat_tbl', 'rad_tbl')
_INT_FIELDS = ('max_args', 'max_power_of_t')
_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(PlanetTable))


def table_from_dict(data: dict[str, object]) -> PlanetTable:
    """Build a PlanetTable from a decoded JSON object.

    Raises:
        ValueError: On unknown or missing keys, wrong value types, or a
            malformed argument stream.
    """
    if not isinstance(data, dict):
        raise ValueError(f'expected a JSON object, got {type(data).__name__}')
    unknown = set(data) - _FIELD_NAMES
    if unknown:
        raise ValueError(f'unknown table keys: {", ".join(sorted(unknown))}')
    kwargs: dict[str, object] = {}
    try:
        for key, value in data.items():
            if key in _INT_LIST_FIELDS or key in _FLOAT_LIST_FIELDS:
                if not isinstance(value, list):
                    raise ValueError(f'{key} must be a list')
                cast = int if key in _INT_LIST_FIELDS else float
                kwargs[key] = tuple(cast(v) for v in value)
            elif key in _INT_FIELDS:
                kwargs[key] = int(value)  # type: ignore[call-overload]
            else:
                kwargs[key] = float(value)  # type: ignore[arg-type]
        table = PlanetTable(**kwargs)  # type: ignore[arg-type]
    except TypeError as e:
        raise ValueError(f'bad or incomplete table: {e}') from None
    _ = table.terms
    return table


def load_table_file(path: str | Path) -> PlanetTable:
    """Read one JSON table file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not a valid table.
    """
    p = Path(path)
    with p.open(encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f'{p.name}: invalid JSON: {e}') from None
    return table_from_dict(data)


def load_tables(path: str | Path | None = None) -> tuple[bool, str | None]:
    """Register every <table>.json file in a directory.

    Parameters:
        path: Directory to scan; defaults to KEPLER_TABLE_PATH.

    Returns:
        (True, None) if at least one table was registered, (False, reason)
        otherwise. Unreadable or malformed files are logged and skipped.
    """
    if path is None:
        path = get_table_path()
        if path is None:
            return (False, 'KEPLER_TABLE_PATH is not set')
    base = Path(path)
    if not base.exists():
        return (False, f'table directory does not exist: {base}')
    if not base.is_dir():
        return (False, f'table path is not a directory: {base}')
    loaded = 0
    for file in sorted(base.glob('*.json')):
        try:
            table = load_table_file(file)
        except (OSError, ValueError) as e:
            logger.warning('Skipping coefficient table %s: %s', file, e)
            continue
        register_table(file.stem, table)
        logger.info('Loaded coefficient table %s from %s', file.stem.lower(), file)
        loaded += 1
    if loaded == 0:
        return (False, f'no valid <table>.json files found under {base}')
    return (True, None)
