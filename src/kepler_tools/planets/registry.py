"""Process-wide registry of coefficient tables, keyed by lowercase table name."""

from __future__ import annotations

import logging
import threading

from kepler_tools.orbit import PlanetTable

logger = logging.getLogger(__name__)

# Body name -> DE404 table name
BODY_TABLES: dict[str, str] = {
    'mercury': 'mer404',
    'venus': 'ven404',
    'earth': 'ear404',
    'mars': 'mar404',
    'jupiter': 'jup404',
    'saturn': 'sat404',
    'uranus': 'ura404',
    'neptune': 'nep404',
    'pluto': 'plu404',
}

_tables: dict[str, PlanetTable] = {}
_lock = threading.Lock()


def register_table(name: str, table: PlanetTable) -> None:
    """Register (or replace) a coefficient table under name.

    The argument stream is parsed before the table is stored.

    Raises:
        ValueError: If the table is malformed.
    """
    _ = table.terms
    key = name.strip().lower()
    with _lock:
        replaced = key in _tables
        _tables[key] = table
    if replaced:
        logger.info('Replaced coefficient table %s', key)
    else:
        logger.debug('Registered coefficient table %s (%d terms)', key, len(table.terms))


def unregister_table(name: str) -> bool:
    """Remove a table; return True if one was registered under name."""
    with _lock:
        return _tables.pop(name.strip().lower(), None) is not None


def get_table(name: str) -> PlanetTable | None:
    """Return the table registered under name, or None."""
    with _lock:
        return _tables.get(name.strip().lower())


def table_names() -> list[str]:
    """Sorted names of all registered tables."""
    with _lock:
        return sorted(_tables)
