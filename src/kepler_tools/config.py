"""Configuration: table path, iteration cap, kernels and logging from environment."""

import logging
import os
import sys

from kepler_tools.constants import DEFAULT_MAX_ITERATIONS

logger = logging.getLogger(__name__)

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def get_table_path() -> str | None:
    """Return directory holding extra coefficient tables (KEPLER_TABLE_PATH).

    Returns:
        Path string, or None when the variable is unset or blank.
    """
    path = os.environ.get('KEPLER_TABLE_PATH', '').strip()
    return path or None


def get_max_iterations() -> int:
    """Return the Newton iteration cap (KEPLER_MAX_ITERATIONS env var or default).

    Returns:
        Positive iteration count. Invalid values log a warning and yield the default.
    """
    raw = os.environ.get('KEPLER_MAX_ITERATIONS', '').strip()
    if not raw:
        return DEFAULT_MAX_ITERATIONS
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            'KEPLER_MAX_ITERATIONS=%r is not an integer; using %d',
            raw,
            DEFAULT_MAX_ITERATIONS,
        )
        return DEFAULT_MAX_ITERATIONS
    if value < 1:
        logger.warning(
            'KEPLER_MAX_ITERATIONS=%d must be at least 1; using %d',
            value,
            DEFAULT_MAX_ITERATIONS,
        )
        return DEFAULT_MAX_ITERATIONS
    return value


def get_spice_kernels() -> list[str]:
    """Return SPICE kernel paths for reference cross-checks (KEPLER_SPICE_KERNELS).

    Returns:
        List of paths split on os.pathsep; empty when unset.
    """
    raw = os.environ.get('KEPLER_SPICE_KERNELS', '')
    return [p.strip() for p in raw.split(os.pathsep) if p.strip()]


def get_leapsecs_path() -> str | None:
    """Return NAIF LSK path for rms-julian (JULIAN_LEAPSECS), or None for the bundled LSK."""
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    return path or None


def configure_logging(verbose: bool = False) -> None:
    """Configure stderr logging (level from verbose flag or KEPLER_TOOLS_LOG).

    Parameters:
        verbose: Use DEBUG level unless KEPLER_TOOLS_LOG names another level.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('KEPLER_TOOLS_LOG', '').upper()
    if env_level in _LOG_LEVELS:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )
