"""Time conversion wrappers around rms-julian for Julian dates on the TDB scale."""

from __future__ import annotations

import logging

import julian

from kepler_tools.config import get_leapsecs_path
from kepler_tools.constants import J2000, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load the leap-seconds kernel if not already loaded.

    rms-julian requires a NAIF LSK (e.g. naif0012.tls). If the configured file
    is missing or not an LSK, falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        julian.load_lsk(path)
        _leapsecs_loaded = True
    except (OSError, KeyError, ValueError) as e:
        logger.info(
            'Leap seconds from %s not used (%s); using rms-julian bundled LSK.',
            path,
            e,
        )
        try:
            julian.load_lsk()
        except Exception as fallback_err:
            logger.error(
                'Fallback to rms-julian bundled LSK failed: %s',
                fallback_err,
                exc_info=True,
            )
            raise
        _leapsecs_loaded = True


def et_from_jd(jd: float) -> float:
    """TDB Julian date to SPICE ephemeris time (TDB seconds past J2000)."""
    return (jd - J2000) * SECONDS_PER_DAY


def jd_from_et(et: float) -> float:
    """SPICE ephemeris time to TDB Julian date."""
    return J2000 + et / SECONDS_PER_DAY


def jd_from_tai(tai: float) -> float:
    """Convert TAI seconds to a TDB Julian date.

    Parameters:
        tai: TAI in seconds (rms-julian convention).

    Returns:
        Julian date, TDB (within 2 ms of TT).
    """
    return jd_from_et(float(julian.tdb_from_tai(tai)))


def tai_from_jd(jd: float) -> float:
    """Convert a TDB Julian date to TAI seconds."""
    return float(julian.tai_from_tdb(et_from_jd(jd)))


def jd_from_string(string: str) -> float | None:
    """Parse a UTC date/time string to a TDB Julian date.

    Parameters:
        string: Any form rms-julian parses, e.g. '2000-01-01 12:00:00';
            a trailing 'Z' is dropped.

    Returns:
        Julian date for kepler_calc, or None if the string does not parse.
    """
    _ensure_leapsecs()
    text = string.strip().removesuffix('Z')
    try:
        day, sec = julian.day_sec_from_string(text)[:2]
    except (ValueError, TypeError, LookupError) as e:
        logger.debug('Unparseable date/time %r: %s', string, e)
        return None
    return jd_from_tai(float(julian.tai_from_day_sec(int(day), float(sec))))


def format_jd(jd: float, fmt: str | None = None) -> str:
    """Format a TDB Julian date as a UTC string.

    Parameters:
        jd: Julian date (TDB).
        fmt: Optional rms-julian format string; None = default.

    Returns:
        Formatted UTC string.
    """
    _ensure_leapsecs()
    tai = tai_from_jd(jd)
    if fmt is not None:
        return julian.format_tai(tai, fmt)
    return julian.format_tai(tai)
