"""SPICE kernel loading for the reference cross-check."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import cspyce

from kepler_tools.config import get_spice_kernels
from kepler_tools.spice.common import get_state

logger = logging.getLogger(__name__)


def load_kernels(paths: Iterable[str | Path] | None = None) -> tuple[bool, str | None]:
    """Furnish SPK/LSK kernels once.

    Returns (True, None) if at least one kernel is loaded (now or by an
    earlier call), (False, reason) otherwise.

    paths: kernel files; defaults to KEPLER_SPICE_KERNELS.
    """
    state = get_state()
    kernel_paths = [Path(p) for p in (get_spice_kernels() if paths is None else paths)]
    if not kernel_paths:
        if state.loaded:
            return (True, None)
        return (False, 'no SPICE kernels configured (set KEPLER_SPICE_KERNELS)')
    for kpath in kernel_paths:
        if str(kpath) in state.kernels:
            continue
        if not kpath.is_file():
            logger.warning('SPICE kernel not found: %s', kpath)
            continue
        try:
            cspyce.furnsh(str(kpath))
        except Exception as e:
            logger.warning('Failed to load %s: %s', kpath, e)
            continue
        state.kernels.append(str(kpath))
        logger.info('Loaded SPICE kernel %s', kpath)
    if not state.kernels:
        names = ', '.join(str(p) for p in kernel_paths)
        return (False, f'none of the SPICE kernels could be loaded: {names}')
    state.loaded = True
    return (True, None)
