"""SPICE reference positions for checking the series (cspyce)."""

from kepler_tools.spice.common import SpiceState, get_state
from kepler_tools.spice.load import load_kernels
from kepler_tools.spice.reference import angular_error, reference_position

__all__ = [
    'SpiceState',
    'angular_error',
    'get_state',
    'load_kernels',
    'reference_position',
]
