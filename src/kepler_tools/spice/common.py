"""Shared state for the SPICE layer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SpiceState:
    """Kernels furnished so far. Modified by load_kernels."""

    loaded: bool = False
    kernels: list[str] = field(default_factory=list)

    def reset(self) -> None:
        """Forget loaded kernels (does not unload them from SPICE)."""
        self.loaded = False
        self.kernels = []


# Module-level singleton
_state = SpiceState()


def get_state() -> SpiceState:
    """Return the global SpiceState instance."""
    return _state
