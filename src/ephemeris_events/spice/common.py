"""Shared state for the SPICE layer (which kernels are furnished)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SpiceState:
    """Kernel pool bookkeeping.

    The CSPICE kernel pool is process-wide, so this record is too. Modified
    by load_kernels and unload_kernels; read by lookup.
    """

    kernels: list[str] = field(default_factory=list)

    @property
    def ephemeris_loaded(self) -> bool:
        """True if at least one kernel is furnished."""
        return bool(self.kernels)

    def reset(self) -> None:
        """Forget all furnished kernels."""
        self.kernels = []


# Module-level singleton mirroring the CSPICE kernel pool.
_state = SpiceState()


def get_state() -> SpiceState:
    """Return the global SpiceState instance."""
    return _state
