"""SPICE kernel loading for high-precision planetary and lunar positions."""

from __future__ import annotations

import logging
from pathlib import Path

import cspyce

from ephemeris_events.config import get_kernel_names, get_spice_path
from ephemeris_events.spice.common import get_state

logger = logging.getLogger(__name__)


def load_kernels(names: list[str] | None = None) -> tuple[bool, str | None]:
    """Furnish SPK (and optional LSK/PCK) kernels from SPICE_PATH.

    Kernels already furnished are skipped. Missing files and CSPICE load
    errors are logged and skipped; the call succeeds if any kernel is loaded.

    Parameters:
        names: Kernel file names or absolute paths; None uses
            EPHEMERIS_EVENTS_KERNELS (see config.get_kernel_names).

    Returns:
        (True, None) if at least one kernel is loaded, else (False, reason).
    """
    state = get_state()
    base = Path(get_spice_path())
    if names is None:
        names = get_kernel_names()
    if not names:
        return (False, 'No kernel files requested')
    for name in names:
        kpath = Path(name)
        if not kpath.is_absolute():
            kpath = base / name
        if str(kpath) in state.kernels:
            continue
        if not kpath.exists():
            logger.warning('Kernel not found: %s', kpath)
            continue
        try:
            cspyce.furnsh(str(kpath))
        except Exception as e:
            logger.warning('Failed to load %s: %s', kpath, e)
            continue
        logger.debug('Loaded kernel %s', kpath)
        state.kernels.append(str(kpath))
    if not state.kernels:
        return (
            False,
            f'No kernel files from {names} could be loaded under {base}. '
            'Check SPICE_PATH and EPHEMERIS_EVENTS_KERNELS.',
        )
    return (True, None)


def unload_kernels() -> None:
    """Unload every kernel furnished by load_kernels."""
    state = get_state()
    for path in state.kernels:
        try:
            cspyce.unload(path)
        except Exception as e:
            logger.warning('Failed to unload %s: %s', path, e)
    state.reset()
