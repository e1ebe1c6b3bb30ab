"""Configuration: SPICE kernel paths and log level from environment."""

import os
from pathlib import Path

DEFAULT_SPICE_PATH = '/var/www/SPICE/'
DEFAULT_KERNELS = ('de440s.bsp',)


def get_spice_path() -> str:
    """Return SPICE kernel root directory (SPICE_PATH env var or default).

    Returns:
        Path string.
    """
    return os.environ.get('SPICE_PATH', DEFAULT_SPICE_PATH)


def get_kernel_names() -> list[str]:
    """Return kernel file names to load for tabulated lookup.

    Reads EPHEMERIS_EVENTS_KERNELS as a comma-separated list of file names
    relative to SPICE_PATH; blank entries are ignored.

    Returns:
        List of kernel file names (default: DE440 short-span SPK).
    """
    raw = os.environ.get('EPHEMERIS_EVENTS_KERNELS', '').strip()
    if not raw:
        return list(DEFAULT_KERNELS)
    return [name.strip() for name in raw.split(',') if name.strip()]


def get_log_level() -> str | None:
    """Return log level name from EPHEMERIS_EVENTS_LOG, or None if unset or invalid."""
    level = os.environ.get('EPHEMERIS_EVENTS_LOG', '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file under SPICE_PATH, then
    leapsecs.txt (which rms-julian rejects, triggering its bundled LSK).

    Returns:
        Path string to LSK or leapsecs file.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_spice_path())
    for name in ('naif0012.tls', 'naif0011.tls', 'naif0010.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return str(base / 'leapsecs.txt')
