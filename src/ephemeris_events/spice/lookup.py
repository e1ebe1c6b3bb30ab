"""Tabulated (SPK) heliocentric states of the major planets and the Moon."""

from __future__ import annotations

import logging

import cspyce
import numpy as np

from ephemeris_events.constants import J2000, KM_PER_AU, NAIF_CODES, NAIF_SUN, SECONDS_PER_DAY
from ephemeris_events.spice.common import get_state

logger = logging.getLogger(__name__)

_AU_PER_DAY_PER_KM_PER_SEC = SECONDS_PER_DAY / KM_PER_AU


def lookup(
    body_id: int, jed: float, want_velocity: bool = True
) -> tuple[np.ndarray, np.ndarray] | None:
    """Heliocentric J2000 position (AU) and velocity (AU/day) from loaded SPK kernels.

    Parameters:
        body_id: Planet ID 0-9 or the Moon (301).
        jed: Julian Ephemeris Date.
        want_velocity: If False, only position is looked up and velocity is zero.

    Returns:
        (position, velocity), or None if no kernel is loaded, the body has no
        NAIF code, or the kernels do not cover jed.
    """
    if not get_state().ephemeris_loaded:
        return None
    naif = NAIF_CODES.get(body_id)
    if naif is None:
        return None
    et = (jed - J2000) * SECONDS_PER_DAY
    try:
        if want_velocity:
            result = cspyce.spkez(naif, et, 'J2000', 'NONE', NAIF_SUN)
        else:
            result = cspyce.spkezp(naif, et, 'J2000', 'NONE', NAIF_SUN)
    except Exception as e:
        logger.debug('SPK lookup failed for body %s at JED %.5f: %s', body_id, jed, e)
        return None
    vec = np.asarray(result[0], dtype=np.float64).flatten()
    pos = vec[:3] / KM_PER_AU
    if want_velocity and len(vec) >= 6:
        vel = vec[3:6] * _AU_PER_DAY_PER_KM_PER_SEC
    else:
        vel = np.zeros(3, dtype=np.float64)
    return (pos, vel)
