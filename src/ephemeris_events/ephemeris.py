"""Apparent ephemeris of a solar system object: light time, aberration, phase, magnitude."""

from __future__ import annotations

import math

import cspyce
import numpy as np

from ephemeris_events.constants import HUGE_VAL, LIGHT_AU_PER_DAY
from ephemeris_events.engine import compute_position_velocity
from ephemeris_events.magnitude import compute_magnitude
from ephemeris_events.objects import Ephemeris, SolarSystemObject
from ephemeris_events.observer import ObserverContext


def phase_angle(position: np.ndarray, direction: np.ndarray) -> float:
    """Return the Sun-object-observer angle (radians).

    Parameters:
        position: Heliocentric position of the object (any unit).
        direction: Unit vector from the observer toward the object.

    Returns:
        Angle between position and direction in [0, pi]; 0 if position has
        zero length (the Sun itself).
    """
    if cspyce.vnorm(position) == 0.0:
        return 0.0
    return float(cspyce.vsep(position, direction))


def illumination(phase: float) -> float:
    """Return the illuminated fraction (0 to 1) of a disk at the given phase angle."""
    return (1.0 + math.cos(phase)) / 2.0


def object_phase_angle(obj: SolarSystemObject) -> float:
    """Phase angle from obj's most recently computed ephemeris."""
    return phase_angle(obj.ephemeris.position, obj.ephemeris.direction)


def object_illumination(obj: SolarSystemObject) -> float:
    """Illuminated fraction from obj's most recently computed ephemeris."""
    return illumination(object_phase_angle(obj))


def compute_ephemeris(obj: SolarSystemObject, context: ObserverContext) -> Ephemeris:
    """Recompute obj's ephemeris in place for the context's time and observer.

    The object's heliocentric state is found once instantaneously, then once
    more antedated by the light time that first state implies (a single
    refinement). The direction is corrected for aberration; phase angle and
    magnitude follow from the refined state.

    Parameters:
        obj: Object whose ephemeris is updated.
        context: Observer time, position, and engine caches.

    Returns:
        obj.ephemeris, for convenience.
    """
    eph = obj.ephemeris
    position, _ = compute_position_velocity(obj, context.jed, 0.0, context.caches)
    if not np.all(np.isfinite(position)):
        # Undefined state (failed propagation): keep the last direction
        eph.position = position
        eph.velocity = np.full(3, HUGE_VAL)
        eph.distance = HUGE_VAL
        eph.magnitude = HUGE_VAL
        return eph
    lt = float(cspyce.vnorm(position - context.obs_pos)) / LIGHT_AU_PER_DAY

    position, velocity = compute_position_velocity(obj, context.jed, lt, context.caches)
    eph.position = position
    eph.velocity = velocity
    offset = position - context.obs_pos
    eph.distance = float(cspyce.vnorm(offset))
    eph.direction = context.add_aberration(np.array(cspyce.vhat(offset), dtype=np.float64))

    beta = phase_angle(eph.position, eph.direction)
    eph.magnitude = compute_magnitude(
        obj, float(cspyce.vnorm(eph.position)), eph.distance, beta
    )
    return eph
