"""Heliocentric position/velocity engine for every solar system object category.

All results are in the fundamental (J2000 equatorial) frame, in AU and
AU/day, evaluated at ``jed - lt``: the Julian Ephemeris Date antedated by
the light time ``lt`` (days). ``lt = 0`` gives the instantaneous position.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable

import cspyce
import numpy as np

from ephemeris_events.constants import (
    EARTH_ID,
    HUGE_VAL,
    KM_PER_AU,
    LUNA_ID,
    NUM_PRIMARIES,
    SECONDS_PER_DAY,
    SUN_ID,
)
from ephemeris_events.frames import ecliptic_matrix, precession_matrix
from ephemeris_events.objects import (
    Asteroid,
    Comet,
    Moon,
    Planet,
    Satellite,
    SolarSystemObject,
)
from ephemeris_events.orbit import Orbit, mean_luna_orbit, mean_planet_orbit
from ephemeris_events.spice.lookup import lookup
from ephemeris_events.time_utils import delta_t_days

logger = logging.getLogger(__name__)

StateVectors = tuple[np.ndarray, np.ndarray]


@dataclass
class PrimaryCache:
    """Heliocentric states of moon primaries, one slot per primary, keyed by jed.

    A slot is refilled whenever it is asked for a different jed, so moons of
    the same primary evaluated at one epoch share a single planet evaluation.
    """

    jeds: list[float] = field(default_factory=lambda: [math.nan] * NUM_PRIMARIES)
    states: list[StateVectors | None] = field(default_factory=lambda: [None] * NUM_PRIMARIES)

    def get(self, primary_id: int, jed: float, compute: Callable[[], StateVectors]) -> StateVectors:
        """Return the cached state of primary_id at jed, computing it on a miss."""
        state = self.states[primary_id]
        if state is None or self.jeds[primary_id] != jed:
            logger.debug('Refilling primary %d state at JED %.6f', primary_id, jed)
            state = compute()
            self.states[primary_id] = state
            self.jeds[primary_id] = jed
        return state

    def invalidate(self) -> None:
        """Empty every slot."""
        self.jeds = [math.nan] * NUM_PRIMARIES
        self.states = [None] * NUM_PRIMARIES


@dataclass
class EarthCache:
    """Earth's heliocentric state plus satellite-frame quantities, keyed by jed.

    Attributes:
        jed: Julian Ephemeris Date of the cached values (NaN when empty).
        position, velocity: Earth's heliocentric state (AU, AU/day).
        delta_t: Ephemeris time minus civil time (days).
        matrix: Rotation from the equator of date to the fundamental frame.
    """

    jed: float = math.nan
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    delta_t: float = 0.0
    matrix: np.ndarray = field(default_factory=lambda: np.eye(3))

    def refresh(self, jed: float) -> EarthCache:
        """Recompute cached values if jed differs from the cached epoch; return self."""
        if jed != self.jed:
            self.position, self.velocity = major_planet_position_velocity(EARTH_ID, jed, 0.0)
            self.delta_t = delta_t_days(jed)
            self.matrix = precession_matrix(jed).T
            self.jed = jed
        return self

    def invalidate(self) -> None:
        self.jed = math.nan


@dataclass
class EngineCaches:
    """Memoization owned by one observer context (never shared between threads)."""

    primaries: PrimaryCache = field(default_factory=PrimaryCache)
    earth: EarthCache = field(default_factory=EarthCache)

    def invalidate(self) -> None:
        """Drop all memoized states."""
        self.primaries.invalidate()
        self.earth.invalidate()


def _ecliptic_to_fundamental(pos: np.ndarray, vel: np.ndarray) -> StateVectors:
    matrix = ecliptic_matrix()
    return (
        np.array(cspyce.mtxv(matrix, pos), dtype=np.float64),
        np.array(cspyce.mtxv(matrix, vel), dtype=np.float64),
    )


def _orbit_position_velocity(orbit: Orbit, jed: float, lt: float) -> StateVectors:
    pos, vel = orbit.to_position_velocity(jed - lt)
    return _ecliptic_to_fundamental(pos, vel)


def major_planet_position_velocity(planet_id: int, jed: float, lt: float) -> StateVectors:
    """Heliocentric state of the Sun or a major planet.

    Uses loaded SPK kernels when they cover the date; otherwise evaluates the
    planet's mean orbital elements (the Sun falls back to the origin).
    """
    result = lookup(planet_id, jed - lt, True)
    if result is not None:
        return result
    if planet_id == SUN_ID:
        return (np.zeros(3, dtype=np.float64), np.zeros(3, dtype=np.float64))
    return _orbit_position_velocity(mean_planet_orbit(planet_id, jed - lt), jed, lt)


def minor_planet_position_velocity(obj: Asteroid | Comet, jed: float, lt: float) -> StateVectors:
    """Heliocentric state of an asteroid or comet from its own orbit."""
    return _orbit_position_velocity(obj.orbit, jed, lt)


def moon_position_velocity(
    moon: Moon, jed: float, lt: float, caches: EngineCaches
) -> StateVectors:
    """Heliocentric state of a natural satellite.

    Earth's Moon comes straight from SPK kernels when available. Otherwise the
    moon's planetocentric orbit is evaluated and the primary's heliocentric
    state (memoized per primary, antedated by velocity times light time) added.

    Raises:
        ValueError: If the moon has no orbit and is not Earth's Moon.
    """
    if moon.moon_id == LUNA_ID:
        result = lookup(LUNA_ID, jed - lt, True)
        if result is not None:
            return result
    orbit = moon.orbit
    if orbit is None:
        if moon.moon_id != LUNA_ID:
            raise ValueError(f'Moon {moon.moon_id} has no orbital elements')
        orbit = mean_luna_orbit(jed - lt)
    pos, vel = _orbit_position_velocity(orbit, jed, lt)
    primary = moon.primary_id
    primary_pos, primary_vel = caches.primaries.get(
        primary, jed, lambda: major_planet_position_velocity(primary, jed, 0.0)
    )
    return (pos + primary_pos - primary_vel * lt, vel + primary_vel)


def satellite_position_velocity(
    sat: Satellite, jed: float, lt: float, caches: EngineCaches
) -> StateVectors:
    """Heliocentric state of an Earth satellite from its TLE.

    SGP4 output (km, km/s, equator of date) is converted to AU and AU/day,
    rotated to the fundamental frame, and added to Earth's memoized state.
    Earth's velocity is taken as constant over the light time. TLE epochs
    are civil time, so delta T is removed before propagating. If SGP4 fails
    the position and velocity are undefined (infinite).
    """
    earth = caches.earth.refresh(jed)
    jd = jed - earth.delta_t - lt
    if not math.isfinite(jd):
        return (np.full(3, HUGE_VAL), np.full(3, HUGE_VAL))
    whole = math.floor(jd)
    err, r, v = sat.tle.sgp4(whole, jd - whole)
    if err != 0:
        logger.warning('SGP4 error %d propagating %s to JD %.5f', err, sat.name, jd)
        return (np.full(3, HUGE_VAL), np.full(3, HUGE_VAL))
    pos = np.asarray(r, dtype=np.float64) / KM_PER_AU
    vel = np.asarray(v, dtype=np.float64) * (SECONDS_PER_DAY / KM_PER_AU)
    pos = earth.matrix @ pos
    vel = earth.matrix @ vel
    return (pos + earth.position - earth.velocity * lt, vel + earth.velocity)


def compute_position_velocity(
    obj: SolarSystemObject, jed: float, lt: float, caches: EngineCaches | None = None
) -> StateVectors:
    """Heliocentric position (AU) and velocity (AU/day) of obj at jed - lt.

    Parameters:
        obj: Any SolarSystemObject variant.
        jed: Julian Ephemeris Date.
        lt: Light time to antedate by (days); 0 for the instantaneous state.
        caches: Memoization for moon primaries and Earth; a fresh, empty
            set is used when None.

    Returns:
        (position, velocity) in the fundamental frame.
    """
    if caches is None:
        caches = EngineCaches()
    if isinstance(obj, Planet):
        return major_planet_position_velocity(obj.planet_id, jed, lt)
    if isinstance(obj, Moon):
        return moon_position_velocity(obj, jed, lt, caches)
    if isinstance(obj, (Asteroid, Comet)):
        return minor_planet_position_velocity(obj, jed, lt)
    if isinstance(obj, Satellite):
        return satellite_position_velocity(obj, jed, lt, caches)
    raise TypeError(f'Not a solar system object: {type(obj).__name__}')
