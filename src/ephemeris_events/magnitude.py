"""Visual magnitude models for the Sun, planets, moons, asteroids, comets and satellites.

Major-planet formulas are from Meeus, Astronomical Algorithms (2nd ed.),
chapter 41; the H-G and H-K laws from chapter 33. Distances are in AU
unless noted, phase angles in radians. An infinite result means the
magnitude is undefined.
"""

from __future__ import annotations

import math
from functools import lru_cache

import cspyce
import numpy as np

from ephemeris_events.constants import (
    DEFAULT_MOON_G_MAG,
    DEG_PER_RAD,
    EARTH_ID,
    HALFPI,
    HUGE_VAL,
    JUPITER_ID,
    KM_PER_AU,
    LUNA_G_MAG,
    LUNA_H_MAG,
    LUNA_ID,
    MARS_ID,
    MERCURY_ID,
    NEPTUNE_ID,
    PLUTO_ID,
    SATURN_ID,
    SATURN_POLE_DEC,
    SATURN_POLE_RA,
    SUN_ID,
    URANUS_ID,
    VENUS_ID,
)
from ephemeris_events.objects import Asteroid, Comet, Moon, Planet, Satellite, SolarSystemObject

# Planet ID -> (V(1,0), linear, quadratic, cubic) phase coefficients in degrees
_PLANET_COEFFS: dict[int, tuple[float, float, float, float]] = {
    MERCURY_ID: (-0.42, 0.0380, -0.000273, 0.000002),
    VENUS_ID: (-4.40, 0.0009, 0.000239, -0.00000065),
    EARTH_ID: (-3.86, 0.0, 0.0, 0.0),
    MARS_ID: (-1.52, 0.016, 0.0, 0.0),
    JUPITER_ID: (-9.40, 0.005, 0.0, 0.0),
    SATURN_ID: (-8.88, 0.044, 0.0, 0.0),
    URANUS_ID: (-7.19, 0.0028, 0.0, 0.0),
    NEPTUNE_ID: (-6.87, 0.0, 0.0, 0.0),
    PLUTO_ID: (-1.01, 0.041, 0.0, 0.0),
}


@lru_cache(maxsize=1)
def _saturn_pole() -> np.ndarray:
    return np.array(cspyce.radrec(1.0, SATURN_POLE_RA, SATURN_POLE_DEC), dtype=np.float64)


def saturn_ring_inclination(direction: np.ndarray) -> float:
    """Ring-plane inclination (radians) toward an observer viewing along direction."""
    cos_angle = max(-1.0, min(1.0, float(np.dot(direction, _saturn_pole()))))
    return HALFPI - math.acos(cos_angle)


def planet_magnitude(
    planet_id: int, rad: float, dist: float, phase: float, ring_inclination: float = 0.0
) -> float:
    """Visual magnitude of the Sun or a major planet.

    Parameters:
        planet_id: 0 (Sun) through 9 (Pluto).
        rad: Distance from the Sun (AU); ignored for the Sun.
        dist: Distance from the observer (AU).
        phase: Phase angle (radians).
        ring_inclination: Saturn's ring-plane inclination (radians); ignored
            for other planets.
    """
    if planet_id == SUN_ID:
        return -26.72 + 5.0 * math.log10(dist)
    coeffs = _PLANET_COEFFS.get(planet_id)
    if coeffs is None:
        return HUGE_VAL
    v0, c1, c2, c3 = coeffs
    b = phase * DEG_PER_RAD
    mag = v0 + 5.0 * math.log10(rad * dist) + b * (c1 + b * (c2 + b * c3))
    if planet_id == SATURN_ID:
        rinc = ring_inclination
        mag += -2.60 * abs(rinc) + 1.25 * rinc * rinc
    return mag


def asteroid_magnitude(rad: float, dist: float, phase: float, h: float, g: float) -> float:
    """H-G magnitude of an asteroid (or moon).

    Parameters:
        rad: Distance from the Sun (AU).
        dist: Distance from the observer (AU).
        phase: Phase angle (radians).
        h: Absolute magnitude (1 AU from Sun and observer, zero phase).
        g: Slope parameter.

    Returns:
        Visual magnitude, or infinity if the phase integral is not positive.
    """
    tan_half = math.tan(phase / 2.0)
    phi1 = math.exp(-3.33 * tan_half**0.63)
    phi2 = math.exp(-1.87 * tan_half**1.22)
    integral = (1.0 - g) * phi1 + g * phi2
    if not integral > 0.0:
        return HUGE_VAL
    return h + 5.0 * math.log10(rad * dist) - 2.5 * math.log10(integral)


def comet_magnitude(rad: float, dist: float, h: float, k: float) -> float:
    """H-K magnitude of a comet: h + 5 log10(dist) + 2.5 k log10(rad)."""
    if math.isinf(h) or math.isinf(k):
        return HUGE_VAL
    return h + 5.0 * math.log10(dist) + 2.5 * k * math.log10(rad)


def satellite_magnitude(dist_km: float, phase: float, std_mag: float) -> float:
    """Magnitude of an Earth satellite from its standard magnitude.

    The standard magnitude is referred to 1000 km range and half
    illumination. Undefined (infinite) when phase >= pi.
    """
    if not phase < math.pi:
        return HUGE_VAL
    fraction = (1.0 + math.cos(phase)) / 2.0
    return std_mag - 15.75 + 2.5 * math.log10(dist_km * dist_km / fraction)


def compute_magnitude(obj: SolarSystemObject, rad: float, dist: float, phase: float) -> float:
    """Visual magnitude of obj given its solar distance, observer distance and phase.

    Saturn's ring term uses obj.ephemeris.direction, so that must already be
    the current apparent direction.
    """
    if isinstance(obj, Planet):
        rinc = 0.0
        if obj.planet_id == SATURN_ID:
            rinc = saturn_ring_inclination(obj.ephemeris.direction)
        return planet_magnitude(obj.planet_id, rad, dist, phase, rinc)
    if isinstance(obj, Moon):
        if obj.moon_id == LUNA_ID:
            return asteroid_magnitude(rad, dist, phase, LUNA_H_MAG, LUNA_G_MAG)
        g = DEFAULT_MOON_G_MAG if math.isinf(obj.g_mag) else obj.g_mag
        return asteroid_magnitude(rad, dist, phase, obj.h_mag, g)
    if isinstance(obj, Asteroid):
        return asteroid_magnitude(rad, dist, phase, obj.h_mag, obj.g_mag)
    if isinstance(obj, Comet):
        return comet_magnitude(rad, dist, obj.h_mag, obj.k_mag)
    if isinstance(obj, Satellite):
        return satellite_magnitude(dist * KM_PER_AU, phase, obj.std_mag)
    return HUGE_VAL
