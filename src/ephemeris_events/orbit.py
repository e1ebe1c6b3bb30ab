"""Keplerian orbits: conic propagation via cspyce and mean planetary elements."""

from __future__ import annotations

import math
from dataclasses import dataclass

import cspyce
import numpy as np

from ephemeris_events.constants import (
    DAYS_PER_CENTURY,
    EARTH_ID,
    J2000,
    JUPITER_ID,
    KM_PER_AU,
    MARS_ID,
    MERCURY_ID,
    NEPTUNE_ID,
    PLUTO_ID,
    RAD_PER_DEG,
    SATURN_ID,
    URANUS_ID,
    VENUS_ID,
)


@dataclass
class Orbit:
    """Osculating conic orbit elements.

    Distances are in AU (or any unit, as long as positions are read back in
    the same unit); angles in radians; times in days.

    Attributes:
        epoch: Julian Ephemeris Date at which the mean anomaly applies.
        q: Periapse distance.
        e: Eccentricity (0 circle, <1 ellipse, 1 parabola, >1 hyperbola).
        i: Inclination.
        w: Argument of periapse.
        node: Longitude of ascending node.
        m: Mean anomaly at epoch.
        mm: Mean motion (radians per day).
    """

    epoch: float
    q: float
    e: float
    i: float
    w: float
    node: float
    m: float
    mm: float

    def gravitational_parameter(self) -> float:
        """Return GM consistent with q, e, and the stored mean motion.

        Uses the same mean-motion definition as cspyce.conics: sqrt(GM / |a|^3)
        for ellipses and hyperbolas, sqrt(GM / (2 q^3)) for parabolas.
        """
        if self.e == 1.0:
            return 2.0 * self.q**3 * self.mm**2
        a = self.q / abs(1.0 - self.e)
        return a**3 * self.mm**2

    def to_position_velocity(self, jed: float) -> tuple[np.ndarray, np.ndarray]:
        """Return position and velocity at Julian Ephemeris Date jed.

        Output is in the orbit's reference frame (J2000 ecliptic for
        heliocentric orbits), in AU and AU/day.
        """
        elts = [
            self.q,
            self.e,
            self.i,
            self.node,
            self.w,
            self.m,
            self.epoch,
            self.gravitational_parameter(),
        ]
        state = np.array(cspyce.conics(elts, jed), dtype=np.float64)
        return (state[:3], state[3:6])


# JPL approximate Keplerian elements (Standish, valid 1800-2050), J2000 ecliptic.
# Per planet: (a, e, I, L, long. perihelion, long. node) and rates per Julian century.
# Earth uses the Earth-Moon barycenter.
_MEAN_ELEMENTS: dict[int, tuple[tuple[float, ...], tuple[float, ...]]] = {
    MERCURY_ID: (
        (0.38709927, 0.20563593, 7.00497902, 252.25032350, 77.45779628, 48.33076593),
        (0.00000037, 0.00001906, -0.00594749, 149472.67411175, 0.16047689, -0.12534081),
    ),
    VENUS_ID: (
        (0.72333566, 0.00677672, 3.39467605, 181.97909950, 131.60246718, 76.67984255),
        (0.00000390, -0.00004107, -0.00078890, 58517.81538729, 0.00268329, -0.27769418),
    ),
    EARTH_ID: (
        (1.00000261, 0.01671123, -0.00001531, 100.46457166, 102.93768193, 0.0),
        (0.00000562, -0.00004392, -0.01294668, 35999.37244981, 0.32327364, 0.0),
    ),
    MARS_ID: (
        (1.52371034, 0.09339410, 1.84969142, -4.55343205, -23.94362959, 49.55953891),
        (0.00001847, 0.00007882, -0.00813131, 19140.30268499, 0.44441088, -0.29257343),
    ),
    JUPITER_ID: (
        (5.20288700, 0.04838624, 1.30439695, 34.39644051, 14.72847983, 100.47390909),
        (-0.00011607, -0.00013253, -0.00183714, 3034.74612775, 0.21252668, 0.20469106),
    ),
    SATURN_ID: (
        (9.53667594, 0.05386179, 2.48599187, 49.95424423, 92.59887831, 113.66242448),
        (-0.00125060, -0.00050991, 0.00193609, 1222.49362201, -0.41897216, -0.28867794),
    ),
    URANUS_ID: (
        (19.18916464, 0.04725744, 0.77263783, 313.23810451, 170.95427630, 74.01692503),
        (-0.00196176, -0.00004397, -0.00242939, 428.48202785, 0.40805281, 0.04240589),
    ),
    NEPTUNE_ID: (
        (30.06992276, 0.00859048, 1.77004347, -55.12002969, 44.96476227, 131.78422574),
        (0.00026291, 0.00005105, 0.00035372, 218.45945325, -0.32241464, -0.00508664),
    ),
    PLUTO_ID: (
        (39.48211675, 0.24882730, 17.14001206, 238.92903833, 224.06891629, 110.30393684),
        (-0.00031596, 0.00005170, 0.00004818, 145.20780515, -0.04062942, -0.01183482),
    ),
}


# Epoch of the simplified lunar elements (2000 January 0.0 TT)
_LUNA_ELEMENTS_EPOCH = 2451543.5


def mean_luna_orbit(jed: float) -> Orbit:
    """Return a low-precision geocentric J2000-ecliptic orbit of Earth's Moon at jed.

    Mean elements of date (Schlyter's simplified lunar theory), with node and
    perigee referred back to the J2000 equinox by general precession. Good to
    a degree or two; periodic perturbations are ignored.
    """
    d = jed - _LUNA_ELEMENTS_EPOCH
    t = (jed - J2000) / DAYS_PER_CENTURY
    precession = 1.396971 * t
    node = 125.1228 - 0.0529538083 * d - precession
    w = 318.0634 + 0.1643573223 * d
    m = 115.3654 + 13.0649929509 * d
    e = 0.054900
    a = 384400.0 / KM_PER_AU
    return Orbit(
        epoch=jed,
        q=a * (1.0 - e),
        e=e,
        i=math.radians(5.1454),
        w=math.radians(w % 360.0),
        node=math.radians(node % 360.0),
        m=math.radians(m % 360.0),
        mm=math.radians(13.0649929509),
    )


def mean_planet_orbit(planet_id: int, jed: float) -> Orbit:
    """Return mean J2000-ecliptic heliocentric orbit of a major planet at jed.

    Parameters:
        planet_id: Planet ID 1 (Mercury) through 9 (Pluto).
        jed: Julian Ephemeris Date; also the epoch of the returned orbit.

    Returns:
        Orbit whose elements are the mean elements at jed.

    Raises:
        ValueError: If planet_id has no mean elements.
    """
    try:
        base, rate = _MEAN_ELEMENTS[planet_id]
    except KeyError:
        raise ValueError(f'No mean orbital elements for planet ID {planet_id}') from None
    t = (jed - J2000) / DAYS_PER_CENTURY
    a, e, inc, mean_lon, peri_lon, node = (b + r * t for b, r in zip(base, rate))
    if inc < 0.0:
        # Same orbit with the node on the other side; conics wants inclination >= 0
        inc = -inc
        node += 180.0
        peri_lon += 360.0
    return Orbit(
        epoch=jed,
        q=a * (1.0 - e),
        e=e,
        i=math.radians(inc),
        w=math.radians(peri_lon - node),
        node=math.radians(node),
        m=math.radians(mean_lon - peri_lon),
        mm=rate[3] / DAYS_PER_CENTURY * RAD_PER_DEG,
    )
