"""Solar system object variants, their ephemeris state, and pass records."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Union

import numpy as np
from sgp4.api import Satrec

from ephemeris_events.constants import HUGE_VAL, NUM_PRIMARIES, PLANET_NAMES, SUN_ID
from ephemeris_events.orbit import Orbit


class ObjectType(enum.Enum):
    """Object categories handled by the ephemeris engine."""

    SUN = 'sun'
    PLANET = 'planet'
    MOON = 'moon'
    ASTEROID = 'asteroid'
    COMET = 'comet'
    SATELLITE = 'satellite'


def _undefined_vector() -> np.ndarray:
    return np.full(3, HUGE_VAL, dtype=np.float64)


def _unit_x() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0], dtype=np.float64)


@dataclass
class Ephemeris:
    """Most recently computed ephemeris of an object.

    Recomputed in place by compute_ephemeris; meaningless between calls
    except as a cache of the last evaluation.

    Attributes:
        position: Heliocentric position, fundamental frame (AU).
        velocity: Heliocentric velocity, fundamental frame (AU/day).
        direction: Apparent unit direction from the observer, fundamental frame.
        distance: True distance from the observer (AU).
        magnitude: Visual magnitude; infinite if undefined.
    """

    position: np.ndarray = field(default_factory=_undefined_vector)
    velocity: np.ndarray = field(default_factory=_undefined_vector)
    direction: np.ndarray = field(default_factory=_unit_x)
    distance: float = HUGE_VAL
    magnitude: float = HUGE_VAL


@dataclass
class Planet:
    """The Sun (ID 0) or a major planet (IDs 1-9)."""

    planet_id: int
    ephemeris: Ephemeris = field(default_factory=Ephemeris)

    def __post_init__(self) -> None:
        if self.planet_id not in PLANET_NAMES:
            raise ValueError(f'Unknown planet ID {self.planet_id}; expected 0-9')

    @property
    def name(self) -> str:
        return PLANET_NAMES[self.planet_id]


@dataclass
class Moon:
    """A natural satellite; the orbit is relative to its primary planet (J2000 ecliptic).

    Earth's Moon (301) uses tabulated positions when available.
    """

    moon_id: int
    orbit: Orbit | None = None
    h_mag: float = HUGE_VAL
    g_mag: float = HUGE_VAL
    name: str = ''
    ephemeris: Ephemeris = field(default_factory=Ephemeris)

    @property
    def primary_id(self) -> int:
        """Planet this moon orbits (moon_id // 100), or the Sun if out of range."""
        primary = self.moon_id // 100
        if primary < 0 or primary >= NUM_PRIMARIES:
            return SUN_ID
        return primary


@dataclass
class Asteroid:
    """A minor planet with a heliocentric J2000-ecliptic orbit and H-G magnitude law."""

    name: str
    orbit: Orbit
    h_mag: float = HUGE_VAL
    g_mag: float = HUGE_VAL
    ephemeris: Ephemeris = field(default_factory=Ephemeris)


@dataclass
class Comet:
    """A comet with a heliocentric J2000-ecliptic orbit and H-K magnitude law."""

    name: str
    orbit: Orbit
    h_mag: float = HUGE_VAL
    k_mag: float = HUGE_VAL
    ephemeris: Ephemeris = field(default_factory=Ephemeris)


@dataclass
class Satellite:
    """An artificial Earth satellite described by a two-line element set."""

    name: str
    tle: Satrec
    std_mag: float = HUGE_VAL
    ephemeris: Ephemeris = field(default_factory=Ephemeris)

    @classmethod
    def from_tle(cls, name: str, line1: str, line2: str, std_mag: float = HUGE_VAL) -> Satellite:
        """Build a Satellite from two TLE lines.

        Raises:
            ValueError: If the lines are not a valid two-line element set.
        """
        line1 = line1.rstrip()
        line2 = line2.rstrip()
        if not (line1.startswith('1 ') and line2.startswith('2 ')):
            raise ValueError('TLE lines must start with "1 " and "2 "')
        try:
            satrec = Satrec.twoline2rv(line1, line2)
        except (ValueError, IndexError) as e:
            raise ValueError(f'Invalid TLE for {name!r}: {e}') from e
        return cls(name=name.strip(), tle=satrec, std_mag=std_mag)


SolarSystemObject = Union[Planet, Moon, Asteroid, Comet, Satellite]


def object_type(obj: SolarSystemObject) -> ObjectType:
    """Return the category tag of obj.

    Raises:
        TypeError: If obj is not one of the SolarSystemObject variants.
    """
    if isinstance(obj, Planet):
        return ObjectType.SUN if obj.planet_id == SUN_ID else ObjectType.PLANET
    if isinstance(obj, Moon):
        return ObjectType.MOON
    if isinstance(obj, Asteroid):
        return ObjectType.ASTEROID
    if isinstance(obj, Comet):
        return ObjectType.COMET
    if isinstance(obj, Satellite):
        return ObjectType.SATELLITE
    raise TypeError(f'Not a solar system object: {type(obj).__name__}')


@dataclass
class PassEvent:
    """One event of a pass: time (civil JD), azimuth, and altitude (radians).

    An infinite time means the event did not occur: -inf for a rising that
    never happens (or happened before the search window), +inf for a setting
    that never happens (or happens after it).
    """

    time: float = HUGE_VAL
    azimuth: float = HUGE_VAL
    altitude: float = HUGE_VAL

    @property
    def occurred(self) -> bool:
        return not math.isinf(self.time)


@dataclass
class Pass:
    """Rising, transit (or peak), and setting circumstances of an object."""

    rising: PassEvent = field(default_factory=PassEvent)
    transit: PassEvent = field(default_factory=PassEvent)
    setting: PassEvent = field(default_factory=PassEvent)

