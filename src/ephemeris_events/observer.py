"""Observer context: time, geographic location, frames, and aberration.

An ObserverContext is the mutable "where and when" that ephemeris and event
computations run against. Rise/set searches move its time as scratch state;
``scoped_time`` puts it back.
"""

from __future__ import annotations

import contextlib
import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import cspyce
import numpy as np

from ephemeris_events.constants import (
    EARTH_FLATTENING,
    EARTH_ID,
    KM_PER_AU,
    KM_PER_EARTH_RADII,
    LIGHT_AU_PER_DAY,
    SIDEREAL_PER_SOLAR_DAYS,
    TWOPI,
)
from ephemeris_events.engine import EngineCaches, major_planet_position_velocity
from ephemeris_events.frames import Frame, ecliptic_matrix, horizon_matrix, precession_matrix, to_spherical
from ephemeris_events.time_utils import jed_from_jd, local_midnight, local_sidereal_time

if TYPE_CHECKING:
    from ephemeris_events.objects import SolarSystemObject

logger = logging.getLogger(__name__)

# Earth rotation rate (rad/day) for the observer's surface velocity
_EARTH_ROT_RATE_RAD_DAY = TWOPI * SIDEREAL_PER_SOLAR_DAYS


@dataclass
class ObserverContext:
    """Time and place of an observer on (or at the center of) the Earth.

    Attributes:
        jd: Civil (UTC) Julian Date.
        longitude: East longitude (radians).
        latitude: Geodetic latitude (radians).
        height: Height above the reference ellipsoid (km).
        zone: Local time zone, hours east of UTC (for local midnight).
        geocentric: If True, observe from Earth's center (longitude and
            latitude still define the horizon).
        caches: Engine memoization owned by this context.

    Derived on every set_time: jed, lst, obs_pos, obs_vel, and the
    precession and horizon matrices.
    """

    jd: float
    longitude: float = 0.0
    latitude: float = 0.0
    height: float = 0.0
    zone: float = 0.0
    geocentric: bool = False
    caches: EngineCaches = field(default_factory=EngineCaches)
    jed: float = field(init=False, default=math.nan)
    lst: float = field(init=False, default=0.0)
    obs_pos: np.ndarray = field(init=False, default_factory=lambda: np.zeros(3))
    obs_vel: np.ndarray = field(init=False, default_factory=lambda: np.zeros(3))
    prec_matrix: np.ndarray = field(init=False, default_factory=lambda: np.eye(3))
    hor_matrix: np.ndarray = field(init=False, default_factory=lambda: np.eye(3))

    def __post_init__(self) -> None:
        self.set_time(self.jd)

    def set_time(self, jd: float) -> None:
        """Move the context to civil Julian Date jd and recompute derived state."""
        self.jd = jd
        self.jed = jed_from_jd(jd)
        self.lst = local_sidereal_time(jd, self.longitude)
        self.prec_matrix = precession_matrix(self.jed)
        self.hor_matrix = horizon_matrix(self.lst, self.latitude)
        earth_pos, earth_vel = major_planet_position_velocity(EARTH_ID, self.jed, 0.0)
        self.obs_pos = earth_pos
        self.obs_vel = earth_vel
        if not self.geocentric:
            geo_pos, geo_vel = self._geocentric_observer()
            self.obs_pos = earth_pos + geo_pos
            self.obs_vel = earth_vel + geo_vel

    def set_location(self, longitude: float, latitude: float, height: float = 0.0) -> None:
        """Move the observer and recompute derived state at the current time."""
        self.longitude = longitude
        self.latitude = latitude
        self.height = height
        self.set_time(self.jd)

    def get_location(self) -> tuple[float, float]:
        """Return (east longitude, latitude) in radians."""
        return (self.longitude, self.latitude)

    def _geocentric_observer(self) -> tuple[np.ndarray, np.ndarray]:
        """Observer position (AU) and rotational velocity (AU/day) relative to Earth's center."""
        body_fixed = cspyce.georec(
            self.longitude, self.latitude, self.height, KM_PER_EARTH_RADII, EARTH_FLATTENING
        )
        # Rotate from Earth-fixed to equator of date by local sidereal angle.
        spin = np.array(cspyce.rotate(self.lst - self.longitude, 3), dtype=np.float64)
        pos_date = np.array(cspyce.mtxv(spin, body_fixed), dtype=np.float64)
        vel_date = np.array(
            [-_EARTH_ROT_RATE_RAD_DAY * pos_date[1], _EARTH_ROT_RATE_RAD_DAY * pos_date[0], 0.0]
        )
        pos = np.array(cspyce.mtxv(self.prec_matrix, pos_date), dtype=np.float64) / KM_PER_AU
        vel = np.array(cspyce.mtxv(self.prec_matrix, vel_date), dtype=np.float64) / KM_PER_AU
        return (pos, vel)

    def _to_fundamental(self, frame: Frame, vector: np.ndarray) -> np.ndarray:
        if frame is Frame.FUNDAMENTAL:
            return np.asarray(vector, dtype=np.float64)
        if frame is Frame.ECLIPTIC:
            return np.array(cspyce.mtxv(ecliptic_matrix(), vector), dtype=np.float64)
        if frame is Frame.EQUATORIAL:
            return np.array(cspyce.mtxv(self.prec_matrix, vector), dtype=np.float64)
        equatorial = cspyce.mtxv(self.hor_matrix, vector)
        return np.array(cspyce.mtxv(self.prec_matrix, equatorial), dtype=np.float64)

    def _from_fundamental(self, frame: Frame, vector: np.ndarray) -> np.ndarray:
        if frame is Frame.FUNDAMENTAL:
            return np.asarray(vector, dtype=np.float64)
        if frame is Frame.ECLIPTIC:
            return np.array(cspyce.mxv(ecliptic_matrix(), vector), dtype=np.float64)
        equatorial = np.array(cspyce.mxv(self.prec_matrix, vector), dtype=np.float64)
        if frame is Frame.EQUATORIAL:
            return equatorial
        return np.array(cspyce.mxv(self.hor_matrix, equatorial), dtype=np.float64)

    def transform(self, from_frame: Frame, to_frame: Frame, vector: np.ndarray) -> np.ndarray:
        """Rotate a rectangular vector from one frame to another at the current time."""
        if from_frame is to_frame:
            return np.asarray(vector, dtype=np.float64)
        return self._from_fundamental(to_frame, self._to_fundamental(from_frame, vector))

    def equatorial(self, direction: np.ndarray) -> tuple[float, float]:
        """Return (right ascension, declination) of date for a fundamental-frame direction."""
        lon, lat, _ = to_spherical(self.transform(Frame.FUNDAMENTAL, Frame.EQUATORIAL, direction), Frame.EQUATORIAL)
        return (lon, lat)

    def horizon(self, direction: np.ndarray) -> tuple[float, float]:
        """Return (azimuth, altitude) for a fundamental-frame direction.

        Azimuth is measured from north through east. Refraction is ignored.
        """
        lon, lat, _ = to_spherical(self.transform(Frame.FUNDAMENTAL, Frame.HORIZON, direction), Frame.HORIZON)
        return (lon, lat)

    def add_aberration(self, direction: np.ndarray) -> np.ndarray:
        """Apply annual (and diurnal) aberration to a unit direction vector."""
        return np.array(cspyce.vhat(direction + self.obs_vel / LIGHT_AU_PER_DAY), dtype=np.float64)

    def local_midnight(self) -> float:
        """Civil Julian Date of local midnight beginning the current local day."""
        return local_midnight(self.jd, self.zone)

    @contextlib.contextmanager
    def scoped_time(self, obj: SolarSystemObject | None = None) -> Iterator[ObserverContext]:
        """Let the caller move this context's time freely, then restore it.

        On exit (normal or exceptional) the original time is restored and, if
        obj is given, obj's ephemeris is recomputed at that time.
        """
        from ephemeris_events.ephemeris import compute_ephemeris

        saved_jd = self.jd
        try:
            yield self
        finally:
            self.set_time(saved_jd)
            if obj is not None:
                compute_ephemeris(obj, self)


def observer_from_degrees(
    jd: float,
    lon_deg: float,
    lat_deg: float,
    height_m: float = 0.0,
    zone: float = 0.0,
) -> ObserverContext:
    """Build an ObserverContext from degrees and meters (CLI convenience)."""
    if abs(lat_deg) > 90.0:
        raise ValueError(f'Latitude {lat_deg} outside [-90, 90]')
    logger.debug('Observer at lon %.4f lat %.4f height %.0f m', lon_deg, lat_deg, height_m)
    return ObserverContext(
        jd=jd,
        longitude=math.radians(lon_deg),
        latitude=math.radians(lat_deg),
        height=height_m / 1000.0,
        zone=zone,
    )
