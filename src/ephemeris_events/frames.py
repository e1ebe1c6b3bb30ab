"""Reference frames: ecliptic, precession, and horizon rotation matrices.

The fundamental frame is the J2000 mean equator and equinox (ICRF-aligned,
the SPICE 'J2000' frame). Matrices follow the SPICE convention of rotating
the coordinate frame, so ``cspyce.mxv(matrix, v)`` expresses v in the new
frame and ``cspyce.mtxv(matrix, v)`` converts back.
"""

from __future__ import annotations

import enum
import math
from functools import lru_cache

import cspyce
import numpy as np

from ephemeris_events.angle_utils import mod_2pi
from ephemeris_events.constants import DAYS_PER_CENTURY, HALFPI, J2000, RAD_PER_ARCSEC


class Frame(enum.Enum):
    """Coordinate frames understood by ObserverContext.transform."""

    FUNDAMENTAL = 'fundamental'
    ECLIPTIC = 'ecliptic'
    EQUATORIAL = 'equatorial'
    HORIZON = 'horizon'


def obliquity(jed: float) -> float:
    """Mean obliquity of the ecliptic (radians) at Julian Ephemeris Date jed (IAU 1980)."""
    t = (jed - J2000) / DAYS_PER_CENTURY
    arcsec = 84381.448 - t * (46.8150 + t * (0.00059 - t * 0.001813))
    return arcsec * RAD_PER_ARCSEC


@lru_cache(maxsize=1)
def ecliptic_matrix() -> np.ndarray:
    """Rotation from the fundamental frame to the J2000 ecliptic frame.

    Computed once. Use ``cspyce.mtxv`` with it to rotate ecliptic vectors
    (orbit output) into the fundamental frame.
    """
    return np.array(cspyce.rotate(obliquity(J2000), 1), dtype=np.float64)


def precession_matrix(jed: float) -> np.ndarray:
    """Rotation from the fundamental frame to the mean equator and equinox of date.

    Uses the IAU 1976 precession angles (Lieske), as in Meeus chapter 21.

    Parameters:
        jed: Julian Ephemeris Date.

    Returns:
        3x3 rotation matrix.
    """
    t = (jed - J2000) / DAYS_PER_CENTURY
    zeta = (2306.2181 + (0.30188 + 0.017998 * t) * t) * t * RAD_PER_ARCSEC
    z = (2306.2181 + (1.09468 + 0.018203 * t) * t) * t * RAD_PER_ARCSEC
    theta = (2004.3109 - (0.42665 + 0.041833 * t) * t) * t * RAD_PER_ARCSEC
    r1 = np.array(cspyce.rotate(-zeta, 3), dtype=np.float64)
    r2 = np.array(cspyce.rotate(theta, 2), dtype=np.float64)
    r3 = np.array(cspyce.rotate(-z, 3), dtype=np.float64)
    return r3 @ r2 @ r1


def horizon_matrix(lst: float, lat: float) -> np.ndarray:
    """Rotation from the equatorial frame of date to the local horizon frame.

    Horizon axes point south, east, and to the zenith.

    Parameters:
        lst: Local sidereal time (radians).
        lat: Geodetic latitude (radians, north positive).

    Returns:
        3x3 rotation matrix.
    """
    r1 = np.array(cspyce.rotate(lst, 3), dtype=np.float64)
    r2 = np.array(cspyce.rotate(HALFPI - lat, 2), dtype=np.float64)
    return r2 @ r1


def to_spherical(vector: np.ndarray | list[float], frame: Frame) -> tuple[float, float, float]:
    """Convert a rectangular vector to (lon, lat, rad).

    Longitudes are in [0, 2*pi). In the horizon frame the longitude is the
    azimuth measured from north through east and the latitude is altitude.
    """
    rad, lon, lat = cspyce.recrad(vector)
    if frame is Frame.HORIZON:
        lon = mod_2pi(math.pi - lon)
    return (float(lon), float(lat), float(rad))


def from_spherical(lon: float, lat: float, rad: float = 1.0) -> np.ndarray:
    """Convert (lon, lat, rad) in a non-horizon frame to a rectangular vector."""
    return np.array(cspyce.radrec(rad, lon, lat), dtype=np.float64)
