"""Time conversion wrappers around rms-julian, plus sidereal time and local midnight.

Times are float Julian Dates. ``jd`` is civil time (UTC); ``jed`` is the
Julian Ephemeris Date (TDB). rms-julian counts days from 2000-01-01 (UTC
midnight, JD 2451544.5) and measures TDB in seconds from J2000 (JD 2451545.0).
"""

from __future__ import annotations

import logging
import math
import re

import julian

from ephemeris_events.angle_utils import mod_2pi
from ephemeris_events.config import get_leapsecs_path
from ephemeris_events.constants import DAYS_PER_CENTURY, J2000, RAD_PER_DEG, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

# Julian Date of UTC midnight beginning rms-julian day 0 (2000-01-01)
JD_OF_DAY_ZERO = J2000 - 0.5

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load the leap seconds kernel if not already loaded.

    rms-julian requires a NAIF LSK (e.g. naif0012.tls). If the configured file
    is missing or not in LSK format, falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        julian.load_lsk(path)
        _leapsecs_loaded = True
    except (OSError, KeyError, ValueError) as e:
        logger.info(
            'Leap seconds from %s not used (%s); using rms-julian bundled LSK.',
            path,
            e,
        )
        try:
            julian.load_lsk()
        except Exception as fallback_err:
            logger.error(
                'Fallback to rms-julian bundled LSK failed: %s',
                fallback_err,
                exc_info=True,
            )
            raise
        _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a date/time string to UTC (day, sec).

    Parameters:
        string: Date/time string (any format accepted by rms-julian; a
            trailing ISO 'Z' is accepted).

    Returns:
        (day, sec) where day is days since 2000-01-01 and sec is seconds
        within that day; None on parse failure.
    """
    _ensure_leapsecs()
    stripped = string.strip()
    candidate_strings = [stripped]
    if stripped.endswith(('Z', 'z')):
        candidate_strings.append(stripped[:-1])
    date_only = re.fullmatch(r'(\d{4})-(\d{1,2})-(\d{1,2})', stripped)
    if date_only is not None:
        candidate_strings.append(stripped + ' 00:00:00')
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
            day, sec = result[0], result[1]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def tai_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to TAI seconds."""
    _ensure_leapsecs()
    return float(julian.tai_from_day_sec(day, sec))


def tdb_from_tai(tai: float) -> float:
    """Convert TAI seconds to TDB seconds past J2000."""
    _ensure_leapsecs()
    return float(julian.tdb_from_tai(tai))


def jd_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to a civil Julian Date."""
    return JD_OF_DAY_ZERO + day + sec / SECONDS_PER_DAY


def day_sec_from_jd(jd: float) -> tuple[int, float]:
    """Convert a civil Julian Date to UTC (day, sec)."""
    days = jd - JD_OF_DAY_ZERO
    day = math.floor(days)
    sec = (days - day) * SECONDS_PER_DAY
    return (int(day), sec)


def parse_jd(string: str) -> float | None:
    """Parse a date/time string directly to a civil Julian Date, or None on failure."""
    parsed = parse_datetime(string)
    if parsed is None:
        return None
    return jd_from_day_sec(*parsed)


def delta_t_days(jd: float) -> float:
    """Return TDB minus UTC, in days, at civil Julian Date jd.

    Parameters:
        jd: Civil (UTC) Julian Date.

    Returns:
        Delta T in days (about 69 seconds in the 2020s).
    """
    day, sec = day_sec_from_jd(jd)
    tdb = tdb_from_tai(tai_from_day_sec(day, sec))
    jed = J2000 + tdb / SECONDS_PER_DAY
    return jed - jd


def jed_from_jd(jd: float) -> float:
    """Convert a civil Julian Date to a Julian Ephemeris Date."""
    return jd + delta_t_days(jd)


def local_midnight(jd: float, zone: float = 0.0) -> float:
    """Return the Julian Date of local midnight beginning the local day containing jd.

    Parameters:
        jd: Civil Julian Date.
        zone: Local time zone in hours east of UTC.

    Returns:
        Civil Julian Date of local midnight.
    """
    offset = zone / 24.0
    return math.floor(jd + 0.5 + offset) - 0.5 - offset


def format_jd(jd: float, zone: float = 0.0) -> str:
    """Format a civil Julian Date as local 'YYYY-MM-DD HH:MM:SS'.

    Infinite dates (event sentinels) format as '--'.
    """
    if math.isinf(jd) or math.isnan(jd):
        return '--'
    day, sec = day_sec_from_jd(jd + zone / 24.0)
    sec = float(round(sec))
    if sec >= SECONDS_PER_DAY:
        day += 1
        sec = 0.0
    year, month, mday = julian.ymd_from_day(day)
    hour, minute, second = julian.hms_from_sec(sec)
    return f'{int(year):04d}-{int(month):02d}-{int(mday):02d} {int(hour):02d}:{int(minute):02d}:{int(second):02d}'


def greenwich_sidereal_time(jd: float) -> float:
    """Return Greenwich mean sidereal time (radians) at civil Julian Date jd (Meeus 12.4)."""
    d = jd - J2000
    t = d / DAYS_PER_CENTURY
    gmst = 280.46061837 + 360.98564736629 * d + t * t * (0.000387933 - t / 38710000.0)
    return mod_2pi(gmst * RAD_PER_DEG)


def local_sidereal_time(jd: float, lon: float) -> float:
    """Return local mean sidereal time (radians) at east longitude lon (radians)."""
    return mod_2pi(greenwich_sidereal_time(jd) + lon)
