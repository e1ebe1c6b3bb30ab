"""Rise, transit, and set times of solar system objects.

Times are civil Julian Dates. Non-events are reported with infinities:
``math.inf`` when an object never sets (or the event falls after the
searched day) and ``-math.inf`` when it never rises (or the event falls
before it). Results stay ordinarily comparable, so callers can test them
with ``<``, ``>`` or ``math.isinf``.

Horizon altitudes: use ALT_POINT (-0.5 deg) for point objects and
ALT_SUN_MOON (-50 arcmin) for the Sun and Moon; twilight uses -6, -12 and
-18 deg. None of these searches work for objects that rise and set several
times a day, such as artificial satellites; use passes.find_satellite_passes.
"""

from __future__ import annotations

import logging
import math

from ephemeris_events.angle_utils import mod_pi
from ephemeris_events.constants import (
    HUGE_VAL,
    RISE,
    SEARCH_MAX_ITERATIONS,
    SEARCH_PRECISION_DAYS,
    SECONDS_PER_DAY,
    SET,
    SIDEREAL_PER_SOLAR_DAYS,
    TRANSIT,
    TWOPI,
)
from ephemeris_events.ephemeris import compute_ephemeris
from ephemeris_events.objects import Pass, PassEvent, SolarSystemObject
from ephemeris_events.observer import ObserverContext
from ephemeris_events.time_utils import local_midnight, local_sidereal_time

logger = logging.getLogger(__name__)

__all__ = [
    'RISE',
    'SET',
    'TRANSIT',
    'rise_transit_set',
    'rise_transit_set_object',
    'rise_transit_set_pass',
    'rise_transit_set_search',
    'rise_transit_set_search_day',
    'semi_diurnal_arc',
]


def semi_diurnal_arc(lat: float, dec: float, alt: float) -> float:
    """Hour angle at which an object at declination dec reaches altitude alt.

    Parameters:
        lat: Observer latitude (radians).
        dec: Object declination (radians).
        alt: Horizon altitude (radians).

    Returns:
        Hour angle in [0, pi]. Exactly 0 if the object never climbs to alt;
        exactly pi if it never drops below alt.
    """
    cos_ha = (math.sin(alt) - math.sin(dec) * math.sin(lat)) / (math.cos(dec) * math.cos(lat))
    if cos_ha >= 1.0:
        return 0.0
    if cos_ha <= -1.0:
        return math.pi
    return math.acos(cos_ha)


def rise_transit_set(
    jd: float, ra: float, dec: float, sign: int, lon: float, lat: float, alt: float
) -> float:
    """Closed-form time of rising, transit, or setting nearest to jd.

    Ignores the object's own motion, which is fine for stars; moving objects
    need rise_transit_set_search.

    Parameters:
        jd: Civil Julian Date of the initial guess.
        ra: Right ascension of date (radians).
        dec: Declination of date (radians).
        sign: RISE (-1), TRANSIT (0), or SET (+1).
        lon: Observer east longitude (radians).
        lat: Observer latitude (radians).
        alt: Horizon altitude (radians).

    Returns:
        Event time within half a day of jd; math.inf if the object never
        sets, -math.inf if it never rises.
    """
    ha = semi_diurnal_arc(lat, dec, alt)
    if ha == math.pi and sign != TRANSIT:
        return HUGE_VAL
    if ha == 0.0:
        return -HUGE_VAL
    lst = local_sidereal_time(jd, lon)
    theta = mod_pi(ra - lst + sign * ha)
    return jd + theta / TWOPI / SIDEREAL_PER_SOLAR_DAYS


def rise_transit_set_object(
    jd: float, context: ObserverContext, obj: SolarSystemObject, sign: int, alt: float
) -> float:
    """rise_transit_set using obj's current apparent direction and the context's location."""
    lon, lat = context.get_location()
    ra, dec = context.equatorial(obj.ephemeris.direction)
    return rise_transit_set(jd, ra, dec, sign, lon, lat, alt)


def rise_transit_set_search(
    jd: float, context: ObserverContext, obj: SolarSystemObject, sign: int, alt: float
) -> float:
    """Iterate rise_transit_set_object, following the object's motion, to convergence.

    Stops once successive estimates agree to within a second, an infinity
    is returned, or the iteration cap is reached (in which case the last
    estimate is returned).

    On return the context and obj.ephemeris are left at the last evaluated
    time, not the input time. Wrap calls in context.scoped_time(obj) to
    restore them.
    """
    for _ in range(SEARCH_MAX_ITERATIONS):
        last_jd = jd
        context.set_time(jd)
        compute_ephemeris(obj, context)
        jd = rise_transit_set_object(jd, context, obj, sign, alt)
        if math.isinf(jd) or abs(jd - last_jd) <= SEARCH_PRECISION_DAYS:
            return jd
    logger.debug(
        'Event search (sign %d) not converged after %d iterations; last step %.1f s',
        sign,
        SEARCH_MAX_ITERATIONS,
        abs(jd - last_jd) * SECONDS_PER_DAY,
    )
    return jd


def rise_transit_set_search_day(
    jd: float, context: ObserverContext, obj: SolarSystemObject, sign: int, alt: float
) -> float:
    """Time of obj's rise, transit, or set during the local day containing jd.

    The search starts at local noon; if it converges onto the previous or
    next day it is retried from that day's noon on the other side. Like
    rise_transit_set_search, it leaves the context at the last search time.

    Returns:
        A time in [local midnight, next local midnight), or -math.inf (rise
        queries) / math.inf (transit and set queries) if the event does not
        happen that day.
    """
    start = local_midnight(jd, context.zone)
    end = start + 1.0
    event = rise_transit_set_search(start + 0.5, context, obj, sign, alt)
    if event >= end:
        event = rise_transit_set_search(start - 0.5, context, obj, sign, alt)
    elif event < start:
        event = rise_transit_set_search(end + 0.5, context, obj, sign, alt)
    if event >= end or event < start:
        return -HUGE_VAL if sign == RISE else HUGE_VAL
    return event


def _event_at(context: ObserverContext, obj: SolarSystemObject, jd: float) -> PassEvent:
    """Horizon circumstances from the live state a day search left behind."""
    if math.isinf(jd):
        return PassEvent(time=jd)
    azimuth, altitude = context.horizon(obj.ephemeris.direction)
    return PassEvent(time=jd, azimuth=azimuth, altitude=altitude)


def rise_transit_set_pass(
    jd: float, context: ObserverContext, obj: SolarSystemObject, alt: float
) -> Pass:
    """Rise, transit, and set circumstances of obj on the local day containing jd.

    Transit is searched with a horizon altitude of zero. Non-events carry an
    infinite time and infinite azimuth and altitude. The context's time and
    obj's ephemeris are restored before returning.
    """
    with context.scoped_time(obj):
        rise_jd = rise_transit_set_search_day(jd, context, obj, RISE, alt)
        rising = _event_at(context, obj, rise_jd)
        transit_jd = rise_transit_set_search_day(jd, context, obj, TRANSIT, 0.0)
        transit = _event_at(context, obj, transit_jd)
        set_jd = rise_transit_set_search_day(jd, context, obj, SET, alt)
        setting = _event_at(context, obj, set_jd)
    return Pass(rising=rising, transit=transit, setting=setting)
