"""Artificial satellite pass search by forward time scan."""

from __future__ import annotations

import logging
import math

from ephemeris_events.constants import (
    HUGE_VAL,
    PASS_COARSE_STEP_DAYS,
    PASS_FINE_ALTITUDE,
    PASS_FINE_STEP_DAYS,
)
from ephemeris_events.ephemeris import compute_ephemeris
from ephemeris_events.objects import Pass, PassEvent, Satellite
from ephemeris_events.observer import ObserverContext
from ephemeris_events.time_utils import format_jd

logger = logging.getLogger(__name__)


def _horizon(context: ObserverContext, satellite: Satellite, jd: float) -> tuple[float, float]:
    """Move the context to jd and return the satellite's (azimuth, altitude).

    An undefined satellite position (failed propagation) reads as altitude
    -inf, so it never crosses any threshold.
    """
    context.set_time(jd)
    eph = compute_ephemeris(satellite, context)
    if math.isinf(eph.distance):
        return (HUGE_VAL, -HUGE_VAL)
    return context.horizon(eph.direction)


def find_satellite_passes(
    context: ObserverContext,
    satellite: Satellite,
    start: float,
    stop: float,
    min_alt: float,
) -> list[Pass]:
    """Find passes of satellite above min_alt between civil Julian Dates start and stop.

    The scan steps forward one minute at a time, dropping to one-second steps
    while the satellite is above -1 degree altitude. A pass rises when the
    altitude climbs above min_alt, peaks at the highest sample above
    min_alt (reported as the transit), and ends when the altitude falls back
    below min_alt. A pass already under way at start is reported with a
    rising time of -inf; a pass still under way at stop is not reported.
    The first sample only seeds the previous altitude.

    Parameters:
        context: Observer; its time is restored (and the satellite's
            ephemeris recomputed) before returning.
        satellite: Satellite to follow.
        start: Scan start (civil Julian Date).
        stop: Scan end, inclusive.
        min_alt: Altitude threshold (radians).

    Returns:
        Passes in chronological order; the count is len(result).
    """
    passes: list[Pass] = []
    with context.scoped_time(satellite):
        _, old_alt = _horizon(context, satellite, start)
        rising = PassEvent(time=-HUGE_VAL) if old_alt > min_alt else PassEvent()
        peak = PassEvent(altitude=-HUGE_VAL)
        step = PASS_FINE_STEP_DAYS if old_alt > PASS_FINE_ALTITUDE else PASS_COARSE_STEP_DAYS
        n = 1
        jd = start + step
        while jd <= stop:
            azimuth, alt = _horizon(context, satellite, jd)
            if alt > min_alt and old_alt < min_alt:
                rising = PassEvent(time=jd, azimuth=azimuth, altitude=alt)
            if alt > min_alt and alt > peak.altitude:
                peak = PassEvent(time=jd, azimuth=azimuth, altitude=alt)
            if old_alt > min_alt and alt < min_alt:
                setting = PassEvent(time=jd, azimuth=azimuth, altitude=alt)
                passes.append(Pass(rising=rising, transit=peak, setting=setting))
                logger.debug(
                    'Pass of %s: rise %s, peak %.1f deg, set %s',
                    satellite.name,
                    format_jd(rising.time),
                    math.degrees(peak.altitude),
                    format_jd(setting.time),
                )
                rising = PassEvent()
                peak = PassEvent(altitude=-HUGE_VAL)
            old_alt = alt
            step = PASS_FINE_STEP_DAYS if alt > PASS_FINE_ALTITUDE else PASS_COARSE_STEP_DAYS
            n += 1
            jd += step
        logger.debug('Scanned %d samples of %s, %d passes', n, satellite.name, len(passes))
    return passes
