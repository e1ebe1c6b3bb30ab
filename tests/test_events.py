"""Tests for the rise/transit/set solvers."""

from __future__ import annotations

import math

import pytest

from ephemeris_events.angle_utils import mod_pi
from ephemeris_events.constants import (
    ALT_SUN_MOON,
    RISE,
    SET,
    SIDEREAL_PER_SOLAR_DAYS,
    SUN_ID,
    TRANSIT,
    TWOPI,
)
from ephemeris_events.events import (
    rise_transit_set,
    rise_transit_set_object,
    rise_transit_set_pass,
    rise_transit_set_search,
    rise_transit_set_search_day,
    semi_diurnal_arc,
)
from ephemeris_events.objects import Planet
from ephemeris_events.observer import ObserverContext
from ephemeris_events.time_utils import local_sidereal_time

EQUINOX_NOON = 2460390.0  # 2024-03-20 12:00 UTC
MINUTE = 1.0 / 1440.0


def test_semi_diurnal_arc_limits() -> None:
    """Exactly 0 for never rising, exactly pi for never setting, pi/2 on the equator."""

    lat = math.radians(80.0)
    assert semi_diurnal_arc(lat, math.radians(-60.0), 0.0) == 0.0
    assert semi_diurnal_arc(lat, math.radians(60.0), 0.0) == math.pi
    assert semi_diurnal_arc(0.0, 0.0, 0.0) == pytest.approx(math.pi / 2.0)


def test_transit_is_at_zero_hour_angle() -> None:
    """The transit estimate puts the object on the meridian."""

    lon = math.radians(-70.0)
    ra = 1.234
    for guess in (EQUINOX_NOON, EQUINOX_NOON + 0.37):
        jd = rise_transit_set(guess, ra, 0.3, TRANSIT, lon, 0.5, 0.0)
        assert abs(jd - guess) <= 0.5
        residual_days = mod_pi(local_sidereal_time(jd, lon) - ra) / TWOPI / SIDEREAL_PER_SOLAR_DAYS
        assert abs(residual_days) < 1e-9


def test_rise_and_set_bracket_transit() -> None:
    """Rising hour angle is -H, setting +H."""

    lon, lat, ra, dec = 0.0, 0.6, 2.0, 0.2
    ha = semi_diurnal_arc(lat, dec, 0.0)
    transit = rise_transit_set(EQUINOX_NOON, ra, dec, TRANSIT, lon, lat, 0.0)
    rise = rise_transit_set(transit, ra, dec, RISE, lon, lat, 0.0)
    set_ = rise_transit_set(transit, ra, dec, SET, lon, lat, 0.0)

    sidereal_day = 1.0 / 1.00273790935
    assert transit - rise == pytest.approx(ha / (2.0 * math.pi) * sidereal_day, abs=1e-9)
    assert set_ - transit == pytest.approx(ha / (2.0 * math.pi) * sidereal_day, abs=1e-9)


def test_circumpolar_and_never_rising_sentinels() -> None:
    """Never-setting objects return +inf for rise/set; never-rising objects return -inf."""

    lat = math.radians(80.0)
    up = math.radians(60.0)
    down = math.radians(-60.0)

    assert rise_transit_set(EQUINOX_NOON, 0.0, up, SET, 0.0, lat, 0.0) == math.inf
    assert rise_transit_set(EQUINOX_NOON, 0.0, up, RISE, 0.0, lat, 0.0) == math.inf
    assert math.isfinite(rise_transit_set(EQUINOX_NOON, 0.0, up, TRANSIT, 0.0, lat, 0.0))
    assert rise_transit_set(EQUINOX_NOON, 0.0, down, RISE, 0.0, lat, 0.0) == -math.inf
    assert rise_transit_set(EQUINOX_NOON, 0.0, down, SET, 0.0, lat, 0.0) == -math.inf


def test_search_leaves_context_at_event() -> None:
    """The iterative search converges and does not restore the context time."""

    ctx = ObserverContext(jd=EQUINOX_NOON)
    sun = Planet(SUN_ID)

    jd = rise_transit_set_search(EQUINOX_NOON, ctx, sun, TRANSIT, 0.0)

    assert abs(ctx.jd - jd) < 2.0 / 86400.0
    again = rise_transit_set_object(ctx.jd, ctx, sun, TRANSIT, 0.0)
    assert again == pytest.approx(jd, abs=2.0 / 86400.0)


def test_sun_at_equinox_on_equator() -> None:
    """Sunrise near 06:00, transit near 12:00, sunset near 18:00 UTC at (0, 0)."""

    ctx = ObserverContext(jd=EQUINOX_NOON)
    sun = Planet(SUN_ID)

    day_pass = rise_transit_set_pass(EQUINOX_NOON, ctx, sun, ALT_SUN_MOON)

    midnight = EQUINOX_NOON - 0.5
    assert day_pass.rising.time == pytest.approx(midnight + 0.25, abs=20.0 * MINUTE)
    assert day_pass.transit.time == pytest.approx(midnight + 0.5, abs=20.0 * MINUTE)
    assert day_pass.setting.time == pytest.approx(midnight + 0.75, abs=20.0 * MINUTE)
    assert math.degrees(day_pass.rising.azimuth) == pytest.approx(90.0, abs=1.0)
    assert math.degrees(day_pass.setting.azimuth) == pytest.approx(270.0, abs=1.0)
    assert day_pass.rising.altitude == pytest.approx(ALT_SUN_MOON, abs=math.radians(0.05))
    assert math.degrees(day_pass.transit.altitude) == pytest.approx(90.0, abs=1.0)


def test_pass_is_idempotent_and_restores_context() -> None:
    """Same inputs give the same pass; context time and ephemeris are restored."""

    ctx = ObserverContext(jd=EQUINOX_NOON + 0.1, longitude=0.3, latitude=0.8)
    sun = Planet(SUN_ID)

    first = rise_transit_set_pass(EQUINOX_NOON, ctx, sun, ALT_SUN_MOON)
    assert ctx.jd == EQUINOX_NOON + 0.1
    saved_direction = sun.ephemeris.direction.copy()
    second = rise_transit_set_pass(EQUINOX_NOON, ctx, sun, ALT_SUN_MOON)

    assert first == second
    assert ctx.jd == EQUINOX_NOON + 0.1
    assert (sun.ephemeris.direction == saved_direction).all()


def test_search_day_stays_within_day() -> None:
    """Results lie within the local day or are infinite, for several zones."""

    sun = Planet(SUN_ID)
    for zone in (-10.0, 0.0, 9.0):
        ctx = ObserverContext(jd=EQUINOX_NOON, longitude=math.radians(15.0 * zone), zone=zone)
        start = ctx.local_midnight()
        for sign in (RISE, TRANSIT, SET):
            jd = rise_transit_set_search_day(EQUINOX_NOON, ctx, sun, sign, ALT_SUN_MOON)
            assert math.isinf(jd) or start <= jd < start + 1.0


def test_polar_night_and_midnight_sun() -> None:
    """At 80 N the winter Sun never rises and the summer Sun never sets."""

    sun = Planet(SUN_ID)
    lat = math.radians(80.0)

    winter = ObserverContext(jd=2460666.0, latitude=lat)  # 2024-12-21
    night = rise_transit_set_pass(winter.jd, winter, sun, ALT_SUN_MOON)
    assert night.rising.time == -math.inf
    assert night.setting.time == math.inf
    assert night.transit.time == math.inf
    assert math.isinf(night.rising.azimuth)

    summer = ObserverContext(jd=2460483.0, latitude=lat)  # 2024-06-21
    day = rise_transit_set_pass(summer.jd, summer, sun, ALT_SUN_MOON)
    assert day.rising.time == -math.inf
    assert day.setting.time == math.inf
    assert day.transit.occurred
    assert math.degrees(day.transit.altitude) == pytest.approx(90.0 - 80.0 + 23.44, abs=0.5)
