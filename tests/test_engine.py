"""Tests for the heliocentric position/velocity engine and its caches."""

from __future__ import annotations

import cspyce
import numpy as np
import pytest

from conftest import ISS_EPOCH_JD
from ephemeris_events import engine
from ephemeris_events.constants import (
    EARTH_ID,
    J2000,
    KM_PER_AU,
    LIGHT_AU_PER_DAY,
    LUNA_ID,
    MARS_ID,
    SUN_ID,
)
from ephemeris_events.engine import (
    EngineCaches,
    PrimaryCache,
    compute_position_velocity,
)
from ephemeris_events.objects import Asteroid, Moon, Planet, Satellite
from ephemeris_events.orbit import Orbit
from ephemeris_events.time_utils import jed_from_jd


def test_primary_cache_refills_only_on_new_time() -> None:
    """One evaluation per (primary, jed); invalidate empties every slot."""

    calls: list[int] = []

    def _compute() -> tuple[np.ndarray, np.ndarray]:
        calls.append(1)
        return (np.ones(3), np.zeros(3))

    cache = PrimaryCache()
    cache.get(5, J2000, _compute)
    cache.get(5, J2000, _compute)
    assert len(calls) == 1

    cache.get(5, J2000 + 1.0, _compute)
    cache.get(6, J2000 + 1.0, _compute)
    assert len(calls) == 3

    cache.invalidate()
    cache.get(5, J2000 + 1.0, _compute)
    assert len(calls) == 4


def test_sun_is_origin_without_kernels() -> None:
    """Heliocentric Sun is the zero vector."""

    pos, vel = compute_position_velocity(Planet(SUN_ID), J2000, 0.0)

    assert np.allclose(pos, 0.0)
    assert np.allclose(vel, 0.0)


def test_planet_light_time_antedates() -> None:
    """A light-time offset evaluates the planet at jed - lt."""

    now, _ = compute_position_velocity(Planet(MARS_ID), J2000, 0.0)
    earlier, _ = compute_position_velocity(Planet(MARS_ID), J2000 - 0.01, 0.0)
    antedated, _ = compute_position_velocity(Planet(MARS_ID), J2000, 0.01)

    assert np.allclose(antedated, earlier, atol=1e-12)
    assert not np.allclose(antedated, now, atol=1e-9)


def test_tabulated_state_preferred(monkeypatch: pytest.MonkeyPatch) -> None:
    """When a kernel lookup succeeds its state is used as-is."""

    tabulated = (np.array([1.0, 2.0, 3.0]), np.array([0.1, 0.2, 0.3]))
    monkeypatch.setattr(engine, 'lookup', lambda body_id, jed, want_velocity: tabulated)

    pos, vel = compute_position_velocity(Planet(EARTH_ID), J2000, 0.0)

    assert list(pos) == [1.0, 2.0, 3.0]
    assert list(vel) == [0.1, 0.2, 0.3]


def test_luna_is_near_earth_and_uses_primary_cache() -> None:
    """Earth's Moon is Earth's state plus a geocentric orbit; Earth is memoized."""

    caches = EngineCaches()
    jed = J2000 + 8800.0
    earth_pos, _ = compute_position_velocity(Planet(EARTH_ID), jed, 0.0)
    moon_pos, _ = compute_position_velocity(Moon(LUNA_ID), jed, 0.0, caches)

    km = cspyce.vnorm(moon_pos - earth_pos) * KM_PER_AU
    assert 350000.0 < km < 420000.0
    assert caches.primaries.jeds[EARTH_ID] == jed


def test_moon_light_time_uses_primary_velocity() -> None:
    """Primary position is antedated by its velocity times light time."""

    caches = EngineCaches()
    jed = J2000
    lt = 0.002
    orbit = Orbit(epoch=jed, q=0.003, e=0.0, i=0.0, w=0.0, node=0.0, m=0.0, mm=0.2)
    moon = Moon(501, orbit=orbit)

    primary_pos, primary_vel = engine.major_planet_position_velocity(5, jed, 0.0)
    moon_pos, moon_vel = compute_position_velocity(moon, jed, lt, caches)
    orbit_pos, orbit_vel = engine._orbit_position_velocity(orbit, jed, lt)

    assert np.allclose(moon_pos, orbit_pos + primary_pos - primary_vel * lt)
    assert np.allclose(moon_vel, orbit_vel + primary_vel)


def test_moon_without_orbit_rejected() -> None:
    """Only Earth's Moon has built-in elements."""

    with pytest.raises(ValueError, match='no orbital elements'):
        compute_position_velocity(Moon(606), J2000, 0.0)


def test_asteroid_uses_its_own_orbit() -> None:
    """Asteroid states come from the orbit, rotated from ecliptic to equatorial."""

    orbit = Orbit(epoch=J2000, q=2.0, e=0.0, i=0.0, w=0.0, node=0.0, m=0.0, mm=0.005)
    pos, _ = compute_position_velocity(Asteroid('Test', orbit, 10.0, 0.15), J2000, 0.0)

    assert np.allclose(pos, [2.0, 0.0, 0.0])


def test_satellite_orbits_earth(iss: Satellite) -> None:
    """A LEO satellite is a few hundred km above Earth's surface."""

    caches = EngineCaches()
    jed = jed_from_jd(ISS_EPOCH_JD)
    pos, vel = compute_position_velocity(iss, jed, 0.0, caches)

    earth = caches.earth
    assert earth.jed == jed
    km = cspyce.vnorm(pos - earth.position) * KM_PER_AU
    assert 6600.0 < km < 7000.0
    speed_km_s = cspyce.vnorm(vel - earth.velocity) * KM_PER_AU / 86400.0
    assert speed_km_s == pytest.approx(7.66, abs=0.1)


def test_satellite_propagation_error_is_undefined(
    iss: Satellite, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An SGP4 error code gives infinite vectors instead of raising."""

    class _Failing:
        def sgp4(self, jd: float, fr: float) -> tuple[int, tuple[float, ...], tuple[float, ...]]:
            return (6, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    monkeypatch.setattr(iss, 'tle', _Failing())
    pos, vel = compute_position_velocity(iss, J2000, 1.0 / LIGHT_AU_PER_DAY, EngineCaches())

    assert np.all(np.isinf(pos))
    assert np.all(np.isinf(vel))


def test_unknown_object_rejected() -> None:
    """Dispatch is closed over the five variants."""

    with pytest.raises(TypeError):
        compute_position_velocity(object(), J2000, 0.0)  # type: ignore[arg-type]
