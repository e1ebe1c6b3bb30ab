"""Tests for conic orbits and mean planetary and lunar elements."""

from __future__ import annotations

import math

import cspyce
import pytest

from ephemeris_events.constants import EARTH_ID, GAUSS_GRAV, J2000, KM_PER_AU, MARS_ID
from ephemeris_events.orbit import Orbit, mean_luna_orbit, mean_planet_orbit


def test_gravitational_parameter_matches_mean_motion() -> None:
    """GM follows from q, e and mean motion for ellipses and parabolas."""

    ellipse = Orbit(epoch=J2000, q=0.5, e=0.5, i=0.0, w=0.0, node=0.0, m=0.0, mm=0.01)
    assert ellipse.gravitational_parameter() == pytest.approx(1.0 * 0.01**2)

    parabola = Orbit(epoch=J2000, q=2.0, e=1.0, i=0.0, w=0.0, node=0.0, m=0.0, mm=0.01)
    assert parabola.gravitational_parameter() == pytest.approx(2.0 * 8.0 * 0.01**2)


def test_mean_earth_orbit_at_j2000() -> None:
    """Earth is near perihelion at 1 AU, heliocentric longitude about 100 degrees."""

    orbit = mean_planet_orbit(EARTH_ID, J2000)
    assert orbit.i >= 0.0
    assert orbit.gravitational_parameter() == pytest.approx(GAUSS_GRAV**2, rel=1e-3)

    pos, vel = orbit.to_position_velocity(J2000)
    assert cspyce.vnorm(pos) == pytest.approx(0.9833, abs=0.001)
    assert math.degrees(math.atan2(pos[1], pos[0])) == pytest.approx(100.4, abs=1.0)
    assert cspyce.vnorm(vel) == pytest.approx(0.0172, rel=0.03)


def test_mean_mars_orbit_distance_bounds() -> None:
    """Mars stays between perihelion and aphelion."""

    orbit = mean_planet_orbit(MARS_ID, J2000 + 1000.0)
    pos, _ = orbit.to_position_velocity(J2000 + 1000.0)

    assert 1.38 < cspyce.vnorm(pos) < 1.67


def test_mean_planet_orbit_rejects_unknown_id() -> None:
    """Only the Sun's planets 1-9 have mean elements."""

    with pytest.raises(ValueError, match='No mean orbital elements'):
        mean_planet_orbit(42, J2000)


def test_mean_luna_orbit_distance() -> None:
    """Earth's Moon stays between perigee and apogee."""

    jed = J2000 + 8800.0
    pos, _ = mean_luna_orbit(jed).to_position_velocity(jed)
    km = cspyce.vnorm(pos) * KM_PER_AU

    assert 360000.0 < km < 410000.0
