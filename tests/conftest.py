"""Shared fixtures: a sample TLE and an observer with no kernels loaded."""

from __future__ import annotations

import pytest

from ephemeris_events.objects import Satellite
from ephemeris_events.spice.common import get_state

# ISS (ZARYA), epoch 2019-12-09 16:38:29 UTC
ISS_LINE1 = '1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991'
ISS_LINE2 = '2 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482'
ISS_EPOCH_JD = 2458827.19339541


@pytest.fixture(autouse=True)
def _no_kernels(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test on mean elements regardless of furnished kernels."""
    monkeypatch.setattr(get_state(), 'kernels', [])


@pytest.fixture
def iss() -> Satellite:
    return Satellite.from_tle('ISS (ZARYA)', ISS_LINE1, ISS_LINE2, std_mag=-1.8)
