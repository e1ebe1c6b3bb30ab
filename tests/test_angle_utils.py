"""Tests for angle reduction, parsing, and sexagesimal formatting."""

from __future__ import annotations

import math

import pytest

from ephemeris_events.angle_utils import dms_string, mod_2pi, mod_pi, parse_angle


def test_mod_2pi_wraps_into_range() -> None:
    """Negative and large angles reduce into [0, 2*pi)."""

    assert mod_2pi(-0.5) == pytest.approx(2.0 * math.pi - 0.5)
    assert mod_2pi(7.0) == pytest.approx(7.0 - 2.0 * math.pi)
    assert mod_2pi(-1e-18) < 2.0 * math.pi


def test_mod_pi_is_half_open() -> None:
    """mod_pi keeps +pi and maps -pi to +pi."""

    assert mod_pi(math.pi) == pytest.approx(math.pi)
    assert mod_pi(-math.pi) == pytest.approx(math.pi)
    assert mod_pi(1.5 * math.pi) == pytest.approx(-0.5 * math.pi)


def test_parse_angle_fields_and_sign() -> None:
    """Blank or colon separated fields; a leading minus negates the whole angle."""

    assert parse_angle('51 28 38') == pytest.approx(51.0 + 28.0 / 60.0 + 38.0 / 3600.0)
    assert parse_angle('-0:30') == pytest.approx(-0.5)
    assert parse_angle('12.5') == pytest.approx(12.5)


@pytest.mark.parametrize('text', ['', 'abc', '1 2 3 4', '10 -5'])
def test_parse_angle_rejects_bad_input(text: str) -> None:
    """Unparsable text returns None instead of raising."""

    assert parse_angle(text) is None


def test_dms_string_formats_and_rounds() -> None:
    """Degrees, minutes and seconds carry correctly after rounding."""

    assert dms_string(51.4772) == '+51d28m38s'
    assert dms_string(-0.5, 'hms') == '-0h30m00s'
    assert dms_string(59.99999) == '+60d00m00s'
    assert dms_string(1.5, ' ') == '+1 30 00'
