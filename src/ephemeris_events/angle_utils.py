"""Angle reduction, parsing, and sexagesimal formatting."""

from __future__ import annotations

import math
import re

from ephemeris_events.constants import TWOPI


def mod_2pi(angle: float) -> float:
    """Reduce angle (radians) to the range [0, 2*pi)."""
    result = math.fmod(angle, TWOPI)
    if result < 0.0:
        result += TWOPI
    # fmod of a tiny negative number can round up to exactly 2*pi
    if result >= TWOPI:
        result = 0.0
    return result


def mod_pi(angle: float) -> float:
    """Reduce angle (radians) to the range (-pi, pi]."""
    result = mod_2pi(angle)
    if result > math.pi:
        result -= TWOPI
    return result


def parse_angle(string: str) -> float | None:
    """Parse an angle given as degrees (or hours), minutes, and seconds.

    Accepts three numbers (deg, m, s), two (deg, m), or one (deg), separated
    by blanks or colons. Minutes and seconds must be non-negative. A leading
    minus sign makes the whole angle negative, so "-0 30" is -0.5.

    Parameters:
        string: Text such as "51 28 38", "-0:07:39" or "12.5".

    Returns:
        Angle in the units of the first field, or None on parse failure.
    """
    s = string.strip()
    if not s:
        return None
    parts = [p for p in re.split(r'[\s:]+', s) if p]
    if not 1 <= len(parts) <= 3:
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 for v in values[1:]):
        return None
    angle = abs(values[0])
    for i, v in enumerate(values[1:], start=1):
        angle += v / 60.0**i
    if s.startswith('-'):
        angle = -angle
    return angle


def dms_string(value: float, separator: str = 'dms', ndecimal: int = 0) -> str:
    """Format an angle as degrees (or hours), minutes, and seconds.

    Parameters:
        value: Angle in degrees (or hours).
        separator: 3-character string of unit markers (e.g. 'hms' or 'dms').
            Fewer than 3 characters means blank separators.
        ndecimal: Decimal places for seconds.

    Returns:
        Formatted string such as "+51d28m38s" (or "+51 28 38" with blank separators).
    """
    if len(separator) < 3:
        sep1, sep2, sep3 = ' ', ' ', ''
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    sign = '-' if value < 0 else '+'
    scale = 10**ndecimal
    total = round(abs(value) * 3600.0 * scale)
    frac = total % scale
    secs = total // scale
    degs, rem = divmod(secs, 3600)
    mins, secs = divmod(rem, 60)
    sec_text = f'{secs:02d}'
    if ndecimal > 0:
        sec_text += f'.{frac:0{ndecimal}d}'
    return f'{sign}{degs:d}{sep1}{mins:02d}{sep2}{sec_text}{sep3}'
