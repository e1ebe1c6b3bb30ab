"""Tests for fixed-width output rows."""

from __future__ import annotations

import io
import math

from ephemeris_events.objects import PassEvent
from ephemeris_events.record import ANGLE_WIDTH, TIME_WIDTH, Record, event_header


def test_append_pads_and_separates() -> None:
    """Fields are padded to width and joined by one blank; trailing blanks dropped."""

    rec = Record()
    rec.append('a', 3)
    rec.append('bb')
    rec.append('', 5)

    assert rec.get_line() == 'a   bb'


def test_append_respects_max_length() -> None:
    """Text beyond the maximum row length is cut off."""

    rec = Record(max_length=6)
    rec.append('abc')
    rec.append('defgh')
    rec.append('ignored')

    assert rec.get_line() == 'abc de'


def test_write_emits_line_and_clears() -> None:
    """write() outputs a newline-terminated row and starts fresh; blank rows are skipped."""

    out = io.StringIO()
    rec = Record()
    rec.append('x')
    rec.write(out)
    rec.write(out)

    assert out.getvalue() == 'x\n'
    assert rec.get_line() == ''


def test_append_event_formats_time_and_angles() -> None:
    """Events print local time and degrees/minutes/seconds; non-events print '--'."""

    rec = Record()
    rec.append_event(PassEvent(time=2451545.0, azimuth=math.radians(90.5), altitude=math.radians(-0.25)))
    line = rec.get_line()
    assert line.startswith('2000-01-01 12:00:00')
    assert '90d30m00s' in line
    assert '-0d15m00s' in line

    rec.clear()
    rec.append_event(PassEvent(time=-math.inf))
    assert rec.get_line().split() == ['--', '--', '--']


def test_event_header_widths() -> None:
    """Header cells line up with event columns."""

    header = event_header('Rise')

    assert header == [('Rise time', TIME_WIDTH), ('Ris azm', ANGLE_WIDTH), ('Ris alt', ANGLE_WIDTH)]
