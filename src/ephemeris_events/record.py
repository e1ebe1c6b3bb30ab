"""Fixed-width table rows for event listings."""

from __future__ import annotations

import math
from typing import TextIO

from ephemeris_events.angle_utils import dms_string
from ephemeris_events.objects import PassEvent
from ephemeris_events.time_utils import format_jd

# Width of a formatted local date-time ('YYYY-MM-DD HH:MM:SS')
TIME_WIDTH = 19
# Width of an azimuth or altitude in degrees, minutes, seconds ('+123d45m07s')
ANGLE_WIDTH = 11


class Record:
    """One output row: fields separated by single blanks, padded to column widths."""

    def __init__(self, max_length: int = 1024) -> None:
        self._fields: list[str] = []
        self._max_length = max_length

    def clear(self) -> None:
        """Drop all fields of the current row."""
        self._fields = []

    def append(self, text: str, width: int = 0) -> None:
        """Add a field, left-justified to width. Text past max_length is cut off."""
        used = sum(len(f) + 1 for f in self._fields)
        room = self._max_length - used
        if room <= 0:
            return
        self._fields.append(text.ljust(width)[:room])

    def append_event(self, event: PassEvent, zone: float = 0.0) -> None:
        """Add time, azimuth and altitude columns for one event ('--' if it did not occur)."""
        self.append(format_jd(event.time, zone), TIME_WIDTH)
        if math.isinf(event.azimuth) or math.isinf(event.altitude):
            self.append('--', ANGLE_WIDTH)
            self.append('--', ANGLE_WIDTH)
            return
        self.append(_dms(event.azimuth, signed=False), ANGLE_WIDTH)
        self.append(_dms(event.altitude, signed=True), ANGLE_WIDTH)

    def get_line(self) -> str:
        """Return the current row with trailing blanks removed."""
        return ' '.join(self._fields).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the current row (if not blank) and start a new one."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.clear()


def _dms(angle: float, signed: bool) -> str:
    text = dms_string(math.degrees(angle), 'dms')
    if not signed:
        text = text[1:]
    return text


def event_header(label: str) -> list[tuple[str, int]]:
    """Column titles and widths for one event group (time, azimuth, altitude)."""
    return [
        (f'{label} time', TIME_WIDTH),
        (f'{label[:3]} azm', ANGLE_WIDTH),
        (f'{label[:3]} alt', ANGLE_WIDTH),
    ]
