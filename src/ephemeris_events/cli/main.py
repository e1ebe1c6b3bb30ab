"""CLI entry point: ephemeris-events riseset|passes subcommands."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import NoReturn, TextIO

from ephemeris_events.angle_utils import parse_angle
from ephemeris_events.config import get_log_level
from ephemeris_events.constants import ALT_POINT, ALT_SUN_MOON, LUNA_ID, SUN_ID, planet_name_to_id
from ephemeris_events.events import rise_transit_set_pass
from ephemeris_events.objects import Moon, Planet, Satellite, SolarSystemObject
from ephemeris_events.observer import observer_from_degrees
from ephemeris_events.passes import find_satellite_passes
from ephemeris_events.record import Record, event_header
from ephemeris_events.spice.load import load_kernels
from ephemeris_events.time_utils import parse_jd

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or EPHEMERIS_EVENTS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _load_ephemeris(skip: bool) -> None:
    """Furnish SPK kernels unless skipped; mean elements are used without them."""
    if skip:
        return
    ok, reason = load_kernels()
    if not ok:
        logger.info('%s Using mean orbital elements.', reason)


def _parse_body(name: str) -> SolarSystemObject:
    """Return a Planet or Earth's Moon for a name or ID string.

    Raises:
        ValueError: If name is not a recognized body.
    """
    body_id = planet_name_to_id(name)
    if body_id is None:
        raise ValueError(f'Unknown body {name!r}; expected Sun, a planet, or Moon')
    if body_id == LUNA_ID:
        return Moon(LUNA_ID, name='Moon')
    return Planet(body_id)


def _parse_time(text: str, what: str) -> float:
    jd = parse_jd(text)
    if jd is None:
        raise ValueError(f'Invalid {what} time: {text!r}')
    return jd


def _write_header(out: TextIO, labels: list[str], first: tuple[str, int] | None = None) -> None:
    rec = Record()
    if first is not None:
        rec.append(*first)
    for label in labels:
        for title, width in event_header(label):
            rec.append(title, width)
    rec.write(out)


def _default_altitude(body: SolarSystemObject) -> float:
    if isinstance(body, Moon) or (isinstance(body, Planet) and body.planet_id == SUN_ID):
        return ALT_SUN_MOON
    return ALT_POINT


def _riseset_cmd(args: argparse.Namespace, out: TextIO) -> int:
    """Print rise, transit, and set for a body on each of N local days.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        body = _parse_body(args.body)
        # Local noon of the requested date
        jd = _parse_time(args.date, 'date') + 0.5 - args.zone / 24.0
        context = observer_from_degrees(jd, args.lon, args.lat, args.height, args.zone)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    alt = _default_altitude(body) if args.altitude is None else math.radians(args.altitude)
    _load_ephemeris(args.no_kernels)

    _write_header(out, ['Rise', 'Transit', 'Set'])
    rec = Record()
    for day in range(args.days):
        day_pass = rise_transit_set_pass(jd + day, context, body, alt)
        rec.append_event(day_pass.rising, args.zone)
        rec.append_event(day_pass.transit, args.zone)
        rec.append_event(day_pass.setting, args.zone)
        rec.write(out)
    return 0


def _passes_cmd(args: argparse.Namespace, out: TextIO) -> int:
    """Print each pass of a TLE satellite between start and stop.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        satellite = Satellite.from_tle(args.name, args.tle1, args.tle2, args.std_mag)
        start = _parse_time(args.start, 'start')
        stop = _parse_time(args.stop, 'stop')
        if stop < start:
            raise ValueError('Stop time precedes start time')
        context = observer_from_degrees(start, args.lon, args.lat, args.height, args.zone)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    _load_ephemeris(args.no_kernels)

    passes = find_satellite_passes(
        context, satellite, start, stop, math.radians(args.min_alt)
    )
    _write_header(out, ['Rise', 'Peak', 'Set'], first=('#', 3))
    rec = Record()
    for n, sat_pass in enumerate(passes, start=1):
        rec.append(str(n), 3)
        rec.append_event(sat_pass.rising, args.zone)
        rec.append_event(sat_pass.transit, args.zone)
        rec.append_event(sat_pass.setting, args.zone)
        rec.write(out)
    print(f'{len(passes)} passes', file=out)
    return 0


def _angle_arg(text: str) -> float:
    """argparse type for angles in decimal or sexagesimal degrees ('51 28 38', '-0:07:39')."""
    value = parse_angle(text)
    if value is None:
        raise argparse.ArgumentTypeError(f'invalid angle: {text!r}')
    return value


def _add_observer_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--lat', type=_angle_arg, required=True, help='Latitude, degrees north')
    parser.add_argument('--lon', type=_angle_arg, required=True, help='Longitude, degrees east')
    parser.add_argument('--height', type=float, default=0.0, help='Height above sea level, meters')
    parser.add_argument(
        '--zone', type=float, default=0.0, help='Time zone, hours east of UTC (default 0)'
    )
    parser.add_argument(
        '--no-kernels',
        action='store_true',
        help='Do not load SPICE kernels; use mean orbital elements',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run a subcommand.

    Parameters:
        argv: Argument list (default sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog='ephemeris-events',
        description='Rise/transit/set times and satellite passes.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    rs_parser = subparsers.add_parser('riseset', help='Daily rise, transit, and set times')
    rs_parser.add_argument('--body', required=True, help='Sun, Mercury ... Pluto, or Moon')
    rs_parser.add_argument('--date', required=True, help='First local day, e.g. 2024-03-20')
    rs_parser.add_argument(
        '--altitude',
        type=float,
        default=None,
        help='Horizon altitude, degrees (default -50 arcmin for Sun/Moon, -0.5 otherwise)',
    )
    rs_parser.add_argument('--days', type=int, default=1, help='Number of days (default 1)')
    _add_observer_args(rs_parser)
    rs_parser.set_defaults(func=_riseset_cmd)

    pass_parser = subparsers.add_parser('passes', help='Satellite passes from a TLE')
    pass_parser.add_argument('--name', default='Satellite', help='Satellite name')
    pass_parser.add_argument('--tle1', required=True, help='TLE line 1')
    pass_parser.add_argument('--tle2', required=True, help='TLE line 2')
    pass_parser.add_argument(
        '--std-mag', type=float, default=math.inf, help='Standard magnitude (1000 km, half lit)'
    )
    pass_parser.add_argument('--start', required=True, help='Start time (UTC)')
    pass_parser.add_argument('--stop', required=True, help='Stop time (UTC)')
    pass_parser.add_argument(
        '--min-alt', type=float, default=10.0, help='Minimum altitude, degrees (default 10)'
    )
    _add_observer_args(pass_parser)
    pass_parser.set_defaults(func=_passes_cmd)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return int(args.func(args, sys.stdout))
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
