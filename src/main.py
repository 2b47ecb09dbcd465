#!/usr/bin/env python3
"""
Turris Nightlight
Sets the router LED intensity according to the current time period (nighttime,
morning twilight, daytime, evening twilight).

The intensity is set to the minimal value during nighttime, to the maximal
value during daytime, gradually increased during morning twilight, and
gradually decreased during evening twilight. Dawn, sunrise, sunset and dusk
come from the sunrise-sunset.org API and are cached for the rest of the day.
"""

import argparse
import dataclasses
import logging
import sys
import time
from datetime import date
from typing import List, Optional

from dotenv import load_dotenv

from src.cache import FileDailyCache
from src.config import load_settings
from src.errors import ArgumentError, NightlightError
from src.geolocation import lookup_location
from src.intensity import local_midnight, set_intensity, sweep_day
from src.log import PROGRAM_NAME, configure_logging
from src.models import LOG_DEVICES, TWILIGHT_TYPES, IntensityRange, Location, RunContext
from src.sun_times import resolve_boundaries

USAGE = """\
Usage: {prog} [--lat LATITUDE] [--long LONGITUDE]
          [--min INTENSITY] [--max INTENSITY] [--twilight TWILIGHT_TYPE]
          [--log LOGGING_DEVICE] [-v] [-n] [-h] [-u]"""

DESCRIPTION = """\
Turris-nightlight sets the LED intensity of a Turris router according to the
current time period (nighttime, morning twilight, daytime, evening twilight).
The intensity is set to the minimal value during nighttime, to the maximal
value during daytime, gradually increased during morning twilight, and
gradually decreased during evening twilight.

The start and end points of the mentioned time periods vary, based on factors
such as season, latitude, longitude, and time zone. Turris-nightlight uses a
web API (https://api.sunrise-sunset.org/) to obtain these time points. If
geographic coordinates are not supplied as command-line arguments, the
coordinates are obtained by an IP geolocation service (http://ip-api.com/),
which will use your current IP address (as seen by the API)."""

OPTIONS_HELP = """\
--lat LATITUDE    Latitude (a geographic coordinate) in the WGS84 Decimal
                  Degrees format.

--long LONGITUDE  Longitude (a geographic coordinate) in the WGS84 Decimal
                  Degrees format.

--min INTENSITY   Minimal LED intensity as an integer ranging from 0 to 100
                  (percent of minimal brightness). Has to be less than or equal
                  to the maximal LED intensity.
                  Default: 0.

--max INTENSITY   Maximal LED intensity as an integer ranging from 0 to 100
                  (percent of maximal brightness). Has to be greater than or
                  equal to the minimal LED intensity.
                  Default: 100.

--twilight TWILIGHT_TYPE
                  Twilight/dawn/dusk type: civil, nautical, or astronomical.
                  Default: civil.

--log LOGGING_DEVICE
                  Where to print diagnostic messages: stderr or syslog.
                  Default: stderr.

-v, --verbose     Be more verbose.

-n, --dry-run     Do not actually set the intensity, just show what would be
                  executed.

-h, --help        Print this help message and exit.

-u, --usage       Print an usage string and exit.

Environment (also read from a .env file): NIGHTLIGHT_CACHE_FILE,
NIGHTLIGHT_TIMES_API_URL, NIGHTLIGHT_GEO_API_URL, NIGHTLIGHT_LED_COMMAND,
NIGHTLIGHT_HTTP_TIMEOUT."""


def usage_text() -> str:
    return USAGE.format(prog=PROGRAM_NAME)


def help_text() -> str:
    return f"{DESCRIPTION}\n\n{usage_text()}\n\n{OPTIONS_HELP}"


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises ArgumentError instead of exiting with status 2."""

    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog=PROGRAM_NAME, add_help=False)
    parser.add_argument("--lat", type=float)
    parser.add_argument("--long", type=float)
    parser.add_argument("--min", default="0")
    parser.add_argument("--max", default="100")
    parser.add_argument("--twilight", default="civil")
    parser.add_argument("--log", default="stderr")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-n", "--dry-run", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-u", "--usage", action="store_true")
    parser.add_argument("--test", action="store_true")  # undocumented: sweep the whole day
    return parser


VALUE_OPTIONS = ("--lat", "--long", "--min", "--max", "--twilight", "--log")
INFO_OPTIONS = ("-h", "--help", "-u", "--usage")


def options_before_info(argv: List[str]) -> List[str]:
    """Cut argv just after the first -h/-u, so later options are never looked at.

    Option values are skipped, so ``--lat -h`` is not taken as a help request.
    """
    i = 0
    while i < len(argv):
        if argv[i] in INFO_OPTIONS:
            return argv[: i + 1]
        i += 2 if argv[i] in VALUE_OPTIONS else 1
    return argv


def parse_intensity(raw: str, which: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise ArgumentError(f"{which} LED intensity is not a positive integer")
    value = int(raw)
    if value > 100:
        raise ArgumentError(f"{which} LED intensity is greater than 100")
    return value


def build_context(args: argparse.Namespace) -> RunContext:
    """Validate parsed arguments and freeze them into a RunContext."""
    intensity_range = IntensityRange(
        min=parse_intensity(args.min, "minimal"),
        max=parse_intensity(args.max, "maximal"),
    )
    if intensity_range.span < 0:
        raise ArgumentError("negative LED intensity range")
    if args.twilight not in TWILIGHT_TYPES:
        raise ArgumentError(f"invalid twilight type '{args.twilight}'")
    if args.log not in LOG_DEVICES:
        raise ArgumentError(f"invalid logging device '{args.log}'")
    if args.lat is not None and not -90.0 <= args.lat <= 90.0:
        raise ArgumentError(f"latitude '{args.lat}' out of range")
    if args.long is not None and not -180.0 <= args.long <= 180.0:
        raise ArgumentError(f"longitude '{args.long}' out of range")

    location = None
    if args.lat is not None and args.long is not None:
        location = Location(latitude=args.lat, longitude=args.long)

    return RunContext(
        intensity_range=intensity_range,
        settings=load_settings(),
        twilight=args.twilight,
        location=location,
        verbose=args.verbose,
        dry_run=args.dry_run,
        test_mode=args.test,
    )


def run(context: RunContext, now: Optional[int] = None, today: Optional[date] = None) -> None:
    """Resolve location and boundary times, then set the intensity for now."""
    if context.location is None:
        # latitude or longitude not supplied, use the IP geolocation API
        if context.verbose:
            logging.info("geo API: unknown latitude or longitude, using an IP geolocation information")
        context = dataclasses.replace(context, location=lookup_location(context.settings))

    now = int(time.time()) if now is None else now
    today = date.fromtimestamp(now) if today is None else today
    cache = FileDailyCache(context.settings.cache_file)
    boundaries = resolve_boundaries(context.location, context.twilight, today, cache, context.settings)
    boundaries.check()

    if context.verbose:
        logging.info(f"latitude:  {context.location.latitude}")
        logging.info(f"longitude: {context.location.longitude}")
        logging.info(f"now:       {time.ctime(now)}")
        logging.info(f"dawn:      {time.ctime(boundaries.dawn)}")
        logging.info(f"sunrise:   {time.ctime(boundaries.sunrise)}")
        logging.info(f"sunset:    {time.ctime(boundaries.sunset)}")
        logging.info(f"dusk:      {time.ctime(boundaries.dusk)}")
        logging.info(f"morning twilight duration: {boundaries.morning_twilight} seconds")
        logging.info(f"evening twilight duration: {boundaries.evening_twilight} seconds")

    if context.test_mode:
        sweep_day(local_midnight(now), boundaries, context)
    else:
        set_intensity(now, boundaries, context)


def main(argv: Optional[List[str]] = None, now: Optional[int] = None) -> int:
    # argument errors are reported on stderr before the requested device is known
    configure_logging("stderr")
    try:
        argv = sys.argv[1:] if argv is None else argv
        args = build_parser().parse_args(options_before_info(argv))
        if args.help:
            print(help_text())
            return 0
        if args.usage:
            print(usage_text())
            return 0
        context = build_context(args)
        configure_logging(args.log)
        run(context, now=now)
    except NightlightError as e:
        logging.error(str(e))
        return 1
    return 0


def cli() -> None:
    load_dotenv()
    sys.exit(main())


if __name__ == "__main__":
    cli()
