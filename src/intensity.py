"""Intensity evaluator: map the current instant onto the day's light periods."""

import logging
import subprocess
import time
from typing import Optional

from src.errors import CommandError
from src.models import BoundarySet, IntensityRange, RunContext

TEST_STEP_SECONDS = 10
SECONDS_PER_DAY = 24 * 60 * 60


def time_period(now: int, boundaries: BoundarySet) -> str:
    if now < boundaries.dawn:
        return "nighttime before dawn"
    if now < boundaries.sunrise:
        return "morning twilight"
    if now < boundaries.sunset:
        return "daytime"
    if now < boundaries.dusk:
        return "evening twilight"
    return "nighttime after dusk"


def evaluate(now: int, boundaries: BoundarySet, intensity_range: IntensityRange) -> int:
    """Return the LED intensity for ``now`` (epoch seconds).

    Minimal during the night, maximal during the day, rising linearly through
    morning twilight and falling linearly through evening twilight. Both
    twilight ramps use integer arithmetic on non-negative operands.
    """
    low, span = intensity_range.min, intensity_range.span
    if now < boundaries.dawn:
        return low
    if now < boundaries.sunrise:
        return low + (now - boundaries.dawn) * span // boundaries.morning_twilight
    if now < boundaries.sunset:
        return intensity_range.max
    if now < boundaries.dusk:
        return low + (boundaries.dusk - now) * span // boundaries.evening_twilight
    return low


def apply_intensity(intensity: int, context: RunContext) -> None:
    """Run the LED command with ``intensity``, or just log it in dry-run mode."""
    argv = context.settings.led_argv(intensity)
    if context.dry_run:
        logging.info(f"would execute '{' '.join(argv)}'")
        return
    try:
        subprocess.run(argv, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise CommandError(f"failed to execute '{' '.join(argv)}': {e}") from e


def set_intensity(now: int, boundaries: BoundarySet, context: RunContext) -> int:
    """Compute the intensity for ``now`` and apply it. Returns the applied value."""
    intensity = evaluate(now, boundaries, context.intensity_range)
    if context.verbose:
        logging.info(f"current time period: {time_period(now, boundaries)}")
        logging.info(f"setting intensity to {intensity}")
    apply_intensity(intensity, context)
    return intensity


def local_midnight(now: Optional[int] = None) -> int:
    """Return epoch seconds of the most recent local midnight."""
    lt = time.localtime(now if now is not None else time.time())
    return int(time.mktime((lt.tm_year, lt.tm_mon, lt.tm_mday, 0, 0, 0, 0, 0, -1)))


def sweep_day(day_start: int, boundaries: BoundarySet, context: RunContext) -> int:
    """Apply the intensity for every 10-second tick of the day starting at ``day_start``.

    Returns the number of ticks evaluated.
    """
    ticks = 0
    for tick in range(day_start, day_start + SECONDS_PER_DAY, TEST_STEP_SECONDS):
        logging.info(f"testing set_intensity for {time.ctime(tick)}:")
        set_intensity(tick, boundaries, context)
        ticks += 1
    return ticks
