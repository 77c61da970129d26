"""
Domain adapters: clock times and weekdays on top of the circular engines.

Each adapter maps its values onto a numeric cyclic domain, runs the engine
selected by the config, and maps the mean back. No averaging logic lives
here.

Conventions:
    time of day — whole seconds since midnight, period 86400
    weekday     — Monday-first zero-based index (Monday=0 … Sunday=6, as
                  datetime.date.weekday() and the calendar module), period 7,
                  mean index rounded half away from zero
"""

import logging
import math
from datetime import datetime, time
from enum import IntEnum
from typing import Iterable, Tuple

import numpy as np

from circadian.config import CircadianConfig
from circadian.engine import circular_average
from circadian.errors import DomainConversionError, InvalidInputError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
DAYS_PER_WEEK = 7


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.title()


# ---------------------------------------------------------------------------
# Time of day
# ---------------------------------------------------------------------------

def seconds_since_midnight(value) -> int:
    """Whole seconds since midnight for a time or datetime (sub-second part dropped)."""
    if isinstance(value, datetime):
        value = value.time()
    if not isinstance(value, time):
        raise InvalidInputError(f"Expected a time or datetime, got {type(value).__name__}")
    return value.hour * 3600 + value.minute * 60 + value.second


def time_from_seconds(seconds) -> time:
    """
    Map a mean in seconds back onto the clock.

    The value is snapped to microseconds (the resolution of datetime.time),
    then the sub-second remainder is truncated and the result wrapped into
    the day, so 86399.9999999999 reads as midnight rather than 23:59:59.
    """
    seconds = float(seconds)
    if not math.isfinite(seconds):
        raise DomainConversionError(f"Mean time of day is not finite: {seconds}")

    micros = round(seconds * 1_000_000)
    whole = (micros // 1_000_000) % SECONDS_PER_DAY
    return time(whole // 3600, whole % 3600 // 60, whole % 60)


def mean_time_of_day_with_confidence(
    times: Iterable,
    cfg: CircadianConfig | None = None,
) -> Tuple[time, float]:
    """Circular mean of clock times plus the engine's confidence."""
    mean_value, confidence = circular_average(
        SECONDS_PER_DAY,
        (seconds_since_midnight(t) for t in times),
        cfg,
    )
    result = time_from_seconds(mean_value)
    logger.debug("Mean time of day %s (confidence=%.4f)", result, confidence)
    return result, float(confidence)


def mean_time_of_day(times: Iterable, cfg: CircadianConfig | None = None) -> time:
    """
    Circular mean of clock times.

    01:00 and 23:00 average to 00:00:00, not noon.
    """
    return mean_time_of_day_with_confidence(times, cfg)[0]


# ---------------------------------------------------------------------------
# Weekday
# ---------------------------------------------------------------------------

def weekday_index(day) -> int:
    """Zero-based Monday-first index for a Weekday, an int 0–6, or a date-like object."""
    if isinstance(day, (int, np.integer)) and not isinstance(day, bool):
        index = int(day)
    elif callable(getattr(day, "weekday", None)):
        index = day.weekday()
    else:
        raise InvalidInputError(f"Cannot interpret {day!r} as a weekday")

    if not 0 <= index < DAYS_PER_WEEK:
        raise InvalidInputError(f"Weekday index must be in [0, 6], got {index}")
    return index


def round_half_away(value: float) -> int:
    """Round to the nearest integer; exact halves move away from zero (2.5 → 3, -2.5 → -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def weekday_from_mean(mean_value) -> Weekday:
    """Round a mean weekday index and map it to a Weekday."""
    value = float(mean_value)
    if not math.isfinite(value):
        raise DomainConversionError(f"Mean weekday index is not finite: {value}")

    index = round_half_away(value)
    # Means in [6.5, 7) belong to the Monday side of the week boundary
    if index == DAYS_PER_WEEK:
        index = 0
    if not 0 <= index < DAYS_PER_WEEK:
        raise DomainConversionError(f"Mean weekday index {value} rounds outside the week")
    return Weekday(index)


def mean_weekday(
    days: Iterable,
    cfg: CircadianConfig | None = None,
) -> Tuple[Weekday, float]:
    """
    Circular mean weekday and its confidence.

    Low confidence means the days are spread across the week with no
    consensus day. Tuesday and Thursday average to Wednesday; Sunday and
    Tuesday average to Monday.
    """
    mean_value, confidence = circular_average(
        DAYS_PER_WEEK,
        (weekday_index(d) for d in days),
        cfg,
    )
    result = weekday_from_mean(mean_value)
    logger.debug("Mean weekday %s (confidence=%.4f)", result.label, confidence)
    return result, float(confidence)
