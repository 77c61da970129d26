"""
circadian-tools — Circular means for cyclic domains

Averages values on domains that wrap around (time of day, day of week,
compass heading), where the arithmetic mean is wrong: 23:00 and 01:00
average to midnight, not noon. Every result comes with a confidence in
[0, 1] measuring how tightly the samples cluster.

Architecture:
    config    — Engine selection, floating type, confidence bands, report precision
    errors    — InvalidInputError, EmptyInputError, DomainConversionError
    engine    — Batch and streaming circular mean engines (+ unchecked variants)
    adapters  — Time-of-day and weekday wrappers over the engine
    frames    — pandas helpers: grouped and rolling circular means
    pipeline  — Orchestration: load → convert → average → classify → report

Public API:
    circular_mean(period, samples)          → (mean, confidence), batch
    running_circular_mean(period, samples)  → (mean, confidence), streaming
    mean_time_of_day(times)                 → datetime.time
    mean_weekday(days)                      → (Weekday, confidence)
    analyze(filepath) / analyze_data(data)  → result dict
    generate_report(result)                 → formatted report
"""

from circadian.adapters import (
    Weekday,
    mean_time_of_day,
    mean_time_of_day_with_confidence,
    mean_weekday,
)
from circadian.config import CircadianConfig
from circadian.engine import (
    RunningMean,
    circular_average,
    circular_mean,
    circular_mean_unchecked,
    running_circular_mean,
    running_circular_mean_unchecked,
)
from circadian.errors import (
    CircadianError,
    DomainConversionError,
    EmptyInputError,
    InvalidInputError,
)
from circadian.pipeline import analyze, analyze_data, generate_report

__version__ = "1.0.0"

__all__ = [
    "CircadianConfig",
    "CircadianError",
    "DomainConversionError",
    "EmptyInputError",
    "InvalidInputError",
    "RunningMean",
    "Weekday",
    "analyze",
    "analyze_data",
    "circular_average",
    "circular_mean",
    "circular_mean_unchecked",
    "generate_report",
    "mean_time_of_day",
    "mean_time_of_day_with_confidence",
    "mean_weekday",
    "running_circular_mean",
    "running_circular_mean_unchecked",
]
