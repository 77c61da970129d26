"""
Circular mean engines: average values on a domain that wraps around.

Each sample x on a domain of circumference `period` is projected onto the
unit circle at angle θ = x / period · 2π. The projections are averaged, the
angle of the average is converted back into domain units, and the length of
the average vector is reported as confidence:

    1.0  → every sample sits at the same point
    0.0  → samples cancel out (e.g. two diametrically opposed values)

Two engines compute the same quantity:

    circular_mean          — sums projections, divides once at the end
    running_circular_mean  — keeps a running mean of projections; every
                             intermediate value stays inside [-1, 1]

Both are generic over numpy floating types, accept any single-pass iterable,
and return (mean_value, confidence) in the requested type with mean_value
normalized into [0, period). Unchecked variants skip input validation and
exist for throughput measurements only.

All functions are pure — no I/O, no shared state.
"""

import logging
from itertools import islice
from typing import Iterable, Iterator, Tuple

import numpy as np

from circadian.config import CircadianConfig, EngineParams
from circadian.errors import EmptyInputError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = EngineParams().chunk_size


# ---------------------------------------------------------------------------
# Floating-type helpers
# ---------------------------------------------------------------------------

def _resolve_dtype(dtype) -> type:
    """Return the numpy scalar type for `dtype`, rejecting non-floating types."""
    ftype = np.dtype(dtype).type
    if not issubclass(ftype, np.floating):
        raise TypeError(f"Engine dtype must be a floating-point type, got {np.dtype(dtype)}")
    return ftype


def _checked_period(period, ftype: type) -> np.floating:
    rng = ftype(period)
    if not (np.isfinite(rng) and rng > 0):
        raise InvalidInputError(f"Period must be a finite positive number, got {period!r}")
    return rng


# ---------------------------------------------------------------------------
# Running mean accumulator
# ---------------------------------------------------------------------------

class RunningMean:
    """
    Incremental arithmetic mean that never holds an unbounded sum.

    Update rule:  mean += (value - mean) / n

    Averaging a constant into itself leaves the mean untouched, including at
    the largest finite value of the floating type, because (v - v) is exactly
    zero.
    """

    __slots__ = ("_ftype", "count", "mean")

    def __init__(self, dtype=np.float64):
        self._ftype = _resolve_dtype(dtype)
        self.count = 0
        self.mean = self._ftype(0.0)

    def update(self, value) -> np.floating:
        """Fold one value into the mean and return the new mean."""
        value = self._ftype(value)
        self.count += 1
        self.mean = self.mean + (value - self.mean) / self._ftype(self.count)
        return self.mean


# ---------------------------------------------------------------------------
# Projection accumulation
# ---------------------------------------------------------------------------

def _iter_chunks(samples: Iterable, ftype: type, chunk_size: int) -> Iterator[np.ndarray]:
    """Yield the samples as 1-D arrays of at most `chunk_size` values."""
    if isinstance(samples, np.ndarray):
        values = samples.astype(ftype, copy=False).ravel()
        for start in range(0, values.size, chunk_size):
            yield values[start : start + chunk_size]
        return

    iterator = iter(samples)
    while True:
        chunk = np.fromiter(islice(iterator, chunk_size), dtype=ftype)
        if chunk.size == 0:
            return
        yield chunk


def _check_chunk(chunk: np.ndarray, offset: int) -> None:
    bad = ~(np.isfinite(chunk) & (chunk >= 0))
    if bad.any():
        index = int(np.argmax(bad))
        raise InvalidInputError(
            f"Sample {offset + index} must be finite and non-negative, got {chunk[index]}"
        )


def _summed_projections(
    rng: np.floating,
    samples: Iterable,
    ftype: type,
    chunk_size: int,
    checked: bool,
) -> Tuple[np.floating, np.floating, int]:
    """Sum cos/sin of every sample chunk by chunk, then divide by the count."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    two_pi = ftype(2.0 * np.pi)
    sum_x = ftype(0.0)
    sum_y = ftype(0.0)
    count = 0

    for chunk in _iter_chunks(samples, ftype, chunk_size):
        if checked:
            _check_chunk(chunk, count)
        # fmod is exact, so reducing first only keeps θ small for huge samples
        theta = np.fmod(chunk, rng) / rng * two_pi
        sum_x += np.cos(theta).sum(dtype=ftype)
        sum_y += np.sin(theta).sum(dtype=ftype)
        count += chunk.size

    if count == 0:
        raise EmptyInputError("Cannot average an empty sequence of samples")

    n = ftype(count)
    return sum_x / n, sum_y / n, count


def _running_projections(
    rng: np.floating,
    samples: Iterable,
    ftype: type,
    checked: bool,
) -> Tuple[np.floating, np.floating, int]:
    """Fold each sample's projection into a running mean, one sample at a time."""
    two_pi = ftype(2.0 * np.pi)
    mean_x = RunningMean(ftype)
    mean_y = RunningMean(ftype)

    for sample in samples:
        value = ftype(sample)
        if checked and not (np.isfinite(value) and value >= 0):
            raise InvalidInputError(
                f"Sample {mean_x.count} must be finite and non-negative, got {sample!r}"
            )
        theta = np.fmod(value, rng) / rng * two_pi
        mean_x.update(np.cos(theta))
        mean_y.update(np.sin(theta))

    if mean_x.count == 0:
        raise EmptyInputError("Cannot average an empty sequence of samples")

    return mean_x.mean, mean_y.mean, mean_x.count


def _finalize(
    mean_x: np.floating,
    mean_y: np.floating,
    rng: np.floating,
    ftype: type,
) -> Tuple[np.floating, np.floating]:
    """Convert a mean projection into (mean_value in [0, period), confidence)."""
    two_pi = ftype(2.0 * np.pi)

    mean_angle = np.arctan2(mean_y, mean_x)
    if mean_angle < 0:
        mean_angle = mean_angle + two_pi

    mean_value = mean_angle / (two_pi / rng)
    # An angle a hair below 2π can round up to exactly one full period
    if mean_value >= rng:
        mean_value = mean_value - rng

    confidence = np.clip(np.sqrt(mean_x * mean_x + mean_y * mean_y), 0.0, 1.0)
    return ftype(mean_value), ftype(confidence)


# ---------------------------------------------------------------------------
# Public engines
# ---------------------------------------------------------------------------

def circular_mean(
    period,
    samples: Iterable,
    dtype=np.float64,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Tuple[np.floating, np.floating]:
    """
    Batch circular mean of non-negative samples on a domain of size `period`.

    Consumes `samples` (any iterable, possibly a one-shot generator) in chunks
    of `chunk_size`, so memory stays bounded regardless of input length.

    Raises:
        InvalidInputError: period is not finite and positive, or a sample is
            negative, NaN or infinite.
        EmptyInputError: no samples were supplied.
    """
    ftype = _resolve_dtype(dtype)
    rng = _checked_period(period, ftype)
    mean_x, mean_y, count = _summed_projections(rng, samples, ftype, chunk_size, checked=True)
    logger.debug("Batch circular mean over %d samples (period=%s)", count, rng)
    return _finalize(mean_x, mean_y, rng, ftype)


def running_circular_mean(
    period,
    samples: Iterable,
    dtype=np.float64,
) -> Tuple[np.floating, np.floating]:
    """
    Streaming circular mean: same result contract as circular_mean.

    Keeps only a running mean of the projections and a count (O(1) state), so
    no intermediate value ever leaves [-1, 1] however many samples arrive.

    Raises:
        InvalidInputError: period is not finite and positive, or a sample is
            negative, NaN or infinite.
        EmptyInputError: no samples were supplied.
    """
    ftype = _resolve_dtype(dtype)
    rng = _checked_period(period, ftype)
    mean_x, mean_y, count = _running_projections(rng, samples, ftype, checked=True)
    logger.debug("Running circular mean over %d samples (period=%s)", count, rng)
    return _finalize(mean_x, mean_y, rng, ftype)


def circular_mean_unchecked(
    period,
    samples: Iterable,
    dtype=np.float64,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Tuple[np.floating, np.floating]:
    """
    Unchecked, caller-verified batch engine.

    Skips period and per-sample validation. The caller guarantees a positive
    period and finite non-negative samples; anything else yields undefined
    output. Empty input still raises EmptyInputError.
    """
    ftype = _resolve_dtype(dtype)
    rng = ftype(period)
    mean_x, mean_y, _ = _summed_projections(rng, samples, ftype, chunk_size, checked=False)
    return _finalize(mean_x, mean_y, rng, ftype)


def running_circular_mean_unchecked(
    period,
    samples: Iterable,
    dtype=np.float64,
) -> Tuple[np.floating, np.floating]:
    """Unchecked, caller-verified streaming engine. See circular_mean_unchecked."""
    ftype = _resolve_dtype(dtype)
    rng = ftype(period)
    mean_x, mean_y, _ = _running_projections(rng, samples, ftype, checked=False)
    return _finalize(mean_x, mean_y, rng, ftype)


# ---------------------------------------------------------------------------
# Config-driven dispatch
# ---------------------------------------------------------------------------

def circular_average(
    period,
    samples: Iterable,
    cfg: CircadianConfig | None = None,
) -> Tuple[np.floating, np.floating]:
    """Run the checked engine and floating type selected by `cfg.engine`."""
    if cfg is None:
        cfg = CircadianConfig()

    ep = cfg.engine
    if ep.streaming:
        return running_circular_mean(period, samples, dtype=ep.dtype)
    return circular_mean(period, samples, dtype=ep.dtype, chunk_size=ep.chunk_size)
