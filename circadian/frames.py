"""
pandas helpers: circular means over DataFrame groups and trailing windows.

These wrap the engine for tabular data (e.g. per-user average bedtime,
7-day rolling wake-up time). Functions return new DataFrames / Series and
never modify their input.
"""

import logging
from typing import Hashable, List, Union

import numpy as np
import pandas as pd

from circadian.config import CircadianConfig
from circadian.engine import circular_average

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Column conversion
# ---------------------------------------------------------------------------

def time_of_day_seconds(series: pd.Series) -> pd.Series:
    """Whole seconds since midnight for a datetime-like Series."""
    ts = pd.to_datetime(series)
    return (ts.dt.hour * 3600 + ts.dt.minute * 60 + ts.dt.second).astype(np.int64)


# ---------------------------------------------------------------------------
# Grouped circular mean
# ---------------------------------------------------------------------------

def circular_mean_by(
    df: pd.DataFrame,
    column: str,
    by: Union[Hashable, List[Hashable]],
    period: float,
    cfg: CircadianConfig | None = None,
) -> pd.DataFrame:
    """
    Circular mean of `column` within each group of `by`.

    Returns one row per group: the group key column(s), then
    `mean`, `confidence` and `count`. Rows with a missing value in `column`
    are dropped before averaging; a group left empty is omitted.
    """
    if cfg is None:
        cfg = CircadianConfig()

    # A tuple is a single column label, as in DataFrame.groupby
    keys: List[Hashable] = list(by) if isinstance(by, list) else [by]
    missing = (set(keys) | {column}) - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    clean = df.dropna(subset=[column])
    dropped = len(df) - len(clean)
    if dropped:
        logger.debug("Dropped %d rows with missing %r", dropped, column)

    rows = []
    for key, group in clean.groupby(keys, sort=True):
        key = key if isinstance(key, tuple) else (key,)
        mean, confidence = circular_average(
            period, group[column].to_numpy(dtype=np.float64), cfg
        )
        row = dict(zip(keys, key))
        row.update(mean=float(mean), confidence=float(confidence), count=len(group))
        rows.append(row)

    return pd.DataFrame(rows, columns=keys + ["mean", "confidence", "count"])


# ---------------------------------------------------------------------------
# Rolling circular mean
# ---------------------------------------------------------------------------

def rolling_circular_mean(
    series: pd.Series,
    window: int,
    period: float,
    cfg: CircadianConfig | None = None,
    min_periods: int = 1,
) -> pd.DataFrame:
    """
    Trailing-window circular mean and confidence for every row of `series`.

    Mirrors Series.rolling(window, min_periods): each row averages itself and
    up to `window - 1` preceding non-missing values. Rows with fewer than
    `min_periods` values get NaN. The result is index-aligned with `series`.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if min_periods < 1:
        raise ValueError(f"min_periods must be >= 1, got {min_periods}")

    if cfg is None:
        cfg = CircadianConfig()

    values = series.to_numpy(dtype=np.float64)
    n = len(values)
    means = np.full(n, np.nan)
    confidences = np.full(n, np.nan)

    for i in range(n):
        tail = values[max(0, i - window + 1) : i + 1]
        tail = tail[~np.isnan(tail)]
        if len(tail) < min_periods:
            continue
        mean, confidence = circular_average(period, tail, cfg)
        means[i] = mean
        confidences[i] = confidence

    return pd.DataFrame({"mean": means, "confidence": confidences}, index=series.index)
