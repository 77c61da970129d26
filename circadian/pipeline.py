"""
Pipeline orchestration: load → convert → average → classify → report.

This is the only module with I/O (file loading, report formatting).
All averaging is delegated to the engine and the domain adapters.

Input format (JSON object):

    {"domain": "time_of_day", "samples": ["23:10", "00:40:30", ...]}
    {"domain": "weekday",     "samples": ["Sunday", "tuesday", 3, ...]}
    {"domain": "numeric",     "period": 360, "samples": [350, 10, ...]}
"""

import json
import logging
from datetime import time
from pathlib import Path
from typing import Dict, List, Union

import numpy as np

from circadian.adapters import (
    DAYS_PER_WEEK,
    SECONDS_PER_DAY,
    Weekday,
    mean_time_of_day_with_confidence,
    mean_weekday,
    seconds_since_midnight,
)
from circadian.config import CircadianConfig, ConfidenceBands
from circadian.engine import circular_average

logger = logging.getLogger(__name__)


DOMAINS = ("time_of_day", "weekday", "numeric")


# ---------------------------------------------------------------------------
# Data loading (CLI mode only)
# ---------------------------------------------------------------------------

def load_data(filepath: Union[str, Path]) -> Dict:
    """Load and validate a sample file."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if not data:
        raise ValueError("Data file is empty")

    _validate_payload(data)
    logger.info("Loaded %d %s samples from %s", len(data["samples"]), data["domain"], path)
    return data


def _validate_payload(data: Dict) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    missing = {"domain", "samples"} - set(data)
    if missing:
        raise ValueError(f"Missing required keys: {missing}")

    if data["domain"] not in DOMAINS:
        raise ValueError(f"Unknown domain {data['domain']!r}, expected one of {DOMAINS}")

    if not isinstance(data["samples"], list) or not data["samples"]:
        raise ValueError("Samples must be a non-empty list")

    if data["domain"] == "numeric" and "period" not in data:
        raise ValueError("Numeric samples require a 'period'")


# ---------------------------------------------------------------------------
# Sample parsing
# ---------------------------------------------------------------------------

def _parse_time(value) -> time:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Invalid time of day: {value!r}") from None


def _parse_weekday(value) -> Weekday:
    if isinstance(value, str):
        name = value.strip()
        if not name.isdigit():
            try:
                return Weekday[name.upper()]
            except KeyError:
                raise ValueError(f"Invalid weekday name: {value!r}") from None
        value = int(name)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Invalid weekday: {value!r}")
    return Weekday(value)


# ---------------------------------------------------------------------------
# Confidence classification
# ---------------------------------------------------------------------------

def classify_confidence(confidence: float, bands: ConfidenceBands) -> str:
    """Map a confidence value to a human-readable consensus label."""
    if confidence >= bands.strong:
        return "Strong consensus"
    if confidence >= bands.moderate:
        return "Moderate consensus"
    return "No consensus"


# ---------------------------------------------------------------------------
# Core analysis (PURE FUNCTION — NO FILE I/O)
# ---------------------------------------------------------------------------

def _analyze_payload(data: Dict, cfg: CircadianConfig) -> Dict:
    domain = data["domain"]
    samples: List = data["samples"]
    precision = cfg.report.precision

    if domain == "time_of_day":
        times = [_parse_time(s) for s in samples]
        mean_time, confidence = mean_time_of_day_with_confidence(times, cfg)
        period = SECONDS_PER_DAY
        mean = seconds_since_midnight(mean_time)
        mean_label = mean_time.strftime("%H:%M:%S")

    elif domain == "weekday":
        days = [_parse_weekday(s) for s in samples]
        day, confidence = mean_weekday(days, cfg)
        period = DAYS_PER_WEEK
        mean = int(day)
        mean_label = day.label

    else:
        period = float(data["period"])
        values = np.asarray(samples, dtype=np.float64)
        mean_value, confidence = circular_average(period, values, cfg)
        # Rounding can lift a mean just below the period up to the period itself
        mean = round(float(mean_value), precision) % period
        mean_label = f"{mean} (period {period:g})"

    confidence = round(float(confidence), precision)

    return {
        "domain": domain,
        "period": period,
        "count": len(samples),
        "mean": mean,
        "mean_label": mean_label,
        "confidence": confidence,
        "consensus": classify_confidence(confidence, cfg.confidence),
    }


# ---------------------------------------------------------------------------
# Public Entry Points
# ---------------------------------------------------------------------------

def analyze(
    filepath: Union[str, Path],
    cfg: CircadianConfig | None = None,
) -> Dict:
    """
    CLI-compatible entry point.
    Reads JSON file and runs analysis.
    """
    if cfg is None:
        cfg = CircadianConfig()

    data = load_data(filepath)
    return _analyze_payload(data, cfg)


def analyze_data(
    data: Dict,
    cfg: CircadianConfig | None = None,
) -> Dict:
    """
    Backend integration entry point.

    Accepts the decoded JSON payload directly.
    No file system usage.
    """
    if cfg is None:
        cfg = CircadianConfig()

    if not data:
        raise ValueError("Input data cannot be empty")

    _validate_payload(data)
    return _analyze_payload(data, cfg)


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

def generate_report(result: Dict) -> str:
    """Format the analysis result as a human-readable text report."""
    domain = result["domain"].replace("_", " ").title()

    lines = [
        "CIRCULAR MEAN REPORT",
        "=" * 58,
        "",
        f"  Domain              : {domain}",
        f"  Period              : {result['period']:g}",
        f"  Samples             : {result['count']}",
        f"  Mean                : {result['mean_label']}",
        f"  Confidence          : {result['confidence']}",
        f"  Consensus           : {result['consensus']}",
    ]

    if result["consensus"] == "No consensus":
        lines.append("")
        lines.append("  ⚠  Samples are spread around the cycle; the mean is weakly defined")

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)
