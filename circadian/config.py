"""
Centralized configuration for engine selection, numeric width, and reporting.

Every tunable constant lives here. Domain facts (seconds per day, days per
week) are not tunables and live with the adapters that use them.
"""

from dataclasses import dataclass, field

import numpy as np


# ---------------------------------------------------------------------------
# Engine parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineParams:
    """Which engine runs and in what floating-point width."""

    # Any numpy floating type name: "float32", "float64", "longdouble"
    dtype: str = "float64"

    # Batch engine consumes its input in chunks of at most this many samples
    chunk_size: int = 65536

    # False → batch (summed projections), True → streaming (running mean)
    streaming: bool = False

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if not np.issubdtype(np.dtype(self.dtype), np.floating):
            raise ValueError(f"dtype must be a floating-point type, got {self.dtype!r}")


# ---------------------------------------------------------------------------
# Confidence classification
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfidenceBands:
    """
    Lower bounds for labeling a confidence value.

    confidence >= strong    → "Strong consensus"
    confidence >= moderate  → "Moderate consensus"
    otherwise               → "No consensus"
    """

    strong: float = 0.75
    moderate: float = 0.35

    def __post_init__(self):
        if not 0.0 <= self.moderate <= self.strong <= 1.0:
            raise ValueError(
                f"Confidence bands must satisfy 0 <= moderate <= strong <= 1, "
                f"got moderate={self.moderate}, strong={self.strong}"
            )


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportParams:
    """Number formatting for pipeline results and the text report."""

    precision: int = 4


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CircadianConfig:
    """Complete configuration. Pass to adapters and pipeline to override defaults."""

    engine: EngineParams = field(default_factory=EngineParams)
    confidence: ConfidenceBands = field(default_factory=ConfidenceBands)
    report: ReportParams = field(default_factory=ReportParams)
