"""windowstats – statistics core.

Pure functions over plain sequences: rounded and unrounded means,
timestamp alignment of two price series and Pearson correlation. Nothing
in this package knows about HTTP or the upstream provider.
"""

from __future__ import annotations

from windowstats.stats.types import AlignedSeries, PriceSample
from windowstats.stats.average import average, mean, round_half_away_from_zero
from windowstats.stats.alignment import align
from windowstats.stats.correlation import LengthMismatchError, correlate, pearson

__all__ = [
    "AlignedSeries",
    "PriceSample",
    "average",
    "mean",
    "round_half_away_from_zero",
    "align",
    "LengthMismatchError",
    "correlate",
    "pearson",
]
