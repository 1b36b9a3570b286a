"""windowstats – per-ticker and pairwise stock statistics.

Glue between fetched price histories and the statistics core:

- a single ticker is summarised by its unrounded mean price;
- a pair of tickers is aligned on common timestamps and correlated.

Averages always use the full history of each ticker; the correlation
uses only the aligned subset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from windowstats.core.logging import get_logger
from windowstats.stats.alignment import align
from windowstats.stats.average import mean
from windowstats.stats.correlation import correlate
from windowstats.stats.types import PriceSample

logger = get_logger(__name__)


@dataclass(frozen=True)
class StockSummary:
    """Average price and the history it was computed from."""

    average_price: float
    price_history: List[PriceSample]


@dataclass(frozen=True)
class PairCorrelation:
    """Correlation of two tickers plus each ticker's summary."""

    correlation: float
    aligned_points: int
    summaries: Dict[str, StockSummary]


def summarize_history(samples: Sequence[PriceSample]) -> StockSummary:
    return StockSummary(
        average_price=mean([s.price for s in samples]),
        price_history=list(samples),
    )


def correlate_pair(
    ticker_a: str,
    samples_a: Sequence[PriceSample],
    ticker_b: str,
    samples_b: Sequence[PriceSample],
) -> PairCorrelation:
    """Summarise both tickers and correlate them.

    If both tickers are the same string the summaries mapping holds a
    single entry.
    """

    aligned = align(samples_a, samples_b)
    correlation = correlate(aligned.values_a, aligned.values_b)
    logger.debug(
        "Correlated %s/%s over %d aligned points: %s",
        ticker_a,
        ticker_b,
        len(aligned),
        correlation,
    )
    return PairCorrelation(
        correlation=correlation,
        aligned_points=len(aligned),
        summaries={
            ticker_a: summarize_history(samples_a),
            ticker_b: summarize_history(samples_b),
        },
    )
