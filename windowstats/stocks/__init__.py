"""windowstats – Stock Price Aggregator package.

Fetches price histories from the upstream provider, normalises their
varying payload shapes and reports average prices and the correlation
of two tickers.
"""

from __future__ import annotations

from windowstats.stocks.normalize import SHAPE_MATCHERS, normalize_price_history
from windowstats.stocks.client import FetchResult, StockPriceClient
from windowstats.stocks.aggregator import PairCorrelation, StockSummary, correlate_pair, summarize_history

__all__ = [
    "SHAPE_MATCHERS",
    "normalize_price_history",
    "FetchResult",
    "StockPriceClient",
    "PairCorrelation",
    "StockSummary",
    "correlate_pair",
    "summarize_history",
]
