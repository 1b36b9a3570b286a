"""windowstats – Stock Price Aggregator API.

REST endpoints that fetch price histories from the provider and report:

- the average price of one ticker over the last ``minutes``;
- the correlation of exactly two tickers over their common timestamps,
  together with each ticker's average and history.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, ConfigDict, Field

from windowstats.core.http import require_bearer_token
from windowstats.core.logging import get_logger
from windowstats.core.types import Number
from windowstats.stats.types import PriceSample
from windowstats.stocks.aggregator import StockSummary, correlate_pair, summarize_history
from windowstats.stocks.client import FetchResult, StockPriceClient

router = APIRouter(tags=["stocks"])
logger = get_logger(__name__)

FETCH_FAILED = "Failed to fetch stock data"
NO_HISTORY = "No price history found"
NO_HISTORY_PAIR = "No price history found for one or both tickers"
TICKER_COUNT = "Exactly two tickers must be provided"


# ============================================================================
# Response Models
# ============================================================================


class PriceSampleModel(BaseModel):
    """One price observation as returned by the provider."""

    model_config = ConfigDict(populate_by_name=True)

    price: Number
    last_updated_at: str = Field(alias="lastUpdatedAt")


class AverageStockPriceResponse(BaseModel):
    """Average price of one ticker and its history."""

    model_config = ConfigDict(populate_by_name=True)

    average_stock_price: float = Field(alias="averageStockPrice")
    price_history: List[PriceSampleModel] = Field(alias="priceHistory")


class StockSummaryModel(BaseModel):
    """Per-ticker block of the correlation response."""

    model_config = ConfigDict(populate_by_name=True)

    average_price: float = Field(alias="averagePrice")
    price_history: List[PriceSampleModel] = Field(alias="priceHistory")


class CorrelationResponse(BaseModel):
    """Correlation of two tickers and a summary of each."""

    correlation: float
    stocks: Dict[str, StockSummaryModel]


def _history_models(samples: Sequence[PriceSample]) -> List[PriceSampleModel]:
    return [PriceSampleModel(price=s.price, last_updated_at=s.last_updated_at) for s in samples]


def _summary_model(summary: StockSummary) -> StockSummaryModel:
    return StockSummaryModel(
        average_price=summary.average_price,
        price_history=_history_models(summary.price_history),
    )


# ============================================================================
# Dependencies
# ============================================================================


_client: Optional[StockPriceClient] = None


def get_stock_client() -> StockPriceClient:
    global _client
    if _client is None:
        _client = StockPriceClient.from_config()
    return _client


def _raise_for_fetch(results: Sequence[FetchResult], empty_detail: str) -> None:
    if any(r.failed for r in results):
        raise HTTPException(status_code=502, detail=FETCH_FAILED)
    if any(r.empty for r in results):
        raise HTTPException(status_code=404, detail=empty_detail)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/stocks/{ticker}",
    response_model=AverageStockPriceResponse,
    summary="Average price of one ticker",
)
def get_average_stock_price(
    ticker: str = Path(..., description="Ticker symbol"),
    minutes: int = Query(..., gt=0, description="Look-back window in minutes"),
    aggregation: Literal["average"] = Query(..., description="Aggregation to apply"),
    credential: str = Depends(require_bearer_token),
    client: StockPriceClient = Depends(get_stock_client),
) -> AverageStockPriceResponse:
    """Return the unrounded mean price of ``ticker`` and its history."""

    result = client.get_price_history(ticker, minutes, credential)
    _raise_for_fetch([result], NO_HISTORY)

    summary = summarize_history(result.samples)
    return AverageStockPriceResponse(
        average_stock_price=summary.average_price,
        price_history=_history_models(summary.price_history),
    )


@router.get(
    "/stockcorrelation",
    response_model=CorrelationResponse,
    summary="Correlation of two tickers",
)
def get_stock_correlation(
    minutes: int = Query(..., gt=0, description="Look-back window in minutes"),
    ticker: List[str] = Query(..., description="Exactly two tickers"),
    credential: str = Depends(require_bearer_token),
    client: StockPriceClient = Depends(get_stock_client),
) -> CorrelationResponse:
    """Correlate two tickers over the timestamps they have in common.

    Both histories are fetched concurrently; the response is built only
    once both have arrived.
    """

    if len(ticker) != 2:
        raise HTTPException(status_code=400, detail=TICKER_COUNT)
    ticker_a, ticker_b = ticker

    results = client.get_price_histories([ticker_a, ticker_b], minutes, credential)
    _raise_for_fetch([results[ticker_a], results[ticker_b]], NO_HISTORY_PAIR)

    pair = correlate_pair(
        ticker_a,
        results[ticker_a].samples,
        ticker_b,
        results[ticker_b].samples,
    )
    logger.info(
        "Correlation %s/%s over %d points: %s",
        ticker_a,
        ticker_b,
        pair.aligned_points,
        pair.correlation,
    )
    return CorrelationResponse(
        correlation=pair.correlation,
        stocks={name: _summary_model(summary) for name, summary in pair.summaries.items()},
    )
