"""windowstats – HTTP client for upstream stock price histories.

Fetches ``GET {base}/stocks/{ticker}?minutes={minutes}`` with the
caller's bearer credential and normalises whatever shape comes back via
:mod:`windowstats.stocks.normalize`.

Failures never raise. They come back as a :class:`FetchResult` with no
samples and ``failed=True``, which lets the API layer tell "the provider
is unreachable" apart from "the provider has no prices" while the
statistics code still receives a plain list.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Sequence
from urllib.parse import quote

import requests

from windowstats.core.config import UpstreamConfig, get_config
from windowstats.core.logging import get_logger
from windowstats.monitoring.metrics import increment_counter
from windowstats.stats.types import PriceSample
from windowstats.stocks.normalize import normalize_price_history

logger = get_logger(__name__)

FETCH_COUNTER = "upstream.fetch"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one price-history fetch.

    Attributes:
        ticker: Ticker that was requested.
        samples: Normalised samples; empty on failure.
        failed: ``True`` when the request itself failed (transport
            error, non-200 status or undecodable body). A non-200 counts
            as a failure, so it surfaces as 502 rather than 404.
    """

    ticker: str
    samples: List[PriceSample] = field(default_factory=list)
    failed: bool = False

    @property
    def empty(self) -> bool:
        return not self.samples


class StockPriceClient:
    """Thin HTTP client for the stocks endpoint.

    Parameters
    ----------
    base_url:
        Base URL of the provider; ``/stocks/{ticker}`` is appended.
    timeout_seconds:
        Request timeout in seconds.
    """

    def __init__(self, base_url: str, timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = requests.Session()

    @classmethod
    def from_config(cls, upstream: UpstreamConfig | None = None) -> "StockPriceClient":
        upstream = upstream or get_config().upstream
        return cls(base_url=upstream.base_url, timeout_seconds=upstream.timeout_seconds)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_price_history(self, ticker: str, minutes: int, credential: str) -> FetchResult:
        """Fetch the price history of ``ticker`` over the last ``minutes``.

        Parameters
        ----------
        ticker:
            Exchange ticker, e.g. ``"NVDA"``.
        minutes:
            Look-back window passed through to the provider.
        credential:
            Full ``Authorization`` header value.
        """

        url = f"{self._base_url}/stocks/{quote(ticker, safe='')}"
        params = {"minutes": str(minutes)}
        headers = {"Authorization": credential.strip(), "Accept": "application/json"}
        logger.info("StockPriceClient.get_price_history: GET %s params=%s", url, params)

        try:
            response = self._session.get(
                url, params=params, headers=headers, timeout=self._timeout_seconds
            )
        except requests.RequestException as exc:
            logger.error("Price history request failed for %s: %s", ticker, exc)
            return self._failed(ticker)

        if response.status_code != 200:
            body_preview = response.text[:500]
            logger.error(
                "Price history request failed: status=%s ticker=%s body=%s",
                response.status_code,
                ticker,
                body_preview,
            )
            return self._failed(ticker)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to decode price history JSON for %s: %s", ticker, exc)
            return self._failed(ticker)

        samples = normalize_price_history(payload)
        increment_counter(
            FETCH_COUNTER,
            tags={"source": "stocks", "outcome": "ok" if samples else "empty"},
        )
        logger.info(
            "StockPriceClient.get_price_history: fetched %d samples for %s", len(samples), ticker
        )
        return FetchResult(ticker=ticker, samples=samples)

    def get_price_histories(
        self,
        tickers: Sequence[str],
        minutes: int,
        credential: str,
    ) -> Dict[str, FetchResult]:
        """Fetch several tickers concurrently and wait for all of them."""

        unique = list(dict.fromkeys(tickers))
        if not unique:
            return {}
        with ThreadPoolExecutor(max_workers=len(unique)) as pool:
            futures = {
                t: pool.submit(self.get_price_history, t, minutes, credential) for t in unique
            }
            return {t: fut.result() for t, fut in futures.items()}

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self._session.close()

    @staticmethod
    def _failed(ticker: str) -> FetchResult:
        increment_counter(FETCH_COUNTER, tags={"source": "stocks", "outcome": "error"})
        return FetchResult(ticker=ticker, failed=True)


__all__ = ["FetchResult", "StockPriceClient", "FETCH_COUNTER"]
