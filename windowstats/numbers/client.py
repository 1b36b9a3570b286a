"""windowstats – HTTP client for the upstream number series.

The provider serves one endpoint per series (``/primes``, ``/fibo``,
``/even``, ``/rand``), each returning ``{"numbers": [...]}``. The
caller's bearer credential is forwarded unchanged.

This client fails soft: transport errors, non-200 responses and
malformed payloads are logged and reported as an empty list, so the
window logic only ever sees "some numbers" or "no numbers".
"""

from __future__ import annotations

import math
from typing import List

import requests

from windowstats.core.config import UpstreamConfig, get_config
from windowstats.core.logging import get_logger
from windowstats.core.types import JsonPayload, Number
from windowstats.monitoring.metrics import increment_counter
from windowstats.numbers.types import NumberId

logger = get_logger(__name__)

FETCH_COUNTER = "upstream.fetch"


def _is_finite_number(value: object) -> bool:
    # Booleans are ints in Python, and JSON may decode to inf, nan or ints
    # too large for a float.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _extract_numbers(payload: JsonPayload) -> List[Number]:
    if not isinstance(payload, dict):
        return []
    raw = payload.get("numbers")
    if not isinstance(raw, list):
        return []
    return [v for v in raw if _is_finite_number(v)]


class NumbersClient:
    """Thin HTTP client for the number series endpoints.

    Parameters
    ----------
    base_url:
        Base URL of the provider. Series paths are appended to it.
    timeout_seconds:
        Request timeout in seconds.
    """

    def __init__(self, base_url: str, timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = requests.Session()

    @classmethod
    def from_config(cls, upstream: UpstreamConfig | None = None) -> "NumbersClient":
        """Build a client from the global (or an explicit) upstream config."""

        upstream = upstream or get_config().upstream
        return cls(base_url=upstream.base_url, timeout_seconds=upstream.timeout_seconds)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_numbers(self, number_id: NumberId, credential: str) -> List[Number]:
        """Fetch the current batch of numbers for a series.

        Parameters
        ----------
        number_id:
            Which series to fetch.
        credential:
            Full ``Authorization`` header value, e.g. ``"Bearer abc"``.

        Returns
        -------
        list
            The numeric entries of the payload, or ``[]`` on any failure.
        """

        url = f"{self._base_url}/{number_id.upstream_path}"
        headers = {"Authorization": credential.strip(), "Accept": "application/json"}
        logger.info("NumbersClient.fetch_numbers: GET %s", url)

        try:
            response = self._session.get(url, headers=headers, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            logger.error("Number fetch failed for series %s: %s", number_id.value, exc)
            self._record(number_id, "error")
            return []

        if response.status_code != 200:
            # Truncate body in logs to avoid huge messages.
            body_preview = response.text[:500]
            logger.error(
                "Number fetch failed: status=%s series=%s body=%s",
                response.status_code,
                number_id.value,
                body_preview,
            )
            self._record(number_id, "error")
            return []

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to decode number JSON for series %s: %s", number_id.value, exc)
            self._record(number_id, "error")
            return []

        numbers = _extract_numbers(payload)
        self._record(number_id, "ok" if numbers else "empty")
        logger.info(
            "NumbersClient.fetch_numbers: fetched %d numbers for %s", len(numbers), number_id.value
        )
        return numbers

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self._session.close()

    @staticmethod
    def _record(number_id: NumberId, outcome: str) -> None:
        increment_counter(
            FETCH_COUNTER,
            tags={"source": f"numbers.{number_id.value}", "outcome": outcome},
        )


__all__ = ["NumbersClient", "FETCH_COUNTER"]
