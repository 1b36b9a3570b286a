"""Unit tests for the upstream number series client.

HTTP is mocked at the ``requests.Session`` level; no network access.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from windowstats.core.config import UpstreamConfig
from windowstats.monitoring.metrics import get_counters, reset_metrics
from windowstats.numbers.client import FETCH_COUNTER, NumbersClient
from windowstats.numbers.types import NumberId


def _response(status: int = 200, payload=None, text: str = "") -> MagicMock:  # type: ignore[no-untyped-def]
    response = MagicMock()
    response.status_code = status
    response.text = text
    response.json.return_value = payload
    return response


@pytest.fixture(autouse=True)
def _clean_metrics():  # type: ignore[no-untyped-def]
    reset_metrics()
    yield
    reset_metrics()


class TestNumbersClient:
    """Tests for NumbersClient.fetch_numbers."""

    @patch("windowstats.numbers.client.requests.Session")
    def test_parses_numbers(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(payload={"numbers": [2, 3, 5, 7, 11]})

        client = NumbersClient(base_url="http://provider/api/")
        numbers = client.fetch_numbers(NumberId.PRIME, "Bearer token-123 ")

        assert numbers == [2, 3, 5, 7, 11]
        args, kwargs = session.get.call_args
        assert args[0] == "http://provider/api/primes"
        assert kwargs["headers"]["Authorization"] == "Bearer token-123"

    @pytest.mark.parametrize(
        "number_id, path",
        [
            (NumberId.PRIME, "primes"),
            (NumberId.FIBONACCI, "fibo"),
            (NumberId.EVEN, "even"),
            (NumberId.RANDOM, "rand"),
        ],
    )
    @patch("windowstats.numbers.client.requests.Session")
    def test_series_paths(self, session_cls: MagicMock, number_id: NumberId, path: str) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(payload={"numbers": [1]})

        NumbersClient(base_url="http://p").fetch_numbers(number_id, "Bearer t")

        assert session.get.call_args[0][0] == f"http://p/{path}"

    @patch("windowstats.numbers.client.requests.Session")
    def test_non_numeric_entries_dropped(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(payload={"numbers": [1, "2", None, True, 3.5]})

        numbers = NumbersClient(base_url="http://p").fetch_numbers(NumberId.RANDOM, "Bearer t")

        assert numbers == [1, 3.5]

    @patch("windowstats.numbers.client.requests.Session")
    def test_non_finite_entries_dropped(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(
            payload={"numbers": [1, float("inf"), float("-inf"), float("nan"), 10**400, 1e30]}
        )

        numbers = NumbersClient(base_url="http://p").fetch_numbers(NumberId.RANDOM, "Bearer t")

        assert numbers == [1, 1e30]

    @patch("windowstats.numbers.client.requests.Session")
    def test_non_200_returns_empty(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(status=401, text="unauthorized")

        numbers = NumbersClient(base_url="http://p").fetch_numbers(NumberId.EVEN, "Bearer bad")

        assert numbers == []
        counters = list(get_counters(FETCH_COUNTER))
        assert counters[0].tags == {"outcome": "error", "source": "numbers.e"}

    @patch("windowstats.numbers.client.requests.Session")
    def test_transport_error_returns_empty(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.side_effect = requests.ConnectionError("connection refused")

        assert NumbersClient(base_url="http://p").fetch_numbers(NumberId.EVEN, "Bearer t") == []

    @patch("windowstats.numbers.client.requests.Session")
    def test_timeout_returns_empty(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.side_effect = requests.Timeout("too slow")

        assert NumbersClient(base_url="http://p").fetch_numbers(NumberId.FIBONACCI, "Bearer t") == []

    @patch("windowstats.numbers.client.requests.Session")
    def test_invalid_json_returns_empty(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        response = _response()
        response.json.side_effect = ValueError("no JSON")
        session.get.return_value = response

        assert NumbersClient(base_url="http://p").fetch_numbers(NumberId.PRIME, "Bearer t") == []

    @pytest.mark.parametrize("payload", [[1, 2, 3], {"numbers": "1,2"}, {"values": [1]}, None])
    @patch("windowstats.numbers.client.requests.Session")
    def test_unexpected_shape_returns_empty(self, session_cls: MagicMock, payload) -> None:  # type: ignore[no-untyped-def]
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(payload=payload)

        assert NumbersClient(base_url="http://p").fetch_numbers(NumberId.PRIME, "Bearer t") == []
        counters = list(get_counters(FETCH_COUNTER))
        assert counters[0].tags["outcome"] == "empty"

    @patch("windowstats.numbers.client.requests.Session")
    def test_uses_configured_timeout(self, session_cls: MagicMock) -> None:
        session = MagicMock()
        session_cls.return_value = session
        session.get.return_value = _response(payload={"numbers": []})

        client = NumbersClient.from_config(UpstreamConfig(base_url="http://p", timeout_seconds=0.5))
        client.fetch_numbers(NumberId.PRIME, "Bearer t")

        assert session.get.call_args[1]["timeout"] == 0.5
