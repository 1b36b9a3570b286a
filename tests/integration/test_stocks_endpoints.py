"""Integration tests for the Stock Price Aggregator endpoints.

The upstream client is replaced with an in-memory stub through
``app.dependency_overrides``; the statistics core runs for real.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pytest
from fastapi.testclient import TestClient

from windowstats.stats.types import PriceSample
from windowstats.stocks.api import get_stock_client
from windowstats.stocks.app import app
from windowstats.stocks.client import FetchResult


AUTH = {"Authorization": "Bearer test-token"}

client = TestClient(app)


def _history(*pairs):  # type: ignore[no-untyped-def]
    return [PriceSample(price=p, last_updated_at=ts) for p, ts in pairs]


class _StubStockClient:
    """Serves canned FetchResults; unknown tickers have no data."""

    def __init__(self) -> None:
        self.results: Dict[str, FetchResult] = {}
        self.calls: list[tuple[str, int, str]] = []

    def get_price_history(self, ticker: str, minutes: int, credential: str) -> FetchResult:
        self.calls.append((ticker, minutes, credential))
        return self.results.get(ticker, FetchResult(ticker=ticker))

    def get_price_histories(
        self, tickers: Sequence[str], minutes: int, credential: str
    ) -> Dict[str, FetchResult]:
        return {t: self.get_price_history(t, minutes, credential) for t in tickers}


@pytest.fixture
def stub():  # type: ignore[no-untyped-def]
    upstream = _StubStockClient()
    app.dependency_overrides[get_stock_client] = lambda: upstream
    yield upstream
    app.dependency_overrides.clear()


# ============================================================================
# /stocks/{ticker}
# ============================================================================


class TestAverageStockPrice:
    """Tests for the single-ticker average endpoint."""

    def test_average_and_history(self, stub: _StubStockClient) -> None:
        stub.results["NVDA"] = FetchResult(
            ticker="NVDA",
            samples=_history((100.0, "t1"), (110.0, "t2"), (125.0, "t3")),
        )

        response = client.get(
            "/stocks/NVDA", params={"minutes": 30, "aggregation": "average"}, headers=AUTH
        )

        assert response.status_code == 200
        data = response.json()
        assert data["averageStockPrice"] == pytest.approx(111.6666666)
        assert data["priceHistory"] == [
            {"price": 100.0, "lastUpdatedAt": "t1"},
            {"price": 110.0, "lastUpdatedAt": "t2"},
            {"price": 125.0, "lastUpdatedAt": "t3"},
        ]
        assert stub.calls == [("NVDA", 30, "Bearer test-token")]

    def test_average_not_rounded(self, stub: _StubStockClient) -> None:
        stub.results["AAPL"] = FetchResult(
            ticker="AAPL", samples=_history((1.0, "t1"), (2.0, "t2"), (2.0, "t3"))
        )

        data = client.get(
            "/stocks/AAPL", params={"minutes": 5, "aggregation": "average"}, headers=AUTH
        ).json()

        assert data["averageStockPrice"] == pytest.approx(5 / 3)

    def test_no_history_is_404(self, stub: _StubStockClient) -> None:
        response = client.get(
            "/stocks/NONE", params={"minutes": 5, "aggregation": "average"}, headers=AUTH
        )

        assert response.status_code == 404

    def test_upstream_failure_is_502(self, stub: _StubStockClient) -> None:
        stub.results["NVDA"] = FetchResult(ticker="NVDA", failed=True)

        response = client.get(
            "/stocks/NVDA", params={"minutes": 5, "aggregation": "average"}, headers=AUTH
        )

        assert response.status_code == 502

    @pytest.mark.parametrize(
        "params",
        [
            {"minutes": 5},
            {"aggregation": "average"},
            {"minutes": 5, "aggregation": "max"},
            {"minutes": 0, "aggregation": "average"},
            {"minutes": -3, "aggregation": "average"},
            {"minutes": "abc", "aggregation": "average"},
        ],
    )
    def test_invalid_query_is_400(self, stub: _StubStockClient, params) -> None:  # type: ignore[no-untyped-def]
        response = client.get("/stocks/NVDA", params=params, headers=AUTH)

        assert response.status_code == 400
        assert stub.calls == []

    def test_missing_auth_is_401(self, stub: _StubStockClient) -> None:
        response = client.get("/stocks/NVDA", params={"minutes": 5, "aggregation": "average"})

        assert response.status_code == 401
        assert stub.calls == []


# ============================================================================
# /stockcorrelation
# ============================================================================


class TestStockCorrelation:
    """Tests for the two-ticker correlation endpoint."""

    def test_perfect_correlation(self, stub: _StubStockClient) -> None:
        stub.results["NVDA"] = FetchResult(
            ticker="NVDA", samples=_history((1.0, "t1"), (2.0, "t2"), (3.0, "t3"))
        )
        stub.results["PYPL"] = FetchResult(
            ticker="PYPL", samples=_history((2.0, "t1"), (4.0, "t2"), (6.0, "t3"))
        )

        response = client.get(
            "/stockcorrelation",
            params=[("minutes", "50"), ("ticker", "NVDA"), ("ticker", "PYPL")],
            headers=AUTH,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["correlation"] == 1.0
        assert set(data["stocks"]) == {"NVDA", "PYPL"}
        assert data["stocks"]["NVDA"]["averagePrice"] == pytest.approx(2.0)
        assert data["stocks"]["PYPL"]["averagePrice"] == pytest.approx(4.0)
        assert data["stocks"]["PYPL"]["priceHistory"][0] == {"price": 2.0, "lastUpdatedAt": "t1"}

    def test_correlation_uses_only_common_timestamps(self, stub: _StubStockClient) -> None:
        stub.results["AAA"] = FetchResult(
            ticker="AAA",
            samples=_history((1.0, "t1"), (2.0, "t2"), (3.0, "t3"), (4.0, "t4")),
        )
        stub.results["BBB"] = FetchResult(
            ticker="BBB",
            samples=_history((1.0, "t2"), (2.0, "t1"), (4.0, "t3"), (3.0, "t4"), (50.0, "t9")),
        )

        data = client.get(
            "/stockcorrelation",
            params=[("minutes", "50"), ("ticker", "AAA"), ("ticker", "BBB")],
            headers=AUTH,
        ).json()

        # Aligned in AAA's order: [1, 2, 3, 4] against [2, 1, 4, 3].
        assert data["correlation"] == 0.6
        # The extra t9 sample still counts towards BBB's average.
        assert data["stocks"]["BBB"]["averagePrice"] == pytest.approx(12.0)

    def test_disjoint_histories_give_zero(self, stub: _StubStockClient) -> None:
        stub.results["AAA"] = FetchResult(ticker="AAA", samples=_history((1.0, "t1")))
        stub.results["BBB"] = FetchResult(ticker="BBB", samples=_history((2.0, "t2")))

        data = client.get(
            "/stockcorrelation",
            params=[("minutes", "10"), ("ticker", "AAA"), ("ticker", "BBB")],
            headers=AUTH,
        ).json()

        assert data["correlation"] == 0.0

    @pytest.mark.parametrize(
        "tickers",
        [["NVDA"], ["NVDA", "PYPL", "AAPL"]],
    )
    def test_wrong_ticker_count_is_400(self, stub: _StubStockClient, tickers) -> None:  # type: ignore[no-untyped-def]
        params = [("minutes", "10")] + [("ticker", t) for t in tickers]

        response = client.get("/stockcorrelation", params=params, headers=AUTH)

        assert response.status_code == 400
        assert stub.calls == []

    def test_missing_tickers_is_400(self, stub: _StubStockClient) -> None:
        response = client.get("/stockcorrelation", params={"minutes": 10}, headers=AUTH)

        assert response.status_code == 400

    def test_one_empty_history_is_404(self, stub: _StubStockClient) -> None:
        stub.results["NVDA"] = FetchResult(ticker="NVDA", samples=_history((1.0, "t1")))

        response = client.get(
            "/stockcorrelation",
            params=[("minutes", "10"), ("ticker", "NVDA"), ("ticker", "NONE")],
            headers=AUTH,
        )

        assert response.status_code == 404

    def test_upstream_failure_is_502(self, stub: _StubStockClient) -> None:
        stub.results["NVDA"] = FetchResult(ticker="NVDA", samples=_history((1.0, "t1")))
        stub.results["DOWN"] = FetchResult(ticker="DOWN", failed=True)

        response = client.get(
            "/stockcorrelation",
            params=[("minutes", "10"), ("ticker", "NVDA"), ("ticker", "DOWN")],
            headers=AUTH,
        )

        assert response.status_code == 502

    def test_missing_auth_is_401(self, stub: _StubStockClient) -> None:
        response = client.get(
            "/stockcorrelation",
            params=[("minutes", "10"), ("ticker", "A"), ("ticker", "B")],
        )

        assert response.status_code == 401


def test_health() -> None:
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["service"] == "Stock Price Aggregator"
