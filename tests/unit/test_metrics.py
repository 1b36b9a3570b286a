"""Unit tests for windowstats.monitoring.metrics."""

from __future__ import annotations

import threading

import pytest

from windowstats.monitoring.metrics import get_counters, increment_counter, reset_metrics


@pytest.fixture(autouse=True)
def _clean_metrics():  # type: ignore[no-untyped-def]
    reset_metrics()
    yield
    reset_metrics()


def test_increment_accumulates():
    increment_counter("upstream.fetch", tags={"source": "stocks", "outcome": "ok"})
    increment_counter("upstream.fetch", tags={"outcome": "ok", "source": "stocks"})

    points = list(get_counters())

    assert len(points) == 1
    assert points[0].value == 2.0
    assert points[0].tags == {"source": "stocks", "outcome": "ok"}


def test_distinct_tags_are_distinct_counters():
    increment_counter("upstream.fetch", tags={"outcome": "ok"})
    increment_counter("upstream.fetch", tags={"outcome": "error"})
    increment_counter("upstream.fetch")

    assert len(list(get_counters())) == 3


def test_prefix_filter():
    increment_counter("upstream.fetch")
    increment_counter("window.update", amount=3)

    points = list(get_counters("window."))

    assert [p.name for p in points] == ["window.update"]
    assert points[0].value == 3.0


def test_returned_points_are_copies():
    increment_counter("upstream.fetch")
    point = list(get_counters())[0]
    point.value = 100.0

    assert list(get_counters())[0].value == 1.0


def test_concurrent_increments():
    def worker() -> None:
        for _ in range(500):
            increment_counter("upstream.fetch")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert list(get_counters())[0].value == 2000.0


def test_reset_clears_everything():
    increment_counter("upstream.fetch")
    reset_metrics()

    assert list(get_counters()) == []
