"""windowstats – in-process metrics counters.

A very small, in-memory counters API that the upstream clients use to
record fetch outcomes. Values are kept in memory and exposed as JSON by
the ``/metrics`` endpoint of each service.

The design is backend-agnostic so that a real metrics sink can be
plugged in without changing call sites.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Iterable, Mapping, MutableMapping, Optional

from windowstats.core.logging import get_logger


logger = get_logger(__name__)


@dataclass
class CounterPoint:
    """Current value of a single counter.

    Attributes:
        name: Counter name (e.g. "upstream.fetch").
        value: Accumulated count.
        tags: Tag mapping (e.g. {"source": "stocks", "outcome": "ok"}).
        updated_at: UTC timestamp of the last increment.
    """

    name: str
    value: float
    tags: Mapping[str, str] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


_counters: MutableMapping[tuple[str, tuple[tuple[str, str], ...]], CounterPoint] = {}
_lock = Lock()


def _normalise_tags(tags: Optional[Mapping[str, str]]) -> tuple[tuple[str, str], ...]:
    if not tags:
        return ()
    return tuple(sorted((str(k), str(v)) for k, v in tags.items()))


def increment_counter(
    name: str,
    amount: float = 1.0,
    tags: Optional[Mapping[str, str]] = None,
) -> None:
    """Add ``amount`` to the counter identified by ``name`` and ``tags``."""

    key = (name, _normalise_tags(tags))
    with _lock:
        point = _counters.get(key)
        if point is None:
            point = CounterPoint(name=name, value=0.0, tags=dict(key[1]))
            _counters[key] = point
        point.value += float(amount)
        point.updated_at = datetime.now(timezone.utc)
    logger.debug("counter incremented: %s %s +%s", name, dict(key[1]), amount)


def get_counters(prefix: str | None = None) -> Iterable[CounterPoint]:
    """Return copies of the current counters, optionally filtered by prefix."""

    with _lock:
        points = [
            CounterPoint(name=p.name, value=p.value, tags=dict(p.tags), updated_at=p.updated_at)
            for p in _counters.values()
        ]

    if prefix is None:
        return points
    return [p for p in points if p.name.startswith(prefix)]


def reset_metrics() -> None:
    """Clear all in-memory counters (useful in tests)."""

    with _lock:
        _counters.clear()
