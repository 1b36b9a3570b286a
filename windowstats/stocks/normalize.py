"""windowstats – normalisation of provider price-history payloads.

The stocks endpoint does not answer in one fixed shape. Depending on the
query it returns a bare array, an object wrapping a list, a single
sample or a map of samples. Each supported shape has a matcher; the
matchers are tried in order and the first one that recognises the
payload wins. A matcher returns ``None`` when the shape does not apply
so the next one gets a chance.

Entries without a finite numeric ``price`` or a string ``lastUpdatedAt`` are
dropped.
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional, Sequence

from windowstats.core.types import JsonPayload
from windowstats.stats.types import PriceSample

ShapeMatcher = Callable[[JsonPayload], Optional[List[PriceSample]]]


def _is_finite_price(price: JsonPayload) -> bool:
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    try:
        return math.isfinite(price)
    except OverflowError:
        return False


def _is_sample(entry: JsonPayload) -> bool:
    if not isinstance(entry, dict):
        return False
    return _is_finite_price(entry.get("price")) and isinstance(entry.get("lastUpdatedAt"), str)


def _to_sample(entry: dict) -> PriceSample:
    return PriceSample(price=entry["price"], last_updated_at=entry["lastUpdatedAt"])


def _samples_from_list(entries: Sequence[JsonPayload]) -> List[PriceSample]:
    return [_to_sample(e) for e in entries if _is_sample(e)]


# ============================================================================
# Shape matchers
# ============================================================================


def match_bare_list(payload: JsonPayload) -> Optional[List[PriceSample]]:
    """``[{"price": ..., "lastUpdatedAt": ...}, ...]``"""
    if isinstance(payload, list):
        return _samples_from_list(payload)
    return None


def match_price_history(payload: JsonPayload) -> Optional[List[PriceSample]]:
    """``{"priceHistory": [...]}``"""
    if isinstance(payload, dict) and isinstance(payload.get("priceHistory"), list):
        return _samples_from_list(payload["priceHistory"])
    return None


def match_stock_list(payload: JsonPayload) -> Optional[List[PriceSample]]:
    """``{"stock": [...]}``"""
    if isinstance(payload, dict) and isinstance(payload.get("stock"), list):
        return _samples_from_list(payload["stock"])
    return None


def match_stock_price_history(payload: JsonPayload) -> Optional[List[PriceSample]]:
    """``{"stock": {"priceHistory": [...]}}``"""
    if not isinstance(payload, dict):
        return None
    stock = payload.get("stock")
    if isinstance(stock, dict) and isinstance(stock.get("priceHistory"), list):
        return _samples_from_list(stock["priceHistory"])
    return None


def match_single_sample(payload: JsonPayload) -> Optional[List[PriceSample]]:
    """``{"price": ..., "lastUpdatedAt": ...}``"""
    if _is_sample(payload):
        return [_to_sample(payload)]
    return None


def match_sample_map(payload: JsonPayload) -> Optional[List[PriceSample]]:
    """``{"<any key>": {"price": ..., "lastUpdatedAt": ...}, ...}``

    This also covers ``{"stock": {<single sample>}}``.
    """
    if not isinstance(payload, dict):
        return None
    samples = _samples_from_list(list(payload.values()))
    return samples or None


SHAPE_MATCHERS: tuple[ShapeMatcher, ...] = (
    match_bare_list,
    match_price_history,
    match_stock_list,
    match_stock_price_history,
    match_single_sample,
    match_sample_map,
)


# ============================================================================
# Public API
# ============================================================================


def normalize_price_history(
    payload: JsonPayload,
    matchers: Sequence[ShapeMatcher] = SHAPE_MATCHERS,
) -> List[PriceSample]:
    """Convert any supported payload shape into a list of samples.

    Returns an empty list when no matcher recognises the payload.
    """

    if not payload:
        return []
    for matcher in matchers:
        samples = matcher(payload)
        if samples is not None:
            return samples
    return []
