"""windowstats – timestamp alignment of two price series.

Two tickers are fetched independently and rarely share every timestamp.
Before they can be correlated the series are restricted to the
timestamps present in both and re-ordered so that index ``i`` refers to
the same instant in each.
"""

from __future__ import annotations

from typing import Dict, Iterable

from windowstats.stats.types import AlignedSeries, PriceSample


def _price_by_timestamp(series: Iterable[PriceSample]) -> Dict[str, float]:
    # Later duplicates overwrite the price but keep the first key position.
    prices: Dict[str, float] = {}
    for sample in series:
        prices[sample.last_updated_at] = sample.price
    return prices


def align(
    series_a: Iterable[PriceSample],
    series_b: Iterable[PriceSample],
) -> AlignedSeries:
    """Intersect two series on their timestamps.

    Args:
        series_a: Samples for the first ticker. Its timestamp order
            determines the order of the result.
        series_b: Samples for the second ticker.

    Returns:
        An :class:`AlignedSeries` holding A's and B's prices at each
        common timestamp. Empty when either input is empty or the two
        share no timestamp.
    """

    prices_a = _price_by_timestamp(series_a)
    prices_b = _price_by_timestamp(series_b)

    common = [ts for ts in prices_a if ts in prices_b]
    if not common:
        return AlignedSeries()

    return AlignedSeries(
        values_a=tuple(prices_a[ts] for ts in common),
        values_b=tuple(prices_b[ts] for ts in common),
        timestamps=tuple(common),
    )
