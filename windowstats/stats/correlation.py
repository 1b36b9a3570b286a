"""windowstats – Pearson correlation over aligned series.

Degenerate inputs are resolved by value rather than by raising: fewer
than two paired observations or a constant series both yield ``0.0``.
The only error is a length mismatch, which means the caller skipped
:func:`windowstats.stats.alignment.align`.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from windowstats.core.types import Number
from windowstats.stats.average import round_half_away_from_zero

CORRELATION_PLACES = 4


class LengthMismatchError(ValueError):
    """Raised when the two value sequences differ in length."""


def pearson(values_a: Sequence[Number], values_b: Sequence[Number]) -> float:
    """Unrounded population Pearson coefficient.

    Returns ``0.0`` for fewer than two points or when either series is
    constant.

    Raises:
        LengthMismatchError: If the sequences differ in length.
    """

    if len(values_a) != len(values_b):
        raise LengthMismatchError(
            f"Cannot correlate series of length {len(values_a)} and {len(values_b)}"
        )
    if len(values_a) <= 1:
        return 0.0

    a = np.asarray(values_a, dtype=float)
    b = np.asarray(values_b, dtype=float)

    # Identical values can still leave a tiny non-zero std after the mean
    # is rounded, so constant series are detected directly.
    if np.all(a == a[0]) or np.all(b == b[0]):
        return 0.0

    dev_a = a - a.mean()
    dev_b = b - b.mean()
    cov = float(np.mean(dev_a * dev_b))
    std_a = float(np.sqrt(np.mean(dev_a**2)))
    std_b = float(np.sqrt(np.mean(dev_b**2)))
    if std_a == 0.0 or std_b == 0.0:
        return 0.0

    r = cov / (std_a * std_b)
    return float(np.clip(r, -1.0, 1.0))


def correlate(values_a: Sequence[Number], values_b: Sequence[Number]) -> float:
    """Pearson coefficient of two aligned series, rounded to 4 decimals."""

    return round_half_away_from_zero(pearson(values_a, values_b), CORRELATION_PLACES)
