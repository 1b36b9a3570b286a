"""windowstats – mean and fixed-point rounding helpers.

Two averaging policies coexist and must not be conflated:

- :func:`average` – mean rounded to two decimals, used for the number
  window.
- :func:`mean` – unrounded mean, used for stock prices.

Both return ``0.0`` for an empty input instead of raising. Neither raises
for very large magnitudes.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Sequence

import numpy as np

from windowstats.core.types import Number

WINDOW_AVERAGE_PLACES = 2

# Precision of the default decimal context.
_MIN_DECIMAL_PRECISION = 28


def round_half_away_from_zero(value: float, places: int) -> float:
    """Round ``value`` to ``places`` decimals, ties away from zero.

    The exact binary value of the float is rounded, so ``1.005`` (stored
    as 1.00499...) rounds down to ``1.0``. Non-finite values are returned
    unchanged.
    """

    if not math.isfinite(value):
        return value

    exact = Decimal(value)
    # Enough digits for every integer digit plus ``places`` decimals.
    context = Context(prec=max(_MIN_DECIMAL_PRECISION, exact.adjusted() + places + 2))
    quantum = Decimal(1).scaleb(-places)
    rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP, context=context)
    # Adding 0.0 turns -0.0 into 0.0.
    return float(rounded) + 0.0


def mean(values: Sequence[Number]) -> float:
    """Arithmetic mean at full precision, ``0.0`` for no values."""

    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    with np.errstate(over="ignore"):
        result = np.mean(arr)
        if not np.isfinite(result) and np.all(np.isfinite(arr)):
            # The running sum overflowed; scale before summing instead.
            result = np.sum(arr / arr.size)
    return float(result)


def average(values: Sequence[Number]) -> float:
    """Arithmetic mean rounded to two decimals, ``0.0`` for no values."""

    if len(values) == 0:
        return 0.0
    return round_half_away_from_zero(mean(values), WINDOW_AVERAGE_PLACES)
