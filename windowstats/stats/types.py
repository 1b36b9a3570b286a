"""windowstats – value types shared by the statistics core.

Key responsibilities:
- Define the immutable price observation consumed by the series aligner.
- Define the aligned pair of value sequences produced by it.

Thread safety: Frozen dataclasses; this module itself is stateless.
"""

from __future__ import annotations

# ============================================================================
# Imports
# ============================================================================

from dataclasses import dataclass
from typing import Tuple

# ============================================================================
# Price samples
# ============================================================================


@dataclass(frozen=True)
class PriceSample:
    """One observed price at one instant.

    ``last_updated_at`` is treated as an opaque key: two samples line up
    only when the strings are identical.
    """

    price: float
    last_updated_at: str


# ============================================================================
# Aligned series
# ============================================================================


@dataclass(frozen=True)
class AlignedSeries:
    """Two equal-length value sequences restricted to common timestamps.

    Attributes:
        values_a: Prices from the first series, in the first series'
            timestamp order.
        values_b: Prices from the second series at the same timestamps.
        timestamps: The shared timestamp keys, index-matched to the values.
    """

    values_a: Tuple[float, ...] = ()
    values_b: Tuple[float, ...] = ()
    timestamps: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.values_a)
