"""windowstats – average calculator types.

Key responsibilities:
- Enumerate the number series the upstream provider serves.
- Define the before/after snapshot pair returned by a window update.

Thread safety: Enums and frozen dataclasses only; stateless.
"""

from __future__ import annotations

# ============================================================================
# Imports
# ============================================================================

from dataclasses import dataclass
from enum import Enum

from windowstats.core.types import WindowSnapshot

# ============================================================================
# Number series
# ============================================================================


class NumberId(str, Enum):
    """Identifier of an upstream number series.

    - ``p`` – prime numbers.
    - ``f`` – Fibonacci numbers.
    - ``e`` – even numbers.
    - ``r`` – random numbers.
    """

    PRIME = "p"
    FIBONACCI = "f"
    EVEN = "e"
    RANDOM = "r"

    @property
    def upstream_path(self) -> str:
        """Path segment of the provider endpoint serving this series."""

        return _UPSTREAM_PATHS[self]


_UPSTREAM_PATHS = {
    NumberId.PRIME: "primes",
    NumberId.FIBONACCI: "fibo",
    NumberId.EVEN: "even",
    NumberId.RANDOM: "rand",
}

# ============================================================================
# Window snapshots
# ============================================================================


@dataclass(frozen=True)
class WindowUpdate:
    """Window contents immediately before and after one update.

    Attributes:
        previous: Snapshot taken before the incoming batch was applied.
        current: Snapshot taken after the batch was applied.
    """

    previous: WindowSnapshot
    current: WindowSnapshot

    @property
    def changed(self) -> bool:
        return self.previous != self.current
