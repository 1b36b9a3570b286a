"""windowstats – Average Calculator package.

Keeps a bounded, deduplicated window of numbers fetched from the
upstream provider and reports its rounded average.
"""

from __future__ import annotations

from windowstats.numbers.types import NumberId, WindowUpdate
from windowstats.numbers.window import BoundedUniqueWindow, DEFAULT_WINDOW_SIZE
from windowstats.numbers.client import NumbersClient

__all__ = [
    "NumberId",
    "WindowUpdate",
    "BoundedUniqueWindow",
    "DEFAULT_WINDOW_SIZE",
    "NumbersClient",
]
