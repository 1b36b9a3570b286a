"""
windowstats: Core Type Definitions

Common type aliases shared across the windowstats packages. Kept in one
place to avoid circular imports between the stats core and the service
layers.

External dependencies:
- typing: Standard library typing primitives only

Thread safety: Thread-safe (no mutable global state)
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from typing import Any, Tuple, TypeAlias, Union

# ============================================================================
# Type Aliases
# ============================================================================

# A real-valued observation as decoded from upstream JSON
Number: TypeAlias = Union[int, float]

# Immutable snapshot of window contents, oldest first
WindowSnapshot: TypeAlias = Tuple[Number, ...]

# Raw decoded JSON payload from the upstream provider
JsonPayload: TypeAlias = Any
