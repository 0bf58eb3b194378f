"""
Scale Table — Precomputed powers of ten

Process-wide read-only lookup of 10^0 .. 10^31, built once at import time.
Every arithmetic and conversion routine takes its scale from here.

CRITICAL INVARIANTS:
1. Index range is exactly 0..=31 (MAX_DECIMALS)
2. The table is a tuple: never mutated after import
3. Out-of-range requests raise UnsupportedPrecision, never clamp
"""

import logging
from typing import Final

from fixdec.core.errors import UnsupportedPrecision

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Largest supported decimal-place count
MAX_DECIMALS: Final[int] = 31

# Number of entries in the table (10^0 .. 10^MAX_DECIMALS)
SCALE_TABLE_SIZE: Final[int] = MAX_DECIMALS + 1

SCALE_TABLE: Final[tuple[int, ...]] = tuple(10**i for i in range(SCALE_TABLE_SIZE))

logger.debug(f"Scale table built with {SCALE_TABLE_SIZE} entries (10^0 .. 10^{MAX_DECIMALS})")


# =============================================================================
# VALIDATION
# =============================================================================


def validate_decimals(decimals: int) -> int:
    """
    Check that a decimal-place count is usable.

    Args:
        decimals: Requested decimal-place count

    Returns:
        decimals unchanged

    Raises:
        TypeError: If decimals is not an int (bool is rejected too)
        UnsupportedPrecision: If decimals is outside 0..=MAX_DECIMALS

    Examples:
        >>> validate_decimals(8)
        8
        >>> validate_decimals(32)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        UnsupportedPrecision: ...
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise TypeError(f"decimals must be an int, got {type(decimals).__name__}")

    if decimals < 0 or decimals > MAX_DECIMALS:
        raise UnsupportedPrecision(
            f"Decimal points after {MAX_DECIMALS} are not supported, got {decimals}"
        )

    return decimals


# =============================================================================
# LOOKUP
# =============================================================================


def base(decimals: int) -> int:
    """
    Scale for a decimal-place count: 10^decimals.

    Args:
        decimals: Decimal-place count in 0..=MAX_DECIMALS

    Returns:
        10 ** decimals

    Raises:
        UnsupportedPrecision: If decimals > MAX_DECIMALS

    Examples:
        >>> base(0)
        1
        >>> base(8)
        100000000
    """
    return SCALE_TABLE[validate_decimals(decimals)]
