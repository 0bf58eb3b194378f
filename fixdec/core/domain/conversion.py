"""
Conversion — Explicit moves between precisions and representations

The only sanctioned way to combine values of different precision: nothing
in Fixed or Scaled rescales implicitly.

    Fixed[D]  --to_dynamic-->  Scaled(val, D)
    Scaled    --to_fixed(D)--> Fixed[D]          (requires decimals == D)
    Fixed[D]  --convert_fixed(D1)-->  Fixed[D1]
    Scaled    --convert_scaled(d1)--> Scaled(.., d1)

Increasing precision is lossless. Decreasing precision truncates the dropped
digits, and they cannot be recovered by converting back up.
"""

from fixdec.core.domain.fixed import Fixed
from fixdec.core.domain.scaled import Scaled


def to_dynamic(value: Fixed) -> Scaled:
    """Fixed[D] -> Scaled(val, D), lossless."""
    if not isinstance(value, Fixed):
        raise TypeError(f"Expected a Fixed value, got {type(value).__name__}")
    return value.to_dynamic()


def to_fixed(value: Scaled, decimals: int) -> Fixed:
    """
    Scaled -> Fixed[decimals].

    Raises:
        RepresentationMismatch: If value.decimals != decimals
    """
    if not isinstance(value, Scaled):
        raise TypeError(f"Expected a Scaled value, got {type(value).__name__}")
    return value.to_fixed(decimals)


def convert_fixed(value: Fixed, decimals: int) -> Fixed:
    """Fixed[D] -> Fixed[decimals], truncating when precision drops."""
    if not isinstance(value, Fixed):
        raise TypeError(f"Expected a Fixed value, got {type(value).__name__}")
    return value.to_decimals(decimals)


def convert_scaled(value: Scaled, decimals: int) -> Scaled:
    """Scaled -> Scaled at decimals, truncating when precision drops."""
    if not isinstance(value, Scaled):
        raise TypeError(f"Expected a Scaled value, got {type(value).__name__}")
    return value.to_decimals(decimals)


def align(*values: Scaled) -> tuple[Scaled, ...]:
    """
    Bring Scaled values to a common precision without losing digits.

    Every value is scaled UP to the largest decimals among them, so the
    result can be combined with ordinary arithmetic.

    Args:
        *values: One or more Scaled values

    Returns:
        Tuple of the values, in order, all at max(decimals)

    Raises:
        ValueError: If no values are given

    Examples:
        >>> align(Scaled(150, 2), Scaled(5, 3))
        (Scaled(val=1500, decimals=3), Scaled(val=5, decimals=3))
    """
    if not values:
        raise ValueError("align() needs at least one value")

    for value in values:
        if not isinstance(value, Scaled):
            raise TypeError(f"Expected Scaled values, got {type(value).__name__}")

    target = max(value.decimals for value in values)
    return tuple(value.to_decimals(target) for value in values)
