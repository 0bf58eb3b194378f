"""
Integer Ops — Truncating fixed-point kernels

Pure functions over non-negative Python ints that implement the fixed-point
rules shared by Fixed[D] and Scaled:
- Mantissa validation (type, sign)
- Checked subtraction (no negative results)
- Rescaling multiply/divide with truncation toward zero
- Precision conversion (scale up exactly, scale down by truncation)
- Integer square roots
- Text rendering

CRITICAL INVARIANTS:
1. All inputs and outputs are non-negative ints
2. Truncation is always toward zero (floor, since nothing is negative)
3. Division rescales BEFORE dividing, so no precision is dropped early
4. A zero divisor raises DivisionByZero, there is no fallback value

FORMULAS:
    mul_rescale(a, b, scale) = floor(a * b / scale)
    div_rescale(a, b, scale) = floor(a * scale / b)
    rescale(m, d_from, d_to) = m * 10^(d_to - d_from)         if d_to >= d_from
                             = floor(m / 10^(d_from - d_to))  otherwise
"""

import math
from typing import Final

from fixdec.core.errors import DivisionByZero, MagnitudeUnderflow
from fixdec.core.math.scale_table import base, validate_decimals

# =============================================================================
# CONSTANTS
# =============================================================================

# Separator between integer and fractional parts in text renderings
DECIMAL_POINT: Final[str] = "."


# =============================================================================
# VALIDATION
# =============================================================================


def validate_mantissa(value: int, name: str = "mantissa") -> int:
    """
    Check that a value can serve as a mantissa.

    Args:
        value: Candidate mantissa
        name: Name used in error messages

    Returns:
        value unchanged

    Raises:
        TypeError: If value is not an int (bool is rejected too)
        MagnitudeUnderflow: If value is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise MagnitudeUnderflow(f"{name} must be non-negative, got {value}")

    return value


# =============================================================================
# ARITHMETIC
# =============================================================================


def checked_sub(minuend: int, subtrahend: int) -> int:
    """
    Subtraction that refuses to go below zero.

    Raises:
        MagnitudeUnderflow: If subtrahend > minuend
    """
    if subtrahend > minuend:
        raise MagnitudeUnderflow(
            f"Subtraction underflow: {minuend} - {subtrahend} is negative"
        )

    return minuend - subtrahend


def mul_rescale(a: int, b: int, scale: int) -> int:
    """
    Product of two scaled mantissas, rescaled back to one scale.

    The raw product carries twice the decimal places; dividing by the scale
    restores it, truncating the extra digits.

    Args:
        a: Left mantissa
        b: Right mantissa
        scale: 10^decimals shared by both operands

    Returns:
        floor(a * b / scale)

    Examples:
        >>> mul_rescale(150, 200, 100)  # 1.50 * 2.00
        300
        >>> mul_rescale(1, 1, 100)  # 0.01 * 0.01 truncates to 0.00
        0
    """
    return a * b // scale


def div_rescale(a: int, b: int, scale: int) -> int:
    """
    Quotient of two scaled mantissas at the same scale.

    The dividend is scaled up first; dividing first would throw the
    fractional digits away before the scale-up could keep them.

    Args:
        a: Dividend mantissa
        b: Divisor mantissa
        scale: 10^decimals shared by both operands

    Returns:
        floor(a * scale / b)

    Raises:
        DivisionByZero: If b == 0

    Examples:
        >>> div_rescale(100, 300, 100)  # 1.00 / 3.00
        33
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")

    return a * scale // b


def div_scalar(a: int, divisor: int) -> int:
    """
    Divide a mantissa by a plain integer (no rescale).

    Raises:
        DivisionByZero: If divisor == 0
    """
    if divisor == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")

    return a // divisor


def fraction_of_scale(scale: int, numerator: int, denominator: int) -> int:
    """
    Mantissa of numerator/denominator at the given scale, truncated.

    Raises:
        DivisionByZero: If denominator == 0
    """
    if denominator == 0:
        raise DivisionByZero(f"Fraction with zero denominator: {numerator}/0")

    return scale * numerator // denominator


# =============================================================================
# PRECISION CONVERSION
# =============================================================================


def rescale(mantissa: int, from_decimals: int, to_decimals: int) -> int:
    """
    Move a mantissa from one precision to another.

    Increasing precision is exact. Decreasing precision truncates the
    dropped digits permanently: rescale(rescale(m, 8, 2), 2, 8) != m in
    general.

    Args:
        mantissa: Mantissa at from_decimals
        from_decimals: Current decimal-place count
        to_decimals: Target decimal-place count

    Returns:
        Mantissa at to_decimals

    Raises:
        UnsupportedPrecision: If either count is outside 0..=31

    Examples:
        >>> rescale(675, 2, 4)
        67500
        >>> rescale(123456789, 8, 2)
        123
    """
    validate_decimals(from_decimals)
    validate_decimals(to_decimals)

    if from_decimals == to_decimals:
        return mantissa

    if to_decimals > from_decimals:
        return mantissa * base(to_decimals - from_decimals)

    return mantissa // base(from_decimals - to_decimals)


# =============================================================================
# SQUARE ROOTS
# =============================================================================


def sqrt_whole(mantissa: int, scale: int) -> int:
    """
    Square root of the integer part only, rescaled.

    The fractional part of the input is dropped BEFORE the root is taken,
    so the result is floor(sqrt(floor(value))) at the original scale, not
    sqrt(value). sqrt(2.25) yields 1.00, sqrt(0.81) yields 0.00. Existing
    callers rely on this result; use sqrt_scaled for the precise root.

    Examples:
        >>> sqrt_whole(225, 100)  # sqrt(2.25) -> 1.00
        100
    """
    whole = mantissa // scale
    return math.isqrt(whole) * scale


def sqrt_scaled(mantissa: int, scale: int) -> int:
    """
    Square root truncated at the operand's own precision.

    sqrt(m / s) = sqrt(m * s) / s, so the root of m * s is already at
    scale s.

    Examples:
        >>> sqrt_scaled(225, 100)  # sqrt(2.25) -> 1.50
        150
    """
    return math.isqrt(mantissa * scale)


# =============================================================================
# FORMATTING
# =============================================================================


def format_scaled(mantissa: int, decimals: int) -> str:
    """
    Render a mantissa as a decimal string with the fraction zero-padded.

    Args:
        mantissa: Non-negative mantissa
        decimals: Decimal-place count

    Returns:
        "<integer>.<fraction padded to decimals digits>", or just
        "<integer>" when decimals == 0

    Examples:
        >>> format_scaled(5, 8)
        '0.00000005'
        >>> format_scaled(675, 2)
        '6.75'
        >>> format_scaled(42, 0)
        '42'
    """
    scale = base(decimals)
    integer_part, remainder = divmod(mantissa, scale)

    if decimals == 0:
        return str(integer_part)

    return f"{integer_part}{DECIMAL_POINT}{remainder:0{decimals}d}"


def format_scaled_legacy(mantissa: int, decimals: int) -> str:
    """
    Unpadded rendering kept for output compatibility.

    The remainder is printed without leading zeros, so the decimal point
    looks shifted for small fractions: (5, 8) renders as "0.5" even though
    the value is 0.00000005.

    Examples:
        >>> format_scaled_legacy(5, 8)
        '0.5'
        >>> format_scaled_legacy(42, 0)
        '42.0'
    """
    scale = base(decimals)
    integer_part, remainder = divmod(mantissa, scale)
    return f"{integer_part}{DECIMAL_POINT}{remainder}"
