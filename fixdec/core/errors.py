"""
Errors — Fixed-point contract violations

Every condition below is a programmer contract violation, not a transient
failure: operations raise immediately and never return a wrong numeric
result. Each exception also derives from the closest builtin so callers can
catch either the package type or the standard one.

TAXONOMY:
1. UnsupportedPrecision   — decimal-place count outside 0..=31
2. PrecisionMismatch      — binary operation on values of different precision
3. MagnitudeUnderflow     — result (or mantissa) below zero
4. DivisionByZero         — divisor mantissa is zero
5. RepresentationMismatch — Scaled → Fixed[D] with decimals != D
6. DecodeError            — malformed interchange or persistence payload
"""


# =============================================================================
# BASE
# =============================================================================


class FixedPointError(Exception):
    """Base class for all fixed-point contract violations."""

    pass


# =============================================================================
# ARITHMETIC & PRECISION
# =============================================================================


class UnsupportedPrecision(FixedPointError, ValueError):
    """
    Decimal-place count outside the supported range 0..=31.

    Raised by the scale table and by every constructor that receives a
    precision.
    """

    pass


class PrecisionMismatch(FixedPointError, ValueError):
    """
    Binary operation between values carrying different decimal counts.

    Precisions are never coerced implicitly: convert first with
    `to_decimals()` or `conversion.align()`.
    """

    pass


class MagnitudeUnderflow(FixedPointError, ArithmeticError):
    """
    Result would be negative.

    Raised by subtraction when the subtrahend exceeds the minuend and by
    constructors receiving a negative mantissa.
    """

    pass


class DivisionByZero(FixedPointError, ZeroDivisionError):
    """Divisor mantissa (or scalar divisor) is zero."""

    pass


class RepresentationMismatch(FixedPointError, TypeError):
    """
    Dynamic value converted to a static type of a different precision.

    `Scaled.to_fixed(D)` requires `decimals == D`.
    """

    pass


# =============================================================================
# SERIALIZATION
# =============================================================================


class DecodeError(FixedPointError, ValueError):
    """Malformed bytes or document presented to a serialization adapter."""

    pass
