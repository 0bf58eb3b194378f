"""
Core math modules for fixdec

Scale table and truncating integer kernels shared by both decimal
representations.
"""

# Scale Table
from fixdec.core.math.scale_table import (
    MAX_DECIMALS,
    SCALE_TABLE,
    SCALE_TABLE_SIZE,
    base,
    validate_decimals,
)

# Integer Ops
from fixdec.core.math.integer_ops import (
    checked_sub,
    div_rescale,
    div_scalar,
    format_scaled,
    format_scaled_legacy,
    fraction_of_scale,
    mul_rescale,
    rescale,
    sqrt_scaled,
    sqrt_whole,
    validate_mantissa,
)

__all__ = [
    # Scale Table — Constants
    "MAX_DECIMALS",
    "SCALE_TABLE",
    "SCALE_TABLE_SIZE",
    # Scale Table — Functions
    "base",
    "validate_decimals",
    # Integer Ops — Validation
    "validate_mantissa",
    # Integer Ops — Arithmetic
    "checked_sub",
    "div_rescale",
    "div_scalar",
    "fraction_of_scale",
    "mul_rescale",
    # Integer Ops — Precision
    "rescale",
    "sqrt_scaled",
    "sqrt_whole",
    # Integer Ops — Formatting
    "format_scaled",
    "format_scaled_legacy",
]
