"""
Contract Validation Module

JSON Schema validation of fixdec interchange documents.
"""

from .validators import (
    ContractValidator,
    FixedDecimalValidator,
    ScaledDecimalValidator,
    SchemaLoader,
    validate_fixed_decimal,
    validate_scaled_decimal,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FixedDecimalValidator",
    "ScaledDecimalValidator",
    # Functions
    "validate_fixed_decimal",
    "validate_scaled_decimal",
]
