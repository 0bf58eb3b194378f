"""
fixdec — exact fixed-point decimals over non-negative integers

Two representations of a value equal to mantissa / 10^decimals:
- Fixed[D]: precision fixed by the class (Fixed[8], alias E8s)
- Scaled:   precision carried at run time

    >>> from fixdec import Fixed, Scaled
    >>> Fixed[2](1000) - Fixed[2](325)
    Fixed[2](val=675)
"""

import logging

from fixdec.core.errors import (
    DecodeError,
    DivisionByZero,
    FixedPointError,
    MagnitudeUnderflow,
    PrecisionMismatch,
    RepresentationMismatch,
    UnsupportedPrecision,
)
from fixdec.core.math import MAX_DECIMALS, base
from fixdec.core.domain import (
    E8s,
    Fixed,
    Scaled,
    align,
    convert_fixed,
    convert_scaled,
    to_dynamic,
    to_fixed,
)
from fixdec.serialization import interchange, persistence

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Value types
    "Fixed",
    "E8s",
    "Scaled",
    # Scale
    "MAX_DECIMALS",
    "base",
    # Conversion
    "to_dynamic",
    "to_fixed",
    "convert_fixed",
    "convert_scaled",
    "align",
    # Serialization
    "interchange",
    "persistence",
    # Errors
    "FixedPointError",
    "UnsupportedPrecision",
    "PrecisionMismatch",
    "MagnitudeUnderflow",
    "DivisionByZero",
    "RepresentationMismatch",
    "DecodeError",
]
