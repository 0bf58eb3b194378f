"""
Domain value types.

Fixed[D] (static precision), Scaled (dynamic precision), and the explicit
conversions between them.
"""

from fixdec.core.domain.scaled import Scaled
from fixdec.core.domain.fixed import E8s, Fixed
from fixdec.core.domain.conversion import (
    align,
    convert_fixed,
    convert_scaled,
    to_dynamic,
    to_fixed,
)

__all__ = [
    # Value types
    "Fixed",
    "E8s",
    "Scaled",
    # Conversion
    "to_dynamic",
    "to_fixed",
    "convert_fixed",
    "convert_scaled",
    "align",
]
