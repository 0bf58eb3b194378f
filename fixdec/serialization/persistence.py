"""
Persistence Encoding — Compact bytes for durable storage

Byte shapes:
- Fixed[D] -> little-endian bytes of the mantissa (zero is one 0x00 byte)
- Scaled   -> interchange (JSON) bytes, unbounded

Storage size contract is a Bound. The bound of a Fixed codec is about BYTES
of the mantissa and has nothing to do with D: it is unbounded unless the
caller derives one from the largest mantissa it expects to store.

    >>> codec = FixedCodec(8, bound=Bound.for_max_mantissa(21_000_000 * 10**8))
    >>> codec.bound.max_size
    7
"""

import logging
from dataclasses import dataclass
from typing import Final, Optional, Union

from fixdec.core.domain import Fixed, Scaled
from fixdec.core.errors import DecodeError, PrecisionMismatch
from fixdec.core.math import validate_decimals, validate_mantissa
from fixdec.serialization import interchange

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

BYTE_ORDER: Final[str] = "little"


# =============================================================================
# BOUND
# =============================================================================


@dataclass(frozen=True)
class Bound:
    """
    Size contract of an encoded value.

    Attributes:
        max_size: Largest encoded length in bytes (None = unbounded)
        is_fixed_size: Every encoding is exactly max_size bytes
    """

    max_size: Optional[int] = None
    is_fixed_size: bool = False

    def __post_init__(self):
        if self.max_size is not None and self.max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {self.max_size}")
        if self.is_fixed_size and self.max_size is None:
            raise ValueError("A fixed-size bound needs max_size")

    @property
    def is_bounded(self) -> bool:
        return self.max_size is not None

    @classmethod
    def unbounded(cls) -> "Bound":
        return cls()

    @classmethod
    def fixed(cls, size: int) -> "Bound":
        """Every encoding is exactly `size` bytes (zero-padded)."""
        return cls(max_size=size, is_fixed_size=True)

    @classmethod
    def for_max_mantissa(cls, max_mantissa: int, is_fixed_size: bool = False) -> "Bound":
        """
        Bound large enough for every mantissa up to max_mantissa.

        Args:
            max_mantissa: Largest mantissa the store must hold
            is_fixed_size: Pad every encoding to that width

        Examples:
            >>> Bound.for_max_mantissa(255).max_size
            1
            >>> Bound.for_max_mantissa(256).max_size
            2
        """
        validate_mantissa(max_mantissa, "max_mantissa")
        return cls(max_size=mantissa_byte_length(max_mantissa), is_fixed_size=is_fixed_size)


UNBOUNDED: Final[Bound] = Bound()


def mantissa_byte_length(mantissa: int) -> int:
    """Minimal little-endian length of a mantissa; zero takes one byte."""
    return max(1, (mantissa.bit_length() + 7) // 8)


# =============================================================================
# FIXED
# =============================================================================


class FixedCodec:
    """
    Persistence codec for one static precision.

    Args:
        decimals: Precision D of the stored Fixed[D] values
        bound: Size contract (default: unbounded)
    """

    def __init__(self, decimals: int, bound: Bound = UNBOUNDED):
        self.value_type = Fixed[validate_decimals(decimals)]
        self.bound = bound

    def to_bytes(self, value: Fixed) -> bytes:
        """
        Raises:
            PrecisionMismatch: If value is not a Fixed[D] of this codec
            ValueError: If the mantissa does not fit the bound
        """
        if not isinstance(value, Fixed):
            raise TypeError(f"Expected a Fixed value, got {type(value).__name__}")
        if value.DECIMALS != self.value_type.DECIMALS:
            raise PrecisionMismatch(
                f"{type(self).__name__} for {self.value_type.__name__} cannot store {type(value).__name__}"
            )

        length = mantissa_byte_length(value.val)
        if self.bound.is_bounded and length > self.bound.max_size:
            logger.warning(
                f"Mantissa of {length} bytes exceeds bound of {self.bound.max_size} bytes"
            )
            raise ValueError(
                f"Mantissa {value.val} needs {length} bytes, bound is {self.bound.max_size}"
            )
        if self.bound.is_fixed_size:
            length = self.bound.max_size

        return value.val.to_bytes(length, BYTE_ORDER)

    def from_bytes(self, data: Union[bytes, bytearray, memoryview]) -> Fixed:
        """
        Raises:
            DecodeError: If data is empty or violates the bound
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")

        size = len(data)
        if size == 0:
            logger.warning(f"Rejected empty {self.value_type.__name__} payload")
            raise DecodeError(f"Empty payload for {self.value_type.__name__}")
        if self.bound.is_bounded and size > self.bound.max_size:
            logger.warning(f"Rejected {size}-byte payload, bound is {self.bound.max_size} bytes")
            raise DecodeError(f"Payload of {size} bytes exceeds bound of {self.bound.max_size} bytes")
        if self.bound.is_fixed_size and size != self.bound.max_size:
            logger.warning(f"Rejected {size}-byte payload, fixed size is {self.bound.max_size} bytes")
            raise DecodeError(f"Payload of {size} bytes, expected exactly {self.bound.max_size} bytes")

        return self.value_type(int.from_bytes(data, BYTE_ORDER))


# =============================================================================
# SCALED
# =============================================================================


class ScaledCodec:
    """Persistence codec for Scaled: interchange bytes, unbounded."""

    bound: Bound = UNBOUNDED

    def to_bytes(self, value: Scaled) -> bytes:
        return interchange.encode_scaled(value)

    def from_bytes(self, data: Union[bytes, bytearray, memoryview]) -> Scaled:
        """
        Raises:
            DecodeError: If data is not a valid Scaled interchange payload
        """
        return interchange.decode_scaled(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def fixed_to_bytes(value: Fixed, bound: Bound = UNBOUNDED) -> bytes:
    if not isinstance(value, Fixed):
        raise TypeError(f"Expected a Fixed value, got {type(value).__name__}")
    return FixedCodec(value.DECIMALS, bound).to_bytes(value)


def fixed_from_bytes(
    data: Union[bytes, bytearray, memoryview], decimals: int, bound: Bound = UNBOUNDED
) -> Fixed:
    return FixedCodec(decimals, bound).from_bytes(data)


def scaled_to_bytes(value: Scaled) -> bytes:
    return ScaledCodec().to_bytes(value)


def scaled_from_bytes(data: Union[bytes, bytearray, memoryview]) -> Scaled:
    return ScaledCodec().from_bytes(data)
