"""
Interchange Encoding — Self-describing JSON for cross-process exchange

Wire shapes:
- Fixed[D] -> JSON integer (the mantissa). D is implied by the declared
  type on both ends and is not transmitted.
- Scaled   -> {"val": <integer>, "decimals": <integer>}. The precision is
  not known statically by the receiver, so it travels with the value.

Encoding is compact UTF-8 JSON with a fixed key order, so encode(decode(b))
reproduces b byte for byte for any canonical payload. Integers of any size
are written exactly (no float round-trip).

Decoding pipeline:
    bytes -> json.loads -> JSON Schema contract -> pydantic wire model -> value
Any failure along the way raises DecodeError chained to the original error.
Objects with a repeated key are rejected rather than resolved last-key-wins.

Mantissas longer than the interpreter's int/str digit limit
(sys.get_int_max_str_digits, 4300 by default) cannot be written as JSON;
encoding one raises the interpreter's ValueError unchanged.
"""

import json
import logging
from typing import Any, Union

from jsonschema import ValidationError as SchemaValidationError
from pydantic import BaseModel, Field, StrictInt
from pydantic import ValidationError as ModelValidationError

from fixdec.core.contracts import validate_fixed_decimal, validate_scaled_decimal
from fixdec.core.domain import Fixed, Scaled
from fixdec.core.errors import DecodeError
from fixdec.core.math import MAX_DECIMALS, validate_decimals

logger = logging.getLogger(__name__)

# =============================================================================
# WIRE MODELS
# =============================================================================


class ScaledRecord(BaseModel):
    """
    Wire record of a Scaled value.

    Immutable (frozen=True); unknown keys are rejected.
    """

    val: StrictInt = Field(..., ge=0, description="Mantissa (value * 10^decimals)")
    decimals: StrictInt = Field(
        ..., ge=0, le=MAX_DECIMALS, description="Decimal-place count"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def from_scaled(cls, value: Scaled) -> "ScaledRecord":
        return cls(val=value.val, decimals=value.decimals)

    def to_scaled(self) -> Scaled:
        return Scaled(self.val, self.decimals)


# =============================================================================
# DOCUMENT LEVEL (python objects)
# =============================================================================


def fixed_to_document(value: Fixed) -> int:
    """Fixed[D] -> interchange document (plain int)."""
    if not isinstance(value, Fixed):
        raise TypeError(f"Expected a Fixed value, got {type(value).__name__}")
    return value.val


def fixed_from_document(document: Any, decimals: int) -> Fixed:
    """
    Interchange document -> Fixed[decimals].

    Args:
        document: Parsed JSON value
        decimals: Precision D declared by the receiving side

    Raises:
        UnsupportedPrecision: If decimals > 31
        DecodeError: If the document is not a non-negative integer
    """
    target = Fixed[validate_decimals(decimals)]

    try:
        validate_fixed_decimal(document)
    except SchemaValidationError as e:
        logger.warning(f"Rejected {target.__name__} interchange document: {e.message}")
        raise DecodeError(f"Invalid {target.__name__} document: {e.message}") from e

    # Schema allows 1.0 as an integer; the mantissa must be a real int
    if isinstance(document, bool) or not isinstance(document, int):
        logger.warning(f"Rejected {target.__name__} interchange document of type {type(document).__name__}")
        raise DecodeError(f"Invalid {target.__name__} document: expected an integer, got {document!r}")

    return target(document)


def scaled_to_document(value: Scaled) -> dict[str, int]:
    """Scaled -> interchange document ({"val", "decimals"})."""
    if not isinstance(value, Scaled):
        raise TypeError(f"Expected a Scaled value, got {type(value).__name__}")
    return ScaledRecord.from_scaled(value).model_dump()


def scaled_from_document(document: Any) -> Scaled:
    """
    Interchange document -> Scaled.

    Raises:
        DecodeError: If the document violates the scaled_decimal contract
    """
    try:
        validate_scaled_decimal(document)
        record = ScaledRecord.model_validate(document)
    except SchemaValidationError as e:
        logger.warning(f"Rejected Scaled interchange document: {e.message}")
        raise DecodeError(f"Invalid Scaled document: {e.message}") from e
    except ModelValidationError as e:
        logger.warning(f"Rejected Scaled interchange document: {e.error_count()} error(s)")
        raise DecodeError(f"Invalid Scaled document: {e}") from e

    return record.to_scaled()


# =============================================================================
# BYTE LEVEL
# =============================================================================


def _dumps(document: Any) -> bytes:
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    document: dict[str, Any] = {}
    for key, value in pairs:
        if key in document:
            raise ValueError(f"Duplicate key {key!r}")
        document[key] = value
    return document


def _loads(data: Union[bytes, bytearray, memoryview, str]) -> Any:
    if isinstance(data, memoryview):
        data = data.tobytes()
    if not isinstance(data, (bytes, bytearray, str)):
        raise TypeError(f"Expected bytes or str, got {type(data).__name__}")

    try:
        return json.loads(data, object_pairs_hook=_reject_duplicate_keys)
    except ValueError as e:
        # JSONDecodeError, UnicodeDecodeError, duplicate keys and the int digit limit
        logger.warning(f"Rejected malformed interchange payload: {e}")
        raise DecodeError(f"Malformed interchange payload: {e}") from e


def encode_fixed(value: Fixed) -> bytes:
    """
    Fixed[D] -> interchange bytes.

    Examples:
        >>> encode_fixed(Fixed[2](675))
        b'675'
    """
    return _dumps(fixed_to_document(value))


def decode_fixed(data: Union[bytes, bytearray, memoryview, str], decimals: int) -> Fixed:
    """
    Interchange bytes -> Fixed[decimals].

    Raises:
        DecodeError: If the payload is not a non-negative JSON integer
    """
    return fixed_from_document(_loads(data), decimals)


def encode_scaled(value: Scaled) -> bytes:
    """
    Scaled -> interchange bytes.

    Examples:
        >>> encode_scaled(Scaled(150, 2))
        b'{"val":150,"decimals":2}'
    """
    return _dumps(scaled_to_document(value))


def decode_scaled(data: Union[bytes, bytearray, memoryview, str]) -> Scaled:
    """
    Interchange bytes -> Scaled.

    Raises:
        DecodeError: If the payload is malformed or violates the contract
    """
    return scaled_from_document(_loads(data))


def encode(value: Union[Fixed, Scaled]) -> bytes:
    """Interchange bytes for either representation."""
    if isinstance(value, Fixed):
        return encode_fixed(value)
    if isinstance(value, Scaled):
        return encode_scaled(value)

    raise TypeError(f"Cannot encode {type(value).__name__}; expected Fixed or Scaled")
