"""Serialization adapters: interchange (JSON) and persistence (bytes)."""

from fixdec.serialization import interchange, persistence
from fixdec.serialization.interchange import (
    ScaledRecord,
    decode_fixed,
    decode_scaled,
    encode,
    encode_fixed,
    encode_scaled,
)
from fixdec.serialization.persistence import (
    UNBOUNDED,
    Bound,
    FixedCodec,
    ScaledCodec,
    fixed_from_bytes,
    fixed_to_bytes,
    scaled_from_bytes,
    scaled_to_bytes,
)

__all__ = [
    "interchange",
    "persistence",
    # Interchange
    "ScaledRecord",
    "encode",
    "encode_fixed",
    "decode_fixed",
    "encode_scaled",
    "decode_scaled",
    # Persistence
    "Bound",
    "UNBOUNDED",
    "FixedCodec",
    "ScaledCodec",
    "fixed_to_bytes",
    "fixed_from_bytes",
    "scaled_to_bytes",
    "scaled_from_bytes",
]
