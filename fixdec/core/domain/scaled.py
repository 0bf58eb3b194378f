"""
Scaled — Dynamic-precision fixed-point decimal

Same value space as Fixed[D], but the decimal-place count travels with the
value as a run-time field. Used where the precision is only known at run
time (per-asset decimals read from a registry, wire payloads).

    >>> Scaled(150, 2) * Scaled(200, 2)
    Scaled(val=300, decimals=2)

CRITICAL INVARIANTS:
1. val >= 0, 0 <= decimals <= 31
2. Every Scaled/Scaled operation requires equal decimals (PrecisionMismatch)
3. A plain int operand of * and / scales the mantissa directly, no rescale
4. Multiply/divide truncate toward zero
5. Instances are immutable; operators return new instances
"""

from functools import total_ordering
from typing import TYPE_CHECKING, Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fixdec.core.errors import PrecisionMismatch, RepresentationMismatch
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
from fixdec.core.math.scale_table import MAX_DECIMALS, base, validate_decimals

if TYPE_CHECKING:
    from fixdec.core.domain.fixed import Fixed


@total_ordering
class Scaled:
    """
    Fixed-point decimal carrying its precision at run time.

    Args:
        val: Non-negative mantissa
        decimals: Decimal-place count in 0..=31

    Raises:
        UnsupportedPrecision: If decimals > 31
        MagnitudeUnderflow: If val < 0
    """

    __slots__ = ("_val", "_decimals")

    def __init__(self, val: int, decimals: int) -> None:
        object.__setattr__(self, "_val", validate_mantissa(val, "val"))
        object.__setattr__(self, "_decimals", validate_decimals(decimals))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Scaled is immutable")

    def __reduce__(self):
        return (Scaled, (self._val, self._decimals))

    @property
    def val(self) -> int:
        return self._val

    @property
    def decimals(self) -> int:
        return self._decimals

    def base(self) -> int:
        """Scale of this value: 10^decimals."""
        return base(self._decimals)

    # =========================================================================
    # CONSTANTS
    # =========================================================================

    @classmethod
    def fraction(cls, numerator: int, denominator: int, decimals: int) -> "Scaled":
        """numerator/denominator at the given precision, truncated."""
        validate_mantissa(numerator, "numerator")
        validate_mantissa(denominator, "denominator")
        return cls(fraction_of_scale(base(decimals), numerator, denominator), decimals)

    @classmethod
    def zero(cls, decimals: int) -> "Scaled":
        return cls(0, decimals)

    @classmethod
    def one(cls, decimals: int) -> "Scaled":
        return cls(base(decimals), decimals)

    @classmethod
    def two(cls, decimals: int) -> "Scaled":
        return cls.fraction(2, 1, decimals)

    @classmethod
    def f0_1(cls, decimals: int) -> "Scaled":
        return cls.fraction(1, 10, decimals)

    @classmethod
    def f0_2(cls, decimals: int) -> "Scaled":
        return cls.fraction(1, 5, decimals)

    @classmethod
    def f0_25(cls, decimals: int) -> "Scaled":
        return cls.fraction(1, 4, decimals)

    @classmethod
    def f0_3(cls, decimals: int) -> "Scaled":
        return cls.fraction(3, 10, decimals)

    @classmethod
    def f0_33(cls, decimals: int) -> "Scaled":
        return cls.fraction(1, 3, decimals)

    @classmethod
    def f0_4(cls, decimals: int) -> "Scaled":
        return cls.fraction(2, 5, decimals)

    @classmethod
    def f0_5(cls, decimals: int) -> "Scaled":
        return cls.fraction(1, 2, decimals)

    @classmethod
    def f0_6(cls, decimals: int) -> "Scaled":
        return cls.fraction(3, 5, decimals)

    @classmethod
    def f0_67(cls, decimals: int) -> "Scaled":
        return cls.fraction(2, 3, decimals)

    @classmethod
    def f0_7(cls, decimals: int) -> "Scaled":
        return cls.fraction(7, 10, decimals)

    @classmethod
    def f0_75(cls, decimals: int) -> "Scaled":
        return cls.fraction(3, 4, decimals)

    @classmethod
    def f0_8(cls, decimals: int) -> "Scaled":
        return cls.fraction(4, 5, decimals)

    @classmethod
    def f0_9(cls, decimals: int) -> "Scaled":
        return cls.fraction(9, 10, decimals)

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def _check_same_precision(self, other: "Scaled") -> None:
        if self._decimals != other._decimals:
            raise PrecisionMismatch(
                f"Incompatible decimal points: {self._decimals} vs {other._decimals}"
            )

    @staticmethod
    def _is_scalar(other: Any) -> bool:
        return isinstance(other, int) and not isinstance(other, bool)

    def add(self, other: "Scaled") -> "Scaled":
        if not isinstance(other, Scaled):
            raise TypeError(f"Cannot add Scaled and {type(other).__name__}")
        self._check_same_precision(other)
        return Scaled(self._val + other._val, self._decimals)

    def subtract(self, other: "Scaled") -> "Scaled":
        """
        Raises:
            PrecisionMismatch: If decimals differ
            MagnitudeUnderflow: If other > self
        """
        if not isinstance(other, Scaled):
            raise TypeError(f"Cannot subtract {type(other).__name__} from Scaled")
        self._check_same_precision(other)
        return Scaled(checked_sub(self._val, other._val), self._decimals)

    def multiply(self, other: "Scaled | int") -> "Scaled":
        """
        Scaled operand: floor(a.val * b.val / 10^decimals).
        int operand: a.val * n, no rescale.
        """
        if self._is_scalar(other):
            return Scaled(self._val * validate_mantissa(other, "multiplier"), self._decimals)
        if not isinstance(other, Scaled):
            raise TypeError(f"Cannot multiply Scaled by {type(other).__name__}")
        self._check_same_precision(other)
        return Scaled(mul_rescale(self._val, other._val, self.base()), self._decimals)

    def divide(self, other: "Scaled | int") -> "Scaled":
        """
        Scaled operand: floor(a.val * 10^decimals / b.val).
        int operand: floor(a.val / n), no rescale.

        Raises:
            PrecisionMismatch: If decimals differ
            DivisionByZero: If the divisor is zero
        """
        if self._is_scalar(other):
            return Scaled(div_scalar(self._val, validate_mantissa(other, "divisor")), self._decimals)
        if not isinstance(other, Scaled):
            raise TypeError(f"Cannot divide Scaled by {type(other).__name__}")
        self._check_same_precision(other)
        return Scaled(div_rescale(self._val, other._val, self.base()), self._decimals)

    def __add__(self, other: Any) -> "Scaled":
        if not isinstance(other, Scaled):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "Scaled":
        if not isinstance(other, Scaled):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> "Scaled":
        if not (isinstance(other, Scaled) or self._is_scalar(other)):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any) -> "Scaled":
        if not self._is_scalar(other):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Any) -> "Scaled":
        if not (isinstance(other, Scaled) or self._is_scalar(other)):
            return NotImplemented
        return self.divide(other)

    def sqrt(self) -> "Scaled":
        """
        Square root of the integer part, rescaled.

        Drops the fraction before rooting (sqrt(2.25) -> 1.00); kept for
        compatibility. Use sqrt_precise() for the true root.
        """
        return Scaled(sqrt_whole(self._val, self.base()), self._decimals)

    def sqrt_precise(self) -> "Scaled":
        return Scaled(sqrt_scaled(self._val, self.base()), self._decimals)

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def to_decimals(self, new_decimals: int) -> "Scaled":
        """
        Same value at another precision.

        Scaling up is exact; scaling down truncates the dropped digits.

        Raises:
            UnsupportedPrecision: If new_decimals > 31
        """
        if validate_decimals(new_decimals) == self._decimals:
            return self

        return Scaled(rescale(self._val, self._decimals, new_decimals), new_decimals)

    def to_fixed(self, decimals: int) -> "Fixed":
        """
        Static-precision view of this value.

        Args:
            decimals: Precision D of the target Fixed[D]

        Returns:
            Fixed[D] with the same mantissa

        Raises:
            RepresentationMismatch: If self.decimals != D; convert with
                to_decimals() first
        """
        from fixdec.core.domain.fixed import Fixed

        target = Fixed[decimals]
        if self._decimals != decimals:
            raise RepresentationMismatch(
                f"{self._decimals} decimals Scaled can't be transformed into {target.__name__}"
            )

        return target(self._val)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Scaled):
            return NotImplemented
        return self._val == other._val and self._decimals == other._decimals

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Scaled):
            return NotImplemented
        self._check_same_precision(other)
        return self._val < other._val

    def __hash__(self) -> int:
        return hash((self._val, self._decimals))

    def __bool__(self) -> bool:
        return self._val != 0

    # =========================================================================
    # RENDERING
    # =========================================================================

    def __str__(self) -> str:
        return format_scaled(self._val, self._decimals)

    def __repr__(self) -> str:
        return f"Scaled(val={self._val}, decimals={self._decimals})"

    def format_legacy(self) -> str:
        return format_scaled_legacy(self._val, self._decimals)

    # =========================================================================
    # PYDANTIC
    # =========================================================================

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Field schema: {"val": <int>, "decimals": <int>} on the wire."""
        record = core_schema.typed_dict_schema(
            {
                "val": core_schema.typed_dict_field(core_schema.int_schema(ge=0, strict=True)),
                "decimals": core_schema.typed_dict_field(
                    core_schema.int_schema(ge=0, le=MAX_DECIMALS, strict=True)
                ),
            },
            extra_behavior="forbid",
        )
        from_record = core_schema.no_info_after_validator_function(
            lambda data: cls(data["val"], data["decimals"]), record
        )

        return core_schema.json_or_python_schema(
            json_schema=from_record,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_record]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: {"val": instance.val, "decimals": instance.decimals},
            ),
        )
