"""
Fixed[D] — Static-precision fixed-point decimal

A value type whose decimal-place count is part of its class: Fixed[8] and
Fixed[2] are different classes, so amounts of different precision cannot be
mixed by accident. The instance holds only the mantissa; the represented
value is val / 10^D.

    >>> E8s = Fixed[8]
    >>> price = E8s(150_000_000)  # 1.5
    >>> str(price * E8s.two())
    '3.00000000'

CRITICAL INVARIANTS:
1. val >= 0 always; subtraction below zero raises MagnitudeUnderflow
2. Fixed[D] is Fixed[D] (parameterized classes are cached)
3. Operands of different D raise PrecisionMismatch, never rescale silently
4. Multiply/divide truncate toward zero
5. Instances are immutable; operators return new instances
"""

from functools import lru_cache, total_ordering
from typing import Any, ClassVar, Optional

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fixdec.core.domain.scaled import Scaled
from fixdec.core.errors import PrecisionMismatch
from fixdec.core.math.integer_ops import (
    checked_sub,
    div_rescale,
    format_scaled,
    format_scaled_legacy,
    fraction_of_scale,
    mul_rescale,
    rescale,
    sqrt_scaled,
    sqrt_whole,
    validate_mantissa,
)
from fixdec.core.math.scale_table import base, validate_decimals


# =============================================================================
# PARAMETERIZATION
# =============================================================================


@lru_cache(maxsize=None)
def _parameterize(decimals: int) -> type["Fixed"]:
    name = f"Fixed[{decimals}]"
    return type(
        name,
        (Fixed,),
        {"DECIMALS": decimals, "__slots__": (), "__module__": __name__, "__qualname__": name},
    )


def _restore(decimals: int, val: int) -> "Fixed":
    """Pickle hook: dynamically created classes are rebuilt by precision."""
    return Fixed[decimals](val)


# =============================================================================
# FIXED
# =============================================================================


@total_ordering
class Fixed:
    """
    Fixed-point decimal with a precision fixed by the class.

    Use a parameterized class: `Fixed[8](val)`. The bare `Fixed` cannot be
    instantiated.

    Attributes:
        DECIMALS: Decimal-place count of the class (None on bare Fixed)
    """

    __slots__ = ("_val",)

    DECIMALS: ClassVar[Optional[int]] = None

    def __class_getitem__(cls, decimals: int) -> type["Fixed"]:
        if cls.DECIMALS is not None:
            raise TypeError(f"{cls.__name__} is already parameterized")

        return _parameterize(validate_decimals(decimals))

    def __init__(self, val: int = 0) -> None:
        if self.DECIMALS is None:
            raise TypeError("Fixed must be parameterized with a precision, e.g. Fixed[8]")

        object.__setattr__(self, "_val", validate_mantissa(val, "val"))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (_restore, (self.DECIMALS, self._val))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def val(self) -> int:
        """Mantissa: the value multiplied by 10^D."""
        return self._val

    @property
    def decimals(self) -> int:
        return self.DECIMALS

    @classmethod
    def base(cls) -> int:
        """Scale of the class: 10^D."""
        return base(cls.DECIMALS)

    # -------------------------------------------------------------------------
    # Constants
    # -------------------------------------------------------------------------

    @classmethod
    def fraction(cls, numerator: int, denominator: int) -> "Fixed":
        """
        numerator/denominator at this precision, truncated toward zero.

        Args:
            numerator: Non-negative numerator
            denominator: Positive denominator

        Returns:
            Instance with val = floor(10^D * numerator / denominator)

        Raises:
            DivisionByZero: If denominator == 0
            MagnitudeUnderflow: If numerator or denominator is negative
        """
        validate_mantissa(numerator, "numerator")
        validate_mantissa(denominator, "denominator")
        return cls(fraction_of_scale(cls.base(), numerator, denominator))

    @classmethod
    def zero(cls) -> "Fixed":
        return cls(0)

    @classmethod
    def one(cls) -> "Fixed":
        return cls(cls.base())

    @classmethod
    def two(cls) -> "Fixed":
        return cls.fraction(2, 1)

    @classmethod
    def f0_1(cls) -> "Fixed":
        return cls.fraction(1, 10)

    @classmethod
    def f0_2(cls) -> "Fixed":
        return cls.fraction(1, 5)

    @classmethod
    def f0_25(cls) -> "Fixed":
        return cls.fraction(1, 4)

    @classmethod
    def f0_3(cls) -> "Fixed":
        return cls.fraction(3, 10)

    @classmethod
    def f0_33(cls) -> "Fixed":
        """One third, truncated: Fixed[8].f0_33().val == 33333333."""
        return cls.fraction(1, 3)

    @classmethod
    def f0_4(cls) -> "Fixed":
        return cls.fraction(2, 5)

    @classmethod
    def f0_5(cls) -> "Fixed":
        return cls.fraction(1, 2)

    @classmethod
    def f0_6(cls) -> "Fixed":
        return cls.fraction(3, 5)

    @classmethod
    def f0_67(cls) -> "Fixed":
        """Two thirds, truncated: Fixed[8].f0_67().val == 66666666."""
        return cls.fraction(2, 3)

    @classmethod
    def f0_7(cls) -> "Fixed":
        return cls.fraction(7, 10)

    @classmethod
    def f0_75(cls) -> "Fixed":
        return cls.fraction(3, 4)

    @classmethod
    def f0_8(cls) -> "Fixed":
        return cls.fraction(4, 5)

    @classmethod
    def f0_9(cls) -> "Fixed":
        return cls.fraction(9, 10)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _check_same_precision(self, other: "Fixed", operation: str) -> None:
        if other.DECIMALS != self.DECIMALS:
            raise PrecisionMismatch(
                f"Cannot {operation} {type(self).__name__} and {type(other).__name__}; "
                f"convert with to_decimals() first"
            )

    def _require_fixed(self, other: Any, operation: str) -> "Fixed":
        if not isinstance(other, Fixed):
            raise TypeError(
                f"Cannot {operation} {type(self).__name__} and {type(other).__name__}"
            )
        self._check_same_precision(other, operation)
        return other

    def add(self, other: "Fixed") -> "Fixed":
        """a + b on mantissas."""
        other = self._require_fixed(other, "add")
        return type(self)(self._val + other._val)

    def subtract(self, other: "Fixed") -> "Fixed":
        """
        a - b on mantissas.

        Raises:
            MagnitudeUnderflow: If other > self
        """
        other = self._require_fixed(other, "subtract")
        return type(self)(checked_sub(self._val, other._val))

    def multiply(self, other: "Fixed") -> "Fixed":
        """
        a * b rescaled back to D places: floor(a.val * b.val / 10^D).
        """
        other = self._require_fixed(other, "multiply")
        return type(self)(mul_rescale(self._val, other._val, self.base()))

    def divide(self, other: "Fixed") -> "Fixed":
        """
        a / b at D places: floor(a.val * 10^D / b.val).

        Raises:
            DivisionByZero: If other.val == 0
        """
        other = self._require_fixed(other, "divide")
        return type(self)(div_rescale(self._val, other._val, self.base()))

    def __add__(self, other: Any) -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Any) -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.divide(other)

    def sqrt(self) -> "Fixed":
        """
        Square root of the integer part, rescaled to D places.

        The fractional part is discarded BEFORE the root is taken:
        sqrt(2.25) returns 1.0 (the root of 2), not 1.5. Callers depend on
        this result. For the root truncated at D places use sqrt_precise().
        """
        return type(self)(sqrt_whole(self._val, self.base()))

    def sqrt_precise(self) -> "Fixed":
        """Square root of the full value, truncated at D places."""
        return type(self)(sqrt_scaled(self._val, self.base()))

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_dynamic(self) -> Scaled:
        """Lossless conversion to Scaled(val, D)."""
        return Scaled(self._val, self.DECIMALS)

    def to_decimals(self, decimals: int) -> "Fixed":
        """
        Same value at another static precision.

        Increasing precision is exact; decreasing truncates the dropped
        digits.

        Args:
            decimals: Target precision D1

        Returns:
            Fixed[D1] instance (self's class when D1 == D)

        Raises:
            UnsupportedPrecision: If decimals > 31
        """
        if validate_decimals(decimals) == self.DECIMALS:
            return self

        return Fixed[decimals](rescale(self._val, self.DECIMALS, decimals))

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.DECIMALS == other.DECIMALS and self._val == other._val

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        self._check_same_precision(other, "compare")
        return self._val < other._val

    def __hash__(self) -> int:
        return hash((self.DECIMALS, self._val))

    def __bool__(self) -> bool:
        return self._val != 0

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return format_scaled(self._val, self.DECIMALS)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(val={self._val})"

    def format_legacy(self) -> str:
        """Unpadded "<int>.<remainder>" rendering (Fixed[8](5) -> "0.5")."""
        return format_scaled_legacy(self._val, self.DECIMALS)

    # -------------------------------------------------------------------------
    # pydantic
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Field schema: a non-negative integer mantissa on the wire.

        D is implied by the field's declared class and is not transmitted.
        """
        if cls.DECIMALS is None:
            raise TypeError("Use a parameterized Fixed[D] as a field type")

        from_mantissa = core_schema.chain_schema(
            [
                core_schema.int_schema(ge=0, strict=True),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )

        return core_schema.json_or_python_schema(
            json_schema=from_mantissa,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_mantissa]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: instance.val,
                return_schema=core_schema.int_schema(),
            ),
        )


# =============================================================================
# ALIASES
# =============================================================================

E8s = Fixed[8]
