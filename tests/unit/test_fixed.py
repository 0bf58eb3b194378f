"""
Tests for Fixed[D]

Checks:
1. Parameterization and class identity
2. Construction and immutability
3. Constants (zero, one, fractional menu)
4. Arithmetic and truncation
5. Error conditions
6. Square roots
7. Comparison, hashing, rendering, pickling
"""

import copy
import pickle

import pytest

from fixdec import (
    DivisionByZero,
    E8s,
    Fixed,
    MagnitudeUnderflow,
    PrecisionMismatch,
    Scaled,
    UnsupportedPrecision,
)


# =============================================================================
# PARAMETERIZATION
# =============================================================================


class TestParameterization:
    """Tests for Fixed[D] class creation"""

    def test_classes_are_cached(self) -> None:
        """Fixed[D] is Fixed[D]"""
        assert Fixed[8] is Fixed[8]
        assert E8s is Fixed[8]

    def test_different_precisions_are_different_classes(self) -> None:
        assert Fixed[2] is not Fixed[8]
        assert Fixed[2].DECIMALS == 2
        assert Fixed[8].DECIMALS == 8

    def test_subclass_of_fixed(self) -> None:
        assert issubclass(Fixed[8], Fixed)
        assert isinstance(Fixed[8](1), Fixed)

    def test_class_name(self) -> None:
        assert Fixed[8].__name__ == "Fixed[8]"

    def test_boundaries(self) -> None:
        assert Fixed[0].base() == 1
        assert Fixed[31].base() == 10**31

    def test_precision_32_rejected(self) -> None:
        with pytest.raises(UnsupportedPrecision):
            Fixed[32]

    def test_bare_fixed_not_instantiable(self) -> None:
        with pytest.raises(TypeError):
            Fixed(1)

    def test_double_parameterization_rejected(self) -> None:
        with pytest.raises(TypeError):
            Fixed[8][2]


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    """Tests for raw-mantissa construction"""

    def test_mantissa_stored(self) -> None:
        value = Fixed[2](675)
        assert value.val == 675
        assert value.decimals == 2

    def test_default_is_zero(self) -> None:
        assert Fixed[2]().val == 0

    def test_arbitrary_precision_mantissa(self) -> None:
        huge = 10**100 + 1
        assert Fixed[8](huge).val == huge

    def test_negative_mantissa_rejected(self) -> None:
        with pytest.raises(MagnitudeUnderflow):
            Fixed[2](-1)

    def test_float_mantissa_rejected(self) -> None:
        with pytest.raises(TypeError):
            Fixed[2](1.5)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        value = Fixed[2](675)
        with pytest.raises(AttributeError):
            value.val = 1  # type: ignore[misc]
        with pytest.raises(AttributeError):
            value._val = 1


# =============================================================================
# CONSTANTS
# =============================================================================


class TestConstants:
    """Tests for named constants"""

    def test_zero_and_one(self) -> None:
        assert E8s.zero().val == 0
        assert E8s.one().val == 100_000_000

    def test_two(self) -> None:
        assert E8s.two().val == 200_000_000

    def test_one_third_truncated(self) -> None:
        """base 10^8 divided by 3, truncated"""
        assert E8s.f0_33().val == 33_333_333

    def test_two_thirds_truncated(self) -> None:
        assert E8s.f0_67().val == 66_666_666

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("f0_1", 10_000_000),
            ("f0_2", 20_000_000),
            ("f0_25", 25_000_000),
            ("f0_3", 30_000_000),
            ("f0_4", 40_000_000),
            ("f0_5", 50_000_000),
            ("f0_6", 60_000_000),
            ("f0_7", 70_000_000),
            ("f0_75", 75_000_000),
            ("f0_8", 80_000_000),
            ("f0_9", 90_000_000),
        ],
    )
    def test_fraction_menu_at_8_places(self, name: str, expected: int) -> None:
        assert getattr(E8s, name)().val == expected

    def test_fractions_at_zero_places_truncate_to_zero(self) -> None:
        """No fractional digits available"""
        assert Fixed[0].f0_5().val == 0
        assert Fixed[0].one().val == 1

    def test_constants_return_own_class(self) -> None:
        assert type(Fixed[2].f0_25()) is Fixed[2]
        assert Fixed[2].f0_25().val == 25

    def test_custom_fraction(self) -> None:
        assert Fixed[4].fraction(1, 8).val == 1250

    def test_fraction_zero_denominator(self) -> None:
        with pytest.raises(DivisionByZero):
            Fixed[4].fraction(1, 0)


# =============================================================================
# ARITHMETIC
# =============================================================================


class TestArithmetic:
    """Tests for +, -, *, / and the named methods"""

    def test_subtraction_scenario(self) -> None:
        """10.00 - 3.25 = 6.75"""
        result = Fixed[2](1000) - Fixed[2](325)
        assert result.val == 675
        assert type(result) is Fixed[2]

    def test_addition(self) -> None:
        assert (Fixed[2](1000) + Fixed[2](325)).val == 1325

    def test_named_methods_match_operators(self) -> None:
        a, b = Fixed[2](1000), Fixed[2](325)
        assert a.add(b) == a + b
        assert a.subtract(b) == a - b
        assert a.multiply(b) == a * b
        assert a.divide(b) == a / b

    def test_augmented_assignment_rebinds(self) -> None:
        """a += b produces a new value and leaves the old one untouched"""
        original = Fixed[2](100)
        total = original
        total += Fixed[2](50)
        assert total.val == 150
        assert original.val == 100

    def test_multiply(self) -> None:
        """1.50 * 2.00 = 3.00"""
        assert (Fixed[2](150) * Fixed[2](200)).val == 300

    def test_multiply_truncates(self) -> None:
        """0.15 * 0.15 = 0.0225 -> 0.02"""
        assert (Fixed[2](15) * Fixed[2](15)).val == 2

    def test_divide(self) -> None:
        """1.00 / 3.00 = 0.33"""
        assert (Fixed[2](100) / Fixed[2](300)).val == 33

    def test_one_is_identity(self) -> None:
        for x in (E8s(0), E8s(1), E8s(123_456_789), E8s(10**30)):
            assert E8s.one() * x == x
            assert x * E8s.one() == x
            assert x / E8s.one() == x

    @pytest.mark.parametrize(
        "a,b",
        [
            (123_456_789, 987_654_321),
            (1, 1),
            (10**25 + 3, 7),
            (99_999_999, 33_333_333),
        ],
    )
    def test_divide_never_overshoots(self, a: int, b: int) -> None:
        """divide(multiply(a, b), b) <= a"""
        x, y = E8s(a), E8s(b)
        assert (x * y) / y <= x

    def test_subtraction_underflow(self) -> None:
        with pytest.raises(MagnitudeUnderflow):
            Fixed[2](325) - Fixed[2](1000)

    def test_divide_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            Fixed[2](100) / Fixed[2].zero()

    def test_mixed_precision_rejected(self) -> None:
        with pytest.raises(PrecisionMismatch):
            Fixed[2](100) + Fixed[8](100)
        with pytest.raises(PrecisionMismatch):
            Fixed[2](100) * Fixed[8](100)

    def test_non_fixed_operand(self) -> None:
        """Plain ints and Scaled do not mix with Fixed"""
        with pytest.raises(TypeError):
            Fixed[2](100) + 1  # type: ignore[operator]
        with pytest.raises(TypeError):
            Fixed[2](100) * Scaled(100, 2)  # type: ignore[operator]
        with pytest.raises(TypeError):
            Fixed[2](100).add(1)  # type: ignore[arg-type]

    def test_sum_with_zero_start(self) -> None:
        values = [Fixed[2](100), Fixed[2](250), Fixed[2](5)]
        assert sum(values, Fixed[2].zero()).val == 355


# =============================================================================
# SQUARE ROOT
# =============================================================================


class TestSqrt:
    """Tests for sqrt (whole part) and sqrt_precise"""

    def test_perfect_square(self) -> None:
        assert Fixed[2](1600).sqrt().val == 400

    def test_sqrt_drops_fraction_first(self) -> None:
        """sqrt(2.25) -> 1.00 (root of the integer part 2)"""
        assert Fixed[2](225).sqrt().val == 100

    def test_sqrt_below_one(self) -> None:
        assert Fixed[2](81).sqrt().val == 0

    def test_sqrt_precise(self) -> None:
        assert Fixed[2](225).sqrt_precise().val == 150
        assert E8s.two().sqrt_precise().val == 141_421_356


# =============================================================================
# COMPARISON & RENDERING
# =============================================================================


class TestComparison:
    """Tests for equality, ordering and hashing"""

    def test_equality_within_class(self) -> None:
        assert Fixed[2](100) == Fixed[2](100)
        assert Fixed[2](100) != Fixed[2](101)

    def test_different_precision_not_equal(self) -> None:
        assert Fixed[2](100) != Fixed[3](100)

    def test_ordering(self) -> None:
        assert Fixed[2](100) < Fixed[2](101)
        assert Fixed[2](101) >= Fixed[2](100)
        assert max(Fixed[2](3), Fixed[2](9), Fixed[2](1)).val == 9

    def test_ordering_across_precisions_rejected(self) -> None:
        with pytest.raises(PrecisionMismatch):
            Fixed[2](100) < Fixed[3](100)

    def test_hashable(self) -> None:
        assert len({Fixed[2](1), Fixed[2](1), Fixed[3](1)}) == 2

    def test_bool(self) -> None:
        assert not Fixed[2].zero()
        assert Fixed[2](1)


class TestRendering:
    """Tests for str, repr and legacy formatting"""

    def test_str_padded(self) -> None:
        assert str(E8s(5)) == "0.00000005"
        assert str(Fixed[2](675)) == "6.75"

    def test_str_zero_decimals(self) -> None:
        assert str(Fixed[0](42)) == "42"

    def test_legacy_unpadded(self) -> None:
        assert E8s(5).format_legacy() == "0.5"

    def test_repr(self) -> None:
        assert repr(Fixed[2](675)) == "Fixed[2](val=675)"


class TestCopying:
    """Tests for pickle and copy support"""

    def test_pickle_round_trip(self) -> None:
        value = E8s(123_456_789)
        restored = pickle.loads(pickle.dumps(value))
        assert restored == value
        assert type(restored) is Fixed[8]

    def test_copy(self) -> None:
        value = Fixed[2](675)
        assert copy.copy(value) == value
        assert copy.deepcopy(value) == value
