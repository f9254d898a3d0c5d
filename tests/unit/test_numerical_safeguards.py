"""
Тесты для модуля Numerical Safeguards (checked uint256)

Проверяет:
1. Checked сложение/вычитание и отказы Overflow/Underflow
2. Fast paths и их assert-границы
3. Валидацию количеств
"""

import pytest

from src.core.math.numerical_safeguards import (
    MAX_UINT256,
    WAD,
    ArithmeticFault,
    Overflow,
    Underflow,
    checked_add,
    checked_sub,
    is_uint256,
    unchecked_add,
    unchecked_sub,
    validate_uint256,
)


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


class TestCheckedAdd:
    """Тесты для checked_add"""

    def test_simple_sum(self) -> None:
        assert checked_add(1, 2) == 3
        assert checked_add(0, 0) == 0

    def test_sum_up_to_max_allowed(self) -> None:
        """Сумма ровно MAX_UINT256 допустима"""
        assert checked_add(MAX_UINT256 - 5, 5) == MAX_UINT256

    def test_overflow_raises(self) -> None:
        with pytest.raises(Overflow) as exc_info:
            checked_add(MAX_UINT256, 1)
        assert exc_info.value.a == MAX_UINT256
        assert exc_info.value.b == 1
        assert exc_info.value.code == "overflow"

    def test_overflow_is_arithmetic_fault(self) -> None:
        with pytest.raises(ArithmeticFault):
            checked_add(MAX_UINT256, MAX_UINT256)


class TestCheckedSub:
    """Тесты для checked_sub"""

    def test_simple_difference(self) -> None:
        assert checked_sub(10 * WAD, 4 * WAD) == 6 * WAD

    def test_difference_to_zero(self) -> None:
        assert checked_sub(7, 7) == 0

    def test_underflow_raises(self) -> None:
        with pytest.raises(Underflow, match="underflow"):
            checked_sub(1, 2)

    def test_underflow_is_arithmetic_error(self) -> None:
        """Underflow совместим со стандартным ArithmeticError"""
        with pytest.raises(ArithmeticError):
            checked_sub(0, 1)


# =============================================================================
# FAST PATHS
# =============================================================================


class TestFastPaths:
    """Тесты для unchecked_add / unchecked_sub"""

    def test_unchecked_add_in_range(self) -> None:
        assert unchecked_add(100, 23) == 123

    def test_unchecked_sub_in_range(self) -> None:
        assert unchecked_sub(100, 23) == 77

    def test_unchecked_add_assert_catches_broken_proof(self) -> None:
        with pytest.raises(AssertionError):
            unchecked_add(MAX_UINT256, 1)

    def test_unchecked_sub_assert_catches_broken_proof(self) -> None:
        with pytest.raises(AssertionError):
            unchecked_sub(1, 2)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestValidation:
    """Тесты для is_uint256 / validate_uint256"""

    def test_bounds(self) -> None:
        assert is_uint256(0)
        assert is_uint256(MAX_UINT256)
        assert not is_uint256(-1)
        assert not is_uint256(MAX_UINT256 + 1)

    def test_non_int_rejected(self) -> None:
        assert not is_uint256(1.0)
        assert not is_uint256("1")
        assert not is_uint256(None)

    def test_bool_rejected(self) -> None:
        """True/False не являются количествами"""
        assert not is_uint256(True)
        with pytest.raises(ValueError, match="must be an int"):
            validate_uint256(True, "amount")

    def test_validate_returns_value(self) -> None:
        assert validate_uint256(42, "amount") == 42

    def test_validate_negative(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            validate_uint256(-1, "amount")

    def test_validate_too_large(self) -> None:
        with pytest.raises(ValueError, match="MAX_UINT256"):
            validate_uint256(MAX_UINT256 + 1, "amount")

    def test_validate_float(self) -> None:
        with pytest.raises(ValueError, match="amount must be an int"):
            validate_uint256(1.5, "amount")
