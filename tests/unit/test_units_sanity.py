"""
Тесты для WadUnits (конверсия human amount ↔ wad)

Проверяет:
1. Точность конверсии без float
2. Отказы на дробных base units и float входе
3. Форматирование для отображения
"""

from decimal import Decimal

import pytest

from src.core.domain.units import WAD_DECIMALS, format_wad, from_wad, to_wad
from src.core.math.numerical_safeguards import MAX_UINT256, WAD


class TestToWad:
    """Тесты для to_wad"""

    def test_integer_amount(self) -> None:
        assert to_wad(100) == 100 * WAD

    def test_decimal_string(self) -> None:
        assert to_wad("0.5") == WAD // 2
        assert to_wad("40") == 40 * WAD

    def test_smallest_unit(self) -> None:
        assert to_wad("0.000000000000000001") == 1

    def test_too_many_decimals_rejected(self) -> None:
        with pytest.raises(ValueError, match="decimal places"):
            to_wad("0.0000000000000000001")

    def test_float_rejected(self) -> None:
        with pytest.raises(ValueError, match="float"):
            to_wad(0.1)

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            to_wad("-1")

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid amount"):
            to_wad("abc")

    def test_infinity_rejected(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            to_wad("Infinity")


class TestFromWad:
    """Тесты для from_wad / format_wad"""

    def test_exact_round_trip_value(self) -> None:
        assert from_wad(1_500_000_000_000_000_000) == Decimal("1.5")

    def test_decimals_constant(self) -> None:
        assert 10**WAD_DECIMALS == WAD

    def test_format(self) -> None:
        assert format_wad(1_500_000_000_000_000_000, "WAD") == "1.5 WAD"
        assert format_wad(100 * WAD) == "100"
        assert format_wad(0, "WAD") == "0 WAD"

    def test_format_unlimited_sentinel(self) -> None:
        assert format_wad(MAX_UINT256, "WAD") == "unlimited"
