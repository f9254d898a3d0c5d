"""
WadUnits — Централизованный модуль конверсии единиц

Единственный допустимый способ преобразований между:
- human amount (Decimal, например "1.5")
- wad base units (int, масштаб 10**18)

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля.
Float запрещён на входе: потеря точности для 18 знаков неизбежна.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Final

from src.core.math.numerical_safeguards import MAX_UINT256, WAD, validate_uint256


# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Число десятичных знаков wad
WAD_DECIMALS: Final[int] = 18

# Точность Decimal контекста: достаточна для MAX_UINT256 (78 цифр) + 18 знаков
_DECIMAL_PRECISION: Final[int] = 100


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def to_wad(amount: "Decimal | int | str") -> int:
    """
    Конверсия: human amount → wad base units

    Args:
        amount: Количество в целых единицах (Decimal, int или строка)

    Returns:
        Количество в base units (int)

    Raises:
        ValueError: Если amount float, отрицательный, содержит дробные base
            units или превышает MAX_UINT256

    Examples:
        >>> to_wad(100)
        100000000000000000000
        >>> to_wad("0.5")
        500000000000000000
    """
    if isinstance(amount, float):
        raise ValueError("float amounts are not accepted, use Decimal or str")

    if isinstance(amount, bool):
        raise ValueError("bool is not an amount")

    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {amount!r}")

    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        scaled = value * WAD

    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"Amount {amount} has more than {WAD_DECIMALS} decimal places"
        )

    return validate_uint256(int(scaled), "amount")


def from_wad(amount: int) -> Decimal:
    """
    Конверсия: wad base units → human amount

    Args:
        amount: Количество в base units

    Returns:
        Decimal в целых единицах (точный, без округления)
    """
    validate_uint256(amount, "amount")
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        return Decimal(amount) / WAD


def format_wad(amount: int, symbol: str = "") -> str:
    """
    Форматирование для отображения.

    Примеры: 1500000000000000000 → "1.5 DAI"; MAX_UINT256 → "unlimited".
    """
    if amount == MAX_UINT256:
        return "unlimited"

    text = format(from_wad(amount).normalize(), "f")
    return f"{text} {symbol}".rstrip()
