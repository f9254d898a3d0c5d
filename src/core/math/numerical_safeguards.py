"""
Numerical Safeguards — Checked uint256 Arithmetic

Модуль обеспечивает точную целочисленную арифметику над количествами ledger:
- Checked add/sub с явным отказом вместо wrap-around
- Узко ограниченные fast paths без проверки (только там, где инвариант
  sum(balances) == total_supply доказывает невозможность переполнения)
- Валидация входных количеств до любого изменения состояния

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все количества — int в диапазоне [0, MAX_UINT256]
2. Переполнение/underflow никогда не происходит молча (Overflow/Underflow)
3. Float никогда не участвует в вычислениях количеств
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальное представимое количество (uint256)
# Совпадает с sentinel "unlimited" для allowance
MAX_UINT256: Final[int] = 2**256 - 1

# Масштаб fixed-point (wad): 1.0 == 10**18 base units
WAD: Final[int] = 10**18


# =============================================================================
# ИСКЛЮЧЕНИЯ
# =============================================================================


class ArithmeticFault(ArithmeticError):
    """
    Базовый класс отказа checked-арифметики.

    Атрибуты a, b сохраняют операнды для диагностики.
    """

    code = "arithmetic_fault"

    def __init__(self, a: int, b: int, message: str):
        super().__init__(message)
        self.a = a
        self.b = b


class Overflow(ArithmeticFault):
    """Результат сложения превышает MAX_UINT256."""

    code = "overflow"


class Underflow(ArithmeticFault):
    """Результат вычитания отрицательный."""

    code = "underflow"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_uint256(value: object) -> bool:
    """
    Проверка, является ли значение валидным uint256.

    bool исключён явно: True/False не являются количествами.

    Examples:
        >>> is_uint256(0)
        True
        >>> is_uint256(MAX_UINT256 + 1)
        False
        >>> is_uint256(1.0)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= MAX_UINT256


def validate_uint256(value: object, name: str) -> int:
    """
    Валидация количества перед использованием в ledger.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value (int) без изменений

    Raises:
        ValueError: Если value не int, отрицательное или > MAX_UINT256
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > MAX_UINT256:
        raise ValueError(f"{name} must be <= MAX_UINT256, got {value}")

    return value


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Args:
        a: Первое слагаемое (uint256)
        b: Второе слагаемое (uint256)

    Returns:
        a + b

    Raises:
        Overflow: Если a + b > MAX_UINT256

    Examples:
        >>> checked_add(1, 2)
        3
        >>> checked_add(MAX_UINT256, 1)  # raises Overflow
    """
    result = a + b
    if result > MAX_UINT256:
        raise Overflow(a, b, f"uint256 overflow: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание с проверкой underflow.

    Args:
        a: Уменьшаемое (uint256)
        b: Вычитаемое (uint256)

    Returns:
        a - b

    Raises:
        Underflow: Если b > a
    """
    if b > a:
        raise Underflow(a, b, f"uint256 underflow: {a} - {b}")
    return a - b


# =============================================================================
# FAST PATHS (INVARIANT-JUSTIFIED)
# =============================================================================


def unchecked_add(a: int, b: int) -> int:
    """
    Сложение без проверки для credit балансов.

    Допустимо только когда a + b <= total_supply <= MAX_UINT256
    гарантировано инвариантом ledger. Assert ловит сломанное доказательство
    в debug-сборках (python -O его отключает).
    """
    result = a + b
    assert result <= MAX_UINT256, f"fast path overflow: {a} + {b}"
    return result


def unchecked_sub(a: int, b: int) -> int:
    """
    Вычитание без проверки для уменьшения total_supply при burn.

    Допустимо только когда b <= balance <= total_supply.
    """
    assert b <= a, f"fast path underflow: {a} - {b}"
    return a - b
