"""
Core math modules для ledger

Точная целочисленная арифметика uint256 с явными отказами.
"""

from src.core.math.numerical_safeguards import (
    # Constants
    MAX_UINT256,
    WAD,
    # Exceptions
    ArithmeticFault,
    Overflow,
    Underflow,
    # Checked arithmetic
    checked_add,
    checked_sub,
    # Fast paths
    unchecked_add,
    unchecked_sub,
    # Validation
    is_uint256,
    validate_uint256,
)

__all__ = [
    # Constants
    "MAX_UINT256",
    "WAD",
    # Exceptions
    "ArithmeticFault",
    "Overflow",
    "Underflow",
    # Checked arithmetic
    "checked_add",
    "checked_sub",
    # Fast paths
    "unchecked_add",
    "unchecked_sub",
    # Validation
    "is_uint256",
    "validate_uint256",
]
