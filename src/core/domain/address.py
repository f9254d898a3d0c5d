"""
Address — Идентификатор аккаунта

20-байтовый адрес, производный от публичного ключа. Внутри ledger адрес
хранится как EIP-55 checksum строка; структура не интерпретируется кроме
равенства и sentinel NULL_ADDRESS (endpoint для mint/burn).
"""

from typing import Final, Union

from eth_utils import (
    is_address,
    is_checksum_address,
    to_canonical_address,
    to_checksum_address,
)

AddressLike = Union[str, bytes, bytearray]

# Endpoint для issuance/redemption
NULL_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"


class InvalidAddress(ValueError):
    """Значение не является 20-байтовым адресом."""


def normalize_address(value: AddressLike, name: str = "address") -> str:
    """
    Нормализация адреса к checksum форме.

    Args:
        value: 20 raw bytes или 0x-hex строка (любой регистр; mixed-case
            строки обязаны иметь корректный checksum)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        EIP-55 checksum адрес

    Raises:
        InvalidAddress: Если значение не является адресом
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise InvalidAddress(f"{name} must be 20 bytes, got {len(value)}")
        return to_checksum_address("0x" + bytes(value).hex())

    if not isinstance(value, str) or not is_address(value):
        raise InvalidAddress(f"{name} is not a valid address: {value!r}")

    # Mixed-case строка несёт EIP-55 checksum и обязана ему соответствовать
    digits = value[2:] if value.startswith(("0x", "0X")) else value
    if digits != digits.lower() and digits != digits.upper():
        if not is_checksum_address(value):
            raise InvalidAddress(f"{name} has an invalid EIP-55 checksum: {value!r}")

    return to_checksum_address(value)


def is_null(address: AddressLike) -> bool:
    """True если адрес равен NULL_ADDRESS."""
    return normalize_address(address) == NULL_ADDRESS


def address_bytes(address: AddressLike) -> bytes:
    """Canonical 20-byte представление (для ABI encoding)."""
    return to_canonical_address(normalize_address(address))
