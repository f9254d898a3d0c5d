"""Тесты для Address (нормализация, NULL sentinel)."""

import pytest

from src.core.domain.address import (
    NULL_ADDRESS,
    InvalidAddress,
    address_bytes,
    is_null,
    normalize_address,
)

# Адрес ключа 0x...01
KEY1_ADDRESS = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"


class TestNormalizeAddress:
    """Тесты normalize_address."""

    def test_lowercase_to_checksum(self):
        assert normalize_address(KEY1_ADDRESS.lower()) == KEY1_ADDRESS

    def test_checksum_passthrough(self):
        assert normalize_address(KEY1_ADDRESS) == KEY1_ADDRESS

    def test_raw_bytes(self):
        raw = bytes.fromhex(KEY1_ADDRESS[2:])
        assert normalize_address(raw) == KEY1_ADDRESS

    def test_bad_checksum_rejected(self):
        """Mixed-case строка с неверным checksum отклоняется."""
        broken = "0x7e5F4552091A69125d5DfCb7b8C2659029395Bdf"
        with pytest.raises(InvalidAddress):
            normalize_address(broken)

    def test_bad_checksum_message(self):
        broken = "0x7E5F4552091A69125d5DfCb7b8C2659029395BDF"
        with pytest.raises(InvalidAddress, match="checksum"):
            normalize_address(broken, "owner")

    def test_uppercase_accepted(self):
        upper = "0x" + KEY1_ADDRESS[2:].upper()
        assert normalize_address(upper) == KEY1_ADDRESS

    def test_wrong_length_rejected(self):
        with pytest.raises(InvalidAddress, match="20 bytes"):
            normalize_address(b"\x01" * 19)
        with pytest.raises(InvalidAddress):
            normalize_address("0x1234")

    def test_non_string_rejected(self):
        with pytest.raises(InvalidAddress):
            normalize_address(12345)

    def test_invalid_address_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_address("not-an-address")


class TestNullAddress:
    """Тесты NULL sentinel."""

    def test_null_detection(self):
        assert is_null(NULL_ADDRESS)
        assert is_null(b"\x00" * 20)
        assert not is_null(KEY1_ADDRESS)

    def test_address_bytes(self):
        assert address_bytes(NULL_ADDRESS) == b"\x00" * 20
        assert len(address_bytes(KEY1_ADDRESS)) == 20
