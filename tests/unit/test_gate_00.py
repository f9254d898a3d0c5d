"""Тесты для GATE 0: Mint Capability.

Coverage:
- Allow-list допуск и блокировка
- rely / deny администрирование
- Deny-all gate
- Нормализация адресов
"""

import pytest

from src.gatekeeper.gates import AllowListMintGate, DenyAllMintGate, MintGateResult

MINTER = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
OTHER = "0x2B5AD5c4795c026514f8317c7a215E218DcCD6cF"


class TestAllowListMintGate:
    """Тесты AllowListMintGate."""

    def test_authorized_caller_passes(self):
        gate = AllowListMintGate([MINTER])

        result = gate.evaluate(MINTER, OTHER, 100)

        assert isinstance(result, MintGateResult)
        assert result.mint_allowed
        assert result.block_reason == ""
        assert result.caller == MINTER
        assert result.amount == 100
        assert "PASS" in result.details

    def test_unknown_caller_blocked(self):
        gate = AllowListMintGate([MINTER])

        result = gate.evaluate(OTHER, OTHER, 100)

        assert not result.mint_allowed
        assert result.block_reason == "caller_not_authorized"

    def test_empty_gate_blocks_everyone(self):
        gate = AllowListMintGate()
        assert not gate.evaluate(MINTER, MINTER, 1).mint_allowed

    def test_rely_grants(self):
        gate = AllowListMintGate()
        gate.rely(OTHER.lower())
        assert gate.evaluate(OTHER, OTHER, 1).mint_allowed
        assert gate.minters == {OTHER}

    def test_deny_revokes(self):
        gate = AllowListMintGate([MINTER])
        gate.deny(MINTER)
        assert not gate.evaluate(MINTER, MINTER, 1).mint_allowed

    def test_deny_idempotent(self):
        gate = AllowListMintGate()
        gate.deny(MINTER)
        assert gate.minters == set()

    def test_invalid_minter_rejected(self):
        with pytest.raises(ValueError):
            AllowListMintGate(["0xdeadbeef"])

    def test_minters_copy(self):
        """Изменение возвращённого множества не влияет на gate."""
        gate = AllowListMintGate([MINTER])
        gate.minters.clear()
        assert gate.minters == {MINTER}


class TestDenyAllMintGate:
    """Тесты DenyAllMintGate."""

    def test_always_blocks(self):
        result = DenyAllMintGate().evaluate(MINTER, MINTER, 1)
        assert not result.mint_allowed
        assert result.block_reason == "minting_disabled"

    def test_result_frozen(self):
        result = DenyAllMintGate().evaluate(MINTER, MINTER, 1)
        with pytest.raises(Exception):
            result.mint_allowed = True
