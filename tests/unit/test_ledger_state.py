"""Тесты для LedgerState и Records.

Coverage:
- Default-zero mappings
- Nonce consumption
- Журнал записей и фильтрация
- Checkpoint / restore / commit (undo log затронутых ключей)
- Проверка инварианта
- Снапшот
"""

import pytest
from pydantic import ValidationError

from src.core.domain.address import NULL_ADDRESS
from src.core.domain.ledger_state import DomainParameters, LedgerState
from src.core.domain.records import ApprovalRecord, RecordKind, TransferRecord
from src.core.errors import InvariantViolation
from src.core.math.numerical_safeguards import MAX_UINT256, WAD

A = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
B = "0x2B5AD5c4795c026514f8317c7a215E218DcCD6cF"
C = "0x6813Eb9362372EEF6200f3b1dbC3f819671cBA69"


@pytest.fixture
def state():
    domain = DomainParameters(
        name="Wad Stable",
        version="1",
        chain_id=1,
        verifying_contract=C,
        domain_separator=b"\x11" * 32,
        permit_typehash=b"\x22" * 32,
    )
    return LedgerState(domain)


class TestDefaults:
    """Неиспользованные записи равны нулю."""

    def test_unseen_entries_are_zero(self, state):
        assert state.balance_of(A) == 0
        assert state.allowance(A, B) == 0
        assert state.nonce(A) == 0
        assert state.total_supply == 0
        assert state.records == []

    def test_domain_parameters_frozen(self, state):
        with pytest.raises(ValidationError):
            state.domain.chain_id = 5

    def test_domain_separator_length_enforced(self):
        with pytest.raises(ValidationError):
            DomainParameters(
                name="X",
                version="1",
                chain_id=1,
                verifying_contract=C,
                domain_separator=b"\x11" * 31,
                permit_typehash=b"\x22" * 32,
            )


class TestNonces:
    """consume_nonce возвращает текущее значение и увеличивает на 1."""

    def test_sequential_consumption(self, state):
        assert state.consume_nonce(A) == 0
        assert state.consume_nonce(A) == 1
        assert state.nonce(A) == 2

    def test_owners_independent(self, state):
        state.consume_nonce(A)
        assert state.nonce(B) == 0


class TestRecords:
    """Журнал Transfer / Approval."""

    def test_sequence_numbers_monotonic(self, state):
        first = state.emit_transfer(NULL_ADDRESS, A, 5)
        second = state.emit_approval(A, B, 7)
        assert first.seq == 0
        assert second.seq == 1
        assert [r.kind for r in state.records] == [RecordKind.TRANSFER, RecordKind.APPROVAL]

    def test_filter_by_kind_and_account(self, state):
        state.emit_transfer(NULL_ADDRESS, A, 5)
        state.emit_transfer(A, C, 1)
        state.emit_approval(A, B, 7)

        assert len(state.filter_records(kind=RecordKind.TRANSFER)) == 2
        assert len(state.filter_records(account=B)) == 1
        assert len(state.filter_records(kind=RecordKind.TRANSFER, account=C)) == 1

    def test_record_models_frozen(self):
        record = TransferRecord(seq=0, from_address=A, to_address=B, amount=1)
        with pytest.raises(ValidationError):
            record.amount = 2

    def test_record_addresses_normalized(self):
        record = ApprovalRecord(seq=0, owner=A.lower(), spender=B.lower(), amount=1)
        assert record.owner == A
        assert record.spender == B

    def test_record_amount_bounds(self):
        with pytest.raises(ValidationError):
            TransferRecord(seq=0, from_address=A, to_address=B, amount=-1)
        with pytest.raises(ValidationError):
            TransferRecord(seq=0, from_address=A, to_address=B, amount=MAX_UINT256 + 1)
        with pytest.raises(ValidationError):
            TransferRecord(seq=0, from_address=A, to_address=B, amount=True)

    def test_record_to_contract(self):
        record = TransferRecord(seq=3, from_address=A, to_address=B, amount=40 * WAD)
        assert record.to_contract() == {
            "kind": "Transfer",
            "seq": 3,
            "from": A,
            "to": B,
            "amount": str(40 * WAD),
        }


class TestCheckpoint:
    """Checkpoint / restore для rollback."""

    def test_restore_discards_all_changes(self, state):
        state.set_balance(A, 10)
        state.total_supply = 10
        checkpoint = state.checkpoint()

        state.set_balance(A, 3)
        state.set_balance(B, 7)
        state.set_allowance(A, B, 99)
        state.consume_nonce(A)
        state.emit_transfer(A, B, 7)

        state.restore(checkpoint)

        assert state.balance_of(A) == 10
        assert state.balance_of(B) == 0
        assert state.allowance(A, B) == 0
        assert state.nonce(A) == 0
        assert state.records == []

    def test_seq_reused_after_restore(self, state):
        checkpoint = state.checkpoint()
        state.emit_transfer(A, B, 1)
        state.restore(checkpoint)
        assert state.emit_transfer(A, B, 1).seq == 0

    def test_undo_log_tracks_only_touched_keys(self, state):
        for i in range(1, 200):
            state.set_balance("0x" + f"{i:040x}", 1)
        checkpoint = state.checkpoint()

        state.set_balance(A, 3)
        state.set_balance(A, 4)
        state.set_allowance(A, B, 5)
        state.consume_nonce(A)

        assert checkpoint.touched() == 3
        state.restore(checkpoint)
        assert state.balance_of(A) == 0
        assert state.allowance(A, B) == 0
        assert state.nonce(A) == 0
        assert state.balance_of("0x" + f"{1:040x}") == 1

    def test_commit_keeps_changes(self, state):
        checkpoint = state.checkpoint()
        state.set_balance(A, 3)
        state.commit(checkpoint)
        assert state.balance_of(A) == 3

        # После commit изменения больше не журналируются
        state.set_balance(B, 4)
        assert list(checkpoint.balances) == [A]

    def test_nested_commit_then_outer_restore(self, state):
        state.set_balance(A, 10)
        outer = state.checkpoint()
        state.set_balance(A, 7)
        inner = state.checkpoint()
        state.set_balance(A, 1)
        state.set_balance(B, 9)
        state.commit(inner)

        state.restore(outer)
        assert state.balance_of(A) == 10
        assert state.balance_of(B) == 0

    def test_restore_out_of_order_rejected(self, state):
        outer = state.checkpoint()
        state.checkpoint()
        with pytest.raises(RuntimeError, match="innermost"):
            state.restore(outer)


class TestInvariant:
    """sum(balances) == total_supply."""

    def test_holds_when_consistent(self, state):
        state.set_balance(A, 60)
        state.set_balance(B, 40)
        state.total_supply = 100
        state.check_invariant()

    def test_violation_detected(self, state):
        state.set_balance(A, 1)
        with pytest.raises(InvariantViolation) as exc_info:
            state.check_invariant()
        assert exc_info.value.total_supply == 0
        assert exc_info.value.balances_sum == 1


class TestSnapshot:
    """Снапшот содержит только ненулевые записи."""

    def test_snapshot_contents(self, state):
        state.set_balance(A, 5)
        state.set_balance(B, 0)
        state.total_supply = 5
        state.set_allowance(A, B, 3)
        state.set_allowance(A, C, 0)
        state.consume_nonce(A)

        snap = state.snapshot("WAD", 18)

        assert snap.total_supply == 5
        assert snap.balances == {A: 5}
        assert len(snap.allowances) == 1
        assert snap.allowances[0].spender == B
        assert snap.nonces == {A: 1}
        assert snap.domain_separator == "0x" + "11" * 32
