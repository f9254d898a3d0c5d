"""
LedgerState — Персистентная запись ledger

Единственный разделяемый агрегат состояния:
- balance[account]            (wad, default 0)
- allowance[owner][spender]   (wad, default 0; MAX_UINT256 = unlimited)
- total_supply                (wad)
- nonces[owner]               (монотонный счётчик, default 0)
- domain parameters           (immutable, фиксируются при создании)
- журнал записей Transfer/Approval

ИНВАРИАНТ (после каждой операции):
    sum(balance.values()) == total_supply

Записи mapping никогда не удаляются: нулевой баланс неотличим от
"никогда не использованного" аккаунта. Состояние пассивно: правила
операций живут в TransferEngine, SupplyController и PermitAuthorizer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from src.core.domain.records import ApprovalRecord, LedgerRecord, RecordKind, TransferRecord
from src.core.errors import InvariantViolation
from src.core.math.numerical_safeguards import checked_add


# =============================================================================
# DOMAIN PARAMETERS
# =============================================================================


class DomainParameters(BaseModel):
    """
    Immutable параметры подписи, вычисленные один раз при создании ledger.

    domain_separator связывает подписи с name, version, chain_id и
    собственным адресом ledger (verifying_contract).
    """

    name: str = Field(..., min_length=1, description="EIP-712 domain name")
    version: str = Field(..., min_length=1, description="EIP-712 domain version")
    chain_id: int = Field(..., gt=0, description="Идентификатор сети")
    verifying_contract: str = Field(..., description="Адрес ledger (checksum)")
    domain_separator: bytes = Field(..., min_length=32, max_length=32)
    permit_typehash: bytes = Field(..., min_length=32, max_length=32)

    model_config = {"frozen": True}


# =============================================================================
# SNAPSHOT MODELS
# =============================================================================


class AllowanceEntry(BaseModel):
    """Одна ненулевая запись allowance в снапшоте."""

    owner: str
    spender: str
    amount: int

    model_config = {"frozen": True}


class LedgerSnapshot(BaseModel):
    """
    Снапшот состояния ledger.

    Immutable модель (frozen=True). Содержит только ненулевые записи
    mapping: нулевые неотличимы от отсутствующих.
    """

    name: str
    symbol: str
    decimals: int = Field(..., ge=0)
    total_supply: int = Field(..., ge=0)
    balances: Dict[str, int] = Field(default_factory=dict)
    allowances: List[AllowanceEntry] = Field(default_factory=list)
    nonces: Dict[str, int] = Field(default_factory=dict)
    record_count: int = Field(..., ge=0)
    domain_separator: str = Field(..., pattern="^0x[0-9a-f]{64}$")

    model_config = {"frozen": True}

    def to_contract(self) -> Dict[str, Any]:
        """JSON-совместимое представление (количества как десятичные строки)."""
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "total_supply": str(self.total_supply),
            "balances": {k: str(v) for k, v in self.balances.items()},
            "allowances": [
                {"owner": a.owner, "spender": a.spender, "amount": str(a.amount)}
                for a in self.allowances
            ],
            "nonces": dict(self.nonces),
            "record_count": self.record_count,
            "domain_separator": self.domain_separator,
        }


# =============================================================================
# CHECKPOINT
# =============================================================================

# Маркер ключа, отсутствовавшего в mapping до операции
_MISSING: Any = object()


@dataclass
class StateCheckpoint:
    """
    Undo log одной операции.

    Прежние значения только затронутых ключей; rollback стоит
    O(размер операции), а не O(число аккаунтов).
    """

    total_supply: int
    record_count: int
    next_seq: int
    balances: Dict[str, Any] = field(default_factory=dict)
    allowances: Dict[Tuple[str, str], Any] = field(default_factory=dict)
    nonces: Dict[str, Any] = field(default_factory=dict)

    def touched(self) -> int:
        return len(self.balances) + len(self.allowances) + len(self.nonces)

    def absorb(self, inner: "StateCheckpoint") -> None:
        """Слияние undo log вложенной операции: более ранние значения важнее."""
        for key, value in inner.balances.items():
            self.balances.setdefault(key, value)
        for key, value in inner.allowances.items():
            self.allowances.setdefault(key, value)
        for key, value in inner.nonces.items():
            self.nonces.setdefault(key, value)


def _undo(mapping: Dict[Any, int], log: Dict[Any, Any]) -> None:
    for key, previous in log.items():
        if previous is _MISSING:
            mapping.pop(key, None)
        else:
            mapping[key] = previous


# =============================================================================
# LEDGER STATE
# =============================================================================


class LedgerState:
    """
    Изменяемый агрегат состояния ledger.

    Адреса на входе уже нормализованы (checksum) вызывающими компонентами.
    Все изменения balance/total_supply компоненты выполняют через
    checked-арифметику, кроме двух fast paths, обоснованных инвариантом.
    """

    def __init__(self, domain: DomainParameters):
        self.domain = domain
        self.total_supply: int = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._nonces: Dict[str, int] = {}
        self._records: List[LedgerRecord] = []
        self._next_seq: int = 0
        # Стек undo log активных операций (вложенные atomic)
        self._undo_stack: List[StateCheckpoint] = []

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def nonce(self, owner: str) -> int:
        return self._nonces.get(owner, 0)

    @property
    def records(self) -> List[LedgerRecord]:
        return list(self._records)

    def balances_sum(self) -> int:
        return sum(self._balances.values())

    # -------------------------------------------------------------------------
    # Запись
    # -------------------------------------------------------------------------

    def set_balance(self, account: str, amount: int) -> None:
        if self._undo_stack:
            self._undo_stack[-1].balances.setdefault(
                account, self._balances.get(account, _MISSING)
            )
        self._balances[account] = amount

    def set_allowance(self, owner: str, spender: str, amount: int) -> None:
        key = (owner, spender)
        if self._undo_stack:
            self._undo_stack[-1].allowances.setdefault(
                key, self._allowances.get(key, _MISSING)
            )
        self._allowances[key] = amount

    def consume_nonce(self, owner: str) -> int:
        """
        Возвращает текущий nonce owner и увеличивает его на 1.

        Чтение и инкремент неразделимы; откат выполняет транзакция.
        """
        current = self.nonce(owner)
        if self._undo_stack:
            self._undo_stack[-1].nonces.setdefault(owner, self._nonces.get(owner, _MISSING))
        self._nonces[owner] = checked_add(current, 1)
        return current

    def emit_transfer(self, from_address: str, to_address: str, amount: int) -> TransferRecord:
        record = TransferRecord(
            seq=self._next_seq,
            from_address=from_address,
            to_address=to_address,
            amount=amount,
        )
        self._append(record)
        return record

    def emit_approval(self, owner: str, spender: str, amount: int) -> ApprovalRecord:
        record = ApprovalRecord(
            seq=self._next_seq,
            owner=owner,
            spender=spender,
            amount=amount,
        )
        self._append(record)
        return record

    def _append(self, record: LedgerRecord) -> None:
        self._records.append(record)
        self._next_seq += 1

    # -------------------------------------------------------------------------
    # Инвариант и rollback
    # -------------------------------------------------------------------------

    def check_invariant(self) -> None:
        """
        Raises:
            InvariantViolation: Если sum(balances) != total_supply
        """
        balances_sum = self.balances_sum()
        if balances_sum != self.total_supply:
            raise InvariantViolation(self.total_supply, balances_sum)

    def checkpoint(self) -> StateCheckpoint:
        """Начало операции: последующие изменения пишутся в undo log."""
        checkpoint = StateCheckpoint(
            total_supply=self.total_supply,
            record_count=len(self._records),
            next_seq=self._next_seq,
        )
        self._undo_stack.append(checkpoint)
        return checkpoint

    def _pop(self, checkpoint: StateCheckpoint) -> None:
        if not self._undo_stack or self._undo_stack[-1] is not checkpoint:
            raise RuntimeError("checkpoint is not the innermost active operation")
        self._undo_stack.pop()

    def commit(self, checkpoint: StateCheckpoint) -> None:
        """Фиксация операции; для вложенной операции undo log переходит к внешней."""
        self._pop(checkpoint)
        if self._undo_stack:
            self._undo_stack[-1].absorb(checkpoint)

    def restore(self, checkpoint: StateCheckpoint) -> None:
        """Откат всех изменений, сделанных после checkpoint()."""
        self._pop(checkpoint)
        _undo(self._balances, checkpoint.balances)
        _undo(self._allowances, checkpoint.allowances)
        _undo(self._nonces, checkpoint.nonces)
        self.total_supply = checkpoint.total_supply
        del self._records[checkpoint.record_count:]
        self._next_seq = checkpoint.next_seq

    # -------------------------------------------------------------------------
    # Журнал и снапшот
    # -------------------------------------------------------------------------

    def filter_records(
        self,
        kind: Optional[RecordKind] = None,
        account: Optional[str] = None,
    ) -> List[LedgerRecord]:
        """Записи журнала, отфильтрованные по типу и/или участнику."""
        result = []
        for record in self._records:
            if kind is not None and record.kind != kind:
                continue
            if account is not None and not record.involves(account):
                continue
            result.append(record)
        return result

    def snapshot(self, symbol: str, decimals: int) -> LedgerSnapshot:
        return LedgerSnapshot(
            name=self.domain.name,
            symbol=symbol,
            decimals=decimals,
            total_supply=self.total_supply,
            balances={k: v for k, v in self._balances.items() if v},
            allowances=[
                AllowanceEntry(owner=owner, spender=spender, amount=amount)
                for (owner, spender), amount in self._allowances.items()
                if amount
            ],
            nonces={k: v for k, v in self._nonces.items() if v},
            record_count=len(self._records),
            domain_separator="0x" + self.domain.domain_separator.hex(),
        )
