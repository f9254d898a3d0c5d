"""
Records — Durable change log ledger

Immutable Pydantic модели записей Transfer и Approval. Внешний indexer
восстанавливает полную историю ledger только из этих записей.
Полная совместимость с JSON Schema (contracts/schema/*_record.json).
"""

from enum import Enum
from typing import Any, Dict, Union

from pydantic import BaseModel, Field, field_validator

from src.core.domain.address import normalize_address
from src.core.math.numerical_safeguards import validate_uint256


class RecordKind(str, Enum):
    """Тип записи."""

    TRANSFER = "Transfer"
    APPROVAL = "Approval"


class TransferRecord(BaseModel):
    """
    Transfer(from, to, amount).

    from_address == NULL_ADDRESS для mint, to_address == NULL_ADDRESS для burn.
    """

    seq: int = Field(..., ge=0, description="Монотонный номер записи в ledger")
    from_address: str = Field(..., description="Отправитель (checksum)")
    to_address: str = Field(..., description="Получатель (checksum)")
    amount: int = Field(..., strict=True, description="Количество (wad)")

    model_config = {"frozen": True}

    @field_validator("from_address", "to_address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: int) -> int:
        return validate_uint256(v, "amount")

    @property
    def kind(self) -> RecordKind:
        return RecordKind.TRANSFER

    def involves(self, account: str) -> bool:
        return account in (self.from_address, self.to_address)

    def to_contract(self) -> Dict[str, Any]:
        """JSON-совместимое представление (amount как десятичная строка)."""
        return {
            "kind": self.kind.value,
            "seq": self.seq,
            "from": self.from_address,
            "to": self.to_address,
            "amount": str(self.amount),
        }


class ApprovalRecord(BaseModel):
    """Approval(owner, spender, amount)."""

    seq: int = Field(..., ge=0, description="Монотонный номер записи в ledger")
    owner: str = Field(..., description="Владелец (checksum)")
    spender: str = Field(..., description="Spender (checksum)")
    amount: int = Field(..., strict=True, description="Allowance (wad)")

    model_config = {"frozen": True}

    @field_validator("owner", "spender")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: int) -> int:
        return validate_uint256(v, "amount")

    @property
    def kind(self) -> RecordKind:
        return RecordKind.APPROVAL

    def involves(self, account: str) -> bool:
        return account in (self.owner, self.spender)

    def to_contract(self) -> Dict[str, Any]:
        """JSON-совместимое представление (amount как десятичная строка)."""
        return {
            "kind": self.kind.value,
            "seq": self.seq,
            "owner": self.owner,
            "spender": self.spender,
            "amount": str(self.amount),
        }


LedgerRecord = Union[TransferRecord, ApprovalRecord]
