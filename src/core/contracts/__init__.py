"""
Contract Validation Module

Модуль для валидации JSON контрактов ledger (записи, permit, снапшот).
"""

from .validators import (
    ApprovalRecordValidator,
    ContractValidator,
    LedgerSnapshotValidator,
    PermitRequestValidator,
    PermitTypedDataValidator,
    SchemaLoader,
    TransferRecordValidator,
    validate_ledger_snapshot,
    validate_permit_request,
    validate_permit_typed_data,
    validate_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TransferRecordValidator",
    "ApprovalRecordValidator",
    "PermitRequestValidator",
    "PermitTypedDataValidator",
    "LedgerSnapshotValidator",
    # Functions
    "validate_record",
    "validate_permit_request",
    "validate_permit_typed_data",
    "validate_ledger_snapshot",
]
