"""
Domain models and value objects.

Contains fundamental ledger entities: addresses, wad units, records, state.
"""

from src.core.domain.address import (
    NULL_ADDRESS,
    AddressLike,
    InvalidAddress,
    address_bytes,
    is_null,
    normalize_address,
)
from src.core.domain.ledger_state import (
    AllowanceEntry,
    DomainParameters,
    LedgerSnapshot,
    LedgerState,
    StateCheckpoint,
)
from src.core.domain.records import (
    ApprovalRecord,
    LedgerRecord,
    RecordKind,
    TransferRecord,
)
from src.core.domain.units import WAD_DECIMALS, format_wad, from_wad, to_wad

__all__ = [
    # Address
    "NULL_ADDRESS",
    "AddressLike",
    "InvalidAddress",
    "address_bytes",
    "is_null",
    "normalize_address",
    # Units
    "WAD_DECIMALS",
    "to_wad",
    "from_wad",
    "format_wad",
    # Records
    "RecordKind",
    "TransferRecord",
    "ApprovalRecord",
    "LedgerRecord",
    # State
    "DomainParameters",
    "AllowanceEntry",
    "LedgerSnapshot",
    "LedgerState",
    "StateCheckpoint",
]
