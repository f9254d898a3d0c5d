"""Ledger — операции над разделяемым LedgerState.

- TransferEngine: transfer / transfer_from / approve
- SupplyController: mint (через capability gate) / burn
- atomic: all-or-nothing граница операции
- Token: публичный фасад с метаданными и запросами
"""

from .allowance import UNLIMITED_ALLOWANCE, spend_allowance
from .config import LedgerConfig
from .supply_controller import SupplyController
from .token import Token, build_domain_parameters
from .transaction import atomic
from .transfer_engine import TransferEngine

__all__ = [
    "UNLIMITED_ALLOWANCE",
    "spend_allowance",
    "LedgerConfig",
    "SupplyController",
    "Token",
    "build_domain_parameters",
    "atomic",
    "TransferEngine",
]
