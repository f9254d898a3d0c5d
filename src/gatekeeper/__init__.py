"""Gatekeeper — capability gates для привилегированных операций ledger.

- GATE 0: Mint Capability (вызывается до любого увеличения supply)
"""

from .gates.gate_00_mint_capability import (
    AllowListMintGate,
    DenyAllMintGate,
    MintCapabilityGate,
    MintGateResult,
)

__all__ = [
    "AllowListMintGate",
    "DenyAllMintGate",
    "MintCapabilityGate",
    "MintGateResult",
]
