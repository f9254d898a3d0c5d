"""Gates — индивидуальные гейты Gatekeeper системы.

- GATE 0: Mint Capability (allow-list / deny-all)
"""

from .gate_00_mint_capability import (
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
