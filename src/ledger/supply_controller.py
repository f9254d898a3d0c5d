"""SupplyController — привилегированный mint и burn (свой или делегированный).

mint: capability gate → checked рост total_supply → fast path credit.
burn: allowance (если делегирован) → checked debit → fast path
уменьшение total_supply.
"""

import logging

from src.core.domain.address import NULL_ADDRESS
from src.core.domain.ledger_state import LedgerState
from src.core.errors import InsufficientBalance, Unauthorized
from src.core.math.numerical_safeguards import (
    checked_add,
    checked_sub,
    unchecked_add,
    unchecked_sub,
)
from src.gatekeeper.gates.gate_00_mint_capability import MintCapabilityGate
from src.ledger.allowance import spend_allowance

logger = logging.getLogger(__name__)


class SupplyController:
    """Эмиссия и погашение."""

    def __init__(self, state: LedgerState, mint_gate: MintCapabilityGate):
        self._state = state
        self._mint_gate = mint_gate

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Эмиссия amount на счёт to.

        Raises:
            Unauthorized: capability gate отказал (состояние не меняется)
            Overflow: total_supply + amount > MAX_UINT256
        """
        gate_result = self._mint_gate.evaluate(caller, to, amount)
        if not gate_result.mint_allowed:
            logger.warning(
                "mint refused for %s: %s", caller, gate_result.block_reason
            )
            raise Unauthorized(caller, gate_result.block_reason)

        state = self._state
        # Единственное место, где переполнение реально возможно
        state.total_supply = checked_add(state.total_supply, amount)
        # balance[to] + amount <= новый total_supply, проверенный выше
        state.set_balance(to, unchecked_add(state.balance_of(to), amount))

        state.emit_transfer(NULL_ADDRESS, to, amount)
        logger.info("mint %d to %s (caller=%s)", amount, to, caller)

    def burn(self, caller: str, src: str, amount: int) -> None:
        """Погашение amount со счёта src.

        Raises:
            InsufficientAllowance: caller != src и allowance недостаточен
            InsufficientBalance: balance[src] < amount
        """
        state = self._state

        if src != caller:
            spend_allowance(state, src, caller, amount)

        balance = state.balance_of(src)
        if balance < amount:
            raise InsufficientBalance(src, amount, balance)

        state.set_balance(src, checked_sub(balance, amount))
        # amount <= balance[src] <= total_supply
        state.total_supply = unchecked_sub(state.total_supply, amount)

        state.emit_transfer(src, NULL_ADDRESS, amount)
        logger.info("burn %d from %s (caller=%s)", amount, src, caller)
