"""TransferEngine — прямые и делегированные переводы, approvals.

Работает только с LedgerState. Адреса на входе нормализованы, количества
провалидированы (это делает Token). Атомарность обеспечивает atomic().
"""

import logging

from src.core.domain.ledger_state import LedgerState
from src.core.errors import InsufficientBalance
from src.core.math.numerical_safeguards import checked_sub, unchecked_add
from src.ledger.allowance import spend_allowance

logger = logging.getLogger(__name__)


class TransferEngine:
    """Переводы между аккаунтами.

    Порядок transfer_from:
    1. from != caller → списание allowance (unlimited не уменьшается)
    2. balance[from] < amount → InsufficientBalance
    3. debit from (checked), credit to (fast path)
    4. запись Transfer(from, to, amount)
    """

    def __init__(self, state: LedgerState):
        self._state = state

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        """transfer(to, amount) ≡ transfer_from(caller, to, amount)."""
        return self.transfer_from(caller, caller, to, amount)

    def transfer_from(self, caller: str, src: str, dst: str, amount: int) -> bool:
        """Перевод amount с src на dst от имени caller.

        amount == 0 и src == dst допустимы: последовательность debit/credit
        выполняется, запись создаётся.

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
        # balance[dst] + amount <= sum(balances) == total_supply <= MAX_UINT256
        state.set_balance(dst, unchecked_add(state.balance_of(dst), amount))

        state.emit_transfer(src, dst, amount)
        logger.debug("transfer %s -> %s amount=%d (caller=%s)", src, dst, amount, caller)
        return True

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        """Перезапись allowance[caller][spender] = amount (не аддитивно)."""
        self._state.set_allowance(caller, spender, amount)
        self._state.emit_approval(caller, spender, amount)
        logger.debug("approve %s -> %s amount=%d", caller, spender, amount)
        return True
