"""Allowance spending — общий шаг transfer_from и делегированного burn."""

from src.core.domain.ledger_state import LedgerState
from src.core.errors import InsufficientAllowance
from src.core.math.numerical_safeguards import MAX_UINT256, checked_sub

# Sentinel "unlimited": никогда не уменьшается автоматически
UNLIMITED_ALLOWANCE = MAX_UINT256


def spend_allowance(state: LedgerState, owner: str, spender: str, amount: int) -> int:
    """Списание amount из allowance[owner][spender].

    Returns:
        allowance после списания (UNLIMITED_ALLOWANCE без изменений)

    Raises:
        InsufficientAllowance: если allowance < amount
    """
    allowed = state.allowance(owner, spender)
    if allowed == UNLIMITED_ALLOWANCE:
        return allowed

    if allowed < amount:
        raise InsufficientAllowance(owner, spender, amount, allowed)

    remaining = checked_sub(allowed, amount)
    state.set_allowance(owner, spender, remaining)
    return remaining
