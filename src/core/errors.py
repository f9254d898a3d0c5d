"""
Ledger Errors — таксономия отказов операций

Каждый отказ прерывает операцию целиком (rollback всех изменений,
включая nonce). Отказы синхронно пробрасываются вызывающему,
retry — ответственность вызывающего.

Арифметические отказы (Overflow/Underflow) определены в
src.core.math.numerical_safeguards и не наследуют LedgerError.
"""

from typing import Optional


class LedgerError(Exception):
    """
    Базовый класс отказа операции ledger.

    code — стабильный машинно-читаемый идентификатор отказа.
    """

    code = "ledger_error"


class InsufficientBalance(LedgerError):
    """balance[account] < amount."""

    code = "insufficient_balance"

    def __init__(self, account: str, required: int, available: int):
        super().__init__(
            f"Insufficient balance for {account}: required={required}, available={available}"
        )
        self.account = account
        self.required = required
        self.available = available


class InsufficientAllowance(LedgerError):
    """allowance[owner][spender] < amount (и не unlimited)."""

    code = "insufficient_allowance"

    def __init__(self, owner: str, spender: str, required: int, available: int):
        super().__init__(
            f"Insufficient allowance {owner} -> {spender}: "
            f"required={required}, available={available}"
        )
        self.owner = owner
        self.spender = spender
        self.required = required
        self.available = available


class OwnerIsZero(LedgerError):
    """permit с owner == NULL_ADDRESS."""

    code = "owner_is_zero"

    def __init__(self):
        super().__init__("Permit owner is the null address")


class InvalidOwner(LedgerError):
    """Восстановленный signer не совпадает с owner."""

    code = "invalid_owner"

    def __init__(self, owner: str, recovered: Optional[str]):
        super().__init__(
            f"Permit signature does not match owner {owner} (recovered={recovered})"
        )
        self.owner = owner
        self.recovered = recovered


class DeadlineExpired(LedgerError):
    """now > deadline."""

    code = "deadline_expired"

    def __init__(self, deadline: int, now: int):
        super().__init__(f"Permit deadline {deadline} expired (now={now})")
        self.deadline = deadline
        self.now = now


class Unauthorized(LedgerError):
    """Capability gate отказал в mint."""

    code = "unauthorized"

    def __init__(self, caller: str, reason: str):
        super().__init__(f"Caller {caller} is not authorized: {reason}")
        self.caller = caller
        self.reason = reason


class InvariantViolation(LedgerError):
    """sum(balances) != total_supply после операции."""

    code = "invariant_violation"

    def __init__(self, total_supply: int, balances_sum: int):
        super().__init__(
            f"Ledger invariant broken: total_supply={total_supply}, "
            f"sum(balances)={balances_sum}"
        )
        self.total_supply = total_supply
        self.balances_sum = balances_sum
