"""Atomic operation boundary — all-or-nothing применение операции.

Каждая публичная операция выполняется внутри atomic(): при любом
исключении состояние (балансы, allowances, nonces, total_supply, журнал)
восстанавливается по undo log checkpoint, исключение пробрасывается дальше.
При успехе undo log закрывается через commit().
Сериализацию вызовов обеспечивает вызывающий (Token держит RLock).
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from src.core.domain.ledger_state import LedgerState

logger = logging.getLogger(__name__)


@contextmanager
def atomic(
    state: LedgerState,
    operation: str,
    check_invariant: bool = True,
) -> Iterator[LedgerState]:
    """Транзакционная граница вокруг одной операции.

    Args:
        state: разделяемое состояние ledger
        operation: имя операции (для логов)
        check_invariant: проверить sum(balances) == total_supply перед commit

    Yields:
        state для изменения внутри границы

    Raises:
        InvariantViolation: если инвариант нарушен (изменения откатываются)
    """
    checkpoint = state.checkpoint()
    try:
        yield state
        if check_invariant:
            state.check_invariant()
    except BaseException as e:
        state.restore(checkpoint)
        logger.warning("%s rolled back: %s: %s", operation, type(e).__name__, e)
        raise
    state.commit(checkpoint)
