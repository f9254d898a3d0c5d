"""
PermitAuthorizer — signed-approval протокол

permit(owner, spender, value, deadline, signature):
1. nonce = nonces[owner]; nonces[owner] += 1; digest по этому nonce
2. owner == NULL_ADDRESS → OwnerIsZero
3. recover(digest, signature) != owner → InvalidOwner
4. now > deadline → DeadlineExpired
5. allowance[owner][spender] = value; запись Approval

Replay protection: подпись действительна ровно для одного nonce. После
успешного permit nonce продвинут, повторная подпись даёт digest над новым
nonce, recovery возвращает другой адрес → InvalidOwner на шаге 3.
При любом отказе инкремент nonce откатывает atomic().
"""

import logging
from typing import Callable, Optional

from src.core.clock import Clock
from src.core.domain.address import NULL_ADDRESS
from src.core.domain.ledger_state import LedgerState
from src.core.errors import DeadlineExpired, InvalidOwner, OwnerIsZero
from src.permit.eip712 import permit_digest
from src.permit.signatures import InvalidSignature, SignatureLike, recover_signer

logger = logging.getLogger(__name__)

SignerRecovery = Callable[[bytes, SignatureLike], str]


class PermitAuthorizer:
    """Проверка подписанных approvals и установка allowance."""

    def __init__(
        self,
        state: LedgerState,
        clock: Clock,
        recover: SignerRecovery = recover_signer,
    ):
        self._state = state
        self._clock = clock
        self._recover = recover

    def permit(
        self,
        owner: str,
        spender: str,
        value: int,
        deadline: int,
        signature: SignatureLike,
    ) -> None:
        """Установка allowance по off-line подписи владельца.

        Args:
            owner: владелец (checksum), подписавший сообщение
            spender: получатель allowance (checksum)
            value: allowance (wad), перезаписывает текущее значение
            deadline: Unix seconds; now == deadline ещё допустимо
            signature: подпись digest владельцем

        Raises:
            OwnerIsZero: owner == NULL_ADDRESS
            InvalidOwner: подпись не принадлежит owner (или не декодируется)
            DeadlineExpired: now > deadline
        """
        state = self._state

        nonce = state.consume_nonce(owner)
        digest = permit_digest(
            state.domain.domain_separator, owner, spender, value, nonce, deadline
        )

        if owner == NULL_ADDRESS:
            raise OwnerIsZero()

        recovered: Optional[str]
        try:
            recovered = self._recover(digest, signature)
        except InvalidSignature as e:
            raise InvalidOwner(owner, None) from e

        if recovered != owner:
            raise InvalidOwner(owner, recovered)

        now = self._clock.now()
        if now > deadline:
            raise DeadlineExpired(deadline, now)

        state.set_allowance(owner, spender, value)
        state.emit_approval(owner, spender, value)
        logger.info(
            "permit %s -> %s value=%d nonce=%d", owner, spender, value, nonce
        )
