"""GATE 0: Mint Capability — допуск вызывающего к увеличению supply.

- Единственный gate перед привилегированной операцией mint
- Вызывается ДО любого изменения состояния
- Политика полностью внешняя: ledger лишь спрашивает "может ли caller mint?"

Реализации:
- AllowListMintGate: ward-style список авторизованных (rely / deny)
- DenyAllMintGate: отказ всем (ledger без эмиссии)
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol, Set

from src.core.domain.address import AddressLike, normalize_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MintGateResult:
    """Результат GATE 0."""

    mint_allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    caller: str
    amount: int

    # Детали
    details: str


class MintCapabilityGate(Protocol):
    """Интерфейс capability check, внедряемый в SupplyController."""

    def evaluate(self, caller: str, to: str, amount: int) -> MintGateResult:
        ...


class AllowListMintGate:
    """GATE 0: список авторизованных minters.

    Порядок проверок:
    1. caller в списке → PASS
    2. иначе → блокировка caller_not_authorized
    """

    def __init__(self, minters: Iterable[AddressLike] = ()):
        self._minters: Set[str] = {normalize_address(m, "minter") for m in minters}

    @property
    def minters(self) -> Set[str]:
        return set(self._minters)

    def rely(self, account: AddressLike) -> None:
        """Выдать право mint."""
        account = normalize_address(account, "account")
        self._minters.add(account)
        logger.info("mint capability granted: %s", account)

    def deny(self, account: AddressLike) -> None:
        """Отозвать право mint (идемпотентно)."""
        account = normalize_address(account, "account")
        self._minters.discard(account)
        logger.info("mint capability revoked: %s", account)

    def evaluate(self, caller: str, to: str, amount: int) -> MintGateResult:
        """Оценка GATE 0.

        Args:
            caller: вызывающий (checksum)
            to: получатель эмиссии (не влияет на решение)
            amount: количество (не влияет на решение)

        Returns:
            MintGateResult с решением о допуске
        """
        if caller not in self._minters:
            return MintGateResult(
                mint_allowed=False,
                block_reason="caller_not_authorized",
                caller=caller,
                amount=amount,
                details=f"{caller} is not in the minter allow-list",
            )

        return MintGateResult(
            mint_allowed=True,
            block_reason="",
            caller=caller,
            amount=amount,
            details=f"PASS: {caller} authorized, to={to}",
        )


class DenyAllMintGate:
    """GATE 0 без minters: эмиссия закрыта."""

    def evaluate(self, caller: str, to: str, amount: int) -> MintGateResult:
        return MintGateResult(
            mint_allowed=False,
            block_reason="minting_disabled",
            caller=caller,
            amount=amount,
            details="Minting is disabled for this ledger",
        )
