"""Конфигурация ledger, фиксируемая при создании."""

from dataclasses import dataclass

from src.core.domain.address import normalize_address
from src.core.domain.units import WAD_DECIMALS


@dataclass(frozen=True)
class LedgerConfig:
    """Параметры экземпляра ledger.

    name, version, chain_id и verifying_contract входят в domain separator:
    off-chain tooling должен знать их точные значения для подписи permit.

    Attributes:
        name: отображаемое имя
        symbol: тикер
        verifying_contract: собственный адрес ledger
        version: строка версии домена подписи
        chain_id: идентификатор сети
        decimals: фиксировано 18 (wad)
        debug_invariants: проверять sum(balances) == total_supply после каждой операции
    """
    name: str
    symbol: str
    verifying_contract: str
    version: str = "1"
    chain_id: int = 1
    decimals: int = WAD_DECIMALS
    debug_invariants: bool = True

    def __post_init__(self):
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.symbol:
            raise ValueError("symbol cannot be empty")
        if not self.version:
            raise ValueError("version cannot be empty")
        if isinstance(self.chain_id, bool) or not isinstance(self.chain_id, int) or self.chain_id <= 0:
            raise ValueError(f"chain_id must be a positive int, got {self.chain_id!r}")
        if self.decimals != WAD_DECIMALS:
            raise ValueError(f"decimals must be {WAD_DECIMALS}, got {self.decimals}")
        # frozen dataclass: нормализованный адрес через object.__setattr__
        object.__setattr__(
            self,
            "verifying_contract",
            normalize_address(self.verifying_contract, "verifying_contract"),
        )
