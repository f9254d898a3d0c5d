"""
Token — публичный фасад ledger

Собирает LedgerState, TransferEngine, SupplyController и PermitAuthorizer
вокруг одного разделяемого состояния. Каждая операция:
- нормализует адреса и валидирует количества ДО изменения состояния
- выполняется под RLock (single-writer) внутри atomic() (all-or-nothing)
- при отказе пробрасывает исключение, состояние не меняется

caller передаётся явно первым аргументом: в ledger нет неявного msg.sender.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from src.core.clock import Clock, SystemClock
from src.core.contracts import validate_permit_request, validate_permit_typed_data
from src.core.domain.address import AddressLike, normalize_address
from src.core.domain.ledger_state import DomainParameters, LedgerSnapshot, LedgerState
from src.core.domain.records import LedgerRecord, RecordKind
from src.core.math.numerical_safeguards import validate_uint256
from src.gatekeeper.gates.gate_00_mint_capability import DenyAllMintGate, MintCapabilityGate
from src.ledger.config import LedgerConfig
from src.ledger.supply_controller import SupplyController
from src.ledger.transaction import atomic
from src.ledger.transfer_engine import TransferEngine
from src.permit.authorizer import PermitAuthorizer
from src.permit.eip712 import PERMIT_TYPEHASH, domain_separator, permit_typed_data
from src.permit.signatures import SignatureLike

logger = logging.getLogger(__name__)


def build_domain_parameters(config: LedgerConfig) -> DomainParameters:
    """Вычисление immutable параметров подписи для config."""
    return DomainParameters(
        name=config.name,
        version=config.version,
        chain_id=config.chain_id,
        verifying_contract=config.verifying_contract,
        domain_separator=domain_separator(
            config.name, config.version, config.chain_id, config.verifying_contract
        ),
        permit_typehash=PERMIT_TYPEHASH,
    )


class Token:
    """Fungible wad ledger с permit."""

    def __init__(
        self,
        config: LedgerConfig,
        mint_gate: Optional[MintCapabilityGate] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.state = LedgerState(build_domain_parameters(config))
        self.clock = clock or SystemClock()
        self.mint_gate = mint_gate or DenyAllMintGate()

        self._transfers = TransferEngine(self.state)
        self._supply = SupplyController(self.state, self.mint_gate)
        self._permits = PermitAuthorizer(self.state, self.clock)
        self._lock = threading.RLock()

        logger.info(
            "ledger %s (%s) initialized: chain_id=%d contract=%s",
            config.name,
            config.symbol,
            config.chain_id,
            config.verifying_contract,
        )

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def version(self) -> str:
        return self.config.version

    @property
    def decimals(self) -> int:
        return self.config.decimals

    @property
    def DOMAIN_SEPARATOR(self) -> bytes:
        return self.state.domain.domain_separator

    @property
    def PERMIT_TYPEHASH(self) -> bytes:
        return self.state.domain.permit_typehash

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    # Чтения под тем же lock, что и операции: незавершённые изменения не видны.

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self.state.total_supply

    def balance_of(self, account: AddressLike) -> int:
        account = normalize_address(account, "account")
        with self._lock:
            return self.state.balance_of(account)

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        owner = normalize_address(owner, "owner")
        spender = normalize_address(spender, "spender")
        with self._lock:
            return self.state.allowance(owner, spender)

    def nonces(self, owner: AddressLike) -> int:
        owner = normalize_address(owner, "owner")
        with self._lock:
            return self.state.nonce(owner)

    def records(
        self,
        kind: Optional[RecordKind] = None,
        account: Optional[AddressLike] = None,
    ) -> List[LedgerRecord]:
        if account is not None:
            account = normalize_address(account, "account")
        with self._lock:
            return self.state.filter_records(kind=kind, account=account)

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return self.state.snapshot(self.symbol, self.decimals)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def transfer(self, caller: AddressLike, to: AddressLike, amount: int) -> bool:
        caller = normalize_address(caller, "caller")
        to = normalize_address(to, "to")
        validate_uint256(amount, "amount")
        with self._lock, atomic(self.state, "transfer", self.config.debug_invariants):
            return self._transfers.transfer(caller, to, amount)

    def transfer_from(
        self,
        caller: AddressLike,
        src: AddressLike,
        dst: AddressLike,
        amount: int,
    ) -> bool:
        caller = normalize_address(caller, "caller")
        src = normalize_address(src, "from")
        dst = normalize_address(dst, "to")
        validate_uint256(amount, "amount")
        with self._lock, atomic(self.state, "transfer_from", self.config.debug_invariants):
            return self._transfers.transfer_from(caller, src, dst, amount)

    def approve(self, caller: AddressLike, spender: AddressLike, amount: int) -> bool:
        caller = normalize_address(caller, "caller")
        spender = normalize_address(spender, "spender")
        validate_uint256(amount, "amount")
        with self._lock, atomic(self.state, "approve", self.config.debug_invariants):
            return self._transfers.approve(caller, spender, amount)

    def mint(self, caller: AddressLike, to: AddressLike, amount: int) -> None:
        caller = normalize_address(caller, "caller")
        to = normalize_address(to, "to")
        validate_uint256(amount, "amount")
        with self._lock, atomic(self.state, "mint", self.config.debug_invariants):
            self._supply.mint(caller, to, amount)

    def burn(self, caller: AddressLike, src: AddressLike, amount: int) -> None:
        caller = normalize_address(caller, "caller")
        src = normalize_address(src, "from")
        validate_uint256(amount, "amount")
        with self._lock, atomic(self.state, "burn", self.config.debug_invariants):
            self._supply.burn(caller, src, amount)

    def permit(
        self,
        owner: AddressLike,
        spender: AddressLike,
        value: int,
        deadline: int,
        signature: SignatureLike,
    ) -> None:
        owner = normalize_address(owner, "owner")
        spender = normalize_address(spender, "spender")
        validate_uint256(value, "value")
        validate_uint256(deadline, "deadline")
        with self._lock, atomic(self.state, "permit", self.config.debug_invariants):
            self._permits.permit(owner, spender, value, deadline, signature)

    def submit_permit(self, payload: Dict[str, Any]) -> None:
        """permit из JSON payload relayer (контракт permit_request.json).

        Raises:
            jsonschema.ValidationError: payload не соответствует контракту
        """
        validate_permit_request(payload)
        self.permit(
            payload["owner"],
            payload["spender"],
            int(payload["value"]),
            int(payload["deadline"]),
            payload["signature"],
        )

    # -------------------------------------------------------------------------
    # Off-line tooling
    # -------------------------------------------------------------------------

    def permit_typed_data(
        self,
        owner: AddressLike,
        spender: AddressLike,
        value: int,
        deadline: int,
        nonce: Optional[int] = None,
    ) -> Dict[str, Any]:
        """EIP-712 документ для подписи владельцем (nonce по умолчанию текущий)."""
        if nonce is None:
            nonce = self.nonces(owner)
        data = permit_typed_data(
            self.name,
            self.version,
            self.config.chain_id,
            self.config.verifying_contract,
            owner,
            spender,
            value,
            nonce,
            deadline,
        )
        validate_permit_typed_data(data)
        return data
