"""
EIP-712 Permit Digest — чистые функции построения digest

Независимы от LedgerState: поля → 32-байтовый digest.

Off-line фаза (выполняется владельцем, воспроизводится здесь байт-в-байт):

    digest = keccak256(
        0x1901
        ‖ domainSeparator
        ‖ keccak256(PERMIT_TYPEHASH ‖ owner ‖ spender ‖ value ‖ nonce ‖ deadline)
    )

    domainSeparator = keccak256(
        DOMAIN_TYPEHASH ‖ keccak256(name) ‖ keccak256(version)
        ‖ chainId ‖ verifyingContract
    )

Каждое поле ABI-кодируется в 32-байтовое слово (uint256 big-endian,
address left-padded нулями).
"""

from typing import Any, Dict, Final

from eth_utils import keccak

from src.core.domain.address import AddressLike, address_bytes, normalize_address
from src.core.math.numerical_safeguards import validate_uint256

# =============================================================================
# TYPE DESCRIPTORS
# =============================================================================

EIP712_DOMAIN_TYPE: Final[str] = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)

PERMIT_TYPE: Final[str] = (
    "Permit(address owner,address spender,uint256 value,uint256 nonce,uint256 deadline)"
)

EIP712_DOMAIN_TYPEHASH: Final[bytes] = keccak(text=EIP712_DOMAIN_TYPE)

PERMIT_TYPEHASH: Final[bytes] = keccak(text=PERMIT_TYPE)

# Префикс EIP-191 для structured data (version byte 0x01)
EIP191_PREFIX: Final[bytes] = b"\x19\x01"


# =============================================================================
# ABI WORD ENCODING
# =============================================================================


def encode_uint256(value: int, name: str = "value") -> bytes:
    """uint256 → 32-байтовое big-endian слово."""
    return validate_uint256(value, name).to_bytes(32, "big")


def encode_address(address: AddressLike) -> bytes:
    """address → 32-байтовое слово (12 нулевых байт + 20 байт адреса)."""
    return address_bytes(address).rjust(32, b"\x00")


# =============================================================================
# DOMAIN SEPARATOR
# =============================================================================


def domain_separator(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: AddressLike,
) -> bytes:
    """
    Domain separator, связывающий подписи с экземпляром ledger.

    Args:
        name: Отображаемое имя ledger
        version: Строка версии
        chain_id: Идентификатор сети
        verifying_contract: Собственный адрес ledger

    Returns:
        32-байтовый separator
    """
    if not name:
        raise ValueError("name cannot be empty")
    if not version:
        raise ValueError("version cannot be empty")

    return keccak(
        EIP712_DOMAIN_TYPEHASH
        + keccak(text=name)
        + keccak(text=version)
        + encode_uint256(chain_id, "chain_id")
        + encode_address(verifying_contract)
    )


# =============================================================================
# PERMIT DIGEST
# =============================================================================


def permit_struct_hash(
    owner: AddressLike,
    spender: AddressLike,
    value: int,
    nonce: int,
    deadline: int,
) -> bytes:
    """hashStruct(Permit)."""
    return keccak(
        PERMIT_TYPEHASH
        + encode_address(owner)
        + encode_address(spender)
        + encode_uint256(value, "value")
        + encode_uint256(nonce, "nonce")
        + encode_uint256(deadline, "deadline")
    )


def permit_digest(
    separator: bytes,
    owner: AddressLike,
    spender: AddressLike,
    value: int,
    nonce: int,
    deadline: int,
) -> bytes:
    """
    Digest, подписываемый владельцем.

    Args:
        separator: Domain separator (32 байта)
        owner: Владелец allowance
        spender: Получатель allowance
        value: Размер allowance (wad)
        nonce: Текущий nonce владельца на момент подписи
        deadline: Unix timestamp (секунды), после которого подпись недействительна

    Returns:
        32-байтовый digest
    """
    if len(separator) != 32:
        raise ValueError(f"domain separator must be 32 bytes, got {len(separator)}")

    return keccak(
        EIP191_PREFIX
        + separator
        + permit_struct_hash(owner, spender, value, nonce, deadline)
    )


def permit_typed_data(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: AddressLike,
    owner: AddressLike,
    spender: AddressLike,
    value: int,
    nonce: int,
    deadline: int,
) -> Dict[str, Any]:
    """
    EIP-712 typed data документ для eth_signTypedData_v4.

    uint256 поля message представлены десятичными строками: JSON number
    не вмещает uint256 без потери точности.
    """
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"},
            ],
            "Permit": [
                {"name": "owner", "type": "address"},
                {"name": "spender", "type": "address"},
                {"name": "value", "type": "uint256"},
                {"name": "nonce", "type": "uint256"},
                {"name": "deadline", "type": "uint256"},
            ],
        },
        "primaryType": "Permit",
        "domain": {
            "name": name,
            "version": version,
            "chainId": chain_id,
            "verifyingContract": normalize_address(verifying_contract, "verifying_contract"),
        },
        "message": {
            "owner": normalize_address(owner, "owner"),
            "spender": normalize_address(spender, "spender"),
            "value": str(validate_uint256(value, "value")),
            "nonce": str(validate_uint256(nonce, "nonce")),
            "deadline": str(validate_uint256(deadline, "deadline")),
        },
    }
