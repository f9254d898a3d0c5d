"""
Signatures — secp256k1 подписи permit

Recovery signer по (digest, signature) и off-line подпись для tooling.

Кодировки подписи:
- 65 байт r ‖ s ‖ v (v ∈ {27, 28} или {0, 1})
- 0x-hex строка тех же 65 байт
- tuple (v, r, s)

Malleability: high-s подписи НЕ отклоняются. Альтернативная кодировка
той же подписи авторизует тот же digest (тот же owner, spender, value,
nonce), а nonce расходуется при первом успешном permit, поэтому второй
вариант кодировки не даёт повторного использования.
"""

from typing import Final, Tuple, Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError

from src.core.domain.address import AddressLike, normalize_address
from src.permit.eip712 import permit_digest

SignatureLike = Union[bytes, bytearray, str, Tuple[int, int, int]]

# Порядок группы secp256k1
SECP256K1_N: Final[int] = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

SIGNATURE_LENGTH: Final[int] = 65


class InvalidSignature(ValueError):
    """Подпись не декодируется или не восстанавливается в публичный ключ."""


def _split(signature: SignatureLike) -> Tuple[int, int, int]:
    if isinstance(signature, tuple):
        if len(signature) != 3:
            raise InvalidSignature(f"signature tuple must be (v, r, s), got {len(signature)} items")
        for part in signature:
            if isinstance(part, bool) or not isinstance(part, int):
                raise InvalidSignature(
                    f"signature tuple items must be int, got {type(part).__name__}"
                )
        return signature

    if isinstance(signature, str):
        text = signature[2:] if signature.startswith(("0x", "0X")) else signature
        try:
            signature = bytes.fromhex(text)
        except ValueError as e:
            raise InvalidSignature("signature is not valid hex") from e

    if not isinstance(signature, (bytes, bytearray)):
        raise InvalidSignature(f"unsupported signature type: {type(signature).__name__}")

    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignature(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )

    r = int.from_bytes(signature[0:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    return v, r, s


def parse_signature(signature: SignatureLike) -> keys.Signature:
    """
    Декодирование подписи в eth_keys Signature (v ∈ {0, 1}).

    Raises:
        InvalidSignature: Если кодировка некорректна
    """
    v, r, s = _split(signature)

    if v in (27, 28):
        v -= 27
    if v not in (0, 1):
        raise InvalidSignature(f"invalid recovery id v={v}")

    if not 0 < r < SECP256K1_N:
        raise InvalidSignature("signature r out of range")
    if not 0 < s < SECP256K1_N:
        raise InvalidSignature("signature s out of range")

    try:
        return keys.Signature(vrs=(v, r, s))
    except ValidationError as e:
        raise InvalidSignature(str(e)) from e


def recover_signer(digest: bytes, signature: SignatureLike) -> str:
    """
    Восстановление адреса signer.

    Args:
        digest: 32-байтовый permit digest
        signature: Подпись в любой поддерживаемой кодировке

    Returns:
        Checksum адрес signer

    Raises:
        InvalidSignature: Если подпись некорректна или не восстанавливается
    """
    if len(digest) != 32:
        raise InvalidSignature(f"digest must be 32 bytes, got {len(digest)}")

    sig = parse_signature(signature)
    try:
        public_key = sig.recover_public_key_from_msg_hash(digest)
    except (BadSignature, ValidationError) as e:
        raise InvalidSignature(f"signature recovery failed: {e}") from e

    return public_key.to_checksum_address()


# =============================================================================
# OFF-LINE SIGNING
# =============================================================================


def _private_key(private_key: Union[bytes, str, keys.PrivateKey]) -> keys.PrivateKey:
    if isinstance(private_key, keys.PrivateKey):
        return private_key
    if isinstance(private_key, str):
        text = private_key[2:] if private_key.startswith("0x") else private_key
        private_key = bytes.fromhex(text)
    return keys.PrivateKey(private_key)


def address_of(private_key: Union[bytes, str, keys.PrivateKey]) -> str:
    """Checksum адрес владельца ключа."""
    return normalize_address(_private_key(private_key).public_key.to_checksum_address())


def sign_digest(private_key: Union[bytes, str, keys.PrivateKey], digest: bytes) -> bytes:
    """
    Подпись digest владельцем (off-line фаза).

    Returns:
        65 байт r ‖ s ‖ v, v ∈ {27, 28}
    """
    if len(digest) != 32:
        raise ValueError(f"digest must be 32 bytes, got {len(digest)}")

    sig = _private_key(private_key).sign_msg_hash(digest)
    return sig.r.to_bytes(32, "big") + sig.s.to_bytes(32, "big") + bytes([sig.v + 27])


def sign_permit(
    private_key: Union[bytes, str, keys.PrivateKey],
    separator: bytes,
    spender: AddressLike,
    value: int,
    nonce: int,
    deadline: int,
) -> bytes:
    """
    Подпись Permit сообщения; owner выводится из ключа.

    Args:
        private_key: Ключ владельца
        separator: Domain separator целевого ledger
        spender: Получатель allowance
        value: Размер allowance (wad)
        nonce: Текущий nonce владельца в ledger
        deadline: Срок действия (Unix seconds)

    Returns:
        65-байтовая подпись для permit()
    """
    owner = address_of(private_key)
    digest = permit_digest(separator, owner, spender, value, nonce, deadline)
    return sign_digest(private_key, digest)
