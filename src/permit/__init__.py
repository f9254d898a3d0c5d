"""Permit — off-line подписанные approvals (EIP-2612).

- eip712: чистое построение domain separator и digest
- signatures: secp256k1 recovery и off-line подпись
- authorizer: проверка подписи, nonce, deadline и установка allowance
"""

from .authorizer import PermitAuthorizer
from .eip712 import (
    EIP712_DOMAIN_TYPEHASH,
    PERMIT_TYPEHASH,
    domain_separator,
    permit_digest,
    permit_struct_hash,
    permit_typed_data,
)
from .signatures import (
    InvalidSignature,
    address_of,
    recover_signer,
    sign_digest,
    sign_permit,
)

__all__ = [
    "PermitAuthorizer",
    "EIP712_DOMAIN_TYPEHASH",
    "PERMIT_TYPEHASH",
    "domain_separator",
    "permit_digest",
    "permit_struct_hash",
    "permit_typed_data",
    "InvalidSignature",
    "address_of",
    "recover_signer",
    "sign_digest",
    "sign_permit",
]
