"""ASN.1 (pyasn1) representation of PKCS #5 algorithm identifiers."""

from encrypted_pkcs8.asn1.algorithms import (
    encode_algorithm,
    resolve_cipher_algorithm,
    resolve_pbe_algorithm,
)

__all__ = [
    "resolve_pbe_algorithm",
    "resolve_cipher_algorithm",
    "encode_algorithm",
]
