"""
Cryptographic operations for password based encryption.

This module provides:
- PBKDF1 and PBKDF2 key derivation
- PBES1 and PBES2 schemes
- Swappable block cipher engines (cryptography, pycryptodome)
"""

from encrypted_pkcs8.crypto.cryptography_engine import CryptographyEngine
from encrypted_pkcs8.crypto.default import get_default_engine, set_default_engine
from encrypted_pkcs8.crypto.kdf import PBKDF1, PBKDF2
from encrypted_pkcs8.crypto.protocol import CryptoEngine
from encrypted_pkcs8.crypto.pycryptodome_engine import PycryptodomeEngine
from encrypted_pkcs8.crypto.scheme import PBES1, PBES2, PBEScheme, lookup_scheme

__all__ = [
    "CryptoEngine",
    "CryptographyEngine",
    "PycryptodomeEngine",
    "get_default_engine",
    "set_default_engine",
    "PBKDF1",
    "PBKDF2",
    "PBEScheme",
    "PBES1",
    "PBES2",
    "lookup_scheme",
]
