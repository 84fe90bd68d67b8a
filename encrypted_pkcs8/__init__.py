"""
PKCS #8 encrypted private keys.

Reads, writes, encrypts and decrypts EncryptedPrivateKeyInfo containers
(RFC 5208) protected with PKCS #5 password based encryption (RFC 8018).

Example:
    ```python
    from encrypted_pkcs8 import EncryptedPrivateKeyInfo, PrivateKeyInfo

    epki = EncryptedPrivateKeyInfo.from_pem(pem_text)
    pki = epki.decrypt_with_password("password")
    key = pki.to_private_key()

    # Re-encrypt with PBES2 (PBKDF2 + AES-256-CBC)
    pem = EncryptedPrivateKeyInfo.encrypt(pki, "new password").to_pem()
    print(pem)
    ```
"""

from encrypted_pkcs8.config import Pkcs8Config
from encrypted_pkcs8.encrypted_private_key_info import EncryptedPrivateKeyInfo
from encrypted_pkcs8.exceptions import (
    CipherError,
    CryptoError,
    DecryptionFailedError,
    MalformedStructureError,
    Pkcs8Error,
    UnsupportedAlgorithmError,
    UnsupportedOperationError,
    WrongContainerTypeError,
)
from encrypted_pkcs8.pem import PEM
from encrypted_pkcs8.private_key_info import PrivateKeyInfo

__version__ = "0.1.0"

__all__ = [
    # Containers
    "EncryptedPrivateKeyInfo",
    "PrivateKeyInfo",
    "PEM",
    "Pkcs8Config",
    # Exceptions
    "Pkcs8Error",
    "MalformedStructureError",
    "WrongContainerTypeError",
    "UnsupportedAlgorithmError",
    "UnsupportedOperationError",
    "CryptoError",
    "CipherError",
    "DecryptionFailedError",
]
