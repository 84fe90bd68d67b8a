"""
Crypto engine protocol definition.

This defines the interface for symmetric cipher operations, allowing different
implementations (cryptography, pycryptodome, ...) to be swapped without
changing the rest of the codebase.
"""

from typing import Protocol, runtime_checkable

from encrypted_pkcs8.models.algorithms import CipherAlgorithmIdentifier


@runtime_checkable
class CryptoEngine(Protocol):
    """
    Abstract interface for block cipher operations in CBC mode.

    Plaintext is padded with PKCS #5/#7 padding before encryption and the
    padding is removed and checked after decryption.
    """

    def encrypt(self, data: bytes, key: bytes, cipher: CipherAlgorithmIdentifier) -> bytes:
        """
        Encrypt data.

        Args:
            data: Plaintext.
            key: Cipher key.
            cipher: Cipher with its IV and parameters.

        Returns:
            Ciphertext.

        Raises:
            CipherError: If the key or parameters are not usable.
        """
        ...

    def decrypt(self, data: bytes, key: bytes, cipher: CipherAlgorithmIdentifier) -> bytes:
        """
        Decrypt data.

        Args:
            data: Ciphertext.
            key: Cipher key.
            cipher: Cipher with its IV and parameters.

        Returns:
            Plaintext with padding removed.

        Raises:
            CipherError: If decryption fails or the padding is invalid.
        """
        ...
