"""
encrypted_pkcs8 exception hierarchy.

All exceptions inherit from Pkcs8Error for easy catching.
"""

from typing import Any


class Pkcs8Error(Exception):
    """Base exception for all encrypted_pkcs8 errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class MalformedStructureError(Pkcs8Error):
    """Binary or textual input does not have the expected structure."""


class WrongContainerTypeError(Pkcs8Error):
    """PEM label does not match the expected container type."""

    def __init__(self, message: str, *, label: str, expected: str) -> None:
        super().__init__(message, label=label, expected=expected)
        self.label = label
        self.expected = expected


class UnsupportedAlgorithmError(Pkcs8Error):
    """Algorithm identifier is not a known (or usable) encryption algorithm."""

    def __init__(self, message: str, *, oid: str | None = None) -> None:
        super().__init__(message, oid=oid)
        self.oid = oid


class UnsupportedOperationError(Pkcs8Error):
    """Algorithm is recognized but does not support the requested operation."""

    def __init__(self, message: str, *, algorithm: str | None = None) -> None:
        super().__init__(message, algorithm=algorithm)
        self.algorithm = algorithm


class CryptoError(Pkcs8Error):
    """Cryptographic operation failed."""


class CipherError(CryptoError):
    """Symmetric encryption or decryption failed (bad key, padding, parameters)."""


class DecryptionFailedError(CryptoError):
    """
    Failed to recover the private key from the ciphertext.

    Raised for a wrong password, corrupted ciphertext or a payload that is not
    a valid PrivateKeyInfo. The underlying error is kept as ``__cause__``.
    """

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__
