"""
Password based key derivation functions (RFC 8018 section 5).
"""

from Crypto.Hash import MD5, SHA1
from Crypto.Protocol import KDF
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from encrypted_pkcs8.models.algorithms import PseudoRandomFunction

_PBKDF1_HASHES = {"md5": MD5, "sha1": SHA1}


def password_bytes(password: str | bytes) -> bytes:
    """Encode a password as UTF-8, bytes are passed through."""
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


class PBKDF1:
    """PBKDF1 over MD5 or SHA-1, as used by PBES1."""

    def __init__(self, hash_name: str) -> None:
        """
        Args:
            hash_name: Digest name, "md5" or "sha1".

        Raises:
            ValueError: If the digest is not supported.
        """
        if hash_name not in _PBKDF1_HASHES:
            msg = f"Unsupported PBKDF1 digest: {hash_name}"
            raise ValueError(msg)
        self._hash_name = hash_name

    @property
    def hash_name(self) -> str:
        return self._hash_name

    @property
    def digest_size(self) -> int:
        return _PBKDF1_HASHES[self._hash_name].digest_size

    def derive(
        self,
        password: str | bytes,
        salt: bytes,
        iterations: int,
        key_length: int,
    ) -> bytes:
        """
        Derive a key.

        Args:
            password: Password.
            salt: 8 byte salt.
            iterations: Iteration count.
            key_length: Derived key length in bytes, at most the digest size.

        Returns:
            Derived key.

        Raises:
            ValueError: If key_length exceeds the digest size.
        """
        if key_length > self.digest_size:
            msg = f"PBKDF1 cannot derive {key_length} bytes with {self._hash_name}"
            raise ValueError(msg)

        return KDF.PBKDF1(
            password_bytes(password),
            salt,
            key_length,
            count=iterations,
            hashAlgo=_PBKDF1_HASHES[self._hash_name],
        )


class PBKDF2:
    """PBKDF2 with an HMAC pseudorandom function."""

    def __init__(self, prf: PseudoRandomFunction = PseudoRandomFunction.HMAC_SHA1) -> None:
        self._prf = prf

    @property
    def prf(self) -> PseudoRandomFunction:
        return self._prf

    def derive(
        self,
        password: str | bytes,
        salt: bytes,
        iterations: int,
        key_length: int,
    ) -> bytes:
        """Derive a key of key_length bytes."""
        kdf = PBKDF2HMAC(
            algorithm=self._prf.hash_algorithm,
            length=key_length,
            salt=salt,
            iterations=iterations,
            backend=default_backend(),
        )
        return kdf.derive(password_bytes(password))
