"""
Password based encryption schemes (RFC 8018 section 6).

A scheme binds an algorithm identifier's parameters (salt, iteration count,
cipher) to a key derivation function and a crypto engine.
"""

from abc import ABC, abstractmethod

from encrypted_pkcs8.crypto.default import get_default_engine
from encrypted_pkcs8.crypto.kdf import PBKDF1, PBKDF2
from encrypted_pkcs8.crypto.protocol import CryptoEngine
from encrypted_pkcs8.exceptions import CipherError, UnsupportedAlgorithmError
from encrypted_pkcs8.models.algorithms import (
    CipherAlgorithm,
    CipherAlgorithmIdentifier,
    PBEAlgorithmIdentifier,
    PBES1AlgorithmIdentifier,
    PBES2AlgorithmIdentifier,
)

_PBES1_DERIVED_KEY_SIZE = 16
_PBES1_CIPHER_KEY_SIZE = 8
_PBES1_RC2_EFFECTIVE_KEY_BITS = 64


class PBEScheme(ABC):
    """Base class for password based encryption schemes."""

    def __init__(self, engine: CryptoEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> CryptoEngine:
        return self._engine

    @property
    @abstractmethod
    def kdf(self) -> PBKDF1 | PBKDF2:
        """Key derivation function of the scheme."""

    @property
    @abstractmethod
    def key_size(self) -> int:
        """Size in bytes of the derived key accepted by encrypt_with_key."""

    @abstractmethod
    def derive_key(self, password: str | bytes) -> bytes:
        """Derive the scheme key from a password."""

    @abstractmethod
    def encrypt_with_key(self, data: bytes, key: bytes) -> bytes:
        """Encrypt data with a key previously obtained from derive_key."""

    @abstractmethod
    def decrypt_with_key(self, data: bytes, key: bytes) -> bytes:
        """Decrypt data with a key previously obtained from derive_key."""

    def encrypt(self, data: bytes, password: str | bytes) -> bytes:
        """
        Encrypt data under a password.

        Raises:
            CipherError: If the cipher rejects the derived key or parameters.
        """
        return self.encrypt_with_key(data, self.derive_key(password))

    def decrypt(self, data: bytes, password: str | bytes) -> bytes:
        """
        Decrypt data with a password.

        Raises:
            CipherError: If decryption fails, e.g. because of a wrong password.
        """
        return self.decrypt_with_key(data, self.derive_key(password))


class PBES1(PBEScheme):
    """
    PBES1: PBKDF1 (MD5 or SHA-1) with DES-CBC or RC2-CBC.

    The derived key is 16 bytes: the cipher key followed by the IV.
    """

    def __init__(self, algorithm: PBES1AlgorithmIdentifier, engine: CryptoEngine) -> None:
        super().__init__(engine)
        self._algorithm = algorithm
        self._kdf = PBKDF1(algorithm.scheme.hash_name)

    @property
    def kdf(self) -> PBKDF1:
        return self._kdf

    @property
    def key_size(self) -> int:
        return _PBES1_DERIVED_KEY_SIZE

    def derive_key(self, password: str | bytes) -> bytes:
        return self._kdf.derive(
            password,
            self._algorithm.salt,
            self._algorithm.iteration_count,
            _PBES1_DERIVED_KEY_SIZE,
        )

    def encrypt_with_key(self, data: bytes, key: bytes) -> bytes:
        cipher_key, cipher = self._split_key(key)
        return self._engine.encrypt(data, cipher_key, cipher)

    def decrypt_with_key(self, data: bytes, key: bytes) -> bytes:
        cipher_key, cipher = self._split_key(key)
        return self._engine.decrypt(data, cipher_key, cipher)

    def _split_key(self, key: bytes) -> tuple[bytes, CipherAlgorithmIdentifier]:
        if len(key) != _PBES1_DERIVED_KEY_SIZE:
            msg = f"PBES1 key must be {_PBES1_DERIVED_KEY_SIZE} bytes, got {len(key)}"
            raise CipherError(msg)

        cipher_algorithm = self._algorithm.scheme.cipher
        effective_key_bits = None
        if cipher_algorithm is CipherAlgorithm.RC2_CBC:
            effective_key_bits = _PBES1_RC2_EFFECTIVE_KEY_BITS
        cipher = CipherAlgorithmIdentifier(
            cipher=cipher_algorithm,
            iv=key[_PBES1_CIPHER_KEY_SIZE:],
            effective_key_bits=effective_key_bits,
        )
        return key[:_PBES1_CIPHER_KEY_SIZE], cipher


class PBES2(PBEScheme):
    """PBES2: PBKDF2 with any supported CBC cipher."""

    def __init__(self, algorithm: PBES2AlgorithmIdentifier, engine: CryptoEngine) -> None:
        super().__init__(engine)
        self._algorithm = algorithm
        self._kdf = PBKDF2(algorithm.kdf.prf)

    @property
    def kdf(self) -> PBKDF2:
        return self._kdf

    @property
    def key_size(self) -> int:
        return self._algorithm.key_size

    def derive_key(self, password: str | bytes) -> bytes:
        return self._kdf.derive(
            password,
            self._algorithm.salt,
            self._algorithm.iteration_count,
            self.key_size,
        )

    def encrypt_with_key(self, data: bytes, key: bytes) -> bytes:
        return self._engine.encrypt(data, key, self._algorithm.cipher)

    def decrypt_with_key(self, data: bytes, key: bytes) -> bytes:
        return self._engine.decrypt(data, key, self._algorithm.cipher)


def lookup_scheme(
    algorithm: PBEAlgorithmIdentifier,
    engine: CryptoEngine | None = None,
) -> PBEScheme:
    """
    Get the scheme implementing a PBE algorithm identifier.

    Args:
        algorithm: PBES1 or PBES2 algorithm identifier.
        engine: Crypto engine, the process wide default if not set.

    Returns:
        Scheme bound to the algorithm's parameters.

    Raises:
        UnsupportedAlgorithmError: If the identifier is not a PBE identifier.
    """
    if engine is None:
        engine = get_default_engine()

    match algorithm:
        case PBES1AlgorithmIdentifier():
            return PBES1(algorithm, engine)
        case PBES2AlgorithmIdentifier():
            return PBES2(algorithm, engine)
        case _:
            name = getattr(algorithm, "name", type(algorithm).__name__)
            msg = f"No password based encryption scheme for {name}"
            raise UnsupportedAlgorithmError(msg, oid=getattr(algorithm, "oid", None))
