"""
Algorithm identifier models for PKCS #5 password based encryption.

These are immutable (frozen) dataclasses. The set is closed: PBES1 and PBES2
identifiers denote password based encryption, cipher identifiers denote plain
symmetric encryption and PBKDF2 identifiers denote key derivation only.
"""

import secrets
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives import hashes

if TYPE_CHECKING:
    from encrypted_pkcs8.config import Pkcs8Config

PBES2_OID = "1.2.840.113549.1.5.13"
PBKDF2_OID = "1.2.840.113549.1.5.12"

_PBES1_SALT_SIZE = 8
# Effective key bits an RC2 version field can express (RFC 8018 B.2.3),
# plus 32 for an absent version. Values of 256 and above are encoded literally.
RC2_SUPPORTED_EFFECTIVE_BITS = frozenset({32, 40, 64, 128})
_RC2_DEFAULT_EFFECTIVE_BITS = 128
_RC2_LITERAL_EFFECTIVE_BITS = range(256, 1025)
# Upper bounds on decoded parameters. 128 bytes is the largest RC2 key.
MAX_ITERATION_COUNT = 2**32 - 1
MAX_KEY_LENGTH = 128


def _check_iteration_count(iteration_count: int) -> None:
    if iteration_count <= 0:
        msg = "iteration_count must be positive"
        raise ValueError(msg)
    if iteration_count > MAX_ITERATION_COUNT:
        msg = f"iteration_count must be at most {MAX_ITERATION_COUNT}, got {iteration_count}"
        raise ValueError(msg)


class PBES1Scheme(Enum):
    """PKCS #5 v1.5 PBE schemes, valued by object identifier."""

    MD5_DES_CBC = "1.2.840.113549.1.5.3"
    MD5_RC2_CBC = "1.2.840.113549.1.5.6"
    SHA1_DES_CBC = "1.2.840.113549.1.5.10"
    SHA1_RC2_CBC = "1.2.840.113549.1.5.11"

    @property
    def hash_name(self) -> str:
        """hashlib name of the PBKDF1 digest."""
        match self:
            case self.MD5_DES_CBC | self.MD5_RC2_CBC:
                return "md5"
            case _:
                return "sha1"

    @property
    def cipher(self) -> "CipherAlgorithm":
        match self:
            case self.MD5_DES_CBC | self.SHA1_DES_CBC:
                return CipherAlgorithm.DES_CBC
            case _:
                return CipherAlgorithm.RC2_CBC


class PseudoRandomFunction(Enum):
    """PBKDF2 pseudorandom functions, valued by object identifier."""

    HMAC_SHA1 = "1.2.840.113549.2.7"
    HMAC_SHA224 = "1.2.840.113549.2.8"
    HMAC_SHA256 = "1.2.840.113549.2.9"
    HMAC_SHA384 = "1.2.840.113549.2.10"
    HMAC_SHA512 = "1.2.840.113549.2.11"

    @property
    def hash_algorithm(self) -> hashes.HashAlgorithm:
        match self:
            case self.HMAC_SHA1:
                return hashes.SHA1()
            case self.HMAC_SHA224:
                return hashes.SHA224()
            case self.HMAC_SHA256:
                return hashes.SHA256()
            case self.HMAC_SHA384:
                return hashes.SHA384()
            case _:
                return hashes.SHA512()


class CipherAlgorithm(Enum):
    """CBC mode block ciphers usable as a PBES2 encryption scheme."""

    DES_CBC = "1.3.14.3.2.7"
    DES_EDE3_CBC = "1.2.840.113549.3.7"
    RC2_CBC = "1.2.840.113549.3.2"
    AES_128_CBC = "2.16.840.1.101.3.4.1.2"
    AES_192_CBC = "2.16.840.1.101.3.4.1.22"
    AES_256_CBC = "2.16.840.1.101.3.4.1.42"

    @property
    def key_size(self) -> int:
        """Get key size in bytes, 0 for variable key size ciphers."""
        match self:
            case self.DES_CBC:
                return 8
            case self.AES_128_CBC:
                return 16
            case self.DES_EDE3_CBC | self.AES_192_CBC:
                return 24
            case self.AES_256_CBC:
                return 32
            case _:
                return 0

    @property
    def block_size(self) -> int:
        """Get block size in bytes for this algorithm."""
        match self:
            case self.DES_CBC | self.DES_EDE3_CBC | self.RC2_CBC:
                return 8
            case _:
                return 16


@dataclass(frozen=True, kw_only=True)
class CipherAlgorithmIdentifier:
    """
    Symmetric cipher with its initialization vector.

    Attributes:
        cipher: The block cipher.
        iv: Initialization vector, one block long.
        effective_key_bits: RC2 effective key bits (128 when not given),
            must stay unset for other ciphers.
    """

    cipher: CipherAlgorithm
    iv: bytes
    effective_key_bits: int | None = None

    def __post_init__(self) -> None:
        if len(self.iv) != self.cipher.block_size:
            msg = (
                f"IV size mismatch: {self.cipher.name} expects "
                f"{self.cipher.block_size} bytes, got {len(self.iv)}"
            )
            raise ValueError(msg)
        if self.cipher is not CipherAlgorithm.RC2_CBC:
            if self.effective_key_bits is not None:
                msg = f"Effective key bits only apply to RC2, not {self.cipher.name}"
                raise ValueError(msg)
            return
        if self.effective_key_bits is None:
            object.__setattr__(self, "effective_key_bits", _RC2_DEFAULT_EFFECTIVE_BITS)
        elif (
            self.effective_key_bits not in RC2_SUPPORTED_EFFECTIVE_BITS
            and self.effective_key_bits not in _RC2_LITERAL_EFFECTIVE_BITS
        ):
            msg = f"Unsupported RC2 effective key bits: {self.effective_key_bits}"
            raise ValueError(msg)

    @property
    def oid(self) -> str:
        return self.cipher.value

    @property
    def name(self) -> str:
        return self.cipher.name

    @property
    def key_size(self) -> int:
        """Key size in bytes. RC2 keys are sized by their effective key bits."""
        if self.effective_key_bits is not None:
            return self.effective_key_bits // 8
        return self.cipher.key_size


@dataclass(frozen=True, kw_only=True)
class PBKDF2AlgorithmIdentifier:
    """
    PBKDF2 key derivation parameters.

    Attributes:
        salt: Salt value.
        iteration_count: Number of iterations.
        key_length: Explicit derived key length in bytes, if encoded.
        prf: Pseudorandom function.
    """

    salt: bytes
    iteration_count: int
    key_length: int | None = None
    prf: PseudoRandomFunction = PseudoRandomFunction.HMAC_SHA1

    def __post_init__(self) -> None:
        _check_iteration_count(self.iteration_count)
        if self.key_length is not None and self.key_length <= 0:
            msg = "key_length must be positive"
            raise ValueError(msg)
        if self.key_length is not None and self.key_length > MAX_KEY_LENGTH:
            msg = f"key_length must be at most {MAX_KEY_LENGTH}, got {self.key_length}"
            raise ValueError(msg)

    @property
    def oid(self) -> str:
        return PBKDF2_OID

    @property
    def name(self) -> str:
        return "PBKDF2"


@dataclass(frozen=True, kw_only=True)
class PBES1AlgorithmIdentifier:
    """PKCS #5 v1.5 identifier: a single OID naming both digest and cipher."""

    scheme: PBES1Scheme
    salt: bytes
    iteration_count: int

    def __post_init__(self) -> None:
        if len(self.salt) != _PBES1_SALT_SIZE:
            msg = f"PBES1 salt must be {_PBES1_SALT_SIZE} bytes, got {len(self.salt)}"
            raise ValueError(msg)
        _check_iteration_count(self.iteration_count)

    @property
    def oid(self) -> str:
        return self.scheme.value

    @property
    def name(self) -> str:
        return f"PBES1-{self.scheme.name}"


@dataclass(frozen=True, kw_only=True)
class PBES2AlgorithmIdentifier:
    """PKCS #5 v2 identifier composed of a KDF and an encryption scheme."""

    kdf: PBKDF2AlgorithmIdentifier
    cipher: CipherAlgorithmIdentifier

    def __post_init__(self) -> None:
        fixed_key_size = self.cipher.cipher.key_size
        key_length = self.kdf.key_length
        if key_length is not None and fixed_key_size and key_length != fixed_key_size:
            msg = (
                f"Key length mismatch: {self.cipher.name} expects "
                f"{fixed_key_size} bytes, got {key_length}"
            )
            raise ValueError(msg)
        if self.key_size <= 0:
            msg = f"Cannot determine key size for {self.cipher.name}"
            raise ValueError(msg)

    @property
    def oid(self) -> str:
        return PBES2_OID

    @property
    def name(self) -> str:
        return f"PBES2-{self.cipher.name}"

    @property
    def salt(self) -> bytes:
        return self.kdf.salt

    @property
    def iteration_count(self) -> int:
        return self.kdf.iteration_count

    @property
    def iv(self) -> bytes:
        return self.cipher.iv

    @property
    def key_size(self) -> int:
        """Derived key size in bytes. keyLength only differs from the cipher's for RC2."""
        if self.kdf.key_length is not None:
            return self.kdf.key_length
        return self.cipher.key_size


PBEAlgorithmIdentifier = PBES1AlgorithmIdentifier | PBES2AlgorithmIdentifier
EncryptionAlgorithmIdentifier = PBEAlgorithmIdentifier | CipherAlgorithmIdentifier
AlgorithmIdentifier = EncryptionAlgorithmIdentifier | PBKDF2AlgorithmIdentifier


def generate_pbes2_algorithm(config: "Pkcs8Config | None" = None) -> PBES2AlgorithmIdentifier:
    """
    Build a PBES2 identifier with a fresh random salt and IV.

    Args:
        config: Parameter defaults. Defaults to Pkcs8Config().

    Returns:
        PBES2AlgorithmIdentifier ready for encryption.
    """
    if config is None:
        from encrypted_pkcs8.config import Pkcs8Config

        config = Pkcs8Config()

    kdf = PBKDF2AlgorithmIdentifier(
        salt=secrets.token_bytes(config.salt_size),
        iteration_count=config.iteration_count,
        prf=config.prf,
    )
    cipher = CipherAlgorithmIdentifier(
        cipher=config.cipher,
        iv=secrets.token_bytes(config.cipher.block_size),
    )
    return PBES2AlgorithmIdentifier(kdf=kdf, cipher=cipher)
