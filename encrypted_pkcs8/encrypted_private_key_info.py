"""
PKCS #8 EncryptedPrivateKeyInfo (RFC 5208 section 6).

    EncryptedPrivateKeyInfo ::= SEQUENCE {
        encryptionAlgorithm  EncryptionAlgorithmIdentifier,
        encryptedData        EncryptedData }

The container converts between DER, PEM and pyasn1 forms and drives password
based encryption and decryption of the wrapped PrivateKeyInfo.
"""

from dataclasses import dataclass
from typing import Any, Self

import structlog
from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1_modules import rfc5208

from encrypted_pkcs8.asn1.algorithms import encode_algorithm, resolve_pbe_algorithm
from encrypted_pkcs8.config import Pkcs8Config
from encrypted_pkcs8.crypto.protocol import CryptoEngine
from encrypted_pkcs8.crypto.scheme import lookup_scheme
from encrypted_pkcs8.exceptions import (
    CipherError,
    DecryptionFailedError,
    MalformedStructureError,
    UnsupportedAlgorithmError,
    UnsupportedOperationError,
    WrongContainerTypeError,
)
from encrypted_pkcs8.models.algorithms import (
    EncryptionAlgorithmIdentifier,
    PBEAlgorithmIdentifier,
    PBES1AlgorithmIdentifier,
    PBES2AlgorithmIdentifier,
    generate_pbes2_algorithm,
)
from encrypted_pkcs8.pem import PEM
from encrypted_pkcs8.private_key_info import PrivateKeyInfo

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class EncryptedPrivateKeyInfo:
    """
    An encrypted private key.

    Attributes:
        algorithm: Encryption algorithm. Password based decryption needs a
            PBES1 or PBES2 identifier.
        ciphertext: Encrypted DER encoding of a PrivateKeyInfo.

    Example:
        epki = EncryptedPrivateKeyInfo.from_pem(pem_text)
        pki = epki.decrypt_with_password("password")
    """

    algorithm: EncryptionAlgorithmIdentifier
    ciphertext: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, EncryptionAlgorithmIdentifier):
            name = getattr(self.algorithm, "name", type(self.algorithm).__name__)
            msg = f"{name} is not an encryption algorithm"
            raise UnsupportedAlgorithmError(msg, oid=getattr(self.algorithm, "oid", None))

    @classmethod
    def from_asn1(cls, node: Any) -> Self:
        """
        Build from a decoded rfc5208.EncryptedPrivateKeyInfo node.

        Raises:
            MalformedStructureError: If the node does not have the expected shape.
            UnsupportedAlgorithmError: If the algorithm is not a supported PBE scheme.
        """
        try:
            algorithm_node = node["encryptionAlgorithm"]
            ciphertext = node["encryptedData"].asOctets()
        except (KeyError, TypeError, PyAsn1Error) as e:
            msg = f"Invalid EncryptedPrivateKeyInfo: {e}"
            raise MalformedStructureError(msg) from e
        return cls(algorithm=resolve_pbe_algorithm(algorithm_node), ciphertext=ciphertext)

    @classmethod
    def from_der(cls, data: bytes) -> Self:
        """
        Parse a DER encoded EncryptedPrivateKeyInfo.

        Raises:
            MalformedStructureError: If data is not an EncryptedPrivateKeyInfo.
            UnsupportedAlgorithmError: If the algorithm is not a supported PBE scheme.
        """
        if not data:
            raise MalformedStructureError("Empty EncryptedPrivateKeyInfo")
        try:
            node, rest = decoder.decode(bytes(data), asn1Spec=rfc5208.EncryptedPrivateKeyInfo())
        except PyAsn1Error as e:
            msg = f"Invalid EncryptedPrivateKeyInfo: {e}"
            raise MalformedStructureError(msg) from e
        if rest:
            raise MalformedStructureError(
                "Trailing data after EncryptedPrivateKeyInfo", trailing=len(rest)
            )
        return cls.from_asn1(node)

    @classmethod
    def from_pem(cls, pem: PEM | str) -> Self:
        """
        Parse an "ENCRYPTED PRIVATE KEY" PEM block.

        Args:
            pem: Parsed PEM block or PEM text.

        Raises:
            WrongContainerTypeError: If the PEM label is not "ENCRYPTED PRIVATE KEY".
            MalformedStructureError: If the payload is not an EncryptedPrivateKeyInfo.
            UnsupportedAlgorithmError: If the algorithm is not a supported PBE scheme.
        """
        if isinstance(pem, str):
            pem = PEM.from_string(pem)
        if pem.type != PEM.TYPE_ENCRYPTED_PRIVATE_KEY:
            raise WrongContainerTypeError(
                "Invalid PEM type", label=pem.type, expected=PEM.TYPE_ENCRYPTED_PRIVATE_KEY
            )
        return cls.from_der(pem.data)

    def to_asn1(self) -> rfc5208.EncryptedPrivateKeyInfo:
        algorithm = encode_algorithm(self.algorithm)
        node = rfc5208.EncryptedPrivateKeyInfo()
        node["encryptionAlgorithm"]["algorithm"] = algorithm["algorithm"]
        node["encryptionAlgorithm"]["parameters"] = algorithm["parameters"]
        node["encryptedData"] = self.ciphertext
        return node

    def to_der(self) -> bytes:
        return encoder.encode(self.to_asn1())

    def to_pem(self) -> PEM:
        return PEM(type=PEM.TYPE_ENCRYPTED_PRIVATE_KEY, data=self.to_der())

    def decrypt_with_password(
        self,
        password: str | bytes,
        engine: CryptoEngine | None = None,
    ) -> PrivateKeyInfo:
        """
        Decrypt the private key.

        Args:
            password: Password, str is UTF-8 encoded.
            engine: Crypto engine, the process wide default if not set.

        Returns:
            Decrypted PrivateKeyInfo.

        Raises:
            UnsupportedOperationError: If the algorithm is not password based.
            DecryptionFailedError: If the password is wrong or the ciphertext
                does not decrypt to a PrivateKeyInfo.
        """
        algorithm = self.algorithm
        if not isinstance(algorithm, PBES1AlgorithmIdentifier | PBES2AlgorithmIdentifier):
            msg = "Algorithm does not support password based decryption"
            raise UnsupportedOperationError(msg, algorithm=algorithm.name)

        scheme = lookup_scheme(algorithm, engine)
        logger.debug("Decrypting private key", algorithm=algorithm.name)
        try:
            return PrivateKeyInfo.from_der(scheme.decrypt(self.ciphertext, password))
        except (CipherError, MalformedStructureError) as e:
            logger.warning(
                "Private key decryption failed",
                algorithm=algorithm.name,
                error_type=type(e).__name__,
            )
            raise DecryptionFailedError("Failed to decrypt private key") from e

    @classmethod
    def encrypt_with_password(
        cls,
        private_key_info: PrivateKeyInfo,
        algorithm: PBEAlgorithmIdentifier,
        password: str | bytes,
        engine: CryptoEngine | None = None,
    ) -> Self:
        """
        Encrypt a private key under a password.

        Args:
            private_key_info: Private key to encrypt.
            algorithm: PBE algorithm with its salt, iteration count and IV.
            password: Password, str is UTF-8 encoded.
            engine: Crypto engine, the process wide default if not set.

        Returns:
            New EncryptedPrivateKeyInfo.

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not a PBE scheme.
            CipherError: If the cipher rejects the derived key or parameters.
        """
        scheme = lookup_scheme(algorithm, engine)
        logger.debug("Encrypting private key", algorithm=algorithm.name)
        ciphertext = scheme.encrypt(private_key_info.to_der(), password)
        return cls(algorithm=algorithm, ciphertext=ciphertext)

    @classmethod
    def encrypt_with_key(
        cls,
        private_key_info: PrivateKeyInfo,
        algorithm: PBEAlgorithmIdentifier,
        key: bytes,
        engine: CryptoEngine | None = None,
    ) -> Self:
        """
        Encrypt a private key with an already derived key.

        For PBES1 the key is the 16 byte PBKDF1 output (DES/RC2 key followed by
        the IV), for PBES2 it is the cipher key.

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not a PBE scheme.
            CipherError: If the key does not fit the cipher.
        """
        scheme = lookup_scheme(algorithm, engine)
        logger.debug("Encrypting private key with derived key", algorithm=algorithm.name)
        ciphertext = scheme.encrypt_with_key(private_key_info.to_der(), key)
        return cls(algorithm=algorithm, ciphertext=ciphertext)

    @classmethod
    def encrypt(
        cls,
        private_key_info: PrivateKeyInfo,
        password: str | bytes,
        *,
        config: Pkcs8Config | None = None,
        engine: CryptoEngine | None = None,
    ) -> Self:
        """Encrypt under PBES2 with a random salt and IV."""
        return cls.encrypt_with_password(
            private_key_info, generate_pbes2_algorithm(config), password, engine
        )
