"""
PKCS #8 PrivateKeyInfo (RFC 5208 section 5).

The key is treated as an opaque payload: it is validated and re-encoded as DER,
but the algorithm specific private key octets are not interpreted.
"""

from dataclasses import dataclass, field
from typing import Any, Self

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1_modules import rfc5208

from encrypted_pkcs8.exceptions import MalformedStructureError, WrongContainerTypeError
from encrypted_pkcs8.pem import PEM


@dataclass(frozen=True)
class PrivateKeyInfo:
    """
    A PrivateKeyInfo, held as its DER encoding.

    Two instances are equal when their DER encodings are byte identical.

    Attributes:
        der: DER encoding of the PrivateKeyInfo structure.
    """

    der: bytes
    _asn1: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_asn1", _decode_private_key_info(self.der))

    @classmethod
    def from_der(cls, data: bytes) -> Self:
        """
        Parse a DER encoded PrivateKeyInfo.

        Raises:
            MalformedStructureError: If data is not a PrivateKeyInfo.
        """
        return cls(bytes(data))

    @classmethod
    def from_pem(cls, pem: PEM | str) -> Self:
        """
        Parse a "PRIVATE KEY" PEM block.

        Raises:
            WrongContainerTypeError: If the PEM label is not "PRIVATE KEY".
            MalformedStructureError: If the payload is not a PrivateKeyInfo.
        """
        if isinstance(pem, str):
            pem = PEM.from_string(pem)
        if pem.type != PEM.TYPE_PRIVATE_KEY:
            raise WrongContainerTypeError(
                "Invalid PEM type", label=pem.type, expected=PEM.TYPE_PRIVATE_KEY
            )
        return cls.from_der(pem.data)

    @classmethod
    def from_private_key(cls, key: PrivateKeyTypes) -> Self:
        """Serialize a cryptography private key object as PrivateKeyInfo."""
        der = key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(der)

    def to_der(self) -> bytes:
        return self.der

    def to_pem(self) -> PEM:
        return PEM(type=PEM.TYPE_PRIVATE_KEY, data=self.der)

    def to_private_key(self) -> PrivateKeyTypes:
        """Load as a cryptography private key object."""
        return serialization.load_der_private_key(self.der, password=None)

    @property
    def version(self) -> int:
        return int(self._asn1["version"])

    @property
    def algorithm_oid(self) -> str:
        """Object identifier of the private key algorithm."""
        return str(self._asn1["privateKeyAlgorithm"]["algorithm"])

    @property
    def private_key(self) -> bytes:
        """Algorithm specific private key octets."""
        return self._asn1["privateKey"].asOctets()


def _decode_private_key_info(der: bytes) -> Any:
    if not der:
        raise MalformedStructureError("Empty PrivateKeyInfo")
    try:
        value, rest = decoder.decode(der, asn1Spec=rfc5208.PrivateKeyInfo())
    except PyAsn1Error as e:
        msg = f"Invalid PrivateKeyInfo: {e}"
        raise MalformedStructureError(msg) from e
    if rest:
        raise MalformedStructureError("Trailing data after PrivateKeyInfo", trailing=len(rest))
    if encoder.encode(value) != der:
        raise MalformedStructureError("PrivateKeyInfo is not DER encoded")
    return value
