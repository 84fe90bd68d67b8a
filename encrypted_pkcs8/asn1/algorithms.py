"""
Conversion between ASN.1 AlgorithmIdentifier nodes and algorithm identifier models.

Resolution is keyed by object identifier. Unknown identifiers raise
UnsupportedAlgorithmError, parameters that do not decode raise
MalformedStructureError.
"""

from collections.abc import Callable
from typing import Any

from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import univ

from encrypted_pkcs8.asn1.specs import (
    AlgorithmIdentifier,
    CBCParameter,
    PBEParameter,
    PBES2Params,
    PBKDF2Params,
    RC2CBCParameter,
)
from encrypted_pkcs8.exceptions import MalformedStructureError, UnsupportedAlgorithmError
from encrypted_pkcs8.models.algorithms import (
    PBES2_OID,
    PBKDF2_OID,
    AlgorithmIdentifier as AlgorithmIdentifierModel,
    CipherAlgorithm,
    CipherAlgorithmIdentifier,
    PBEAlgorithmIdentifier,
    PBES1AlgorithmIdentifier,
    PBES1Scheme,
    PBES2AlgorithmIdentifier,
    PBKDF2AlgorithmIdentifier,
    PseudoRandomFunction,
)

# RFC 8018 B.2.3 rc2ParameterVersion <-> effective key bits
_RC2_VERSION_TO_BITS = {160: 40, 120: 64, 58: 128}
_RC2_BITS_TO_VERSION = {bits: version for version, bits in _RC2_VERSION_TO_BITS.items()}
_RC2_ABSENT_VERSION_BITS = 32
_RC2_LITERAL_VERSION_MIN = 256


def resolve_pbe_algorithm(node: Any) -> PBEAlgorithmIdentifier:
    """
    Resolve an AlgorithmIdentifier node into a PBE algorithm identifier.

    Args:
        node: pyasn1 AlgorithmIdentifier (``algorithm`` + optional ``parameters``).

    Returns:
        PBES1AlgorithmIdentifier or PBES2AlgorithmIdentifier.

    Raises:
        UnsupportedAlgorithmError: If an object identifier is not recognized.
        MalformedStructureError: If the parameters cannot be decoded.
    """
    oid = _algorithm_oid(node)
    resolver = _PBE_RESOLVERS.get(oid)
    if resolver is None:
        msg = f"Algorithm {oid} is not a supported password based encryption scheme"
        raise UnsupportedAlgorithmError(msg, oid=oid)
    try:
        return resolver(oid, node)
    except ValueError as e:
        msg = f"Invalid parameters for algorithm {oid}: {e}"
        raise MalformedStructureError(msg, oid=oid) from e


def resolve_cipher_algorithm(node: Any) -> CipherAlgorithmIdentifier:
    """
    Resolve an AlgorithmIdentifier node into a block cipher identifier.

    Raises:
        UnsupportedAlgorithmError: If the cipher is not recognized.
        MalformedStructureError: If the parameters cannot be decoded.
    """
    oid = _algorithm_oid(node)
    try:
        cipher = CipherAlgorithm(oid)
    except ValueError:
        msg = f"Unsupported encryption scheme: {oid}"
        raise UnsupportedAlgorithmError(msg, oid=oid) from None

    try:
        if cipher is CipherAlgorithm.RC2_CBC:
            params = _decode_parameters(oid, node, RC2CBCParameter())
            return CipherAlgorithmIdentifier(
                cipher=cipher,
                iv=params["iv"].asOctets(),
                effective_key_bits=_rc2_effective_key_bits(params["rc2ParameterVersion"]),
            )
        iv = _decode_parameters(oid, node, CBCParameter())
        return CipherAlgorithmIdentifier(cipher=cipher, iv=iv.asOctets())
    except ValueError as e:
        msg = f"Invalid parameters for algorithm {oid}: {e}"
        raise MalformedStructureError(msg, oid=oid) from e


def encode_algorithm(algorithm: AlgorithmIdentifierModel) -> AlgorithmIdentifier:
    """
    Build the AlgorithmIdentifier node for an algorithm identifier model.

    This is the inverse of resolve_pbe_algorithm / resolve_cipher_algorithm.
    """
    match algorithm:
        case PBES1AlgorithmIdentifier():
            params: Any = PBEParameter()
            params["salt"] = algorithm.salt
            params["iterationCount"] = algorithm.iteration_count
        case PBES2AlgorithmIdentifier():
            params = PBES2Params()
            params["keyDerivationFunc"] = encode_algorithm(algorithm.kdf)
            params["encryptionScheme"] = encode_algorithm(algorithm.cipher)
        case PBKDF2AlgorithmIdentifier():
            params = PBKDF2Params()
            params["salt"] = algorithm.salt
            params["iterationCount"] = algorithm.iteration_count
            if algorithm.key_length is not None:
                params["keyLength"] = algorithm.key_length
            if algorithm.prf is not PseudoRandomFunction.HMAC_SHA1:
                params["prf"] = _build_algorithm_identifier(algorithm.prf.value, univ.Null(""))
        case CipherAlgorithmIdentifier(cipher=CipherAlgorithm.RC2_CBC):
            params = RC2CBCParameter()
            version = _rc2_parameter_version(algorithm.effective_key_bits)
            if version is not None:
                params["rc2ParameterVersion"] = version
            params["iv"] = algorithm.iv
        case CipherAlgorithmIdentifier():
            params = CBCParameter(algorithm.iv)
        case _:
            msg = f"Cannot encode algorithm identifier of type {type(algorithm).__name__}"
            raise UnsupportedAlgorithmError(msg)
    return _build_algorithm_identifier(algorithm.oid, params)


def _resolve_pbes1(oid: str, node: Any) -> PBES1AlgorithmIdentifier:
    params = _decode_parameters(oid, node, PBEParameter())
    return PBES1AlgorithmIdentifier(
        scheme=PBES1Scheme(oid),
        salt=params["salt"].asOctets(),
        iteration_count=int(params["iterationCount"]),
    )


def _resolve_pbes2(oid: str, node: Any) -> PBES2AlgorithmIdentifier:
    params = _decode_parameters(oid, node, PBES2Params())
    kdf = _resolve_pbkdf2(params["keyDerivationFunc"])
    cipher = resolve_cipher_algorithm(params["encryptionScheme"])
    return PBES2AlgorithmIdentifier(kdf=kdf, cipher=cipher)


def _resolve_pbkdf2(node: Any) -> PBKDF2AlgorithmIdentifier:
    oid = _algorithm_oid(node)
    if oid != PBKDF2_OID:
        msg = f"Unsupported key derivation function: {oid}"
        raise UnsupportedAlgorithmError(msg, oid=oid)

    params = _decode_parameters(oid, node, PBKDF2Params())
    key_length = int(params["keyLength"]) if params["keyLength"].isValue else None
    prf = PseudoRandomFunction.HMAC_SHA1
    if params["prf"].isValue:
        prf_oid = _algorithm_oid(params["prf"])
        try:
            prf = PseudoRandomFunction(prf_oid)
        except ValueError:
            msg = f"Unsupported pseudorandom function: {prf_oid}"
            raise UnsupportedAlgorithmError(msg, oid=prf_oid) from None

    return PBKDF2AlgorithmIdentifier(
        salt=params["salt"].asOctets(),
        iteration_count=int(params["iterationCount"]),
        key_length=key_length,
        prf=prf,
    )


_PBE_RESOLVERS: dict[str, Callable[[str, Any], PBEAlgorithmIdentifier]] = {
    **{scheme.value: _resolve_pbes1 for scheme in PBES1Scheme},
    PBES2_OID: _resolve_pbes2,
}


def _algorithm_oid(node: Any) -> str:
    try:
        algorithm = node["algorithm"]
    except (KeyError, PyAsn1Error) as e:
        msg = f"Not an AlgorithmIdentifier: {e}"
        raise MalformedStructureError(msg) from e
    if not algorithm.isValue:
        raise MalformedStructureError("AlgorithmIdentifier has no algorithm")
    return str(algorithm)


def _decode_parameters(oid: str, node: Any, spec: Any) -> Any:
    parameters = node["parameters"]
    if not parameters.isValue:
        msg = f"Missing parameters for algorithm {oid}"
        raise MalformedStructureError(msg, oid=oid)
    try:
        value, rest = decoder.decode(parameters.asOctets(), asn1Spec=spec)
    except PyAsn1Error as e:
        msg = f"Invalid parameters for algorithm {oid}: {e}"
        raise MalformedStructureError(msg, oid=oid) from e
    if rest:
        msg = f"Trailing data in parameters for algorithm {oid}"
        raise MalformedStructureError(msg, oid=oid)
    return value


def _build_algorithm_identifier(oid: str, params: Any) -> AlgorithmIdentifier:
    node = AlgorithmIdentifier()
    node["algorithm"] = univ.ObjectIdentifier(oid)
    node["parameters"] = univ.Any(encoder.encode(params))
    return node


def _rc2_effective_key_bits(version: Any) -> int:
    if not version.isValue:
        return _RC2_ABSENT_VERSION_BITS
    value = int(version)
    if value >= _RC2_LITERAL_VERSION_MIN:
        return value
    bits = _RC2_VERSION_TO_BITS.get(value)
    if bits is None:
        msg = f"Unsupported RC2 parameter version: {value}"
        raise UnsupportedAlgorithmError(msg, oid=CipherAlgorithm.RC2_CBC.value)
    return bits


def _rc2_parameter_version(effective_key_bits: int | None) -> int | None:
    if effective_key_bits is None or effective_key_bits == _RC2_ABSENT_VERSION_BITS:
        return None
    if effective_key_bits >= _RC2_LITERAL_VERSION_MIN:
        return effective_key_bits
    return _RC2_BITS_TO_VERSION[effective_key_bits]
