"""
ASN.1 structures for PKCS #5 algorithm parameters (RFC 8018 appendix A/B).

The outer PKCS #8 containers come from pyasn1_modules.rfc5208.
"""

from pyasn1.type import constraint, namedtype, univ

from encrypted_pkcs8.models.algorithms import MAX_ITERATION_COUNT, MAX_KEY_LENGTH

_ITERATION_COUNT = constraint.ValueRangeConstraint(1, MAX_ITERATION_COUNT)
_KEY_LENGTH = constraint.ValueRangeConstraint(1, MAX_KEY_LENGTH)


class AlgorithmIdentifier(univ.Sequence):
    """AlgorithmIdentifier with open type parameters (RFC 5280)."""

    componentType = namedtype.NamedTypes(
        namedtype.NamedType("algorithm", univ.ObjectIdentifier()),
        namedtype.OptionalNamedType("parameters", univ.Any()),
    )


class PBEParameter(univ.Sequence):
    """PBES1 parameters."""

    componentType = namedtype.NamedTypes(
        namedtype.NamedType(
            "salt",
            univ.OctetString().subtype(subtypeSpec=constraint.ValueSizeConstraint(8, 8)),
        ),
        namedtype.NamedType(
            "iterationCount", univ.Integer().subtype(subtypeSpec=_ITERATION_COUNT)
        ),
    )


class PBES2Params(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("keyDerivationFunc", AlgorithmIdentifier()),
        namedtype.NamedType("encryptionScheme", AlgorithmIdentifier()),
    )


class PBKDF2Params(univ.Sequence):
    """
    PBKDF2 parameters.

    Only the ``specified`` alternative of the salt CHOICE is supported. The
    DEFAULT prf is modelled as OPTIONAL: DER omits it when it is hmacWithSHA1.
    """

    componentType = namedtype.NamedTypes(
        namedtype.NamedType("salt", univ.OctetString()),
        namedtype.NamedType(
            "iterationCount",
            univ.Integer().subtype(subtypeSpec=_ITERATION_COUNT),
        ),
        namedtype.OptionalNamedType(
            "keyLength",
            univ.Integer().subtype(subtypeSpec=_KEY_LENGTH),
        ),
        namedtype.OptionalNamedType("prf", AlgorithmIdentifier()),
    )


class RC2CBCParameter(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.OptionalNamedType("rc2ParameterVersion", univ.Integer()),
        namedtype.NamedType(
            "iv",
            univ.OctetString().subtype(subtypeSpec=constraint.ValueSizeConstraint(8, 8)),
        ),
    )


class CBCParameter(univ.OctetString):
    """IV of DES, DES-EDE3 and AES in CBC mode."""
