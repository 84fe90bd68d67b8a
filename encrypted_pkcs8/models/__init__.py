"""
Algorithm identifier models.

These are immutable (frozen) dataclasses and enums describing PKCS #5
encryption algorithms and their parameters.
"""

from encrypted_pkcs8.models.algorithms import (
    AlgorithmIdentifier,
    CipherAlgorithm,
    CipherAlgorithmIdentifier,
    EncryptionAlgorithmIdentifier,
    PBEAlgorithmIdentifier,
    PBES1AlgorithmIdentifier,
    PBES1Scheme,
    PBES2AlgorithmIdentifier,
    PBKDF2AlgorithmIdentifier,
    PseudoRandomFunction,
    generate_pbes2_algorithm,
)

__all__ = [
    # Enums
    "PBES1Scheme",
    "PseudoRandomFunction",
    "CipherAlgorithm",
    # Identifiers
    "CipherAlgorithmIdentifier",
    "PBKDF2AlgorithmIdentifier",
    "PBES1AlgorithmIdentifier",
    "PBES2AlgorithmIdentifier",
    "PBEAlgorithmIdentifier",
    "EncryptionAlgorithmIdentifier",
    "AlgorithmIdentifier",
    "generate_pbes2_algorithm",
]
