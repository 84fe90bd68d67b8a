"""
Defaults for generating new password based encryption parameters.
"""

from dataclasses import dataclass

from encrypted_pkcs8.models.algorithms import CipherAlgorithm, PseudoRandomFunction


@dataclass(frozen=True, kw_only=True)
class Pkcs8Config:
    """
    Attributes:
        iteration_count: PBKDF2 iteration count.
        salt_size: Size of the random PBKDF2 salt in bytes.
        prf: PBKDF2 pseudorandom function.
        cipher: PBES2 encryption scheme.
    """

    iteration_count: int = 2048
    salt_size: int = 8
    prf: PseudoRandomFunction = PseudoRandomFunction.HMAC_SHA256
    cipher: CipherAlgorithm = CipherAlgorithm.AES_256_CBC

    def __post_init__(self) -> None:
        if self.iteration_count <= 0:
            msg = "iteration_count must be positive"
            raise ValueError(msg)
        if self.salt_size < 8:
            msg = "salt_size must be at least 8 bytes"
            raise ValueError(msg)
        if not self.cipher.key_size:
            msg = f"cipher must have a fixed key size, got {self.cipher.name}"
            raise ValueError(msg)
