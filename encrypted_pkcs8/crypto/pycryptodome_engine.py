"""
Crypto engine implementation using pycryptodome.
"""

from typing import Any

from Crypto.Cipher import AES, ARC2, DES, DES3
from Crypto.Util.Padding import pad, unpad

from encrypted_pkcs8.exceptions import CipherError
from encrypted_pkcs8.models.algorithms import CipherAlgorithm, CipherAlgorithmIdentifier


class PycryptodomeEngine:
    """
    Crypto engine implementation using pycryptodome.

    Supports every cipher in CipherAlgorithm, including RC2 with arbitrary
    effective key bits.

    Example:
        engine = PycryptodomeEngine()
        ciphertext = engine.encrypt(plaintext, key, cipher)
    """

    def encrypt(self, data: bytes, key: bytes, cipher: CipherAlgorithmIdentifier) -> bytes:
        try:
            return self._new(key, cipher).encrypt(pad(data, cipher.cipher.block_size))
        except ValueError as e:
            msg = f"{cipher.name} encryption failed: {e}"
            raise CipherError(msg) from e

    def decrypt(self, data: bytes, key: bytes, cipher: CipherAlgorithmIdentifier) -> bytes:
        try:
            padded = self._new(key, cipher).decrypt(data)
            return unpad(padded, cipher.cipher.block_size)
        except ValueError as e:
            msg = f"{cipher.name} decryption failed: {e}"
            raise CipherError(msg) from e

    @staticmethod
    def _new(key: bytes, cipher: CipherAlgorithmIdentifier) -> Any:
        match cipher.cipher:
            case CipherAlgorithm.DES_CBC:
                return DES.new(key, DES.MODE_CBC, iv=cipher.iv)
            case CipherAlgorithm.DES_EDE3_CBC:
                return DES3.new(key, DES3.MODE_CBC, iv=cipher.iv)
            case CipherAlgorithm.RC2_CBC:
                return ARC2.new(
                    key,
                    ARC2.MODE_CBC,
                    iv=cipher.iv,
                    effective_keylen=cipher.effective_key_bits,
                )
            case _:
                return AES.new(key, AES.MODE_CBC, iv=cipher.iv)
