"""
Crypto engine implementation using the cryptography library.

This is the default engine. It can be swapped for any CryptoEngine
implementation, per call or process wide.
"""

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from encrypted_pkcs8.crypto.pycryptodome_engine import PycryptodomeEngine
from encrypted_pkcs8.exceptions import CipherError
from encrypted_pkcs8.models.algorithms import CipherAlgorithm, CipherAlgorithmIdentifier

_DES_KEY_SIZE = 8


class CryptographyEngine:
    """
    Crypto engine implementation using cryptography.

    RC2 is delegated to pycryptodome: cryptography only implements RC2 with
    128 bit keys, while PBES1 needs 64 effective key bits.

    Example:
        engine = CryptographyEngine()
        plaintext = engine.decrypt(ciphertext, key, cipher)
    """

    def __init__(self) -> None:
        self._rc2 = PycryptodomeEngine()

    def encrypt(self, data: bytes, key: bytes, cipher: CipherAlgorithmIdentifier) -> bytes:
        if cipher.cipher is CipherAlgorithm.RC2_CBC:
            return self._rc2.encrypt(data, key, cipher)
        try:
            padder = padding.PKCS7(cipher.cipher.block_size * 8).padder()
            padded = padder.update(data) + padder.finalize()
            encryptor = self._cipher(key, cipher).encryptor()
            return encryptor.update(padded) + encryptor.finalize()
        except ValueError as e:
            msg = f"{cipher.name} encryption failed: {e}"
            raise CipherError(msg) from e

    def decrypt(self, data: bytes, key: bytes, cipher: CipherAlgorithmIdentifier) -> bytes:
        if cipher.cipher is CipherAlgorithm.RC2_CBC:
            return self._rc2.decrypt(data, key, cipher)
        try:
            decryptor = self._cipher(key, cipher).decryptor()
            padded = decryptor.update(data) + decryptor.finalize()
            unpadder = padding.PKCS7(cipher.cipher.block_size * 8).unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            msg = f"{cipher.name} decryption failed: {e}"
            raise CipherError(msg) from e

    @staticmethod
    def _cipher(key: bytes, cipher: CipherAlgorithmIdentifier) -> Cipher:
        match cipher.cipher:
            case CipherAlgorithm.DES_CBC:
                if len(key) != _DES_KEY_SIZE:
                    msg = f"Invalid DES key size: {len(key)}"
                    raise ValueError(msg)
                # EDE with K1 = K2 = K3 is single DES
                algorithm = TripleDES(key * 3)
            case CipherAlgorithm.DES_EDE3_CBC:
                algorithm = TripleDES(key)
            case _:
                algorithm = algorithms.AES(key)
        return Cipher(algorithm, modes.CBC(cipher.iv), backend=default_backend())
