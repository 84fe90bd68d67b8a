"""
Interoperability with OpenSSL.

The assets were produced from private_key.pem (EC P-256) with
`openssl pkcs8 -topk8` (OpenSSL 3, legacy provider for the PBES1 and RC2
files) and the password "password".
"""

from collections.abc import Callable

import pytest

from encrypted_pkcs8.crypto.protocol import CryptoEngine
from encrypted_pkcs8.crypto.scheme import lookup_scheme
from encrypted_pkcs8.encrypted_private_key_info import EncryptedPrivateKeyInfo
from encrypted_pkcs8.exceptions import DecryptionFailedError
from encrypted_pkcs8.models.algorithms import (
    CipherAlgorithm,
    CipherAlgorithmIdentifier,
    PBES1AlgorithmIdentifier,
    PBES1Scheme,
    PBES2AlgorithmIdentifier,
    PBKDF2AlgorithmIdentifier,
    PseudoRandomFunction,
)
from encrypted_pkcs8.pem import PEM
from encrypted_pkcs8.private_key_info import PrivateKeyInfo

PASSWORD = "password"

OPENSSL_KEYS = [
    "key_PBE-MD5-DES.pem",
    "key_PBE-MD5-RC2-64.pem",
    "key_PBE-SHA1-DES.pem",
    "key_PBE-SHA1-RC2-64.pem",
    "key_v2_aes.pem",
    "key_v2_aes128_sha512.pem",
    "key_v2_des.pem",
    "key_v2_des3.pem",
    "key_v2_rc2.pem",
]


@pytest.mark.parametrize("name", OPENSSL_KEYS)
def test_decrypt_openssl_key(
    read_asset: Callable[[str], str],
    private_key_info: PrivateKeyInfo,
    engine: CryptoEngine,
    name: str,
) -> None:
    epki = EncryptedPrivateKeyInfo.from_pem(read_asset(name))

    assert epki.decrypt_with_password(PASSWORD, engine) == private_key_info


@pytest.mark.parametrize("name", OPENSSL_KEYS)
def test_reencrypt_reproduces_openssl_key(
    read_asset: Callable[[str], str],
    private_key_info: PrivateKeyInfo,
    engine: CryptoEngine,
    name: str,
) -> None:
    text = read_asset(name)
    reference = EncryptedPrivateKeyInfo.from_pem(text)

    epki = EncryptedPrivateKeyInfo.encrypt_with_password(
        private_key_info, reference.algorithm, PASSWORD, engine
    )

    assert epki.to_der() == PEM.from_string(text).data
    assert str(epki.to_pem()) == text


@pytest.mark.parametrize("name", OPENSSL_KEYS)
def test_encrypt_with_derived_key_reproduces_openssl_key(
    read_asset: Callable[[str], str],
    private_key_info: PrivateKeyInfo,
    engine: CryptoEngine,
    name: str,
) -> None:
    reference = EncryptedPrivateKeyInfo.from_pem(read_asset(name))
    key = lookup_scheme(reference.algorithm, engine).derive_key(PASSWORD)

    epki = EncryptedPrivateKeyInfo.encrypt_with_key(
        private_key_info, reference.algorithm, key, engine
    )

    assert epki == reference


@pytest.mark.parametrize("name", OPENSSL_KEYS)
def test_openssl_key_rejects_wrong_password(
    read_asset: Callable[[str], str], engine: CryptoEngine, name: str
) -> None:
    epki = EncryptedPrivateKeyInfo.from_pem(read_asset(name))

    with pytest.raises(DecryptionFailedError):
        epki.decrypt_with_password("drowssap", engine)


def test_decrypt_pbes1_sha1_rc2_64(
    read_asset: Callable[[str], str], private_key_info: PrivateKeyInfo
) -> None:
    der = PEM.from_string(read_asset("key_PBE-SHA1-RC2-64.pem")).data

    epki = EncryptedPrivateKeyInfo.from_der(der)

    assert epki.algorithm == PBES1AlgorithmIdentifier(
        scheme=PBES1Scheme.SHA1_RC2_CBC,
        salt=bytes.fromhex("48292A75AA434D8F"),
        iteration_count=2048,
    )
    assert epki.decrypt_with_password(PASSWORD).to_der() == private_key_info.to_der()


def test_encrypt_pbes2_aes256_with_explicit_parameters(
    read_asset: Callable[[str], str], private_key_info: PrivateKeyInfo
) -> None:
    algorithm = PBES2AlgorithmIdentifier(
        kdf=PBKDF2AlgorithmIdentifier(
            salt=bytes.fromhex("6A0A24954135C3FA"),
            iteration_count=2048,
            prf=PseudoRandomFunction.HMAC_SHA256,
        ),
        cipher=CipherAlgorithmIdentifier(
            cipher=CipherAlgorithm.AES_256_CBC,
            iv=bytes.fromhex("2A8A2EA4642A5FC245300E8F9CB98F56"),
        ),
    )

    epki = EncryptedPrivateKeyInfo.encrypt_with_password(private_key_info, algorithm, PASSWORD)

    assert epki.to_der() == PEM.from_string(read_asset("key_v2_aes.pem")).data
