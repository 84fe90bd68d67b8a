from encrypted_pkcs8.exceptions import (
    CipherError,
    CryptoError,
    DecryptionFailedError,
    Pkcs8Error,
    UnsupportedAlgorithmError,
    UnsupportedOperationError,
    WrongContainerTypeError,
)


def test_pkcs8_error_str_without_context() -> None:
    error = Pkcs8Error("Something failed")

    assert str(error) == "Something failed"


def test_pkcs8_error_str_with_context() -> None:
    error = Pkcs8Error("Failed", oid="1.2.3", attempt=3)

    assert "Failed" in str(error)
    assert "oid='1.2.3'" in str(error)
    assert "attempt=3" in str(error)


def test_wrong_container_type_error_keeps_labels() -> None:
    error = WrongContainerTypeError(
        "Invalid PEM type", label="PRIVATE KEY", expected="ENCRYPTED PRIVATE KEY"
    )

    assert error.label == "PRIVATE KEY"
    assert error.expected == "ENCRYPTED PRIVATE KEY"
    assert "label='PRIVATE KEY'" in str(error)


def test_unsupported_algorithm_error_keeps_oid() -> None:
    error = UnsupportedAlgorithmError("Unknown algorithm", oid="1.3.6.1.3")

    assert error.oid == "1.3.6.1.3"
    assert isinstance(error, Pkcs8Error)


def test_unsupported_operation_error_keeps_algorithm() -> None:
    error = UnsupportedOperationError("Not password based", algorithm="AES_256_CBC")

    assert error.algorithm == "AES_256_CBC"


def test_crypto_errors_share_base_class() -> None:
    assert issubclass(CipherError, CryptoError)
    assert issubclass(DecryptionFailedError, CryptoError)
    assert issubclass(CryptoError, Pkcs8Error)


def test_decryption_failed_error_exposes_cause() -> None:
    cause = CipherError("Padding is incorrect")
    try:
        raise DecryptionFailedError("Failed to decrypt private key") from cause
    except DecryptionFailedError as e:
        error = e

    assert error.cause is cause


def test_decryption_failed_error_cause_defaults_to_none() -> None:
    assert DecryptionFailedError("Failed").cause is None
