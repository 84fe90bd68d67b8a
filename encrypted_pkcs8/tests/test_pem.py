from collections.abc import Callable
from pathlib import Path

import pytest

from encrypted_pkcs8.exceptions import MalformedStructureError
from encrypted_pkcs8.pem import PEM


def test_pem_from_string_reads_label_and_payload() -> None:
    pem = PEM.from_string("-----BEGIN TEST-----\naGVsbG8=\n-----END TEST-----\n")

    assert pem.type == "TEST"
    assert pem.data == b"hello"


def test_pem_from_string_ignores_surrounding_text() -> None:
    text = "Bag Attributes\n-----BEGIN TEST-----\r\naGVs\r\nbG8=\r\n-----END TEST-----\ntrailer\n"

    assert PEM.from_string(text) == PEM(type="TEST", data=b"hello")


def test_pem_from_string_raises_without_block() -> None:
    with pytest.raises(MalformedStructureError, match="No PEM block found"):
        PEM.from_string("not a pem file")


def test_pem_from_string_raises_on_label_mismatch() -> None:
    with pytest.raises(MalformedStructureError, match="labels differ"):
        PEM.from_string("-----BEGIN A-----\naGVsbG8=\n-----END B-----\n")


def test_pem_from_string_raises_on_invalid_base64() -> None:
    with pytest.raises(MalformedStructureError, match="Invalid PEM base64 body"):
        PEM.from_string("-----BEGIN TEST-----\naGVsbG8*\n-----END TEST-----\n")


def test_pem_to_string_wraps_at_64_columns() -> None:
    text = PEM(type="TEST", data=bytes(100)).to_string()
    lines = text.splitlines()

    assert lines[0] == "-----BEGIN TEST-----"
    assert lines[-1] == "-----END TEST-----"
    assert [len(line) for line in lines[1:-1]] == [64, 64, 8]
    assert text.endswith("-----END TEST-----\n")


def test_pem_str_matches_to_string() -> None:
    pem = PEM(type="TEST", data=b"hello")

    assert str(pem) == pem.to_string()


def test_pem_to_string_reproduces_openssl_output(read_asset: Callable[[str], str]) -> None:
    text = read_asset("key_v2_aes.pem")

    assert PEM.from_string(text).to_string() == text


def test_pem_from_file(tmp_path: Path) -> None:
    path = tmp_path / "key.pem"
    path.write_text(PEM(type="PRIVATE KEY", data=b"\x30\x00").to_string())

    assert PEM.from_file(path) == PEM(type="PRIVATE KEY", data=b"\x30\x00")
