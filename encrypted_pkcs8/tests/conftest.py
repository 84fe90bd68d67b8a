from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from encrypted_pkcs8.crypto.cryptography_engine import CryptographyEngine
from encrypted_pkcs8.crypto.default import set_default_engine
from encrypted_pkcs8.crypto.protocol import CryptoEngine
from encrypted_pkcs8.crypto.pycryptodome_engine import PycryptodomeEngine
from encrypted_pkcs8.private_key_info import PrivateKeyInfo

ASSETS_DIR = Path(__file__).parent / "assets" / "pkcs8"


@pytest.fixture
def read_asset() -> Callable[[str], str]:
    def _read(name: str) -> str:
        return (ASSETS_DIR / name).read_text(encoding="ascii")

    return _read


@pytest.fixture
def private_key_info(read_asset: Callable[[str], str]) -> PrivateKeyInfo:
    return PrivateKeyInfo.from_pem(read_asset("private_key.pem"))


@pytest.fixture(
    params=[CryptographyEngine, PycryptodomeEngine],
    ids=["cryptography", "pycryptodome"],
)
def engine(request: pytest.FixtureRequest) -> CryptoEngine:
    return request.param()


@pytest.fixture
def reset_default_engine() -> Iterator[None]:
    set_default_engine(None)
    yield
    set_default_engine(None)
