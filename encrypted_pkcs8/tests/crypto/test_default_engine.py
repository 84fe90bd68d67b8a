import threading

from encrypted_pkcs8.crypto.cryptography_engine import CryptographyEngine
from encrypted_pkcs8.crypto.default import get_default_engine, set_default_engine
from encrypted_pkcs8.crypto.protocol import CryptoEngine
from encrypted_pkcs8.crypto.pycryptodome_engine import PycryptodomeEngine


def test_default_engine_is_cryptography(reset_default_engine: None) -> None:
    assert isinstance(get_default_engine(), CryptographyEngine)


def test_default_engine_is_reused(reset_default_engine: None) -> None:
    assert get_default_engine() is get_default_engine()


def test_set_default_engine_replaces_default(reset_default_engine: None) -> None:
    engine = PycryptodomeEngine()

    set_default_engine(engine)

    assert get_default_engine() is engine


def test_set_default_engine_none_resets(reset_default_engine: None) -> None:
    set_default_engine(PycryptodomeEngine())

    set_default_engine(None)

    assert isinstance(get_default_engine(), CryptographyEngine)


def test_default_engine_created_once_under_concurrency(reset_default_engine: None) -> None:
    engines: list[CryptoEngine] = []
    barrier = threading.Barrier(8)

    def _worker() -> None:
        barrier.wait()
        engines.append(get_default_engine())

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(engines) == 8
    assert all(engine is engines[0] for engine in engines)
