"""Process wide default crypto engine."""

import threading

import structlog

from encrypted_pkcs8.crypto.cryptography_engine import CryptographyEngine
from encrypted_pkcs8.crypto.protocol import CryptoEngine

logger = structlog.get_logger(__name__)

_lock = threading.Lock()
_default_engine: CryptoEngine | None = None


def get_default_engine() -> CryptoEngine:
    """
    Get the default crypto engine, creating a CryptographyEngine on first use.

    Safe to call concurrently, a single instance is created.
    """
    global _default_engine
    engine = _default_engine
    if engine is not None:
        return engine

    with _lock:
        if _default_engine is None:
            _default_engine = CryptographyEngine()
            logger.debug("Default crypto engine initialized", engine=type(_default_engine).__name__)
        return _default_engine


def set_default_engine(engine: CryptoEngine | None) -> None:
    """
    Replace the default crypto engine.

    Args:
        engine: New default, or None to go back to lazy CryptographyEngine creation.
    """
    global _default_engine
    with _lock:
        _default_engine = engine
    logger.debug("Default crypto engine replaced", engine=type(engine).__name__ if engine else None)
