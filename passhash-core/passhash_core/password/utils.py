"""
Password Utilities
==================
Rehash policy for stored hashes.
"""

from typing import TYPE_CHECKING, Optional

import structlog

from .models import HashStatus

if TYPE_CHECKING:
    from .adaptive import AdaptiveHashEngine
    from .legacy import LegacyHashEngine

logger = structlog.get_logger(__name__)


def needs_rehash(stored_hash: str, engine: Optional["AdaptiveHashEngine"] = None) -> bool:
    """
    Check if a hash needs to be upgraded.

    Returns True if:
    - Hash is not bcrypt (should migrate to bcrypt)
    - Hash is bcrypt with a work factor outside the configured bounds

    Args:
        stored_hash: The hash to check
        engine: AdaptiveHashEngine carrying the bounds, defaults to the
            environment-configured engine

    Returns:
        True if the hash should be re-computed
    """
    if engine is None:
        from .hasher import get_cached_dispatcher
        engine = get_cached_dispatcher().adaptive

    status = engine.classify(stored_hash)
    if status is not HashStatus.CURRENT:
        logger.debug("Stored hash needs rehash", status=status.value)
        return True
    return False


def legacy_hash_status(stored_hash: str, engine: Optional["LegacyHashEngine"] = None) -> bool:
    """
    Strict legacy check: True unless the hash is a full-length "$S$" hash
    at the configured default cost.
    """
    if engine is None:
        from .hasher import get_cached_dispatcher
        engine = get_cached_dispatcher().legacy
    return engine.needs_new_hash(stored_hash)
