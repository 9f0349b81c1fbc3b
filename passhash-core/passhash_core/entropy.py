"""
Entropy Source
==============
Cryptographically secure random bytes for salts.
"""

import secrets
from typing import Callable

import structlog

from .exceptions import EntropySourceFailure

logger = structlog.get_logger(__name__)

RandomBytes = Callable[[int], bytes]


def random_bytes(count: int, source: RandomBytes = secrets.token_bytes) -> bytes:
    """
    Draw `count` bytes from the given source.

    Args:
        count: Number of bytes required
        source: Callable returning that many secure random bytes

    Returns:
        Exactly `count` random bytes

    Raises:
        EntropySourceFailure: If the source errors or returns a short read
    """
    try:
        data = source(count)
    except Exception as e:
        logger.error("Entropy source failed", requested=count, error=str(e))
        raise EntropySourceFailure(f"Random source failed: {e}") from e

    if not isinstance(data, (bytes, bytearray)) or len(data) != count:
        logger.error("Entropy source returned short read", requested=count)
        raise EntropySourceFailure(f"Random source did not return {count} bytes")

    return bytes(data)
