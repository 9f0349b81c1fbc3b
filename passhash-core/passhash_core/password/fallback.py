"""
Legacy Verifiers
================
Strategies for checking hashes written by predecessor systems.
"""

import hashlib
import hmac
from abc import ABC, abstractmethod
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


class LegacyVerifier(ABC):
    """Checks a password against a hash format this library does not own."""

    @abstractmethod
    def verify(self, password: str, stored_hash: str) -> bool:
        """Return True if `password` matches `stored_hash`."""


class CallableVerifier(LegacyVerifier):
    """Wraps a plain `(password, stored_hash) -> bool` function."""

    def __init__(self, func: Callable[[str, str], bool]):
        self.func = func

    def verify(self, password: str, stored_hash: str) -> bool:
        return bool(self.func(password, stored_hash))


class DigestVerifier(LegacyVerifier):
    """
    Matches a bare hex digest of the password.

    Predecessor systems often stored `md5(password)` directly.
    """

    def __init__(self, algorithm: str = "md5"):
        self.algorithm = algorithm
        self.hex_length = hashlib.new(algorithm).digest_size * 2

    def verify(self, password: str, stored_hash: str) -> bool:
        if len(stored_hash) != self.hex_length:
            return False
        computed = hashlib.new(self.algorithm, password.encode("utf-8")).hexdigest()
        return hmac.compare_digest(computed.encode("ascii"), stored_hash.lower().encode("utf-8"))


class FallbackChain(LegacyVerifier):
    """Tries each verifier in order; the first match wins."""

    def __init__(self, *verifiers: LegacyVerifier):
        self.verifiers = list(verifiers)

    def verify(self, password: str, stored_hash: str) -> bool:
        for verifier in self.verifiers:
            if verifier.verify(password, stored_hash):
                logger.debug("Legacy verifier matched", verifier=type(verifier).__name__)
                return True
        return False
