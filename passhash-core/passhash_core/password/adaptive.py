"""
Adaptive Hash
=============
bcrypt hashing with "$2y$" settings and work factor bounds.
"""

import base64
import hmac
import secrets
from typing import Optional

import bcrypt
import structlog

from ..config import HashConfig
from ..entropy import RandomBytes, random_bytes
from ..exceptions import UnsupportedFormat
from .fallback import LegacyVerifier
from .models import FormatTag, HashStatus

logger = structlog.get_logger(__name__)

SALT_BYTES = 16
SALT_LENGTH = 22

BCRYPT_ALPHABET = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

# bcrypt only reads the first 72 bytes of a password
MAX_SECRET_BYTES = 72


class AdaptiveHashEngine:
    """
    bcrypt engine producing "$2y$NN$<salt><hash>" strings.

    Args:
        config: Work factor bounds and default
        random_source: Callable returning secure random bytes
    """

    def __init__(
        self,
        config: Optional[HashConfig] = None,
        random_source: RandomBytes = secrets.token_bytes,
    ):
        self.config = config or HashConfig()
        self.random_source = random_source

    def clamp_work_factor(self, work_factor: int) -> int:
        """Substitute the default for non-positive values, then clamp to the bounds."""
        if work_factor <= 0:
            work_factor = self.config.default_work_factor
        return max(self.config.min_work_factor, min(work_factor, self.config.max_work_factor))

    def generate_settings(self, work_factor: int = 0) -> str:
        """
        Build a "$2y$" settings prefix with a fresh salt.

        Args:
            work_factor: Requested work factor, 0 for the default

        Returns:
            29 character settings string
        """
        work_factor = self.clamp_work_factor(work_factor)
        raw_salt = random_bytes(SALT_BYTES, self.random_source)
        salt = base64.b64encode(raw_salt).decode("ascii").replace("+", ".")[:SALT_LENGTH]
        # Only the top 2 bits of the last salt character are used
        last = BCRYPT_ALPHABET[BCRYPT_ALPHABET.index(salt[-1]) & 0x30]
        salt = salt[:-1] + last
        return f"{FormatTag.MODERN_ADAPTIVE.value}{work_factor:02d}${salt}"

    def hash(self, password: str, work_factor: int = 0) -> str:
        """
        Hash a password with bcrypt.

        Args:
            password: Plain text password
            work_factor: Requested work factor, 0 for the default

        Returns:
            60 character "$2y$" hash
        """
        return self._derive(password, self.generate_settings(work_factor))

    def verify(
        self,
        password: str,
        stored_hash: str,
        legacy_fallback: Optional[LegacyVerifier] = None,
    ) -> bool:
        """
        Verify a password against a stored hash.

        Hashes that are not readable bcrypt hashes are handed to
        `legacy_fallback` when one is given. A bcrypt hash whose work factor
        is outside the bounds still verifies, so it can be upgraded.

        Raises:
            UnsupportedFormat: Hash is not bcrypt and no fallback was given
        """
        status = self.classify(stored_hash)
        if status in (HashStatus.NOT_BCRYPT, HashStatus.CORRUPT_BCRYPT):
            if legacy_fallback is None:
                raise UnsupportedFormat(f"Stored hash is not usable: {status.value}")
            logger.debug("Delegating to legacy verifier", status=status.value)
            return legacy_fallback.verify(password, stored_hash)

        try:
            computed = self._derive(password, stored_hash)
        except ValueError as e:
            logger.warning("bcrypt rejected stored hash", error=str(e))
            return False
        return hmac.compare_digest(computed.encode("utf-8"), stored_hash.encode("utf-8"))

    def classify(self, stored_hash: str) -> HashStatus:
        """
        Classify a stored hash against the configured bounds.

        Returns:
            HashStatus.NOT_BCRYPT for other formats,
            HashStatus.CORRUPT_BCRYPT when the work factor is unreadable,
            HashStatus.OUT_OF_BOUNDS_WORK_FACTOR when the bounds moved,
            HashStatus.CURRENT otherwise
        """
        if not stored_hash or stored_hash[:4] != FormatTag.MODERN_ADAPTIVE.value:
            return HashStatus.NOT_BCRYPT

        digits = stored_hash[4:6]
        work_factor = int(digits) if digits.isascii() and digits.isdigit() else 0
        if work_factor == 0:
            return HashStatus.CORRUPT_BCRYPT
        if work_factor != self.clamp_work_factor(work_factor):
            return HashStatus.OUT_OF_BOUNDS_WORK_FACTOR
        return HashStatus.CURRENT

    def _derive(self, password: str, salt: str) -> str:
        secret = password.encode("utf-8")[:MAX_SECRET_BYTES]
        return bcrypt.hashpw(secret, salt.encode("ascii")).decode("ascii")
