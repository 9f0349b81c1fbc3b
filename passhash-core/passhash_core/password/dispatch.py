"""
Password Dispatch
=================
Routes a stored hash to the engine that understands its format.

Supported formats:
- $2y$ → bcrypt (current)
- $S$ → SHA-512 stretched hash
- $P$, $H$ → MD5 stretched hash (imported phpass/phpBB hashes)
- U$S$... → SHA-512 stretched hash of md5(password), for passwords
  that were migrated while still stored as bare md5 digests
"""

import hashlib
from typing import Callable, Dict, Optional, Tuple

import structlog

from ..exceptions import PasswordHashError
from .adaptive import AdaptiveHashEngine
from .legacy import LegacyHashEngine
from .models import FormatTag, PREDIGEST_MARKER, detect_format
from .utils import needs_rehash

logger = structlog.get_logger(__name__)

Verifier = Callable[[str, str], bool]


class PasswordDispatcher:
    """
    Verifies passwords against any supported stored hash.

    Args:
        legacy: Engine for "$S$", "$P$" and "$H$" hashes
        adaptive: Engine for "$2y$" hashes, also used for new hashes
    """

    def __init__(
        self,
        legacy: Optional[LegacyHashEngine] = None,
        adaptive: Optional[AdaptiveHashEngine] = None,
    ):
        self.legacy = legacy or LegacyHashEngine()
        self.adaptive = adaptive or AdaptiveHashEngine(self.legacy.config, self.legacy.random_source)
        self._verifiers: Dict[FormatTag, Verifier] = {
            FormatTag.MODERN_ADAPTIVE: self.adaptive.verify,
            FormatTag.LEGACY_SHA512: self.legacy.check_password,
            FormatTag.LEGACY_MD5: self.legacy.check_password,
        }

    def check_password(self, password: str, stored_hash: str) -> bool:
        """
        Check a password against a stored hash.

        Malformed and unrecognised hashes give False rather than an error.

        Args:
            password: Plain text password
            stored_hash: Hash as read from the account record

        Returns:
            True if the password matches
        """
        if not stored_hash:
            return False

        if stored_hash.startswith(PREDIGEST_MARKER):
            stored_hash = stored_hash[1:]
            password = hashlib.md5(password.encode("utf-8")).hexdigest()

        tag = detect_format(stored_hash)
        verifier = self._verifiers.get(tag)
        if verifier is None:
            logger.info("Unrecognised stored hash format", prefix=stored_hash[:4])
            return False

        try:
            return verifier(password, stored_hash)
        except PasswordHashError as e:
            logger.warning("Stored hash could not be checked", format=tag.name, error=str(e))
            return False

    def hash_password(self, password: str, work_factor: int = 0) -> str:
        """Hash a password with the preferred engine."""
        return self.adaptive.hash(password, work_factor)

    def needs_rehash(self, stored_hash: str) -> bool:
        return needs_rehash(stored_hash, self.adaptive)

    def verify_and_upgrade(self, password: str, stored_hash: str) -> Tuple[bool, Optional[str]]:
        """
        Verify a password and produce a replacement hash if one is due.

        This is the recommended function for login flows.

        Returns:
            Tuple of (is_valid, new_hash_or_none)
        """
        if not self.check_password(password, stored_hash):
            return False, None

        if self.needs_rehash(stored_hash):
            logger.info("Upgrading stored hash", status=self.adaptive.classify(stored_hash).value)
            return True, self.hash_password(password)

        return True, None
