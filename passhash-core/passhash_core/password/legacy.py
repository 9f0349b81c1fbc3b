"""
Legacy Stretched Hash
=====================
Salted, iterated digest hashing in the portable phpass layout.

A hash is a 12 character settings string followed by the encoded digest:

    $S$ C SSSSSSSS <digest>
     |  |    |
     |  |    +-- 8 character salt
     |  +------- log2 of the iteration count, as an alphabet index
     +---------- format tag

New hashes always use SHA-512. MD5 ("$P$" / "$H$") is only verified, for
hashes imported from older systems.
"""

import hashlib
import hmac
import math
import secrets
from typing import Optional

import structlog

from ..config import HashConfig, LEGACY_HASH_LENGTH
from ..encoding import ITOA64, char_index, encode64
from ..entropy import RandomBytes, random_bytes
from ..exceptions import (
    CostOutOfRange,
    EncodingLengthMismatch,
    MalformedSettings,
    PasswordTooLong,
    SaltTooShort,
    UnsupportedFormat,
)
from .models import FormatTag, detect_format

logger = structlog.get_logger(__name__)

SETTINGS_LENGTH = 12
SALT_BYTES = 6

# Digest used for each legacy format
ALGORITHMS = {
    FormatTag.LEGACY_SHA512: "sha512",
    FormatTag.LEGACY_MD5: "md5",
}


def parse_count_log2(setting: str) -> int:
    """Read the iteration exponent stored at offset 3 of a settings string."""
    return char_index(setting[3:4])


class LegacyHashEngine:
    """
    Stretched-hash engine for "$S$", "$P$" and "$H$" hashes.

    Args:
        config: Cost bounds and password limits
        random_source: Callable returning secure random bytes
    """

    def __init__(
        self,
        config: Optional[HashConfig] = None,
        random_source: RandomBytes = secrets.token_bytes,
    ):
        self.config = config or HashConfig()
        self.random_source = random_source

    def clamp_cost(self, count_log2: int) -> int:
        return max(self.config.legacy_min_cost, min(count_log2, self.config.legacy_max_cost))

    def generate_settings(self, count_log2: int) -> str:
        """
        Build a fresh SHA-512 settings string.

        Args:
            count_log2: Requested iteration exponent, clamped to the bounds

        Returns:
            12 character settings string starting with "$S$"
        """
        count_log2 = self.clamp_cost(count_log2)
        salt = random_bytes(SALT_BYTES, self.random_source)
        return FormatTag.LEGACY_SHA512.value + ITOA64[count_log2] + encode64(salt, SALT_BYTES)

    def crypt(self, algorithm: str, password: str, setting: str) -> str:
        """
        Stretch a password with the salt and cost taken from `setting`.

        Args:
            algorithm: hashlib digest name ("sha512" or "md5")
            password: Plain text password
            setting: Settings string or a complete stored hash

        Returns:
            Encoded hash, at most 55 characters

        Raises:
            PasswordTooLong: Password exceeds the configured maximum
            MalformedSettings: Settings lack the '$' framing
            CostOutOfRange: Iteration exponent outside the bounds
            SaltTooShort: Fewer than 8 salt characters
            EncodingLengthMismatch: Encoded output has an unexpected size
        """
        secret = password.encode("utf-8")
        if len(secret) > self.config.max_password_length:
            raise PasswordTooLong(
                f"Password longer than {self.config.max_password_length} bytes"
            )

        setting = setting[:SETTINGS_LENGTH]
        if len(setting) < 3 or setting[0] != "$" or setting[2] != "$":
            raise MalformedSettings("Settings must start with a '$x$' tag")

        count_log2 = parse_count_log2(setting)
        if count_log2 < self.config.legacy_min_cost or count_log2 > self.config.legacy_max_cost:
            raise CostOutOfRange(f"Iteration exponent {count_log2} out of range", cost=count_log2)

        salt = setting[4:12]
        if len(salt) != 8:
            raise SaltTooShort("Settings must carry an 8 character salt")

        digest = hashlib.new(algorithm, salt.encode("utf-8") + secret).digest()
        for _ in range(1 << count_log2):
            digest = hashlib.new(algorithm, digest + secret).digest()

        output = setting + encode64(digest, len(digest))
        expected = SETTINGS_LENGTH + math.ceil(8 * len(digest) / 6)
        if len(output) != expected:
            raise EncodingLengthMismatch(
                "Encoded hash has unexpected length",
                expected=expected,
                actual=len(output),
            )
        return output[:LEGACY_HASH_LENGTH]

    def hash_password(self, password: str, count_log2: Optional[int] = None) -> str:
        """Hash a password as "$S$" with the configured or given cost."""
        if count_log2 is None:
            count_log2 = self.config.legacy_default_cost
        return self.crypt("sha512", password, self.generate_settings(count_log2))

    def check_password(self, password: str, stored_hash: str) -> bool:
        """
        Verify a password against a legacy stored hash.

        Raises:
            UnsupportedFormat: The hash is not a legacy format
        """
        algorithm = ALGORITHMS.get(detect_format(stored_hash))
        if algorithm is None:
            raise UnsupportedFormat("Not a legacy stretched hash")
        computed = self.crypt(algorithm, password, stored_hash)
        return hmac.compare_digest(computed.encode("utf-8"), stored_hash.encode("utf-8"))

    def needs_new_hash(self, stored_hash: str) -> bool:
        """
        Strict legacy status: whether a stored hash should be regenerated.

        Anything but a full-length "$S$" hash at the configured default cost
        needs a new hash.
        """
        if detect_format(stored_hash) is not FormatTag.LEGACY_SHA512:
            return True
        if parse_count_log2(stored_hash) != self.config.legacy_default_cost:
            logger.debug(
                "Legacy hash cost differs from default",
                cost=parse_count_log2(stored_hash),
                default=self.config.legacy_default_cost,
            )
            return True
        return len(stored_hash) != LEGACY_HASH_LENGTH
