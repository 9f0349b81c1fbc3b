"""
passhash-core
=============
Password hashing and verification with legacy format migration.
"""

__version__ = "0.1.0"

# Config
from passhash_core.config import HashConfig

# Errors
from passhash_core.exceptions import (
    PasswordHashError,
    MalformedSettings,
    CostOutOfRange,
    SaltTooShort,
    EncodingLengthMismatch,
    UnsupportedFormat,
    PasswordTooLong,
    ConfigurationError,
    EntropySourceFailure,
)

# Encoding
from passhash_core.encoding import encode64, char_index

# Password
from passhash_core.password import (
    FormatTag,
    HashStatus,
    detect_format,
    LegacyHashEngine,
    AdaptiveHashEngine,
    LegacyVerifier,
    CallableVerifier,
    DigestVerifier,
    FallbackChain,
    PasswordDispatcher,
    needs_rehash,
    legacy_hash_status,
    hash_password,
    check_password,
    verify_and_upgrade,
    hash_password_sync,
    check_password_sync,
)

__all__ = [
    "__version__",
    "HashConfig",
    "PasswordHashError",
    "MalformedSettings",
    "CostOutOfRange",
    "SaltTooShort",
    "EncodingLengthMismatch",
    "UnsupportedFormat",
    "PasswordTooLong",
    "ConfigurationError",
    "EntropySourceFailure",
    "encode64",
    "char_index",
    "FormatTag",
    "HashStatus",
    "detect_format",
    "LegacyHashEngine",
    "AdaptiveHashEngine",
    "LegacyVerifier",
    "CallableVerifier",
    "DigestVerifier",
    "FallbackChain",
    "PasswordDispatcher",
    "needs_rehash",
    "legacy_hash_status",
    "hash_password",
    "check_password",
    "verify_and_upgrade",
    "hash_password_sync",
    "check_password_sync",
]
