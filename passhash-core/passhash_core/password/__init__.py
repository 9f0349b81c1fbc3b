"""
Password Hashing
================
Self-describing password hashes with migration between formats.

- New passwords are hashed with bcrypt ("$2y$")
- On login, detect the format from the hash prefix:
  - $2y$ → bcrypt
  - $S$ → SHA-512 stretched hash
  - $P$, $H$ → MD5 stretched hash
- If a non-current hash verified, rehash with bcrypt (transparent upgrade)
"""

from .models import FormatTag, HashStatus, detect_format
from .legacy import LegacyHashEngine, parse_count_log2
from .adaptive import AdaptiveHashEngine
from .fallback import LegacyVerifier, CallableVerifier, DigestVerifier, FallbackChain
from .dispatch import PasswordDispatcher
from .utils import needs_rehash, legacy_hash_status
from .hasher import get_config, get_cached_dispatcher, hash_password_sync, check_password_sync
from .async_ops import hash_password, check_password, verify_and_upgrade

__all__ = [
    # Models
    "FormatTag",
    "HashStatus",
    "detect_format",
    # Engines
    "LegacyHashEngine",
    "parse_count_log2",
    "AdaptiveHashEngine",
    # Legacy verifiers
    "LegacyVerifier",
    "CallableVerifier",
    "DigestVerifier",
    "FallbackChain",
    # Dispatch
    "PasswordDispatcher",
    # Utils
    "needs_rehash",
    "legacy_hash_status",
    # Hasher
    "get_config",
    "get_cached_dispatcher",
    "hash_password_sync",
    "check_password_sync",
    # Async Operations
    "hash_password",
    "check_password",
    "verify_and_upgrade",
]
