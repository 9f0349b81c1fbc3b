"""
Password Hashing Configuration
==============================
Cost bounds and defaults for each hash family.
"""

import os
from dataclasses import dataclass, replace

from .exceptions import ConfigurationError

# Adaptive (bcrypt) work factor
DEFAULT_WORK_FACTOR = 10
MIN_WORK_FACTOR = 4
MAX_WORK_FACTOR = 31

# Legacy stretched hash, log2 of the iteration count
LEGACY_DEFAULT_COST = 15
LEGACY_MIN_COST = 7
LEGACY_MAX_COST = 30

# Stored legacy hashes are truncated to this many characters
LEGACY_HASH_LENGTH = 55

MAX_PASSWORD_LENGTH = 512


@dataclass(frozen=True)
class HashConfig:
    """Immutable cost configuration shared by the hash engines."""
    default_work_factor: int = DEFAULT_WORK_FACTOR
    min_work_factor: int = MIN_WORK_FACTOR
    max_work_factor: int = MAX_WORK_FACTOR
    legacy_default_cost: int = LEGACY_DEFAULT_COST
    legacy_min_cost: int = LEGACY_MIN_COST
    legacy_max_cost: int = LEGACY_MAX_COST
    max_password_length: int = MAX_PASSWORD_LENGTH

    def __post_init__(self):
        if not MIN_WORK_FACTOR <= self.min_work_factor <= self.max_work_factor <= MAX_WORK_FACTOR:
            raise ConfigurationError(
                f"Work factor bounds [{self.min_work_factor}, {self.max_work_factor}] "
                f"must lie within [{MIN_WORK_FACTOR}, {MAX_WORK_FACTOR}]"
            )
        if not LEGACY_MIN_COST <= self.legacy_min_cost <= self.legacy_max_cost <= LEGACY_MAX_COST:
            raise ConfigurationError(
                f"Legacy cost bounds [{self.legacy_min_cost}, {self.legacy_max_cost}] "
                f"must lie within [{LEGACY_MIN_COST}, {LEGACY_MAX_COST}]"
            )
        if self.default_work_factor <= 0:
            raise ConfigurationError("Default work factor must be positive")
        if self.max_password_length <= 0:
            raise ConfigurationError("Maximum password length must be positive")

    def with_bounds(self, **changes) -> "HashConfig":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "HashConfig":
        """Build a config from PASSHASH_* environment variables."""
        return cls(
            default_work_factor=_env_int("PASSHASH_DEFAULT_WORK_FACTOR", DEFAULT_WORK_FACTOR),
            min_work_factor=_env_int("PASSHASH_MIN_WORK_FACTOR", MIN_WORK_FACTOR),
            max_work_factor=_env_int("PASSHASH_MAX_WORK_FACTOR", MAX_WORK_FACTOR),
            legacy_default_cost=_env_int("PASSHASH_LEGACY_DEFAULT_COST", LEGACY_DEFAULT_COST),
            legacy_min_cost=_env_int("PASSHASH_LEGACY_MIN_COST", LEGACY_MIN_COST),
            legacy_max_cost=_env_int("PASSHASH_LEGACY_MAX_COST", LEGACY_MAX_COST),
            max_password_length=_env_int("PASSHASH_MAX_PASSWORD_LENGTH", MAX_PASSWORD_LENGTH),
        )


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, str(default))
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
