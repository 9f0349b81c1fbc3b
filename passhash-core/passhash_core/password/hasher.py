"""
Password Hasher
===============
Default engines, configured from the environment.
"""

from functools import lru_cache

from ..config import HashConfig
from .adaptive import AdaptiveHashEngine
from .dispatch import PasswordDispatcher
from .legacy import LegacyHashEngine


@lru_cache(maxsize=1)
def get_config() -> HashConfig:
    """Get the environment-derived config, read once per process."""
    return HashConfig.from_env()


@lru_cache(maxsize=1)
def get_cached_dispatcher() -> PasswordDispatcher:
    """Get cached dispatcher instance."""
    config = get_config()
    return PasswordDispatcher(LegacyHashEngine(config), AdaptiveHashEngine(config))


def hash_password_sync(password: str, work_factor: int = 0) -> str:
    """Synchronous version of hash_password (use async version when possible)."""
    if not password:
        raise ValueError("Password cannot be empty")
    return get_cached_dispatcher().hash_password(password, work_factor)


def check_password_sync(password: str, stored_hash: str) -> bool:
    """Synchronous version of check_password (use async version when possible)."""
    if not password or not stored_hash:
        return False
    return get_cached_dispatcher().check_password(password, stored_hash)
