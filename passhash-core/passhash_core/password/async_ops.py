"""
Async Password Hashing
======================
Async-safe hashing and verification on top of the default dispatcher.
"""

import asyncio
from typing import Optional, Tuple

from .hasher import get_cached_dispatcher


async def hash_password(password: str, work_factor: int = 0) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plain text password to hash
        work_factor: bcrypt cost, 0 for the configured default

    Returns:
        "$2y$" hash string (includes work factor, salt, and hash)
    """
    if not password:
        raise ValueError("Password cannot be empty")

    dispatcher = get_cached_dispatcher()
    loop = asyncio.get_running_loop()

    # Run in executor to avoid blocking the event loop
    return await loop.run_in_executor(None, dispatcher.hash_password, password, work_factor)


async def check_password(password: str, stored_hash: str) -> bool:
    """
    Verify a password against any supported stored hash.

    Args:
        password: Plain text password to verify
        stored_hash: Hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    if not password or not stored_hash:
        return False

    dispatcher = get_cached_dispatcher()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, dispatcher.check_password, password, stored_hash)


async def verify_and_upgrade(
    password: str,
    stored_hash: str,
) -> Tuple[bool, Optional[str]]:
    """
    Verify password and return new hash if upgrade is needed.

    Example:
        >>> valid, new_hash = await verify_and_upgrade(password, stored_hash)
        >>> if valid and new_hash:
        >>>     await update_user_password_hash(user_id, new_hash)

    Returns:
        Tuple of (is_valid, new_hash_or_none)
    """
    if not password or not stored_hash:
        return False, None

    dispatcher = get_cached_dispatcher()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, dispatcher.verify_and_upgrade, password, stored_hash)
