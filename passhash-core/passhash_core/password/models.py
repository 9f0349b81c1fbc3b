"""
Password Hash Models
====================
Format tags and classification results for stored hashes.
"""

from enum import Enum


class FormatTag(str, Enum):
    """Hash formats, identified by their fixed-offset prefix."""
    LEGACY_SHA512 = "$S$"
    LEGACY_MD5 = "$P$"
    MODERN_ADAPTIVE = "$2y$"
    UNKNOWN = ""


# phpBB wrote "$H$" for the same md5 stretched format
LEGACY_MD5_ALIASES = ("$P$", "$H$")

# Marks a password that was md5'd once before being stretched
PREDIGEST_MARKER = "U$"


class HashStatus(str, Enum):
    """Adaptive engine view of a stored hash."""
    CURRENT = "current"
    NOT_BCRYPT = "not_bcrypt"
    CORRUPT_BCRYPT = "corrupt_bcrypt"
    OUT_OF_BOUNDS_WORK_FACTOR = "out_of_bounds_work_factor"


def detect_format(stored_hash: str) -> FormatTag:
    """
    Identify the format of a stored hash from its prefix.

    Args:
        stored_hash: Hash as read from storage

    Returns:
        Matching FormatTag, FormatTag.UNKNOWN otherwise
    """
    if not stored_hash:
        return FormatTag.UNKNOWN
    if stored_hash[:4] == FormatTag.MODERN_ADAPTIVE.value:
        return FormatTag.MODERN_ADAPTIVE

    prefix = stored_hash[:3]
    if prefix == FormatTag.LEGACY_SHA512.value:
        return FormatTag.LEGACY_SHA512
    if prefix in LEGACY_MD5_ALIASES:
        return FormatTag.LEGACY_MD5
    return FormatTag.UNKNOWN
