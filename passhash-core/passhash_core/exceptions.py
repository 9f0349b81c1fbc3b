"""
Password Hashing Exceptions
===========================
Exception classes raised by the hash engines.
"""

from typing import Optional


class PasswordHashError(Exception):
    """Base class for recoverable hashing and parsing failures."""
    pass


class MalformedSettings(PasswordHashError):
    """Raised when a settings string lacks the '$x$' framing."""
    pass


class CostOutOfRange(PasswordHashError):
    """Raised when a parsed cost parameter falls outside the configured bounds."""

    def __init__(self, message: str, cost: Optional[int] = None):
        super().__init__(message)
        self.cost = cost


class SaltTooShort(PasswordHashError):
    """Raised when the embedded salt is shorter than 8 characters."""
    pass


class EncodingLengthMismatch(PasswordHashError):
    """Raised when the encoded digest does not have the expected length."""

    def __init__(self, message: str, expected: int = 0, actual: int = 0):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnsupportedFormat(PasswordHashError):
    """Raised when a stored hash has no matching engine and no fallback."""
    pass


class PasswordTooLong(PasswordHashError):
    """Raised when a password exceeds the configured maximum length."""
    pass


class ConfigurationError(PasswordHashError):
    """Raised when configured bounds are inconsistent."""
    pass


class EntropySourceFailure(Exception):
    """
    Raised when the random source cannot deliver the requested bytes.

    Not a PasswordHashError: callers that collapse hashing failures into
    a boolean must still see this one.
    """
    pass
