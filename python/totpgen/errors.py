"""
totpgen errors - one exception type per failure kind.

Every error is raised at the call that caused it and carries:
    kind:     ErrorKind, for callers that map failures to messages
    fragment: the offending piece of input, when one is useful

Secrets are never placed in a fragment; only the bad character or
parameter name is.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of failure kinds."""
    INVALID_ENCODING = "invalid_encoding"
    INVALID_KEY = "invalid_key"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    MISSING_SECRET = "missing_secret"
    INVALID_PARAMETER = "invalid_parameter"


class OTPError(ValueError):
    """Base class for every totpgen failure."""

    kind: ErrorKind

    def __init__(self, message: str, fragment: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.fragment = fragment

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "fragment": self.fragment,
        }


class InvalidEncoding(OTPError):
    """Secret text is not valid Base32."""
    kind = ErrorKind.INVALID_ENCODING


class InvalidKey(OTPError):
    """Key is empty after decoding."""
    kind = ErrorKind.INVALID_KEY


class UnsupportedScheme(OTPError):
    """URI is not an otpauth://totp/ URI."""
    kind = ErrorKind.UNSUPPORTED_SCHEME


class MissingSecret(OTPError):
    """URI has no secret parameter, or it is empty."""
    kind = ErrorKind.MISSING_SECRET


class InvalidParameter(OTPError):
    """An algorithm, digits, period or issuer value is malformed."""
    kind = ErrorKind.INVALID_PARAMETER
