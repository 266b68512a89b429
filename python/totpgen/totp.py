"""
totpgen TOTP - Time-based One-Time Passwords (RFC 6238).

Compatible with Google Authenticator, Authy, Microsoft Authenticator, etc.

Example:
    >>> from totpgen.totp import TOTP
    >>> totp = TOTP.from_base32("JBSWY3DPEHPK3PXP")
    >>> code = totp.generate()
    >>> totp.verify(code)  # True
    >>> totp.seconds_remaining()  # 1..30
"""

import hmac
import math
import secrets
import time
from typing import Optional, Union

from totpgen import base32, hotp, uri
from totpgen.config import DEFAULT_PERIOD, TotpConfig, check_period
from totpgen.errors import InvalidParameter

Timestamp = Union[int, float]


def resolve_time(at_time: Optional[Timestamp]) -> Timestamp:
    """Injected timestamp, or the wall clock when None."""
    if at_time is None:
        return time.time()
    if not math.isfinite(at_time) or at_time < 0:
        raise InvalidParameter(
            f"Time must be finite and non-negative, got {at_time}", fragment="at_time"
        )
    return at_time


def counter_at(at_time: Optional[Timestamp] = None, period: int = DEFAULT_PERIOD) -> int:
    """
    Time step counter for a Unix timestamp.

    Args:
        at_time: Unix timestamp in seconds (default: current time)
        period: Time step in seconds

    Returns:
        floor(at_time / period)
    """
    check_period(period)
    return int(resolve_time(at_time) // period)


def seconds_remaining(at_time: Optional[Timestamp] = None, period: int = DEFAULT_PERIOD) -> int:
    """
    Seconds left in the current period, in [1, period].

    A timestamp on a period boundary starts a full new window, so the
    result is `period`, never 0.
    """
    check_period(period)
    return period - int(resolve_time(at_time)) % period


def generate(
    secret: bytes,
    config: TotpConfig = TotpConfig(),
    at_time: Optional[Timestamp] = None,
) -> str:
    """
    Generate the TOTP code for a point in time.

    Args:
        secret: Shared secret bytes
        config: Algorithm, digits and period
        at_time: Unix timestamp (default: current time)

    Returns:
        OTP code as string (zero-padded)

    Raises:
        InvalidKey: If secret is empty
        InvalidParameter: If at_time is negative or not finite
    """
    counter = counter_at(at_time, config.period)
    return hotp.generate(secret, counter, config.algorithm, config.digits)


def verify(
    code: str,
    secret: bytes,
    config: TotpConfig = TotpConfig(),
    at_time: Optional[Timestamp] = None,
    window: int = 1,
) -> bool:
    """
    Verify a TOTP code with a tolerance window.

    Args:
        code: User-provided code
        secret: Shared secret bytes
        config: Algorithm, digits and period
        at_time: Time to verify against (default: now)
        window: Number of periods to check before/after

    Returns:
        True if code is valid
    """
    counter = counter_at(at_time, config.period)

    # Check current and adjacent periods (handles clock skew)
    matched = False
    for offset in range(-window, window + 1):
        if counter + offset < 0:
            continue
        expected = hotp.generate(secret, counter + offset, config.algorithm, config.digits)
        matched |= hmac.compare_digest(str(code).encode("utf-8"), expected.encode("ascii"))
    return matched


class TOTP:
    """
    Time-based One-Time Password generator/verifier bound to one secret.

    The secret is kept only in memory and is never shown by repr().
    """

    def __init__(self, secret: bytes, config: Optional[TotpConfig] = None):
        """
        Initialize TOTP generator.

        Args:
            secret: Shared secret (typically 20 bytes)
            config: Code parameters (default: SHA1, 6 digits, 30 seconds)
        """
        self.secret = secret
        self.config = config or TotpConfig()

    def __repr__(self) -> str:
        return f"TOTP(config={self.config!r})"

    @classmethod
    def from_base32(cls, text: str, config: Optional[TotpConfig] = None) -> "TOTP":
        """Create from a Base32 secret as typed by a user."""
        return cls(base32.decode(text), config)

    @classmethod
    def from_uri(cls, text: str) -> "TOTP":
        """Create from an otpauth://totp/ provisioning URI."""
        parsed = uri.parse(text)
        return cls(parsed.key(), parsed.to_config())

    @classmethod
    def generate_secret(cls, length: int = 20) -> bytes:
        """
        Generate random secret for new 2FA setup.

        Args:
            length: Secret length in bytes (default: 20)

        Returns:
            Random secret bytes

        Raises:
            InvalidParameter: If length is not positive
        """
        if length < 1:
            raise InvalidParameter(f"Secret length must be positive, got {length}", fragment="length")
        return secrets.token_bytes(length)

    @classmethod
    def secret_to_base32(cls, secret: bytes) -> str:
        """Convert secret to unpadded Base32 for QR codes."""
        return base32.encode(secret)

    def counter(self, at_time: Optional[Timestamp] = None) -> int:
        return counter_at(at_time, self.config.period)

    def generate(self, at_time: Optional[Timestamp] = None) -> str:
        """Generate current TOTP code."""
        return generate(self.secret, self.config, at_time)

    def at(self, counter: int) -> str:
        """Code for an explicit time step counter."""
        return hotp.generate(self.secret, counter, self.config.algorithm, self.config.digits)

    def verify(self, code: str, at_time: Optional[Timestamp] = None, window: int = 1) -> bool:
        """Verify TOTP code with time window."""
        return verify(code, self.secret, self.config, at_time, window)

    def seconds_remaining(self, at_time: Optional[Timestamp] = None) -> int:
        return seconds_remaining(at_time, self.config.period)

    def provisioning_uri(self) -> str:
        """otpauth:// URI for QR code generation."""
        return uri.build(self.secret_to_base32(self.secret), self.config)
