"""
totpgen - Authenticator-compatible TOTP codes (RFC 6238 / RFC 4226)

Turns a shared Base32 secret, or an otpauth:// provisioning URI, into the
rotating numeric codes shown by authenticator apps.

Usage:
    from totpgen import TOTP, TotpSession

    # One-off code
    totp = TOTP.from_base32("JBSWY3DPEHPK3PXP")
    code = totp.generate()
    left = totp.seconds_remaining()

    # Polling display: code recomputed once per period
    session = TotpSession.from_text("otpauth://totp/Example:alice?secret=JBSWY3DPEHPK3PXP")
    tick = session.tick()

Security:
    Secrets live only in memory and are never logged.
"""

__version__ = "0.1.0"
__license__ = "CC0-1.0"

from totpgen.errors import (
    ErrorKind,
    OTPError,
    InvalidEncoding,
    InvalidKey,
    UnsupportedScheme,
    MissingSecret,
    InvalidParameter,
)
from totpgen.hotp import Algorithm
from totpgen.config import TotpConfig
from totpgen.uri import ProvisioningURI
from totpgen.totp import TOTP, counter_at, seconds_remaining
from totpgen.result import Result, try_decode, try_parse, try_generate
from totpgen.session import SessionState, Tick, TotpSession, advance

__all__ = [
    # Errors
    "ErrorKind",
    "OTPError",
    "InvalidEncoding",
    "InvalidKey",
    "UnsupportedScheme",
    "MissingSecret",
    "InvalidParameter",
    # Configuration
    "Algorithm",
    "TotpConfig",
    # Codes
    "TOTP",
    "counter_at",
    "seconds_remaining",
    # Provisioning
    "ProvisioningURI",
    # Results
    "Result",
    "try_decode",
    "try_parse",
    "try_generate",
    # Sessions
    "SessionState",
    "Tick",
    "TotpSession",
    "advance",
]
