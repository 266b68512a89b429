"""
totpgen HOTP - HMAC-based One-Time Passwords (RFC 4226).

Pure functions: identical inputs always give identical codes.

Example:
    >>> from totpgen.hotp import generate
    >>> generate(b"12345678901234567890", 0)
    '755224'
"""

import hashlib
import hmac
import struct
from enum import Enum
from typing import Union

from totpgen.errors import InvalidKey, InvalidParameter

MIN_DIGITS = 6
MAX_DIGITS = 8
MAX_COUNTER = 2**64 - 1


class Algorithm(Enum):
    """Hash algorithms allowed for the HMAC."""
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digestmod(self):
        """hashlib constructor for this algorithm."""
        return _DIGESTS[self]

    @classmethod
    def from_name(cls, name: Union[str, "Algorithm"]) -> "Algorithm":
        """
        Look up an algorithm by name, ignoring case and dashes.

        Raises:
            InvalidParameter: If the name is not SHA1, SHA256 or SHA512
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper().replace("-", "")
        try:
            return cls(key)
        except ValueError:
            raise InvalidParameter(
                f"Unsupported algorithm {name!r}, must be SHA1, SHA256 or SHA512",
                fragment="algorithm",
            ) from None


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}


def check_digits(digits: int) -> int:
    """Validate code length; returns it unchanged."""
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidParameter(f"Digits must be an integer, got {digits!r}", fragment="digits")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidParameter(
            f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}",
            fragment="digits",
        )
    return digits


def generate(
    key: bytes,
    counter: int,
    algorithm: Algorithm = Algorithm.SHA1,
    digits: int = 6,
) -> str:
    """
    Compute the HOTP code for a counter.

    Args:
        key: Shared secret bytes
        counter: Moving factor, 0 <= counter < 2**64
        algorithm: HMAC hash algorithm
        digits: Code length (6-8)

    Returns:
        Code as zero-padded decimal string of length `digits`

    Raises:
        InvalidKey: If key is empty
        InvalidParameter: If counter or digits are out of range
    """
    if not key:
        raise InvalidKey("Key is empty")
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidParameter(f"Counter out of range: {counter}", fragment="counter")
    check_digits(digits)

    # Counter as 8-byte big-endian
    counter_bytes = struct.pack(">Q", counter)
    h = hmac.new(key, counter_bytes, Algorithm.from_name(algorithm).digestmod).digest()

    # Dynamic truncation
    offset = h[-1] & 0x0F
    code_int = struct.unpack(">I", h[offset : offset + 4])[0] & 0x7FFFFFFF

    return str(code_int % (10**digits)).zfill(digits)


def verify(
    code: str,
    key: bytes,
    counter: int,
    algorithm: Algorithm = Algorithm.SHA1,
    digits: int = 6,
) -> bool:
    """
    Check a code against the expected HOTP value (constant time).

    Returns:
        True if code matches
    """
    expected = generate(key, counter, algorithm, digits)
    return hmac.compare_digest(str(code).encode("utf-8"), expected.encode("ascii"))
