"""
totpgen Base32 - RFC 4648 codec for shared secrets.

Authenticator apps and QR codes usually drop the '=' padding and may
show the secret in lower case or in space-separated groups of four.
All of these decode to the same key.

Example:
    >>> from totpgen.base32 import decode, encode
    >>> decode("JBSWY3DPEHPK3PXP")
    b'Hello!\\xde\\xad\\xbe\\xef'
    >>> encode(b"Hello!\\xde\\xad\\xbe\\xef")
    'JBSWY3DPEHPK3PXP'
"""

import base64
import binascii

from totpgen.errors import InvalidEncoding

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

# Unpadded lengths (mod 8) that leave a partial byte
_INVALID_REMAINDERS = {1, 3, 6}


def _normalize(text: str) -> str:
    """Upper-case and drop whitespace used for grouping."""
    return "".join(text.split()).upper()


def decode(text: str) -> bytes:
    """
    Decode Base32 secret text into key bytes.

    Args:
        text: Base32 secret (case-insensitive, padding optional)

    Returns:
        Raw key bytes

    Raises:
        InvalidEncoding: If text is empty, contains characters outside
            the Base32 alphabet, or cannot form whole bytes
    """
    data = _normalize(text).rstrip("=")
    if not data:
        raise InvalidEncoding("Secret is empty")

    for ch in data:
        if ch not in ALPHABET:
            raise InvalidEncoding(f"Invalid Base32 character: {ch!r}", fragment=ch)

    if len(data) % 8 in _INVALID_REMAINDERS:
        raise InvalidEncoding(
            f"Invalid Base32 length: {len(data)} characters do not form whole bytes"
        )

    padded = data + "=" * (-len(data) % 8)
    try:
        return base64.b32decode(padded)
    except binascii.Error as e:
        raise InvalidEncoding(f"Invalid Base32 data: {e}") from e


def encode(data: bytes, padding: bool = False) -> str:
    """
    Encode key bytes as Base32 text.

    Args:
        data: Raw key bytes
        padding: Keep trailing '=' (default: stripped, as in otpauth URIs)

    Returns:
        Upper-case Base32 string
    """
    text = base64.b32encode(data).decode("ascii")
    return text if padding else text.rstrip("=")


def is_valid(text: str) -> bool:
    """True if text decodes to a non-empty key."""
    try:
        return len(decode(text)) > 0
    except InvalidEncoding:
        return False
