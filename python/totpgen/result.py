"""
totpgen Result - tagged success/failure values.

Collaborators that prefer not to handle exceptions (UI loops, request
handlers) can use the try_* functions, which return a Result instead of
raising. Only OTPError is converted; programming errors still raise.

Example:
    >>> from totpgen.result import try_decode
    >>> r = try_decode("not base32!")
    >>> r.ok, r.kind
    (False, <ErrorKind.INVALID_ENCODING: 'invalid_encoding'>)
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from totpgen import base32, totp, uri
from totpgen.config import TotpConfig
from totpgen.errors import ErrorKind, OTPError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an OTPError, never both."""
    value: Optional[T] = None
    error: Optional[OTPError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: OTPError) -> "Result[T]":
        return cls(error=error)

    @classmethod
    def capture(cls, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
        """Call fn, turning a raised OTPError into a failure value."""
        try:
            return cls.success(fn(*args, **kwargs))
        except OTPError as e:
            return cls.failure(e)


def try_decode(text: str) -> Result[bytes]:
    """Base32 decode as a Result."""
    return Result.capture(base32.decode, text)


def try_parse(text: str) -> Result[uri.ProvisioningURI]:
    """Provisioning URI parse as a Result."""
    return Result.capture(uri.parse, text)


def try_generate(
    secret: bytes,
    config: TotpConfig = TotpConfig(),
    at_time: Optional[float] = None,
) -> Result[str]:
    """TOTP generation as a Result."""
    return Result.capture(totp.generate, secret, config, at_time)
