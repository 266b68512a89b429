"""
totpgen config - defaults and the immutable TotpConfig value.

One TotpConfig is paired with one secret for the life of a session.
Issuer and label are cosmetic: they appear in provisioning URIs and
displays but never change the generated code.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Union

from totpgen.errors import InvalidParameter
from totpgen.hotp import Algorithm, check_digits

DEFAULT_ALGORITHM = Algorithm.SHA1
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_ISSUER = "TOTP Generator"
DEFAULT_LABEL = "User"


def check_period(period: int) -> int:
    """Validate time step; returns it unchanged."""
    if isinstance(period, bool) or not isinstance(period, int):
        raise InvalidParameter(f"Period must be an integer, got {period!r}", fragment="period")
    if period <= 0:
        raise InvalidParameter(f"Period must be positive, got {period}", fragment="period")
    return period


@dataclass(frozen=True)
class TotpConfig:
    """
    Code generation parameters.

    Args:
        algorithm: SHA1, SHA256 or SHA512 (name strings accepted)
        digits: Code length, 6 to 8
        period: Time step in seconds
        issuer: Service name shown by authenticator apps
        label: Account name shown by authenticator apps

    Raises:
        InvalidParameter: If algorithm, digits or period is invalid
    """
    algorithm: Algorithm = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    issuer: str = DEFAULT_ISSUER
    label: str = DEFAULT_LABEL

    def __post_init__(self):
        object.__setattr__(self, "algorithm", Algorithm.from_name(self.algorithm))
        check_digits(self.digits)
        check_period(self.period)

    def with_overrides(self, **changes: Union[str, int, Algorithm, None]) -> "TotpConfig":
        """Copy with the given fields replaced; None values are skipped."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "algorithm": self.algorithm.value,
            "digits": self.digits,
            "period": self.period,
            "issuer": self.issuer,
            "label": self.label,
        }
