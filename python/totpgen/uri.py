"""
totpgen URI - otpauth:// provisioning URIs.

Format (Google Authenticator Key URI):
    otpauth://totp/<issuer>:<account>?secret=<base32>&issuer=<issuer>
        &algorithm=<SHA1|SHA256|SHA512>&digits=<6-8>&period=<seconds>

Only `secret` is required. Optional parameters that are present but
malformed are rejected rather than replaced by defaults.

Example:
    >>> from totpgen.uri import parse
    >>> p = parse("otpauth://totp/Example:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=Example")
    >>> p.secret, p.issuer, p.digits
    ('JBSWY3DPEHPK3PXP', 'Example', 6)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from totpgen import base32
from totpgen.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_ISSUER,
    DEFAULT_LABEL,
    DEFAULT_PERIOD,
    TotpConfig,
    check_period,
)
from totpgen.errors import InvalidParameter, MissingSecret, UnsupportedScheme
from totpgen.hotp import Algorithm, check_digits

SCHEME = "otpauth://"
OTP_TYPE = "totp"


@dataclass(frozen=True)
class ProvisioningURI:
    """Fields extracted from an otpauth:// URI."""
    secret: str = field(repr=False)
    label: str = ""
    issuer: Optional[str] = None
    algorithm: Algorithm = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD

    def key(self) -> bytes:
        """Decode the Base32 secret into key bytes."""
        return base32.decode(self.secret)

    def to_config(self) -> TotpConfig:
        """Build a TotpConfig, falling back to defaults for cosmetic fields."""
        return TotpConfig(
            algorithm=self.algorithm,
            digits=self.digits,
            period=self.period,
            issuer=self.issuer or DEFAULT_ISSUER,
            label=self.label or DEFAULT_LABEL,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, without the secret."""
        return {
            "label": self.label,
            "issuer": self.issuer,
            "algorithm": self.algorithm.value,
            "digits": self.digits,
            "period": self.period,
        }


def _parse_int(name: str, value: str) -> int:
    """Parse a decimal query value or fail naming the parameter."""
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        raise InvalidParameter(f"Invalid value for {name}: {value!r}", fragment=name)
    return int(value)


def _split_label(path: str):
    """
    Split a raw 'Issuer:account' path into (issuer, account).

    A literal ':' separates before unquoting, so an issuer holding an
    encoded colon survives. Without one, an encoded separator (%3A) is used.
    """
    if ":" in path:
        issuer, account = (unquote(part) for part in path.split(":", 1))
    else:
        label = unquote(path)
        if ":" not in label:
            return None, label.strip()
        issuer, account = label.split(":", 1)
    return issuer.strip() or None, account.strip()


def parse(uri: str) -> ProvisioningURI:
    """
    Parse an otpauth://totp/ provisioning URI.

    Args:
        uri: URI text, e.g. decoded from a QR code

    Returns:
        ProvisioningURI; the secret is still Base32 text

    Raises:
        UnsupportedScheme: If the URI is not otpauth://totp/
        MissingSecret: If the secret parameter is absent or empty
        InvalidParameter: If issuer, algorithm, digits or period is malformed
    """
    uri = uri.strip()
    if not uri.startswith(SCHEME):
        raise UnsupportedScheme("Not an otpauth:// URI", fragment=uri.split(":", 1)[0])

    parsed = urlsplit(uri)
    if parsed.netloc.lower() != OTP_TYPE:
        raise UnsupportedScheme(
            f"Unsupported OTP type {parsed.netloc!r}, only totp is supported",
            fragment=parsed.netloc,
        )

    label_issuer, label = _split_label(parsed.path.lstrip("/"))

    # First occurrence of each parameter wins
    params: Dict[str, str] = {}
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        params.setdefault(key.lower(), value)

    secret = params.get("secret", "").strip()
    if not secret:
        raise MissingSecret("No secret found in URI", fragment="secret")

    issuer = params.get("issuer", "").strip() or None
    if issuer and label_issuer and issuer != label_issuer:
        raise InvalidParameter(
            "Issuer in label and issuer parameter must be equal", fragment="issuer"
        )

    algorithm = DEFAULT_ALGORITHM
    if "algorithm" in params:
        algorithm = Algorithm.from_name(params["algorithm"])

    digits = DEFAULT_DIGITS
    if "digits" in params:
        digits = check_digits(_parse_int("digits", params["digits"]))

    period = DEFAULT_PERIOD
    if "period" in params:
        period = check_period(_parse_int("period", params["period"]))

    return ProvisioningURI(
        secret=secret,
        label=label,
        issuer=issuer or label_issuer,
        algorithm=algorithm,
        digits=digits,
        period=period,
    )


def build(secret: str, config: TotpConfig = TotpConfig()) -> str:
    """
    Build a provisioning URI for QR code generation.

    Args:
        secret: Base32 secret text
        config: Code parameters, issuer and label

    Returns:
        otpauth://totp/ URI
    """
    label = quote(config.label, safe="@")
    if config.issuer:
        label = f"{quote(config.issuer, safe='')}:{label}"

    params = {"secret": secret.replace(" ", "").upper().rstrip("=")}
    if config.issuer:
        params["issuer"] = config.issuer
    params["algorithm"] = config.algorithm.value
    params["digits"] = str(config.digits)
    params["period"] = str(config.period)

    return f"{SCHEME}{OTP_TYPE}/{label}?{urlencode(params, quote_via=quote)}"
