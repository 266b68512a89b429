"""
totpgen Session - per-session code rotation for polling displays.

A display polls on a fixed interval (e.g. once per second). Each poll
advances the session: the code is recomputed only when a period boundary
has been crossed, otherwise the cached code is returned with a fresh
countdown. Polling frequency therefore affects only countdown
responsiveness, never the code or the HMAC cost.

State is explicit and owned by one session; run several sessions side by
side to display several secrets.

Example:
    >>> from totpgen.session import TotpSession
    >>> session = TotpSession.from_text("JBSWY3DPEHPK3PXP")
    >>> tick = session.tick()
    >>> tick.code, tick.seconds_remaining
"""

import logging
from dataclasses import dataclass
from typing import Optional

from totpgen import base32, totp, uri
from totpgen.config import TotpConfig
from totpgen.errors import InvalidKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Last period seen and the code computed for it."""
    counter: Optional[int] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class Tick:
    """Outcome of one scheduler step."""
    state: SessionState
    code: str
    seconds_remaining: int
    changed: bool


def advance(
    state: SessionState,
    secret: bytes,
    config: TotpConfig,
    at_time: Optional[float] = None,
) -> Tick:
    """
    Advance session state to a point in time.

    Args:
        state: State returned by the previous step (SessionState() to start)
        secret: Shared secret bytes
        config: Code parameters
        at_time: Unix timestamp (default: current time)

    Returns:
        Tick with the new state; `changed` is True only when a new code
        was computed for a new period
    """
    now = totp.resolve_time(at_time)
    counter = totp.counter_at(now, config.period)
    remaining = totp.seconds_remaining(now, config.period)

    if counter == state.counter and state.code is not None:
        return Tick(state=state, code=state.code, seconds_remaining=remaining, changed=False)

    code = totp.generate(secret, config, now)
    logger.debug("Code rotated for period %d", counter)
    return Tick(
        state=SessionState(counter=counter, code=code),
        code=code,
        seconds_remaining=remaining,
        changed=True,
    )


class TotpSession:
    """
    One secret being displayed.

    Holds the secret in memory until clear() is called.
    """

    def __init__(self, secret: bytes, config: Optional[TotpConfig] = None):
        if not secret:
            raise InvalidKey("Key is empty")
        self._secret: Optional[bytes] = secret
        self.config = config or TotpConfig()
        self.state = SessionState()

    def __repr__(self) -> str:
        return f"TotpSession(config={self.config!r}, active={self.active})"

    @classmethod
    def from_text(cls, text: str, config: Optional[TotpConfig] = None) -> "TotpSession":
        """
        Start a session from user input.

        Args:
            text: Base32 secret or otpauth://totp/ URI
            config: Parameters for a bare secret; for a URI, the URI's own
                parameters are used

        Raises:
            OTPError: If the input is malformed
        """
        text = text.strip()
        if text.lower().startswith("otpauth:"):
            parsed = uri.parse(text)
            logger.info("Session started from provisioning URI (%s)", parsed.issuer or "no issuer")
            return cls(parsed.key(), parsed.to_config())
        logger.info("Session started from Base32 secret")
        return cls(base32.decode(text), config)

    @property
    def active(self) -> bool:
        return self._secret is not None

    def tick(self, at_time: Optional[float] = None) -> Tick:
        """
        Advance to at_time (default: now) and keep the new state.

        Raises:
            InvalidKey: If the session was cleared
        """
        if self._secret is None:
            raise InvalidKey("Session has been cleared")
        result = advance(self.state, self._secret, self.config, at_time)
        self.state = result.state
        return result

    def clear(self) -> None:
        """Forget the secret and the cached code."""
        self._secret = None
        self.state = SessionState()
        logger.info("Session cleared")
