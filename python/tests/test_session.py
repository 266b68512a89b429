"""Tests for totpgen session scheduling."""

import logging
import pytest
from totpgen import hotp
from totpgen.config import TotpConfig
from totpgen.errors import InvalidEncoding, InvalidKey, UnsupportedScheme
from totpgen.session import SessionState, TotpSession, advance
from totpgen.totp import generate

KEY = b"12345678901234567890"
START = 1111111110  # on a 30-second boundary


class TestAdvance:
    """Test advance()."""

    def test_first_step_computes(self):
        tick = advance(SessionState(), KEY, TotpConfig(), 59)
        assert tick.changed
        assert tick.code == "287082"
        assert tick.seconds_remaining == 1
        assert tick.state == SessionState(counter=1, code="287082")

    def test_same_period_reuses_code(self, monkeypatch):
        """No recomputation within a period."""
        first = advance(SessionState(), KEY, TotpConfig(), 31)

        def fail(*args, **kwargs):
            raise AssertionError("code recomputed mid-period")

        monkeypatch.setattr(hotp, "generate", fail)
        second = advance(first.state, KEY, TotpConfig(), 45)
        assert not second.changed
        assert second.code == first.code
        assert second.state is first.state
        assert second.seconds_remaining == 15

    def test_boundary_recomputes(self):
        first = advance(SessionState(), KEY, TotpConfig(), 59)
        second = advance(first.state, KEY, TotpConfig(), 60)
        assert second.changed
        assert second.code == generate(KEY, TotpConfig(), 60)
        assert second.seconds_remaining == 30

    def test_ninety_second_run(self):
        """Code changes exactly at the two boundaries; countdown steps by 1."""
        state = SessionState()
        codes = []
        remaining = []
        changes = 0
        for second in range(90):
            tick = advance(state, KEY, TotpConfig(), START + second)
            if second > 0 and tick.changed:
                changes += 1
            state = tick.state
            codes.append(tick.code)
            remaining.append(tick.seconds_remaining)

        assert changes == 2
        assert len(set(codes[0:30])) == 1
        assert len(set(codes[30:60])) == 1
        assert len(set(codes[60:90])) == 1
        assert codes[29] != codes[30]
        assert codes[59] != codes[60]

        for prev, cur in zip(remaining, remaining[1:]):
            if cur == 30:
                assert prev == 1
            else:
                assert cur == prev - 1

    def test_sub_second_polling(self):
        """Polling faster than once per second gives the same codes."""
        state = SessionState()
        changes = 0
        for step in range(0, 600):
            tick = advance(state, KEY, TotpConfig(), START + step / 10)
            changes += tick.changed
            state = tick.state
        assert changes == 2  # first tick plus boundary at +30

    def test_logs_counter_not_code(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="totpgen.session"):
            tick = advance(SessionState(), KEY, TotpConfig(), 59)
        assert "period 1" in caplog.text
        assert tick.code not in caplog.text


class TestTotpSession:
    """Test TotpSession."""

    def test_tick(self):
        session = TotpSession(KEY)
        tick = session.tick(59)
        assert tick.code == "287082"
        assert session.state.counter == 1

    def test_independent_sessions(self):
        """Sessions do not share state."""
        a = TotpSession(KEY)
        b = TotpSession(b"another shared secret")
        a.tick(START)
        assert b.state == SessionState()
        tick = b.tick(START + 1)
        assert tick.changed
        assert a.state.code != b.state.code

    def test_from_base32(self):
        session = TotpSession.from_text("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", TotpConfig(digits=8))
        assert session.tick(59).code == "94287082"

    def test_from_uri(self):
        session = TotpSession.from_text(
            " otpauth://totp/ACME:jo?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ&period=60 "
        )
        assert session.config.period == 60
        assert session.config.issuer == "ACME"
        assert session.tick(119).seconds_remaining == 1

    def test_from_hotp_uri(self):
        with pytest.raises(UnsupportedScheme):
            TotpSession.from_text("otpauth://hotp/ACME:jo?secret=JBSWY3DPEHPK3PXP")

    def test_from_bad_secret(self):
        with pytest.raises(InvalidEncoding):
            TotpSession.from_text("hello world 1")

    def test_empty_key(self):
        with pytest.raises(InvalidKey):
            TotpSession(b"")

    def test_clear(self):
        session = TotpSession(KEY)
        session.tick(59)
        session.clear()
        assert not session.active
        assert session.state == SessionState()
        with pytest.raises(InvalidKey):
            session.tick(59)

    def test_repr_hides_secret(self):
        assert "1234567890" not in repr(TotpSession(KEY))
