"""Tests for totpgen tagged results."""

import pytest
from totpgen.config import TotpConfig
from totpgen.errors import ErrorKind, InvalidKey
from totpgen.result import Result, try_decode, try_generate, try_parse


class TestResult:
    """Test Result."""

    def test_success(self):
        r = Result.success(5)
        assert r.ok
        assert r.kind is None
        assert r.unwrap() == 5

    def test_failure(self):
        err = InvalidKey("Key is empty")
        r = Result.failure(err)
        assert not r.ok
        assert r.kind is ErrorKind.INVALID_KEY
        with pytest.raises(InvalidKey):
            r.unwrap()

    def test_capture_only_otp_errors(self):
        """Non-OTP exceptions still propagate."""
        def boom():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            Result.capture(boom)


class TestTryFunctions:
    """Test try_* entry points."""

    def test_try_decode_ok(self):
        assert try_decode("MZXW6").value == b"foo"

    def test_try_decode_empty(self):
        r = try_decode("")
        assert r.kind is ErrorKind.INVALID_ENCODING

    def test_try_parse_ok(self):
        r = try_parse("otpauth://totp/x?secret=JBSWY3DPEHPK3PXP")
        assert r.ok
        assert r.value.secret == "JBSWY3DPEHPK3PXP"

    @pytest.mark.parametrize(
        "uri,kind",
        [
            ("otpauth://hotp/x?secret=JBSWY3DPEHPK3PXP", ErrorKind.UNSUPPORTED_SCHEME),
            ("otpauth://totp/x?issuer=y", ErrorKind.MISSING_SECRET),
            ("otpauth://totp/x?secret=JBSWY3DPEHPK3PXP&digits=x", ErrorKind.INVALID_PARAMETER),
        ],
    )
    def test_try_parse_kinds(self, uri, kind):
        assert try_parse(uri).kind is kind

    def test_try_generate_ok(self):
        r = try_generate(b"12345678901234567890", TotpConfig(digits=8), 59)
        assert r.value == "94287082"

    def test_try_generate_empty_key(self):
        r = try_generate(b"", TotpConfig(), 59)
        assert r.kind is ErrorKind.INVALID_KEY
        assert r.value is None

    def test_try_generate_infinite_time(self):
        """An infinite timestamp is a failure value, not a crash."""
        r = try_generate(b"12345678901234567890", TotpConfig(), float("inf"))
        assert r.kind is ErrorKind.INVALID_PARAMETER

    def test_failures_are_independent(self):
        """A failed call does not affect the next one."""
        assert not try_generate(b"", TotpConfig(), 59).ok
        assert try_generate(b"12345678901234567890", TotpConfig(), 59).value == "287082"
