"""Tests for totpgen Base32 codec."""

import os
import pytest
from totpgen.base32 import decode, encode, is_valid
from totpgen.errors import ErrorKind, InvalidEncoding


class TestDecode:
    """Test decode()."""

    def test_known_secret(self):
        """Common example secret decodes to known bytes."""
        assert decode("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"

    def test_rfc_secret(self):
        """RFC 6238 test secret decodes."""
        assert decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ") == b"12345678901234567890"

    def test_lowercase(self):
        """Decoder is case-insensitive."""
        assert decode("jbswy3dpehpk3pxp") == decode("JBSWY3DPEHPK3PXP")

    def test_without_padding(self):
        """Secrets without padding decode."""
        assert decode("MZXW6") == b"foo"

    def test_with_padding(self):
        """Padding is optional and ignored."""
        assert decode("MZXW6===") == b"foo"
        assert decode("MZXW6=") == b"foo"

    def test_grouped_with_spaces(self):
        """Space-separated groups are accepted."""
        assert decode("jbsw y3dp ehpk 3pxp") == decode("JBSWY3DPEHPK3PXP")

    def test_empty_fails(self):
        """Empty text fails at the codec boundary."""
        with pytest.raises(InvalidEncoding):
            decode("")

    def test_padding_only_fails(self):
        """Text that is only padding is empty."""
        with pytest.raises(InvalidEncoding):
            decode("====")

    def test_invalid_character(self):
        """Characters outside A-Z2-7 fail with the offending fragment."""
        with pytest.raises(InvalidEncoding) as exc:
            decode("JBSWY3DPEHPK3PX1")
        assert exc.value.fragment == "1"
        assert exc.value.kind is ErrorKind.INVALID_ENCODING

    def test_interior_padding_fails(self):
        """Padding in the middle is not padding."""
        with pytest.raises(InvalidEncoding):
            decode("MZ=XW6")

    @pytest.mark.parametrize("text", ["A", "ABC", "ABCDEF", "ABCDEFGHI"])
    def test_partial_byte_lengths_fail(self, text):
        """Lengths that cannot form whole bytes fail."""
        with pytest.raises(InvalidEncoding):
            decode(text)

    def test_is_value_error(self):
        """Errors are ValueErrors."""
        with pytest.raises(ValueError):
            decode("!!!!")


class TestEncode:
    """Test encode()."""

    def test_no_padding_by_default(self):
        """Output has no padding."""
        assert encode(b"foo") == "MZXW6"

    def test_keep_padding(self):
        """Padding kept on request."""
        assert encode(b"foo", padding=True) == "MZXW6==="

    def test_stable_after_normalisation(self):
        """decode(encode(decode(s))) == decode(s)."""
        for text in ["JBSWY3DPEHPK3PXP", "mzxw6", "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "MFRGG==="]:
            assert decode(encode(decode(text))) == decode(text)

    def test_random_secret(self):
        """Random secrets survive encoding."""
        secret = os.urandom(20)
        assert decode(encode(secret)) == secret


class TestIsValid:
    """Test is_valid()."""

    def test_valid(self):
        assert is_valid("JBSWY3DPEHPK3PXP")

    def test_invalid(self):
        assert not is_valid("not base32")
        assert not is_valid("")
