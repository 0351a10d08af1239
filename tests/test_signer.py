import hashlib
import hmac

import pytest

from fxdx.errors import SigningError
from fxdx.signer import Signer, SigningScheme


class TestSign:
    def test_is_hmac_sha1(self):
        expected = hmac.new(b"k", b"payload", hashlib.sha1).digest()
        assert Signer(b"k").sign("payload") == expected

    def test_is_deterministic(self):
        signer = Signer(b"secret")
        assert signer.sign("a,b,c") == signer.sign("a,b,c")

    def test_is_key_sensitive(self):
        assert Signer(b"k1").sign("same") != Signer(b"k2").sign("same")

    def test_str_and_bytes_keys_agree(self):
        assert Signer("secret").sign("x") == Signer(b"secret").sign("x")

    def test_hexdigest_is_header_safe(self):
        digest = Signer(b"k").hexdigest("x")
        assert len(digest) == 40
        assert digest == digest.lower()
        assert all(c in "0123456789abcdef" for c in digest)

    def test_empty_key_is_rejected(self):
        with pytest.raises(SigningError):
            Signer(b"")

    def test_non_text_key_is_rejected(self):
        with pytest.raises(SigningError):
            Signer(12345)

    def test_repr_hides_secret(self):
        assert "top-secret-value" not in repr(Signer(b"top-secret-value"))


class TestCanonicalMessage:
    def test_full_scheme_with_fragment(self):
        message = Signer(b"k").canonical_message(
            SigningScheme.FULL, "1700000000", "/maker/order", "10,1.5,ETHUSDT,0"
        )
        assert message == b"k,1700000000,/maker/order,10,1.5,ETHUSDT,0"

    def test_full_scheme_without_fragment(self):
        message = Signer(b"k").canonical_message(
            SigningScheme.FULL, "1700000000", "/maker/symbols", None
        )
        assert message == b"k,1700000000,/maker/symbols"

    def test_fragment_scheme_signs_fields_only(self):
        message = Signer(b"k").canonical_message(
            SigningScheme.FRAGMENT, "1700000000", "/maker/depth/ETHUSDT", "ETHUSDT"
        )
        assert message == b"ETHUSDT"

    def test_fragment_scheme_without_fragment_is_empty(self):
        message = Signer(b"k").canonical_message(
            SigningScheme.FRAGMENT, "1700000000", "/maker/balances", None
        )
        assert message == b""
