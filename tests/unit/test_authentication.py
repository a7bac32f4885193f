"""
Unit Tests for Partner Authentication
"""
import base64

import pytest

from partnerpay.models.pipeline import ReasonCode
from partnerpay.services.authentication import authenticate_partner, decode_partner_password


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestDecodePartnerPassword:

    def test_decodes_utf8_text(self):
        assert decode_partner_password("RkFLRVBBU1NXT1JEMTIzNA==") == "FAKEPASSWORD1234"

    def test_non_ascii_secret(self):
        assert decode_partner_password(b64("pässwörd")) == "pässwörd"

    @pytest.mark.parametrize("value", ["not base64!", "abc", "RkFLRVBBU1NXT1JEMTIzNA=", "////"])
    def test_invalid_base64(self, value):
        assert decode_partner_password(value) is None

    def test_invalid_utf8(self):
        assert decode_partner_password(base64.b64encode(b"\xff\xfe\xfd").decode("ascii")) is None


class TestAuthenticatePartner:

    def test_valid_credentials(self, credential_store):
        assert authenticate_partner("FAKEGOOGLE", b64("FAKEPASSWORD1234"), credential_store) is None

    def test_partner_key_is_case_insensitive(self, credential_store):
        assert authenticate_partner("fakepeople", b64("FAKEPASSWORD4578"), credential_store) is None

    @pytest.mark.parametrize("key,password", [("", b64("FAKEPASSWORD1234")), ("FAKEGOOGLE", ""), (None, None)])
    def test_empty_fields_are_denied(self, credential_store, key, password):
        result = authenticate_partner(key, password, credential_store)
        assert result.reason == ReasonCode.ACCESS_DENIED

    def test_malformed_credential_is_distinct(self, credential_store):
        result = authenticate_partner("FAKEGOOGLE", "%%%not-base64%%%", credential_store)
        assert result.reason == ReasonCode.MALFORMED_CREDENTIAL

    def test_wrong_password(self, credential_store):
        result = authenticate_partner("FAKEGOOGLE", b64("FAKEPASSWORD4578"), credential_store)
        assert result.reason == ReasonCode.ACCESS_DENIED
        assert result.message == "Access Denied!"

    def test_password_comparison_is_case_sensitive(self, credential_store):
        result = authenticate_partner("FAKEGOOGLE", b64("fakepassword1234"), credential_store)
        assert result.reason == ReasonCode.ACCESS_DENIED

    def test_unknown_partner_with_any_password(self, credential_store):
        unknown = authenticate_partner("UNKNOWN", b64("FAKEPASSWORD1234"), credential_store)
        wrong = authenticate_partner("FAKEGOOGLE", b64("nope"), credential_store)
        assert unknown == wrong

    def test_rejection_never_contains_decoded_secret(self, credential_store):
        result = authenticate_partner("FAKEGOOGLE", b64("my-guess"), credential_store)
        assert "my-guess" not in result.message
        assert "my-guess" not in str(result.details)
