"""
Property-Based Tests for Transaction Signatures

Properties tested:
- Signing is deterministic
- Changing any signed field without re-signing fails verification
- Signatures are always base64 of 64 lowercase hex characters
"""
import base64
import re
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from partnerpay.models.pipeline import ReasonCode, TransactionRequest
from partnerpay.services.signature_service import sign_transaction, verify_signature


# =============================================================================
# HYPOTHESIS STRATEGIES
# =============================================================================

timestamp_strategy = st.datetimes(
    min_value=datetime(2000, 1, 1),
    max_value=datetime(2099, 12, 31),
    timezones=st.just(timezone.utc),
).map(lambda dt: dt.replace(microsecond=0))

text_field_strategy = st.text(min_size=1, max_size=50)
amount_strategy = st.integers(min_value=1, max_value=2 ** 63 - 1)
password_strategy = st.binary(min_size=1, max_size=32).map(lambda raw: base64.b64encode(raw).decode("ascii"))


@st.composite
def signed_request_strategy(draw):
    timestamp = draw(timestamp_strategy)
    partner_key = draw(text_field_strategy)
    partner_ref_no = draw(text_field_strategy)
    total_amount = draw(amount_strategy)
    partner_password = draw(password_strategy)
    request = TransactionRequest(
        partner_key=partner_key,
        partner_ref_no=partner_ref_no,
        partner_password=partner_password,
        total_amount=total_amount,
        timestamp=timestamp.isoformat(),
        sig=sign_transaction(timestamp, partner_key, partner_ref_no, total_amount, partner_password),
    )
    return request, timestamp


# =============================================================================
# PROPERTIES
# =============================================================================

@settings(max_examples=100)
@given(signed=signed_request_strategy())
def test_signed_request_verifies(signed):
    request, timestamp = signed
    assert verify_signature(request, timestamp) is None


@settings(max_examples=100)
@given(signed=signed_request_strategy())
def test_signing_is_deterministic(signed):
    request, timestamp = signed
    again = sign_transaction(
        timestamp, request.partner_key, request.partner_ref_no, request.total_amount, request.partner_password
    )
    assert again == request.sig


@settings(max_examples=100)
@given(signed=signed_request_strategy())
def test_signature_shape(signed):
    request, _ = signed
    assert re.fullmatch(r"[0-9a-f]{64}", base64.b64decode(request.sig).decode("ascii"))


@settings(max_examples=100)
@given(signed=signed_request_strategy(), delta=st.integers(min_value=1, max_value=10 ** 6))
def test_tampered_total_amount_fails(signed, delta):
    request, timestamp = signed
    tampered = replace(request, total_amount=request.total_amount + delta)
    assert verify_signature(tampered, timestamp).reason == ReasonCode.SIGNATURE_MISMATCH


@settings(max_examples=100)
@given(signed=signed_request_strategy(), new_value=text_field_strategy)
def test_tampered_partner_ref_no_fails(signed, new_value):
    request, timestamp = signed
    assume(new_value != request.partner_ref_no)
    tampered = replace(request, partner_ref_no=new_value)
    assert verify_signature(tampered, timestamp).reason == ReasonCode.SIGNATURE_MISMATCH


@settings(max_examples=100)
@given(signed=signed_request_strategy(), new_value=text_field_strategy)
def test_tampered_partner_key_fails(signed, new_value):
    request, timestamp = signed
    assume(new_value != request.partner_key)
    tampered = replace(request, partner_key=new_value)
    assert verify_signature(tampered, timestamp).reason == ReasonCode.SIGNATURE_MISMATCH


@settings(max_examples=100)
@given(signed=signed_request_strategy(), seconds=st.integers(min_value=1, max_value=10 ** 7))
def test_tampered_timestamp_fails(signed, seconds):
    request, timestamp = signed
    assert verify_signature(request, timestamp + timedelta(seconds=seconds)).reason == ReasonCode.SIGNATURE_MISMATCH
