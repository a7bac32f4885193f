"""
Shared fixtures for PartnerPay tests.

Provides a fixed server clock, a credential store with the demo partners and
a factory for correctly signed transaction requests.
"""
import base64
from datetime import datetime, timezone
from typing import Optional, Sequence

import pytest

from partnerpay.models.pipeline import LineItem, PartnerCredential, TransactionRequest
from partnerpay.services.credential_store import CredentialStore
from partnerpay.services.freshness import parse_timestamp
from partnerpay.services.pipeline import ValidationPipeline
from partnerpay.services.signature_service import sign_transaction


SERVER_TIME = datetime(2024, 8, 15, 2, 11, 22, tzinfo=timezone.utc)

PARTNER_KEY = "FAKEGOOGLE"
PARTNER_REF_NO = "FG-00001"
PARTNER_PASSWORD = "FAKEPASSWORD1234"


def encode_password(password: str) -> str:
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


@pytest.fixture
def server_time() -> datetime:
    return SERVER_TIME


@pytest.fixture
def credential_store() -> CredentialStore:
    return CredentialStore([
        PartnerCredential(partner_key="FAKEGOOGLE", partner_no="FG-00001", password="FAKEPASSWORD1234"),
        PartnerCredential(partner_key="FAKEPEOPLE", partner_no="FG-00002", password="FAKEPASSWORD4578"),
    ])


@pytest.fixture
def pipeline(credential_store) -> ValidationPipeline:
    return ValidationPipeline(credential_store)


@pytest.fixture
def make_request():
    """
    Factory for signed requests.

    The signature is computed over the given fields unless `sig` is passed
    explicitly, so tests can tamper with fields after signing via
    dataclasses.replace.
    """

    def _make(
        total_amount: int = 25000,
        items: Optional[Sequence[LineItem]] = None,
        timestamp: str = "2024-08-15T02:11:22Z",
        partner_key: str = PARTNER_KEY,
        partner_ref_no: str = PARTNER_REF_NO,
        password: str = PARTNER_PASSWORD,
        encoded_password: Optional[str] = None,
        sig: Optional[str] = None,
    ) -> TransactionRequest:
        if encoded_password is None:
            encoded_password = encode_password(password)
        if sig is None:
            parsed = parse_timestamp(timestamp) or SERVER_TIME
            sig = sign_transaction(parsed, partner_key, partner_ref_no, total_amount, encoded_password)
        return TransactionRequest(
            partner_key=partner_key,
            partner_ref_no=partner_ref_no,
            partner_password=encoded_password,
            total_amount=total_amount,
            timestamp=timestamp,
            sig=sig,
            items=tuple(items) if items is not None else None,
        )

    return _make
