"""
Signature Service for Partner Transactions

Builds the canonical string of a request and verifies the partner signature.

Wire contract (shared with partners, must stay bit-exact):
    canonical = yyyyMMddHHmmss(UTC) + partnerKey + partnerRefNo + totalAmount + partnerPassword
    sig       = base64( lowercase_hex( sha256( utf8(canonical) ) ) )

The base64 step encodes the hex text, not the raw digest bytes.
"""
import base64
import hashlib
import hmac
import logging
from datetime import datetime, timezone
from typing import Optional

from ..models.pipeline import ReasonCode, Rejected, TransactionRequest

logger = logging.getLogger(__name__)

SIGNATURE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def format_signature_timestamp(timestamp: datetime) -> str:
    """Render a timestamp as the 14-digit UTC form used in the canonical string."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(SIGNATURE_TIMESTAMP_FORMAT)


def build_canonical_string(
    timestamp: datetime,
    partner_key: str,
    partner_ref_no: str,
    total_amount: int,
    partner_password: str
) -> str:
    """
    Create the string to sign.

    Fields are concatenated without separators, in this order:
    - Parsed timestamp as yyyyMMddHHmmss (UTC)
    - Partner key, as submitted
    - Partner reference number, as submitted
    - Total amount as a plain base-10 integer
    - Partner password in its base64 form, as submitted
    """
    return (
        f"{format_signature_timestamp(timestamp)}"
        f"{partner_key}"
        f"{partner_ref_no}"
        f"{int(total_amount):d}"
        f"{partner_password}"
    )


def compute_signature(canonical: str) -> str:
    """
    Compute the signature for a canonical string.

    Returns:
        Base64 of the UTF-8 bytes of the lowercase hex SHA-256 digest
    """
    hex_digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return base64.b64encode(hex_digest.encode("utf-8")).decode("ascii")


def sign_transaction(
    timestamp: datetime,
    partner_key: str,
    partner_ref_no: str,
    total_amount: int,
    partner_password: str
) -> str:
    """Sign a transaction the way a partner does before submitting it."""
    return compute_signature(
        build_canonical_string(timestamp, partner_key, partner_ref_no, total_amount, partner_password)
    )


def verify_signature(request: TransactionRequest, parsed_timestamp: datetime) -> Optional[Rejected]:
    """
    Verify the request signature.

    Args:
        request: Transaction request
        parsed_timestamp: Timestamp as parsed by the freshness check

    Returns:
        None if the signature matches, Rejected otherwise
    """
    if not request.sig:
        logger.warning("Signature validation failed: sig is missing or empty")
        return Rejected(ReasonCode.SIGNATURE_MISMATCH, "Signature is missing.")

    canonical = build_canonical_string(
        parsed_timestamp,
        request.partner_key,
        request.partner_ref_no,
        request.total_amount,
        request.partner_password,
    )
    expected = compute_signature(canonical)
    logger.debug(f"Calculated signature: {expected} | Received: {request.sig}")

    if not hmac.compare_digest(expected.encode("utf-8"), request.sig.encode("utf-8")):
        logger.warning(
            f"Signature mismatch for partnerKey: '{request.partner_key}', "
            f"partnerRefNo: '{request.partner_ref_no}'"
        )
        return Rejected(ReasonCode.SIGNATURE_MISMATCH, "Signature mismatch.")

    return None
