"""
Partner Authentication

Decodes the submitted base64 password and compares it with the stored secret.
The decoded value is never logged or returned.
"""
import base64
import binascii
import hmac
import logging
from typing import Optional

from ..models.pipeline import ReasonCode, Rejected
from .credential_store import CredentialStore

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "Access Denied!"


def decode_partner_password(encoded: str) -> Optional[str]:
    """
    Decode a base64 password into UTF-8 text.

    Returns:
        Decoded text, or None if the value is not valid base64 / UTF-8
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError):
        return None


def authenticate_partner(
    partner_key: Optional[str],
    partner_password: Optional[str],
    store: CredentialStore
) -> Optional[Rejected]:
    """
    Authenticate a partner against the credential store.

    Args:
        partner_key: Partner identifier as submitted
        partner_password: Base64-encoded password as submitted
        store: Credential store

    Returns:
        None if authenticated, Rejected otherwise. Unknown partner and wrong
        password are reported identically.
    """
    if not partner_key or not partner_password:
        logger.warning("Authentication failed: partnerKey or partnerPassword is empty")
        return Rejected(ReasonCode.ACCESS_DENIED, ACCESS_DENIED_MESSAGE)

    decoded = decode_partner_password(partner_password)
    if decoded is None:
        logger.warning(f"Authentication failed: partnerPassword for '{partner_key}' is not valid base64")
        return Rejected(ReasonCode.MALFORMED_CREDENTIAL, "PartnerPassword is not a valid Base64 string.")

    credential = store.lookup(partner_key)
    if credential is None or not hmac.compare_digest(
        credential.password.encode("utf-8"),
        decoded.encode("utf-8")
    ):
        logger.warning(f"Authentication failed for partnerKey: '{partner_key}'")
        return Rejected(ReasonCode.ACCESS_DENIED, ACCESS_DENIED_MESSAGE)

    logger.debug(f"Partner authenticated: '{partner_key}' ({credential.partner_no})")
    return None
