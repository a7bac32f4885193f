"""
Log Redaction

Prepares request data for logging. Partner passwords are replaced by a keyed
fingerprint so log lines can be correlated without exposing the secret.
"""
import hashlib
import hmac
import json
import logging
from typing import Any, Dict, Optional

from ..config import settings
from ..models.transactions import SubmitTransactionRequest

logger = logging.getLogger(__name__)

FINGERPRINT_PREFIX = "hmac-sha256:"
SERIALIZATION_FAILED = "Error serializing object for log."


def fingerprint_secret(value: str, key: Optional[str] = None) -> str:
    """
    Fingerprint a secret for logging.

    Args:
        value: Secret to fingerprint
        key: HMAC key (defaults to settings.log_redaction_secret)

    Returns:
        "hmac-sha256:" + 16 hex chars, or "" for an empty value
    """
    if not value:
        return ""
    secret_key = key if key is not None else settings.log_redaction_secret
    digest = hmac.new(
        secret_key.encode("utf-8"),
        value.encode("utf-8"),
        hashlib.sha256
    ).hexdigest()
    return f"{FINGERPRINT_PREFIX}{digest[:16]}"


def loggable_request(request: SubmitTransactionRequest) -> Dict[str, Any]:
    """Wire representation of a request with the password fingerprinted."""
    body = request.model_dump(by_alias=True, exclude_none=True)
    body["partnerPassword"] = fingerprint_secret(request.partner_password)
    return body


def serialize_for_log(obj: Any) -> str:
    """Compact JSON for log lines; never raises."""
    try:
        return json.dumps(obj, separators=(",", ":"), default=str)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize object for logging: {e}")
        return SERIALIZATION_FAILED
