"""
Timestamp Freshness Check

Parses the request timestamp and bounds it against server time.
Naive timestamps are assumed to be UTC; aware ones are converted to UTC.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from dateutil import parser

from ..models.pipeline import ReasonCode, Rejected

logger = logging.getLogger(__name__)

ALLOWED_TIMESTAMP_SKEW = timedelta(minutes=5)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a partner timestamp into an aware UTC datetime.

    Returns:
        UTC datetime, or None if the value is missing or unparseable
    """
    if not value or not value.strip():
        return None
    # Offsets of 24h or more and instants outside years 1-9999 after
    # conversion are rejected here rather than by the parser
    try:
        parsed = parser.parse(value)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def check_freshness(timestamp: Optional[str], now: datetime) -> Union[datetime, Rejected]:
    """
    Validate the timestamp format and that it is within the allowed skew.

    Args:
        timestamp: Raw timestamp string from the request
        now: Current server time (aware)

    Returns:
        Parsed UTC timestamp on success, Rejected otherwise
    """
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        logger.warning(f"Timestamp is invalid or missing. Provided: '{timestamp}'")
        return Rejected(ReasonCode.MALFORMED_TIMESTAMP, "Timestamp is invalid or missing.")

    server_time = now.astimezone(timezone.utc)
    if parsed < server_time - ALLOWED_TIMESTAMP_SKEW or parsed > server_time + ALLOWED_TIMESTAMP_SKEW:
        logger.warning(
            f"Timestamp expired. Request UTC: {parsed.isoformat()}, "
            f"Server UTC: {server_time.isoformat()}, Allowed skew: {ALLOWED_TIMESTAMP_SKEW}"
        )
        return Rejected(
            ReasonCode.EXPIRED,
            "Expired.",
            {"request_time": parsed.isoformat(), "server_time": server_time.isoformat()}
        )

    return parsed
