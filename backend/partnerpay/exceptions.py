"""
PartnerPay Exception Hierarchy

Errors raised at the HTTP edge. The validation pipeline itself never raises
for expected failures; it returns a Rejected outcome which the route turns
into a TransactionRejectedError.
"""
from typing import Optional, Dict, Any

from .models.pipeline import ReasonCode, Rejected


class PartnerPayError(Exception):
    """
    Base exception for all PartnerPay API errors.

    Carries a stable error code, a caller-safe message and the HTTP status
    the exception handler should use.
    """

    status_code = 400

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a log-friendly dictionary."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


# Reason code -> (HTTP status, message shown to the partner).
# Authentication failures share one message so callers cannot tell them apart.
_REJECTION_RENDERING: Dict[ReasonCode, tuple] = {
    ReasonCode.MALFORMED_TIMESTAMP: (400, None),
    ReasonCode.EXPIRED: (400, None),
    ReasonCode.ACCESS_DENIED: (401, "Access Denied!"),
    ReasonCode.MALFORMED_CREDENTIAL: (401, "Access Denied!"),
    ReasonCode.SIGNATURE_MISMATCH: (400, "Access Denied!"),
    ReasonCode.INVALID_QUANTITY: (400, None),
    ReasonCode.INVALID_UNIT_PRICE: (400, None),
    ReasonCode.AMOUNT_MISMATCH: (400, None),
    ReasonCode.INTERNAL_ERROR: (500, "An unexpected error occurred."),
}


class TransactionRejectedError(PartnerPayError):
    """
    Transaction failed one of the validation steps.

    Examples:
    - Timestamp outside the allowed skew
    - Unknown partner or wrong password
    - Signature does not match the canonical string
    - Item totals do not add up to the declared total
    """

    def __init__(self, reason: ReasonCode, message: str, details: Optional[Dict[str, Any]] = None):
        status_code, public_message = _REJECTION_RENDERING.get(reason, (400, None))
        self.reason = reason
        super().__init__(reason.value, public_message or message, details, status_code)

    @classmethod
    def from_outcome(cls, outcome: Rejected) -> "TransactionRejectedError":
        return cls(outcome.reason, outcome.message, outcome.details)
