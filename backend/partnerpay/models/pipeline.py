"""
Transaction Pipeline Domain Types

Plain immutable values passed between the validation steps.
All monetary values are integers in minor currency units (cents).
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

# Amounts are signed 64-bit integers on the partner side
MAX_AMOUNT = 2 ** 63 - 1


class ReasonCode(str, Enum):
    """Stable rejection codes, reported to callers and logs."""
    MALFORMED_TIMESTAMP = "trx:timestamp:malformed"
    EXPIRED = "trx:timestamp:expired"
    ACCESS_DENIED = "trx:auth:access_denied"
    MALFORMED_CREDENTIAL = "trx:auth:malformed_credential"
    SIGNATURE_MISMATCH = "trx:signature:mismatch"
    INVALID_QUANTITY = "trx:items:invalid_quantity"
    INVALID_UNIT_PRICE = "trx:items:invalid_unit_price"
    AMOUNT_MISMATCH = "trx:items:amount_mismatch"
    INTERNAL_ERROR = "trx:internal_error"


class PipelineStage(str, Enum):
    """Stages a request passes through, in order."""
    START = "start"
    FRESHNESS_CHECKED = "freshness_checked"
    AUTHENTICATED = "authenticated"
    SIGNATURE_VERIFIED = "signature_verified"
    ITEMS_CHECKED = "items_checked"
    PRICED = "priced"
    REJECTED = "rejected"


@dataclass(frozen=True)
class LineItem:
    """One line of a partner submission."""
    partner_item_ref: str
    name: str
    qty: int
    unit_price: int


@dataclass(frozen=True)
class TransactionRequest:
    """
    Partner transaction submission.

    Every string field is caller-supplied and untrusted. `partner_password`
    is the base64 form exactly as submitted.
    """
    partner_key: str
    partner_ref_no: str
    partner_password: str
    total_amount: int
    timestamp: str
    sig: str
    items: Optional[Tuple[LineItem, ...]] = None


@dataclass(frozen=True)
class PartnerCredential:
    partner_key: str
    partner_no: str
    password: str

    def __repr__(self) -> str:
        return f"PartnerCredential(partner_key={self.partner_key!r}, partner_no={self.partner_no!r})"


@dataclass(frozen=True)
class DiscountBreakdown:
    """Result of the pricing rules for one total amount."""
    total_amount: int
    base_percent: Decimal
    prime_bonus: Decimal
    digit_bonus: Decimal
    applied_percent: Decimal
    discount: int
    final_amount: int


@dataclass(frozen=True)
class Accepted:
    total_amount: int
    discount: int
    final_amount: int
    applied_percent: Decimal


@dataclass(frozen=True)
class Rejected:
    reason: ReasonCode
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


ValidationOutcome = Union[Accepted, Rejected]
