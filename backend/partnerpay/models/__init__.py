"""
Models package for PartnerPay.

Exports pipeline domain types and HTTP wire models.
"""
from .pipeline import (
    MAX_AMOUNT,
    Accepted,
    DiscountBreakdown,
    LineItem,
    PartnerCredential,
    PipelineStage,
    ReasonCode,
    Rejected,
    TransactionRequest,
    ValidationOutcome,
)
from .transactions import ItemDetail, SubmitTransactionRequest, TransactionResponse

__all__ = [
    "MAX_AMOUNT",
    "Accepted",
    "DiscountBreakdown",
    "LineItem",
    "PartnerCredential",
    "PipelineStage",
    "ReasonCode",
    "Rejected",
    "TransactionRequest",
    "ValidationOutcome",
    "ItemDetail",
    "SubmitTransactionRequest",
    "TransactionResponse",
]
