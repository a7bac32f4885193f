"""
Transaction Validation Pipeline

Runs the validation steps in a fixed order and prices the transaction:

    freshness -> authentication -> signature -> line items -> discount

The first failing step decides the outcome. The pipeline never raises: any
unexpected fault is reported as an internal-error rejection.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

from ..models.pipeline import (
    Accepted,
    PipelineStage,
    ReasonCode,
    Rejected,
    TransactionRequest,
    ValidationOutcome,
)
from .authentication import authenticate_partner
from .credential_store import CredentialStore, get_credential_store
from .discount_service import calculate_discount
from .freshness import check_freshness
from .line_items import check_line_items
from .signature_service import verify_signature

logger = logging.getLogger(__name__)

Step = Tuple[PipelineStage, Callable[[], Optional[Rejected]]]


class ValidationPipeline:
    """Stateless validator; safe to share across concurrent requests."""

    def __init__(self, credential_store: CredentialStore):
        self.credential_store = credential_store

    def validate(self, request: TransactionRequest, now: datetime) -> ValidationOutcome:
        """
        Validate and price a transaction request.

        Args:
            request: Transaction request
            now: Current server time (aware)

        Returns:
            Accepted with the discount, or Rejected with the first failure
        """
        try:
            return self._run(request, now)
        except Exception as e:
            logger.error(f"Unexpected error while validating transaction: {e}", exc_info=True)
            return Rejected(
                ReasonCode.INTERNAL_ERROR,
                "An unexpected error occurred.",
                {"error_type": type(e).__name__}
            )

    def _run(self, request: TransactionRequest, now: datetime) -> ValidationOutcome:
        freshness = check_freshness(request.timestamp, now)
        if isinstance(freshness, Rejected):
            return self._reject(PipelineStage.START, freshness)
        parsed_timestamp = freshness

        steps: Sequence[Step] = (
            (PipelineStage.FRESHNESS_CHECKED,
             lambda: authenticate_partner(request.partner_key, request.partner_password, self.credential_store)),
            (PipelineStage.AUTHENTICATED,
             lambda: verify_signature(request, parsed_timestamp)),
            (PipelineStage.SIGNATURE_VERIFIED,
             lambda: check_line_items(request.items, request.total_amount)),
        )

        for stage, step in steps:
            logger.debug(f"Pipeline stage reached: {stage.value}")
            rejection = step()
            if rejection is not None:
                return self._reject(stage, rejection)

        logger.debug(f"Pipeline stage reached: {PipelineStage.ITEMS_CHECKED.value}")
        breakdown = calculate_discount(request.total_amount)

        logger.info(
            f"Transaction accepted for partnerKey: '{request.partner_key}', "
            f"partnerRefNo: '{request.partner_ref_no}', total={breakdown.total_amount}, "
            f"discount={breakdown.discount}, final={breakdown.final_amount}"
        )
        return Accepted(
            total_amount=breakdown.total_amount,
            discount=breakdown.discount,
            final_amount=breakdown.final_amount,
            applied_percent=breakdown.applied_percent,
        )

    @staticmethod
    def _reject(stage: PipelineStage, rejection: Rejected) -> Rejected:
        logger.warning(f"Transaction rejected after stage '{stage.value}': {rejection.reason.value}")
        return rejection


def get_validation_pipeline() -> ValidationPipeline:
    """FastAPI dependency: pipeline bound to the process-wide credential store."""
    return ValidationPipeline(get_credential_store())
