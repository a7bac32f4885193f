"""
Transactions API Endpoints

Partner transaction submission and server-time ping.

Flow:
- Body presence/range checks by pydantic (rendered by the app's handler)
- Validation pipeline: freshness, authentication, signature, line items
- Discount pricing on success
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from typing import Any, Dict
import logging

from ..exceptions import TransactionRejectedError
from ..models.pipeline import Rejected
from ..models.transactions import SubmitTransactionRequest, TransactionResponse
from ..services.log_redaction import loggable_request, serialize_for_log
from ..services.pipeline import ValidationPipeline, get_validation_pipeline
from ..services.signature_service import format_signature_timestamp

logger = logging.getLogger(__name__)

router = APIRouter()


def get_server_time() -> datetime:
    """Current server time; overridden in tests."""
    return datetime.now(timezone.utc)


@router.post("/submittrxmessage")
def submit_transaction_endpoint(
    request: SubmitTransactionRequest,
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
    now: datetime = Depends(get_server_time)
) -> Dict[str, Any]:
    """
    Validate a partner transaction and compute its discount.

    Declared sync so FastAPI runs the CPU-bound pricing in its threadpool.

    Request Body:
        SubmitTransactionRequest (camelCase fields)

    Returns:
        {
            "result": 1,
            "totalAmount": int,
            "totalDiscount": int,
            "finalAmount": int
        }

    Errors:
        400 / 401 with {"result": 0, "resultMessage": str}

    Example:
        POST /api/submittrxmessage
    """
    logger.info(
        f"Received request for partnerKey: '{request.partner_key}', "
        f"partnerRefNo: '{request.partner_ref_no}'"
    )
    logger.info(f"Sanitized request body: {serialize_for_log(loggable_request(request))}")

    outcome = pipeline.validate(request.to_transaction(), now)

    if isinstance(outcome, Rejected):
        raise TransactionRejectedError.from_outcome(outcome)

    response = TransactionResponse(
        result=1,
        total_amount=outcome.total_amount,
        total_discount=outcome.discount,
        final_amount=outcome.final_amount,
    )
    logger.info(f"Processing successful. Response: {serialize_for_log(response.to_body())}")
    return response.to_body()


@router.get("/ping")
async def ping_endpoint(now: datetime = Depends(get_server_time)) -> Dict[str, Any]:
    """
    Report server time so partners can check their clock skew.

    Returns:
        {"result": 1, "resultMessage": "SERVER TIME NOW: <yyyyMMddHHmmss> & <ISO 8601>"}
    """
    logger.info("Ping endpoint was hit")

    # 100ns ticks: seven fractional digits
    iso_time = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f") + "0Z"
    response = TransactionResponse(
        result=1,
        result_message=f"SERVER TIME NOW: {format_signature_timestamp(now)} & {iso_time}"
    )
    return response.to_body()
