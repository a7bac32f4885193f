"""
Pydantic Transaction Wire Models

Request and response bodies of the partner transaction endpoint.
Field names on the wire are camelCase; all monetary values are in cents.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .pipeline import MAX_AMOUNT, LineItem, TransactionRequest


class ItemDetail(BaseModel):
    """One purchased item as submitted by the partner."""

    partner_item_ref: str = Field(alias="partnerItemRef", min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    qty: int = Field(ge=1, le=5, description="Quantity must be between 1 and 5")
    unit_price: int = Field(alias="unitPrice", ge=1, le=MAX_AMOUNT, description="Unit price in cents")

    model_config = ConfigDict(populate_by_name=True)

    def to_line_item(self) -> LineItem:
        return LineItem(
            partner_item_ref=self.partner_item_ref,
            name=self.name,
            qty=self.qty,
            unit_price=self.unit_price,
        )


class SubmitTransactionRequest(BaseModel):
    """
    Partner transaction submission body.

    Only presence and range are validated here; timestamp format, credentials,
    signature and item totals are checked by the validation pipeline.
    """

    partner_key: str = Field(alias="partnerKey", min_length=1, max_length=50)
    partner_ref_no: str = Field(alias="partnerRefNo", min_length=1, max_length=50)
    partner_password: str = Field(alias="partnerPassword", min_length=1, max_length=50)
    total_amount: int = Field(alias="totalAmount", ge=1, le=MAX_AMOUNT, description="Total amount in cents")
    items: Optional[List[ItemDetail]] = None
    timestamp: str = Field(min_length=1)
    sig: str = Field(min_length=1)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "partnerKey": "FAKEGOOGLE",
                "partnerRefNo": "FG-00001",
                "partnerPassword": "RkFLRVBBU1NXT1JEMTIzNA==",
                "totalAmount": 1000,
                "items": [
                    {"partnerItemRef": "i-00001", "name": "Pen", "qty": 4, "unitPrice": 200},
                    {"partnerItemRef": "i-00002", "name": "Ruler", "qty": 2, "unitPrice": 100},
                ],
                "timestamp": "2024-08-15T02:11:22.0000000Z",
                "sig": "<base64 of hex sha256>",
            }
        },
    )

    def to_transaction(self) -> TransactionRequest:
        """Convert the validated body into the pipeline's domain request."""
        return TransactionRequest(
            partner_key=self.partner_key,
            partner_ref_no=self.partner_ref_no,
            partner_password=self.partner_password,
            total_amount=self.total_amount,
            timestamp=self.timestamp,
            sig=self.sig,
            items=tuple(item.to_line_item() for item in self.items) if self.items is not None else None,
        )


class TransactionResponse(BaseModel):
    """
    Response envelope.

    `result` is 1 on success and 0 on rejection. Amounts are present only on
    success, `resultMessage` only on rejection or informational replies.
    Use `to_body()` so that absent fields are omitted rather than null.
    """

    result: int = Field(ge=0, le=1)
    total_amount: Optional[int] = Field(None, alias="totalAmount")
    total_discount: Optional[int] = Field(None, alias="totalDiscount")
    final_amount: Optional[int] = Field(None, alias="finalAmount")
    result_message: Optional[str] = Field(None, alias="resultMessage")

    model_config = ConfigDict(populate_by_name=True)

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
