"""
Line-Item Consistency Check

Validates item quantities and prices and cross-checks the declared total.
"""
import logging
from typing import Optional, Sequence

from ..models.pipeline import MAX_AMOUNT, LineItem, ReasonCode, Rejected

logger = logging.getLogger(__name__)


def check_line_items(items: Optional[Sequence[LineItem]], total_amount: int) -> Optional[Rejected]:
    """
    Check every item and compare the item sum with the declared total.

    Skipped entirely when there are no items; the declared total is then
    trusted as-is.

    Returns:
        None if consistent, Rejected for the first offending item or the total
    """
    if not items:
        return None

    calculated_total = 0
    for item in items:
        if item.qty <= 0:
            logger.warning(f"Item {item.partner_item_ref} has invalid quantity ({item.qty})")
            return Rejected(
                ReasonCode.INVALID_QUANTITY,
                f"Item {item.partner_item_ref} has invalid quantity (must be positive).",
                {"partner_item_ref": item.partner_item_ref}
            )
        if item.unit_price <= 0:
            logger.warning(f"Item {item.partner_item_ref} has invalid unit price ({item.unit_price})")
            return Rejected(
                ReasonCode.INVALID_UNIT_PRICE,
                f"Item {item.partner_item_ref} has invalid unit price (must be positive).",
                {"partner_item_ref": item.partner_item_ref}
            )
        calculated_total += item.qty * item.unit_price

        if calculated_total > MAX_AMOUNT:
            logger.warning(f"Item total overflowed at item {item.partner_item_ref}")
            return Rejected(ReasonCode.AMOUNT_MISMATCH, "Invalid Total Amount.")

    if calculated_total != total_amount:
        logger.warning(
            f"Invalid total amount. Declared: {total_amount}, calculated from items: {calculated_total}"
        )
        return Rejected(
            ReasonCode.AMOUNT_MISMATCH,
            "Invalid Total Amount.",
            {"total_amount": total_amount, "calculated_total": calculated_total}
        )

    return None
