"""
Invoice totals calculator

Computes the tax-inclusive payable amount of an invoice. The document
service recomputes the same figures, so the arithmetic below runs in
IEEE-754 doubles, in this exact order, and must not be rearranged:

    product_total      = sum(quantity * rate)        (listed order)
    total_amount       = product_total + loading_charge
    gst_amount         = total_amount * 0.18
    final_before_round = total_amount + gst_amount
    final_amount       = custom_round(final_before_round)
    round_off          = final_amount - final_before_round
    cgst = sgst        = gst_amount / 2
"""

import logging
import math
from typing import Iterable, Sequence, Tuple

from models.invoice import InvoiceTotals, LineItem
from utils.validators import InvoiceValidator

logger = logging.getLogger(__name__)

GST_RATE = 0.18
ROUND_UP_THRESHOLD = 0.50


def custom_round(value: float) -> int:
    """
    Round to an integer, going up only when the fraction exceeds 0.50

    An exact .50 stays at the floor. Negative values keep the floor-based
    definition: custom_round(-1.5) == -2.
    """
    floor_value = math.floor(value)
    fraction = value - floor_value

    if fraction > ROUND_UP_THRESHOLD:
        return floor_value + 1
    return floor_value


def calculate_totals(amounts: Iterable[Tuple[float, float]], loading_charge: float) -> InvoiceTotals:
    """
    Run the totals arithmetic without validating inputs

    Args:
        amounts: (quantity, rate) pairs in listed order
        loading_charge: flat charge added before tax

    Used directly by the live form preview, where unparseable fields
    already default to 0.
    """
    product_total = 0.0
    for index, (quantity, rate) in enumerate(amounts, 1):
        item_total = quantity * rate
        product_total += item_total
        logger.debug("Product %d: %s x %s = %s", index, quantity, rate, item_total)

    total_amount = product_total + loading_charge
    gst_amount = total_amount * GST_RATE
    final_before_round = total_amount + gst_amount
    final_amount = custom_round(final_before_round)
    round_off = final_amount - final_before_round
    cgst = gst_amount / 2
    sgst = gst_amount / 2

    logger.debug(
        "Loading charge: %s, product total: %s, total amount: %s, final: %s",
        loading_charge, product_total, total_amount, final_amount
    )

    return InvoiceTotals(
        product_total=product_total,
        loading_charge=loading_charge,
        total_amount=total_amount,
        gst_amount=gst_amount,
        cgst=cgst,
        sgst=sgst,
        final_before_round=final_before_round,
        round_off=round_off,
        final_amount=final_amount
    )


def compute(items: Sequence[LineItem], loading_charge: float) -> InvoiceTotals:
    """
    Validated totals for a list of line items

    Raises:
        InvoiceValidationError: empty item list, non-positive quantity or
            rate, blank description/HSN/unit, negative or non-finite
            loading charge
    """
    InvoiceValidator().validate_items(items, loading_charge).raise_for_errors()

    return calculate_totals(
        ((item.quantity, item.rate) for item in items),
        float(loading_charge)
    )
