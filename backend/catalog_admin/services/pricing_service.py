"""Discounted price calculation for the product form."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[Decimal, float, int, str, None]

CENTS = Decimal("0.01")


def _to_decimal(value: Number) -> Decimal:
    """Parse a form value; blank or unparsable input counts as zero."""
    if value is None or value == "":
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def calculate_discounted_price(
    original_price: Number,
    discount_percentage: Number
) -> Optional[Decimal]:
    """
    Calculate the discounted price from the original price and discount %.

    Returns None when the inputs do not define a price (no original price,
    or a discount outside 0-100), in which case the caller keeps whatever
    value it already has.
    """
    original = _to_decimal(original_price)
    discount = _to_decimal(discount_percentage)

    if original > 0 and 0 < discount <= 100:
        discount_amount = original * discount / 100
        return (original - discount_amount).quantize(CENTS, rounding=ROUND_HALF_UP)

    if discount == 0 and original > 0:
        return original.quantize(CENTS, rounding=ROUND_HALF_UP)

    return None
