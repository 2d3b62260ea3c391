"""
Money helpers shared by add-on reconciliation and discount validation.

Every nullable amount is normalised to ``Decimal("0")`` before any arithmetic.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from kopi_cafe.models import DiscountTypeEnum, OrderDetail

ZERO = Decimal("0")
CENT = Decimal("0.01")


def money(value) -> Decimal:
    """None, garbage and floats all end up as a Decimal."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO


def parse_int(value) -> Optional[int]:
    """Lenient id parsing: ints and numeric strings pass, anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def expected_unit_price(base_price, size_delta, add_on_prices: Iterable) -> Decimal:
    return money(base_price) + money(size_delta) + sum((money(p) for p in add_on_prices), ZERO)


def find_matching_detail(
    details: Sequence[OrderDetail],
    used: set,
    product_id: int,
    quantity: int,
    size_id: Optional[int],
    unit_price: Decimal,
) -> Optional[int]:
    """
    Index of the first unused detail with the same product, quantity, size and unit price.
    Lines without a product never match.
    """
    for index, detail in enumerate(details):
        if index in used or detail.product is None:
            continue
        if detail.product.id != product_id or detail.quantity != quantity:
            continue
        detail_size_id = detail.size.id if detail.size is not None else None
        if detail_size_id != size_id:
            continue
        if money(detail.unit_price) != unit_price:
            continue
        return index
    return None


def compute_discount(discount_type, discount_value, subtotal) -> Decimal:
    """Percent of subtotal or a flat amount, always within [0, subtotal]."""
    subtotal = money(subtotal)
    value = money(discount_value)
    if discount_type == DiscountTypeEnum.PERCENT:
        amount = subtotal * value / Decimal("100")
    else:
        amount = value
    amount = min(amount, subtotal)
    amount = max(amount, ZERO)
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
