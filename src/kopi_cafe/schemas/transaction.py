"""
Read-side projections of orders: customer transaction history and the staff pending board.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from kopi_cafe.models import Order, OrderDetail, OrderDetailAddOn
from kopi_cafe.pricing import money
from kopi_cafe.repositories import Page


def _enum_value(value):
    return getattr(value, "value", value)


def payment_name(order: Order) -> Optional[str]:
    """Method of the first payment, None when there is none."""
    if not order.payments:
        return None
    method = order.payments[0].method
    return _enum_value(method) if method is not None else None


def delivery(order: Order) -> Tuple[str, Optional[str]]:
    """(delivery name, delivery address). An address wins over a table."""
    if order.address is not None:
        return "Shipping", order.address.address_line
    if order.table is not None:
        return f"Table {order.table.number}", None
    return "", None


class AddOnLine(BaseModel):
    name: Optional[str] = None
    price: Decimal

    @classmethod
    def from_row(cls, row: OrderDetailAddOn):
        return cls(
            name=row.add_on.name if row.add_on is not None else None,
            price=money(row.unit_price_snapshot),
        )


class ProductLine(BaseModel):
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    product_img: Optional[str] = None
    qty: int
    price: Decimal
    subtotal: Decimal
    size: Optional[str] = None
    add_ons: List[AddOnLine] = []

    @classmethod
    def from_detail(cls, detail: OrderDetail, add_ons: Sequence[OrderDetailAddOn] = ()):
        product = detail.product
        name = detail.product_name_snapshot
        if name is None and product is not None:
            name = product.name
        return cls(
            product_id=product.id if product is not None else None,
            product_name=name,
            product_img=product.img_url if product is not None else None,
            qty=detail.quantity or 0,
            price=money(detail.unit_price),
            subtotal=money(detail.line_total),
            size=detail.size.name if detail.size is not None else None,
            add_ons=[AddOnLine.from_row(row) for row in add_ons],
        )


class OrderSummary(BaseModel):
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    status_name: Optional[str] = None
    receiver_name: str = ""
    payment_name: Optional[str] = None
    delivery_name: str = ""
    delivery_address: Optional[str] = None
    grand_total: Decimal
    subtotal: Decimal
    discount: Decimal
    notes: Optional[str] = None
    products: List[ProductLine] = []

    @classmethod
    def summary_fields(cls, order: Order, products: List[ProductLine]) -> dict:
        delivery_name, delivery_address = delivery(order)
        customer = order.customer
        return dict(
            id=order.id,
            created_at=order.created_at,
            status_name=order.status,
            receiver_name=(customer.full_name or "") if customer is not None else "",
            payment_name=payment_name(order),
            delivery_name=delivery_name,
            delivery_address=delivery_address,
            grand_total=money(order.total_amount),
            subtotal=money(order.subtotal_amount),
            discount=money(order.discount_amount),
            notes=order.note,
            products=products,
        )


class TransactionItem(OrderSummary):
    shipping_fee: Decimal

    @classmethod
    def from_order(cls, order: Order, products: List[ProductLine]):
        return cls(shipping_fee=money(order.shipping_amount), **cls.summary_fields(order, products))


class TransactionDetailItem(OrderSummary):
    delivery_fee: Decimal
    payment_fee: Decimal = Decimal("0")

    @classmethod
    def from_order(cls, order: Order, products: List[ProductLine]):
        return cls(delivery_fee=money(order.shipping_amount), **cls.summary_fields(order, products))


class PageMeta(BaseModel):
    current_page: int = Field(alias="currentPage")
    total_page: int = Field(alias="totalPage")
    prev: bool
    next: bool

    class Config:
        populate_by_name = True

    @classmethod
    def from_page(cls, page: Page):
        current = page.request.page + 1
        total_pages = -(-page.total // page.request.size) if page.request.size > 0 else 0
        return cls(
            current_page=current,
            total_page=total_pages,
            prev=current > 1,
            next=current < total_pages,
        )


class TransactionPage(BaseModel):
    data: List[TransactionItem]
    meta: PageMeta


class TransactionDetail(BaseModel):
    data: List[TransactionDetailItem]


class PendingOrderItem(BaseModel):
    id: Optional[int] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    note: Optional[str] = None
    table_number: Optional[int] = None
    address: Optional[str] = None
    shipper_id: Optional[int] = None
    total: Decimal
    products: List[ProductLine] = []

    @classmethod
    def from_order(cls, order: Order, products: List[ProductLine]):
        return cls(
            id=order.id,
            status=order.status,
            created_at=order.created_at,
            note=order.note,
            table_number=order.table.number if order.table is not None else None,
            address=order.address.address_line if order.address is not None else None,
            shipper_id=order.shipper.id if order.shipper is not None else None,
            total=money(order.total_amount),
            products=products,
        )


class PendingOrderPage(BaseModel):
    data: List[PendingOrderItem]
    meta: PageMeta
