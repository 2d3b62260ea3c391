import logging
from datetime import datetime
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Union

from fastapi.concurrency import run_in_threadpool

from kopi_cafe.config import settings
from kopi_cafe.exceptions import BadRequestError, ForbiddenError, OrderNotFoundError
from kopi_cafe.models import Order, OrderDetailAddOn, OrderStatusEnum, Product, User
from kopi_cafe.pricing import ZERO, compute_discount, expected_unit_price, find_matching_detail, money
from kopi_cafe.repositories import (
    DiscountCodeStore,
    OrderDetailAddOnStore,
    OrderStore,
    PageRequest,
    ProductAddOnStore,
    ProductSizeStore,
    ProductStore,
    StatusNotifier,
    TableAvailability,
)
from kopi_cafe.schemas.discount import DiscountValidateRequest, DiscountValidation
from kopi_cafe.schemas.order import ChangeStatusRequest, LineDescriptor
from kopi_cafe.schemas.transaction import (
    PageMeta,
    PendingOrderItem,
    PendingOrderPage,
    ProductLine,
    TransactionDetail,
    TransactionDetailItem,
    TransactionItem,
    TransactionPage,
)
from kopi_cafe.status import CLOSED_STATUSES, PAYMENT_STATUS_FOR, is_transition_allowed

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order pricing and lifecycle rules: add-on reconciliation, status changes,
    discount codes and the transaction history read side.
    """

    def __init__(
        self,
        orders: OrderStore,
        products: ProductStore,
        product_sizes: ProductSizeStore,
        product_add_ons: ProductAddOnStore,
        order_detail_add_ons: OrderDetailAddOnStore,
        discount_codes: DiscountCodeStore,
        tables: TableAvailability,
        notifier: StatusNotifier,
        *,
        now: Callable[[], datetime] = datetime.now,
        enforce_transitions: bool = False,
        staff_roles: Optional[Iterable[str]] = None,
        default_page_size: int = settings.DEFAULT_PAGE_SIZE,
    ):
        self.orders = orders
        self.products = products
        self.product_sizes = product_sizes
        self.product_add_ons = product_add_ons
        self.order_detail_add_ons = order_detail_add_ons
        self.discount_codes = discount_codes
        self.tables = tables
        self.notifier = notifier
        self.now = now
        self.enforce_transitions = enforce_transitions
        if staff_roles is None:
            staff_roles = settings.STAFF_ROLES
        self.staff_roles = frozenset(role.upper() for role in staff_roles)
        self.default_page_size = default_page_size

    # ------------------------------------------------------------------
    # Add-on reconciliation
    # ------------------------------------------------------------------

    async def persist_add_ons_for_order(self, order: Optional[Order], lines: Optional[Sequence]) -> None:
        """
        Attach the requested add-ons to the order lines they were priced into.

        Each request line is re-priced (base + size delta + add-ons) and bound to the first
        unused order detail with the same product, quantity, size and unit price.
        Lines that match nothing are skipped silently.
        """
        if order is None or not lines or not order.details:
            return

        details = list(order.details)
        used = set()

        for raw in lines:
            line = LineDescriptor.parse_line(raw)
            if line is None:
                logger.debug("Order %s: unreadable line %r skipped", order.id, raw)
                continue

            product = await self.products.get(line.product_id)
            if product is None:
                continue

            size_delta = ZERO
            if line.size_id is not None:
                product_size = await self.product_sizes.find_by_product_and_size(product.id, line.size_id)
                if product_size is not None:
                    size_delta = money(product_size.price)

            rows: List[OrderDetailAddOn] = []
            for add_on_id in line.add_on_ids:
                link = await self.product_add_ons.find_by_product_and_add_on(product.id, add_on_id)
                if link is None:
                    continue
                rows.append(OrderDetailAddOn(add_on=link.add_on, unit_price_snapshot=money(link.price)))

            expected = expected_unit_price(product.price, size_delta, [row.unit_price_snapshot for row in rows])
            index = find_matching_detail(details, used, product.id, line.qty, line.size_id, expected)
            if index is None:
                logger.debug(
                    "Order %s: no detail for product=%s qty=%s size=%s unit=%s",
                    order.id, product.id, line.qty, line.size_id, expected,
                )
                continue

            used.add(index)
            if not rows:
                continue
            for row in rows:
                row.order_detail = details[index]
            await self.order_detail_add_ons.save_all(rows)

    # ------------------------------------------------------------------
    # Status transition
    # ------------------------------------------------------------------

    async def change_status(self, order_id: int, payload: Union[ChangeStatusRequest, Mapping, None]) -> Order:
        if isinstance(payload, ChangeStatusRequest):
            raw_status = payload.status
        else:
            raw_status = (payload or {}).get("status")
        try:
            new_status = OrderStatusEnum.parse(raw_status)
        except ValueError:
            raise BadRequestError("Invalid status")

        order = await self.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        old_status = order.status
        if not is_transition_allowed(old_status, new_status):
            if self.enforce_transitions:
                raise BadRequestError(f"Cannot change status from {old_status} to {new_status.value}")
            logger.info("Order %s: unusual transition %s -> %s", order.id, old_status, new_status.value)

        if new_status is OrderStatusEnum.COMPLETED:
            await self._deduct_stock(order)

        order.status = new_status.value
        self._sync_payment_status(order, new_status)
        order.updated_at = self.now()

        if order.table is not None:
            await self.tables.set_available_if_no_pending_orders(order.table.id)

        await self._notify(order, old_status, new_status.value)

        return await self.orders.save(order)

    async def _deduct_stock(self, order: Order) -> None:
        # all-or-nothing: check every product before touching any stock
        required: dict[Product, int] = {}
        for detail in order.details:
            if detail.product is None:
                continue
            required[detail.product] = required.get(detail.product, 0) + (detail.quantity or 0)

        for product, quantity in required.items():
            if (product.stock_qty or 0) < quantity:
                raise BadRequestError(f"Product '{product.name}' has insufficient stock")

        for product, quantity in required.items():
            product.stock_qty = (product.stock_qty or 0) - quantity
            await self.products.save(product)

    @staticmethod
    def _sync_payment_status(order: Order, new_status: OrderStatusEnum) -> None:
        if not order.payments:
            return
        payment_status = PAYMENT_STATUS_FOR.get(new_status)
        if payment_status is not None:
            order.payments[0].status = payment_status

    async def _notify(self, order: Order, old_status: str, new_status: str) -> None:
        # senders may block on network I/O, keep them off the event loop
        senders = (
            self.notifier.notify_order_status_change_to_customer,
            self.notifier.notify_order_status_change_to_staff,
        )
        for send in senders:
            try:
                await run_in_threadpool(send, order, old_status, new_status)
            except Exception:
                logger.warning("Order %s: status notification failed", order.id, exc_info=True)

    # ------------------------------------------------------------------
    # Discount codes
    # ------------------------------------------------------------------

    async def validate_discount(
        self,
        payload: Union[DiscountValidateRequest, Mapping, None],
        user: Optional[User] = None,
    ) -> DiscountValidation:
        if isinstance(payload, DiscountValidateRequest):
            request = payload
        else:
            request = DiscountValidateRequest.model_validate(dict(payload or {}))

        if not request.code:
            raise BadRequestError("Please enter a discount code")

        discount = await self.discount_codes.find_by_code(request.code)
        if discount is None:
            raise BadRequestError("Discount code does not exist")
        if not discount.active:
            raise BadRequestError("Discount code has been disabled")

        now = self.now()
        if discount.starts_at is not None and now < discount.starts_at:
            raise BadRequestError("Discount code is not yet valid")
        if discount.ends_at is not None and now > discount.ends_at:
            raise BadRequestError("Discount code has expired")

        if discount.min_order_amount is not None and request.subtotal < money(discount.min_order_amount):
            raise BadRequestError("Minimum order value not reached")

        amount = compute_discount(discount.discount_type, discount.discount_value, request.subtotal)
        logger.debug(
            "Discount %s for user %s: subtotal=%s amount=%s",
            discount.code, getattr(user, "id", None), request.subtotal, amount,
        )
        return DiscountValidation(
            valid=True,
            code=discount.code,
            discount_type=discount.discount_type,
            discount_value=money(discount.discount_value),
            discount_amount=amount,
        )

    # ------------------------------------------------------------------
    # Transaction history
    # ------------------------------------------------------------------

    async def get_user_transactions(
        self, user_id: Optional[int], page: Optional[int] = 1, limit: Optional[int] = None
    ) -> TransactionPage:
        result = await self.orders.find_by_customer(user_id, self._page_request(page, limit))
        data = [TransactionItem.from_order(order, await self._product_lines(order)) for order in result.items]
        return TransactionPage(data=data, meta=PageMeta.from_page(result))

    async def get_transaction_detail(self, order_id: int, current_user: Optional[User]) -> TransactionDetail:
        if current_user is None:
            raise ForbiddenError()

        order = await self.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not self._can_view(order, current_user):
            raise ForbiddenError()

        item = TransactionDetailItem.from_order(order, await self._product_lines(order))
        return TransactionDetail(data=[item])

    async def list_pending(
        self,
        status: Optional[str],
        order_type: Optional[str],
        page: Optional[int] = 1,
        limit: Optional[int] = None,
    ) -> PendingOrderPage:
        """
        TABLE: open dine-in orders, SHIPPING: open delivery orders,
        anything else: orders with exactly ``status``.
        """
        page_request = self._page_request(page, limit)
        closed = sorted(s.value for s in CLOSED_STATUSES)
        kind = (order_type or "").strip().upper()
        if kind == "TABLE":
            result = await self.orders.find_by_status_not_in_and_address_is_null(closed, page_request)
        elif kind == "SHIPPING":
            result = await self.orders.find_by_status_not_in_and_address_is_not_null(closed, page_request)
        else:
            result = await self.orders.find_by_status(status, page_request)

        data = [PendingOrderItem.from_order(order, await self._product_lines(order)) for order in result.items]
        return PendingOrderPage(data=data, meta=PageMeta.from_page(result))

    def _can_view(self, order: Order, user: User) -> bool:
        customer = order.customer
        if customer is not None and customer.id is not None and customer.id == user.id:
            return True
        role = user.role
        return role is not None and bool(role.name) and role.name.upper() in self.staff_roles

    def _page_request(self, page: Optional[int], limit: Optional[int]) -> PageRequest:
        page = page if page is not None and page > 0 else 1
        limit = limit if limit is not None and limit > 0 else self.default_page_size
        return PageRequest(page=page - 1, size=limit)

    async def _product_lines(self, order: Order) -> List[ProductLine]:
        lines = []
        for detail in order.details:
            add_ons = []
            if detail.id is not None:
                add_ons = await self.order_detail_add_ons.find_by_order_detail(detail.id)
            lines.append(ProductLine.from_detail(detail, add_ons))
        return lines

