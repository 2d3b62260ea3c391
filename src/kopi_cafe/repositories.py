"""
Ports the order service talks to. SQLAlchemy implementations live in ``kopi_cafe.crud``,
in-memory ones in the test suite.
"""
from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Optional, Protocol, Sequence, TypeVar

from kopi_cafe.models import (
    DiscountCode,
    Order,
    OrderDetailAddOn,
    Product,
    ProductAddOn,
    ProductSize,
)

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int  # zero-based
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    request: PageRequest = field(default_factory=lambda: PageRequest(0, 10))


class OrderStore(Protocol):
    async def get(self, order_id: int) -> Optional[Order]: ...

    async def find_by_customer(self, user_id: int, page_request: PageRequest) -> Page[Order]: ...

    async def find_by_status(self, status: str, page_request: PageRequest) -> Page[Order]: ...

    async def find_by_status_not_in_and_address_is_null(
        self, statuses: Iterable[str], page_request: PageRequest
    ) -> Page[Order]: ...

    async def find_by_status_not_in_and_address_is_not_null(
        self, statuses: Iterable[str], page_request: PageRequest
    ) -> Page[Order]: ...

    async def save(self, order: Order) -> Order: ...


class ProductStore(Protocol):
    async def get(self, product_id: int) -> Optional[Product]: ...

    async def save(self, product: Product) -> Product: ...


class ProductSizeStore(Protocol):
    async def find_by_product_and_size(self, product_id: int, size_id: int) -> Optional[ProductSize]: ...


class ProductAddOnStore(Protocol):
    async def find_by_product_and_add_on(self, product_id: int, add_on_id: int) -> Optional[ProductAddOn]: ...


class OrderDetailAddOnStore(Protocol):
    async def find_by_order_detail(self, order_detail_id: int) -> List[OrderDetailAddOn]: ...

    async def save_all(self, rows: Sequence[OrderDetailAddOn]) -> List[OrderDetailAddOn]: ...


class DiscountCodeStore(Protocol):
    async def find_by_code(self, code: str) -> Optional[DiscountCode]: ...


class TableAvailability(Protocol):
    async def set_available_if_no_pending_orders(self, table_id: int) -> None: ...


class StatusNotifier(Protocol):
    def notify_order_status_change_to_customer(self, order: Order, old_status: str, new_status: str) -> None: ...

    def notify_order_status_change_to_staff(self, order: Order, old_status: str, new_status: str) -> None: ...
