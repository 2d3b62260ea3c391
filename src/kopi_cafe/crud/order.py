from typing import Iterable, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kopi_cafe.models import Order, OrderDetail, User
from kopi_cafe.repositories import Page, PageRequest


def _order_query():
    """
    Orders with everything the service and the projections touch.
    Loaded eagerly so nothing lazy-loads outside the greenlet.
    """
    return (
        select(Order)
        .options(
            selectinload(Order.details).selectinload(OrderDetail.product),
            selectinload(Order.details).selectinload(OrderDetail.size),
            selectinload(Order.payments),
            selectinload(Order.customer).selectinload(User.role),
            selectinload(Order.shipper),
            selectinload(Order.table),
            selectinload(Order.address),
        )
    )


class OrderCrud:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, order_id: int) -> Optional[Order]:
        result = await self.db.execute(_order_query().where(Order.id == order_id))
        return result.scalars().unique().first()

    async def find_by_customer(self, user_id: int, page_request: PageRequest) -> Page[Order]:
        return await self._paginate(
            _order_query().where(Order.customer_id == user_id).order_by(Order.created_at.desc(), Order.id.desc()),
            page_request,
        )

    async def find_by_status(self, status: str, page_request: PageRequest) -> Page[Order]:
        return await self._paginate(
            _order_query().where(Order.status == status).order_by(Order.created_at, Order.id),
            page_request,
        )

    async def find_by_status_not_in_and_address_is_null(
        self, statuses: Iterable[str], page_request: PageRequest
    ) -> Page[Order]:
        stmt = (
            _order_query()
            .where(Order.status.not_in(list(statuses)))
            .where(Order.address_id.is_(None))
            .order_by(Order.created_at, Order.id)
        )
        return await self._paginate(stmt, page_request)

    async def find_by_status_not_in_and_address_is_not_null(
        self, statuses: Iterable[str], page_request: PageRequest
    ) -> Page[Order]:
        stmt = (
            _order_query()
            .where(Order.status.not_in(list(statuses)))
            .where(Order.address_id.is_not(None))
            .order_by(Order.created_at, Order.id)
        )
        return await self._paginate(stmt, page_request)

    async def save(self, order: Order) -> Order:
        self.db.add(order)
        await self.db.flush()
        return order

    async def _paginate(self, stmt, page_request: PageRequest) -> Page[Order]:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()

        result = await self.db.execute(stmt.limit(page_request.size).offset(page_request.offset))
        return Page(items=list(result.scalars().unique().all()), total=total, request=page_request)
