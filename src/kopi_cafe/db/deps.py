from typing import Optional

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kopi_cafe.config import settings
from kopi_cafe.crud.catalog import OrderDetailAddOnCrud, ProductAddOnCrud, ProductCrud, ProductSizeCrud
from kopi_cafe.crud.discount import DiscountCodeCrud
from kopi_cafe.crud.order import OrderCrud
from kopi_cafe.db.session import get_async_session
from kopi_cafe.models import User
from kopi_cafe.services.notifications import notifier
from kopi_cafe.services.order_service import OrderService
from kopi_cafe.services.tables import TableService


def get_order_service(db: AsyncSession = Depends(get_async_session)) -> OrderService:
    return OrderService(
        orders=OrderCrud(db),
        products=ProductCrud(db),
        product_sizes=ProductSizeCrud(db),
        product_add_ons=ProductAddOnCrud(db),
        order_detail_add_ons=OrderDetailAddOnCrud(db),
        discount_codes=DiscountCodeCrud(db),
        tables=TableService(db),
        notifier=notifier,
        enforce_transitions=settings.ENFORCE_STATUS_TRANSITIONS,
        staff_roles=settings.STAFF_ROLES,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
    )


async def get_current_user(
    x_user_id: Optional[int] = Header(None),
    db: AsyncSession = Depends(get_async_session),
) -> Optional[User]:
    """
    Caller identity from the X-User-Id header, None when absent or unknown.
    Placeholder until a real auth layer sits in front of the API.
    """
    if x_user_id is None:
        return None
    result = await db.execute(
        select(User).where(User.id == x_user_id).options(selectinload(User.role))
    )
    return result.scalars().first()
