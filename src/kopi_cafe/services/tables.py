import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from kopi_cafe.models import DiningTable, Order, TableStatusEnum
from kopi_cafe.status import CLOSED_STATUSES

logger = logging.getLogger(__name__)


class TableService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def set_available_if_no_pending_orders(self, table_id: int) -> None:
        """Free the table once none of its orders is still open."""
        table = await self.db.get(DiningTable, table_id)
        if table is None:
            return

        # autoflush pushes the status change of the current order before counting
        stmt = (
            select(func.count(Order.id))
            .where(Order.table_id == table_id)
            .where(Order.status.not_in([s.value for s in CLOSED_STATUSES]))
        )
        open_orders = (await self.db.execute(stmt)).scalar_one()
        if open_orders == 0 and table.status != TableStatusEnum.AVAILABLE:
            table.status = TableStatusEnum.AVAILABLE
            logger.info("Table %s is available again", table.number)
