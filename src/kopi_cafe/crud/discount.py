from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from kopi_cafe.models import DiscountCode


class DiscountCodeCrud:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_code(self, code: str) -> Optional[DiscountCode]:
        """Case-insensitive lookup."""
        stmt = select(DiscountCode).where(func.lower(DiscountCode.code) == code.lower())
        result = await self.db.execute(stmt)
        return result.scalars().first()
