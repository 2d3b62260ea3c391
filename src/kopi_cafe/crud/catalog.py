from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kopi_cafe.models import OrderDetailAddOn, Product, ProductAddOn, ProductSize


class ProductCrud:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, product_id: int) -> Optional[Product]:
        return await self.db.get(Product, product_id)

    async def save(self, product: Product) -> Product:
        self.db.add(product)
        await self.db.flush()
        return product


class ProductSizeCrud:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_product_and_size(self, product_id: int, size_id: int) -> Optional[ProductSize]:
        stmt = select(ProductSize).where(
            ProductSize.product_id == product_id,
            ProductSize.size_id == size_id,
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()


class ProductAddOnCrud:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_product_and_add_on(self, product_id: int, add_on_id: int) -> Optional[ProductAddOn]:
        stmt = (
            select(ProductAddOn)
            .where(ProductAddOn.product_id == product_id, ProductAddOn.add_on_id == add_on_id)
            .options(selectinload(ProductAddOn.add_on))
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()


class OrderDetailAddOnCrud:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_order_detail(self, order_detail_id: int) -> List[OrderDetailAddOn]:
        stmt = (
            select(OrderDetailAddOn)
            .where(OrderDetailAddOn.order_detail_id == order_detail_id)
            .options(selectinload(OrderDetailAddOn.add_on))
            .order_by(OrderDetailAddOn.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def save_all(self, rows: Sequence[OrderDetailAddOn]) -> List[OrderDetailAddOn]:
        self.db.add_all(rows)
        await self.db.flush()
        return list(rows)
