"""Inventory statistics for the admin dashboard"""

import asyncio
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..repository.product_repository import ProductRepository
from ..schemas.product import ProductFilter


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_percentage(this_month: float, last_month: float) -> int:
    """Month-over-month change in percent, rounded to an integer"""
    if last_month == 0:
        return _round_half_up(this_month * 100)
    percentage = ((this_month - last_month) / last_month) * 100
    return _round_half_up(percentage)


class DashboardService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _count(self, product_filter: Optional[ProductFilter] = None) -> int:
        async with self.session_factory() as session:
            return await ProductRepository(session).count_documents(product_filter)

    async def _count_category(self, category: str) -> int:
        return await self._count(ProductFilter(category=category))

    async def count_products(self) -> int:
        """Total number of products in the catalog"""
        return await self._count()

    async def get_inventories(
        self, categories: Sequence[str], products_count: int
    ) -> List[Dict[str, int]]:
        """Share of the catalog held by each category, in input order"""
        counts = await asyncio.gather(
            *(self._count_category(category) for category in categories)
        )
        if products_count <= 0:
            return [{category: 0} for category in categories]
        return [
            {category: _round_half_up(count / products_count * 100)}
            for category, count in zip(categories, counts)
        ]
