"""Filtered, paginated product search"""

import asyncio
import math
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..models.product import Product
from ..repository.product_repository import ProductRepository
from ..schemas.product import (
    ProductFilter,
    ProductResponse,
    ProductSearchParams,
    ProductSearchResult,
)
from ..utils.logging import setup_catalog_logging as setup_logging

logger = setup_logging("product_search_service")


def price_sort(sort: Optional[str]) -> Optional[List[Any]]:
    """Order clause for the requested price direction, None for store order"""
    if not sort:
        return None
    if sort == "asc":
        return [Product.price.asc(), Product.id.asc()]
    return [Product.price.desc(), Product.id.asc()]


class ProductSearchService:
    """Search never reads or writes the cache.

    The page query and the count query run concurrently, each on its own
    session from the factory.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession], page_size: int = 8
    ):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.session_factory = session_factory
        self.page_size = page_size

    async def _fetch_page(
        self, product_filter: ProductFilter, sort: Optional[List[Any]], skip: int
    ) -> List[Product]:
        async with self.session_factory() as session:
            return await ProductRepository(session).find(
                product_filter, sort=sort, skip=skip, limit=self.page_size
            )

    async def _count(self, product_filter: ProductFilter) -> int:
        async with self.session_factory() as session:
            return await ProductRepository(session).count_documents(product_filter)

    async def search_products(self, params: ProductSearchParams) -> ProductSearchResult:
        """One page of matching products plus the total page count"""
        product_filter = params.to_filter()
        skip = (params.page - 1) * self.page_size

        products, matched = await asyncio.gather(
            self._fetch_page(product_filter, price_sort(params.sort), skip),
            self._count(product_filter),
        )

        total_page = math.ceil(matched / self.page_size)
        logger.debug(
            "Product search completed",
            extra={
                "search": params.search,
                "category": params.category,
                "page": params.page,
                "matched": matched,
                "total_page": total_page,
            },
        )
        return ProductSearchResult(
            products=[ProductResponse.model_validate(p) for p in products],
            total_page=total_page,
        )
