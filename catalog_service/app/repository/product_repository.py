"""Product repository for database operations"""

from typing import Any, List, Optional, Union

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import StoreUnavailableError
from ..models.product import Product
from ..schemas.product import ProductFilter

# Columns that distinct() may be asked about
DISTINCT_FIELDS = {"category": Product.category}


class ProductRepository:
    """Repository for product database operations.

    Exposes the find / find_by_id / distinct / count_documents / save /
    delete_one / create surface the catalog services are written against.
    Every driver failure surfaces as StoreUnavailableError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _apply_filter(query: Select, product_filter: Optional[ProductFilter]) -> Select:
        if product_filter is None:
            return query
        if product_filter.search:
            query = query.where(
                func.lower(Product.name).contains(
                    product_filter.search.lower(), autoescape=True
                )
            )
        if product_filter.max_price is not None:
            query = query.where(Product.price <= product_filter.max_price)
        if product_filter.category:
            query = query.where(Product.category == product_filter.category)
        return query

    async def find(
        self,
        product_filter: Optional[ProductFilter] = None,
        sort: Optional[List[Any]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Product]:
        """Find products matching the filter, in the given order"""
        query = self._apply_filter(select(Product), product_filter)
        query = query.order_by(*sort) if sort else query.order_by(Product.id)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("find", e) from e
        return list(result.scalars().all())

    async def find_latest(self, limit: int) -> List[Product]:
        """Newest products first"""
        return await self.find(
            sort=[Product.created_at.desc(), Product.id.desc()], limit=limit
        )

    async def find_by_id(self, product_id: Union[int, str]) -> Optional[Product]:
        """Get product by ID"""
        try:
            product_id = int(product_id)
        except (TypeError, ValueError):
            return None
        try:
            return await self.db.get(Product, product_id)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("find_by_id", e) from e

    async def distinct(self, field: str) -> List[Any]:
        """Distinct values of a product column"""
        column = DISTINCT_FIELDS.get(field)
        if column is None:
            raise ValueError(f"distinct() is not supported for field '{field}'")
        query = select(column).distinct().order_by(column)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("distinct", e) from e
        return list(result.scalars().all())

    async def count_documents(self, product_filter: Optional[ProductFilter] = None) -> int:
        """Count products matching the filter"""
        query = self._apply_filter(
            select(func.count()).select_from(Product), product_filter
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("count_documents", e) from e
        return int(result.scalar_one())

    async def create(self, **fields: Any) -> Product:
        """Create a new product"""
        product = Product(**fields)
        self.db.add(product)
        try:
            await self.db.commit()
            await self.db.refresh(product)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreUnavailableError("create", e) from e
        return product

    async def save(self, product: Product) -> Product:
        """Persist changes made to a loaded product"""
        self.db.add(product)
        try:
            await self.db.commit()
            await self.db.refresh(product)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreUnavailableError("save", e) from e
        return product

    async def delete_one(self, product: Product) -> None:
        """Delete a loaded product"""
        try:
            await self.db.delete(product)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreUnavailableError("delete_one", e) from e

    async def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Relative stock decrement in a single statement.

        Returns False when no row has the given id.
        """
        query = (
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock - quantity)
        )
        try:
            result = await self.db.execute(query)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreUnavailableError("decrement_stock", e) from e
        return result.rowcount > 0
