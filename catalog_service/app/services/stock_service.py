"""Stock decrement on order placement"""

from typing import List, Optional, Sequence, Union

from ..core.exceptions import ProductNotFoundError
from ..repository.product_repository import ProductRepository
from ..schemas.product import OrderLine
from ..utils.logging import setup_catalog_logging as setup_logging
from .cache.invalidation import CacheInvalidationService

logger = setup_logging("stock_service")


class StockReducer:
    """Decrements product stock for each line of a placed order.

    Lines are applied one at a time, in order. The first unknown product
    aborts the batch; lines already applied stay applied unless
    ``validate_first`` is requested. Stock is not clamped at zero.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def _ensure_exists(self, line: OrderLine) -> None:
        product = await self.repository.find_by_id(line.product_id)
        if product is None:
            logger.error(
                "Stock reduction aborted, product not found",
                extra={"product_id": line.product_id, "quantity": line.quantity},
            )
            raise ProductNotFoundError(line.product_id)

    async def reduce_stock(
        self, lines: Sequence[OrderLine], validate_first: bool = False
    ) -> None:
        """Apply every line's decrement.

        With validate_first, every product is looked up before any stock
        changes, so an unknown product leaves all stock untouched.
        """
        if validate_first:
            for line in lines:
                await self._ensure_exists(line)

        for line in lines:
            if not validate_first:
                await self._ensure_exists(line)
            # Relative update; concurrent orders cannot overwrite each other
            applied = await self.repository.decrement_stock(
                line.product_id, line.quantity
            )
            if not applied:
                raise ProductNotFoundError(line.product_id)

            logger.info(
                "Stock reduced",
                extra={"product_id": line.product_id, "quantity": line.quantity},
            )


class OrderStockService:
    """Order placement path: reduce stock, then drop the affected cache keys"""

    def __init__(
        self, reducer: StockReducer, invalidation: CacheInvalidationService
    ):
        self.reducer = reducer
        self.invalidation = invalidation

    async def commit_order(
        self,
        lines: Sequence[OrderLine],
        order_id: Optional[Union[int, str]] = None,
        user_id: Optional[Union[int, str]] = None,
        validate_first: bool = False,
    ) -> List[Union[int, str]]:
        """Reduce stock for the order; returns the ids of the touched products.

        The cache is invalidated even when the reduction aborts, since earlier
        lines may already have been applied.
        """
        product_ids = list(dict.fromkeys(line.product_id for line in lines))
        try:
            await self.reducer.reduce_stock(lines, validate_first=validate_first)
        finally:
            self.invalidation.invalidate_fields(
                product=True,
                order=True,
                product_ids=product_ids,
                order_id=order_id,
                user_id=user_id,
            )
        return product_ids
