"""Inventory API endpoints"""

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ...repository.product_repository import ProductRepository
from ...schemas.product import OrderLine
from ...services.cache.invalidation import CacheInvalidationService
from ...services.dashboard_service import DashboardService
from ...services.product_query_service import ProductQueryService
from ...services.stock_service import OrderStockService, StockReducer
from ..dependencies import (
    DashboardServiceDep,
    QueryServiceDep,
    get_async_session,
    get_invalidation_service,
)

router = APIRouter(prefix="/inventory")


class OrderStockRequest(BaseModel):
    order_id: Optional[Union[int, str]] = None
    user_id: Optional[Union[int, str]] = None
    items: List[OrderLine] = Field(..., min_length=1)
    validate_first: bool = False


def get_order_stock_service(
    session: AsyncSession = Depends(get_async_session),
    invalidation: CacheInvalidationService = Depends(get_invalidation_service),
) -> OrderStockService:
    return OrderStockService(StockReducer(ProductRepository(session)), invalidation)


@router.post("/reduce-stock")
async def reduce_stock(
    payload: OrderStockRequest,
    service: OrderStockService = Depends(get_order_stock_service),
) -> Dict[str, Any]:
    """Decrement stock for the lines of a placed order"""
    product_ids = await service.commit_order(
        payload.items,
        order_id=payload.order_id,
        user_id=payload.user_id,
        validate_first=payload.validate_first,
    )
    return {"success": True, "product_ids": product_ids}


@router.get("/stats")
async def get_inventory_stats(
    query_service: ProductQueryService = QueryServiceDep,
    dashboard: DashboardService = DashboardServiceDep,
) -> Dict[str, Any]:
    """Share of products per category"""
    categories = await query_service.get_categories()
    products_count = await dashboard.count_products()
    inventories = await dashboard.get_inventories(categories, products_count)
    return {
        "success": True,
        "products_count": products_count,
        "category_count": inventories,
    }
