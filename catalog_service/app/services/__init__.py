"""Service layer for Catalog Service"""

from .dashboard_service import DashboardService
from .product_query_service import ProductQueryService
from .product_search_service import ProductSearchService
from .product_service import ProductService
from .stock_service import OrderStockService, StockReducer

__all__ = [
    "ProductService",
    "ProductQueryService",
    "ProductSearchService",
    "StockReducer",
    "OrderStockService",
    "DashboardService",
]
