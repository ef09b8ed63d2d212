"""Product API endpoints"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from ...schemas.product import ProductCreate, ProductSearchParams, ProductUpdate
from ...services.product_query_service import ProductQueryService
from ...services.product_search_service import ProductSearchService
from ...services.product_service import ProductService
from ..dependencies import ProductServiceDep, QueryServiceDep, SearchServiceDep

router = APIRouter(prefix="/products")


@router.get("/latest")
async def get_latest_products(
    service: ProductQueryService = QueryServiceDep,
) -> Dict[str, Any]:
    """Five newest products"""
    products = await service.get_latest_products()
    return {"success": True, "products": products}


@router.get("/categories")
async def get_all_categories(
    service: ProductQueryService = QueryServiceDep,
) -> Dict[str, Any]:
    categories = await service.get_categories()
    return {"success": True, "categories": categories}


@router.get("/admin-products")
async def get_admin_products(
    service: ProductQueryService = QueryServiceDep,
) -> Dict[str, Any]:
    products = await service.get_admin_products()
    return {"success": True, "products": products}


@router.get("/all")
async def search_products(
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    price: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    service: ProductSearchService = SearchServiceDep,
) -> Dict[str, Any]:
    """Filtered, paginated search; never cached"""
    params = ProductSearchParams(
        search=search, sort=sort, category=category, price=price, page=page
    )
    result = await service.search_products(params)
    return {
        "success": True,
        "products": result.products,
        "total_page": result.total_page,
    }


@router.get("/{product_id}")
async def get_single_product(
    product_id: int,
    service: ProductQueryService = QueryServiceDep,
) -> Dict[str, Any]:
    product = await service.get_product(product_id)
    return {"success": True, "product": product}


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    service: ProductService = ProductServiceDep,
) -> Dict[str, Any]:
    product = await service.create_product(product_data)
    return {
        "success": True,
        "message": "Product created successfully",
        "product": product,
    }


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = ProductServiceDep,
) -> Dict[str, Any]:
    product = await service.update_product(product_id, product_data)
    return {
        "success": True,
        "message": "Product updated successfully",
        "product": product,
    }


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    service: ProductService = ProductServiceDep,
) -> Dict[str, Any]:
    await service.delete_product(product_id)
    return {"success": True, "message": "Product deleted successfully"}
