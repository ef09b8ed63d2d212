"""Cached product reads"""

from typing import Any, Awaitable, Callable, List, Union

from pydantic import TypeAdapter

from ..core.exceptions import ProductNotFoundError
from ..repository.product_repository import ProductRepository
from ..schemas.product import ProductResponse
from ..utils.logging import setup_catalog_logging as setup_logging
from .cache import CacheStore
from .cache.keys import (
    all_products_key,
    categories_key,
    latest_products_key,
    product_key,
)

logger = setup_logging("product_query_service")

LATEST_PRODUCTS_LIMIT = 5

_product_list = TypeAdapter(List[ProductResponse])
_category_list = TypeAdapter(List[str])


class ProductQueryService:
    """Read-through cache in front of the product store.

    Each read derives its key, returns the deserialized entry on a hit, and on
    a miss queries the store and populates exactly one entry.
    Invalidation is the write paths' job; see CacheInvalidationService.
    """

    def __init__(self, repository: ProductRepository, cache_store: CacheStore):
        self.repository = repository
        self.cache_store = cache_store

    async def _read_through(
        self,
        key: str,
        adapter: TypeAdapter,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        cached = self.cache_store.get(key)
        if cached is not None:
            logger.debug("Cache hit", extra={"cache_key": key})
            return adapter.validate_json(cached)

        logger.debug("Cache miss", extra={"cache_key": key})
        value = await fetch()
        self.cache_store.set(key, adapter.dump_json(value).decode("utf-8"))
        return value

    async def get_latest_products(self) -> List[ProductResponse]:
        """Newest products, most recent first"""

        async def fetch() -> List[ProductResponse]:
            products = await self.repository.find_latest(LATEST_PRODUCTS_LIMIT)
            return [ProductResponse.model_validate(p) for p in products]

        return await self._read_through(latest_products_key(), _product_list, fetch)

    async def get_categories(self) -> List[str]:
        """Distinct categories across all products"""

        async def fetch() -> List[str]:
            return await self.repository.distinct("category")

        return await self._read_through(categories_key(), _category_list, fetch)

    async def get_admin_products(self) -> List[ProductResponse]:
        """Unfiltered product listing"""

        async def fetch() -> List[ProductResponse]:
            products = await self.repository.find()
            return [ProductResponse.model_validate(p) for p in products]

        return await self._read_through(all_products_key(), _product_list, fetch)

    async def get_product(self, product_id: Union[int, str]) -> ProductResponse:
        """Single product by id; a missing id is never cached"""
        key = product_key(product_id)
        cached = self.cache_store.get(key)
        if cached is not None:
            logger.debug("Cache hit", extra={"cache_key": key})
            return ProductResponse.model_validate_json(cached)

        logger.debug("Cache miss", extra={"cache_key": key})
        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        response = ProductResponse.model_validate(product)
        self.cache_store.set(key, response.model_dump_json())
        return response
