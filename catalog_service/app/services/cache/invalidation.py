"""
Cache invalidation service for Catalog Service
"""

from typing import Any, Set

from ...schemas.cache import ChangeDescriptor
from ...utils.logging import setup_catalog_logging
from . import CacheStore
from .keys import (
    all_coupons_key,
    all_orders_key,
    all_products_key,
    categories_key,
    latest_products_key,
    my_orders_key,
    order_key,
    product_key,
)

logger = setup_catalog_logging("catalog_service_cache_invalidation")


def cache_keys_for(descriptor: ChangeDescriptor) -> Set[str]:
    """Every cache key made stale by the described change."""
    keys: Set[str] = set()

    if descriptor.product:
        keys.update([latest_products_key(), categories_key(), all_products_key()])
        if descriptor.product_id is not None:
            keys.add(product_key(descriptor.product_id))
        for product_id in descriptor.product_ids:
            keys.add(product_key(product_id))

    if descriptor.order:
        keys.update(
            [
                all_orders_key(),
                my_orders_key(descriptor.user_id),
                order_key(descriptor.order_id),
            ]
        )

    if descriptor.coupon:
        keys.add(all_coupons_key())

    return keys


class CacheInvalidationService:
    """Drops the cache entries a write path made stale"""

    def __init__(self, cache_store: CacheStore):
        self.cache_store = cache_store

    def invalidate(self, descriptor: ChangeDescriptor) -> Set[str]:
        """Delete the keys for descriptor in one bulk call; returns the keys"""
        keys = cache_keys_for(descriptor)
        if not keys:
            return keys

        deleted = self.cache_store.delete_many(keys)
        logger.info(
            f"Invalidated {deleted} cache entries",
            extra={
                "cache_keys": sorted(keys),
                "deleted": deleted,
                "product": descriptor.product,
                "order": descriptor.order,
                "coupon": descriptor.coupon,
            },
        )
        return keys

    def invalidate_fields(self, **fields: Any) -> Set[str]:
        """Shorthand for invalidate(ChangeDescriptor(**fields))"""
        return self.invalidate(ChangeDescriptor(**fields))
