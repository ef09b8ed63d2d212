"""
Pytest configuration and fixtures for Catalog Service tests.
"""

import os
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List

import pytest
import pytest_asyncio

# Set up test environment variables before importing anything else
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("CATALOG_DATABASE_URL", "sqlite+aiosqlite:///./catalog_test.db")
os.environ.setdefault("PRODUCT_PER_PAGE", "8")

from catalog_service.app.core.database import CatalogDatabaseManager
from catalog_service.app.models.product import Product
from catalog_service.app.repository.product_repository import ProductRepository
from catalog_service.app.services.cache import CacheStore
from catalog_service.app.services.cache.invalidation import CacheInvalidationService

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def make_product(product_id: int = 1, **overrides: Any) -> Product:
    """Transient Product instance for unit tests."""
    fields: Dict[str, Any] = {
        "id": product_id,
        "name": f"Product {product_id}",
        "price": Decimal("100.00"),
        "stock": 10,
        "category": "laptop",
        "photo": f"uploads/{product_id}.png",
        "created_at": BASE_TIME + timedelta(minutes=product_id),
        "updated_at": BASE_TIME + timedelta(minutes=product_id),
    }
    fields.update(overrides)
    return Product(**fields)


async def seed_products(
    database_manager: CatalogDatabaseManager, specs: List[Dict[str, Any]]
) -> List[Product]:
    """Insert products in order, with strictly increasing creation times."""
    created = []
    async with database_manager.async_session_maker() as session:
        repository = ProductRepository(session)
        for index, spec in enumerate(specs):
            fields: Dict[str, Any] = {
                "name": f"Item {index}",
                "price": Decimal("100.00"),
                "stock": 10,
                "category": "general",
                "photo": f"uploads/item-{index}.png",
                "created_at": BASE_TIME + timedelta(minutes=index),
                "updated_at": BASE_TIME + timedelta(minutes=index),
            }
            fields.update(spec)
            created.append(await repository.create(**fields))
    return created


@pytest.fixture
def cache_store() -> CacheStore:
    """Fresh unbounded cache store."""
    return CacheStore()


@pytest.fixture
def invalidation(cache_store) -> CacheInvalidationService:
    return CacheInvalidationService(cache_store)


@pytest_asyncio.fixture
async def database_manager(tmp_path):
    """Catalog database backed by a temporary SQLite file."""
    manager = CatalogDatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest_asyncio.fixture
async def db_session(database_manager):
    async with database_manager.async_session_maker() as session:
        yield session
