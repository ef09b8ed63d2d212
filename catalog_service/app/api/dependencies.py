"""
FastAPI dependency injection for Catalog Service

Services are built per request from the request's database session and the
process cache store held on app.state.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.database import CatalogDatabaseManager
from ..core.setting import get_settings
from ..repository.product_repository import ProductRepository
from ..services.cache import CacheStore
from ..services.cache.invalidation import CacheInvalidationService
from ..services.dashboard_service import DashboardService
from ..services.photo_storage import LocalPhotoStorage
from ..services.product_query_service import ProductQueryService
from ..services.product_search_service import ProductSearchService
from ..services.product_service import ProductService

# =====================================================
# INFRASTRUCTURE DEPENDENCIES
# =====================================================


def get_database(request: Request) -> CatalogDatabaseManager:
    """Provide the database manager attached at startup"""
    return request.app.state.database_manager


async def get_async_session(
    database: CatalogDatabaseManager = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    async for session in database.get_async_session():
        yield session


def get_session_factory(
    database: CatalogDatabaseManager = Depends(get_database),
) -> async_sessionmaker[AsyncSession]:
    """Provide the session factory for services that open their own sessions"""
    return database.async_session_maker


def get_cache_store(request: Request) -> CacheStore:
    """Provide the process cache store created at startup"""
    return request.app.state.cache_store


def get_photo_storage() -> LocalPhotoStorage:
    return LocalPhotoStorage(get_settings().PHOTO_UPLOAD_DIR)


def get_product_repository(
    session: AsyncSession = Depends(get_async_session),
) -> ProductRepository:
    return ProductRepository(session)


def get_invalidation_service(
    cache_store: CacheStore = Depends(get_cache_store),
) -> CacheInvalidationService:
    return CacheInvalidationService(cache_store)


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_product_query_service(
    repository: ProductRepository = Depends(get_product_repository),
    cache_store: CacheStore = Depends(get_cache_store),
) -> ProductQueryService:
    """Provide ProductQueryService backed by the shared cache"""
    return ProductQueryService(repository, cache_store)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
    invalidation: CacheInvalidationService = Depends(get_invalidation_service),
    photo_storage: LocalPhotoStorage = Depends(get_photo_storage),
) -> ProductService:
    """Provide ProductService wired to cache invalidation"""
    return ProductService(repository, invalidation, photo_storage)


def get_product_search_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ProductSearchService:
    """Provide ProductSearchService with the configured page size"""
    return ProductSearchService(session_factory, get_settings().PRODUCT_PER_PAGE)


def get_dashboard_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DashboardService:
    return DashboardService(session_factory)


QueryServiceDep = Depends(get_product_query_service)
ProductServiceDep = Depends(get_product_service)
SearchServiceDep = Depends(get_product_search_service)
DashboardServiceDep = Depends(get_dashboard_service)
