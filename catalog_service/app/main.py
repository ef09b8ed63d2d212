"""
Catalog Service FastAPI Application
===================================

Entry point for the catalog service: cached product reads, product writes
with cache invalidation, product search, and stock reduction for placed
orders. The read cache is created at startup and cleared at shutdown.
"""

import os
import time
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.health import router as health_router
from .api.v1.inventory import router as inventory_router
from .api.v1.products import router as products_router
from .core.database import CatalogDatabaseManager, get_database_manager
from .core.setting import get_settings
from .middleware.error.error_handler import setup_catalog_error_handling
from .services.cache import CacheStore
from .utils.logging import setup_catalog_logging

settings = get_settings()
environment = os.getenv("ENVIRONMENT", settings.ENVIRONMENT).lower()
enable_file_logging = environment in ["production", "staging"]

logger = setup_catalog_logging(
    "catalog_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=enable_file_logging,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown."""
    startup_start = time.time()
    try:
        await _initialize_services(app)
    except Exception as e:
        logger.error(
            "Failed to start catalog service",
            exc_info=True,
            extra={
                "startup_duration_ms": int((time.time() - startup_start) * 1000),
                "error_type": type(e).__name__,
            },
        )
        raise

    logger.info(
        "Catalog service started successfully",
        extra={"total_startup_duration_ms": int((time.time() - startup_start) * 1000)},
    )

    yield

    await _shutdown_services(app)


async def _initialize_services(app: FastAPI) -> None:
    """Create the database tables and the process cache store."""
    if getattr(app.state, "database_manager", None) is None:
        app.state.database_manager = get_database_manager()
    await app.state.database_manager.create_tables()

    app.state.cache_store = CacheStore(max_entries=settings.CACHE_MAX_ENTRIES)
    logger.info(
        "Cache store initialized",
        extra={"max_entries": settings.CACHE_MAX_ENTRIES or None},
    )


async def _shutdown_services(app: FastAPI) -> None:
    """Tear down the cache store and close database connections."""
    cache_store: Optional[CacheStore] = getattr(app.state, "cache_store", None)
    if cache_store is not None:
        logger.info("Clearing cache store", extra=cache_store.get_stats())
        cache_store.clear()
        app.state.cache_store = None

    await app.state.database_manager.close()
    logger.info("Catalog service shutdown completed")


def create_app(database_manager: Optional[CatalogDatabaseManager] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.database_manager = database_manager

    setup_catalog_error_handling(app)
    _setup_cors(app)
    _setup_routers(app)

    return app


def _setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )


def _setup_routers(app: FastAPI) -> None:
    """Configure all application routers."""
    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": ""})

    app.include_router(products_router, prefix="/api/v1", tags=["Products"])
    routers_info.append({"router": "products", "prefix": "/api/v1"})

    app.include_router(inventory_router, prefix="/api/v1", tags=["Inventory"])
    routers_info.append({"router": "inventory", "prefix": "/api/v1"})

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )


app = create_app()
