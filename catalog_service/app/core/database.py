from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..models.base import CatalogServiceBase
from ..utils.logging import setup_catalog_logging as setup_logging
from .setting import get_settings

logger = setup_logging("catalog_service.database", log_level=get_settings().LOG_LEVEL)


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite's built-in lower() folds ASCII only
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class CatalogDatabaseManager:
    """Async engine and session factory for the catalog store."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        logger.info(
            "Initializing catalog database manager",
            extra={
                "operation": "database_manager_init",
                "database_url": database_url.split("@")[-1],  # Mask credentials
                "echo": echo,
            },
        )

        engine_kwargs: Dict[str, Any] = {"echo": echo}

        if "sqlite" in database_url:
            engine_kwargs["connect_args"] = {
                "timeout": 60,
                "check_same_thread": False,
            }
            logger.info(
                "Configured SQLite database settings",
                extra={"database_type": "sqlite", "timeout": 60},
            )
        else:
            settings = get_settings()
            engine_kwargs.update(
                {
                    "pool_size": settings.DATABASE_POOL_SIZE,
                    "max_overflow": settings.DATABASE_MAX_OVERFLOW,
                    "pool_timeout": 45,
                    "pool_recycle": 3600,
                    "pool_pre_ping": True,
                    "connect_args": {"command_timeout": 30},
                }
            )
            logger.info(
                "Configured PostgreSQL database settings",
                extra={
                    "database_type": "postgresql",
                    "pool_size": settings.DATABASE_POOL_SIZE,
                    "max_overflow": settings.DATABASE_MAX_OVERFLOW,
                },
            )

        self.async_engine = create_async_engine(database_url, **engine_kwargs)
        if "sqlite" in database_url:
            event.listen(
                self.async_engine.sync_engine, "connect", _register_sqlite_functions
            )
        self.async_session_maker = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_tables(self) -> None:
        """Create all catalog tables."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(CatalogServiceBase.metadata.create_all, checkfirst=True)
        logger.info(
            "Database tables created successfully",
            extra={"operation": "create_tables"},
        )

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async database session."""
        async with self.async_session_maker() as session:
            yield session

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        await self.async_engine.dispose()
        logger.info(
            "Catalog database connections closed",
            extra={"operation": "database_close"},
        )


_database_manager: Optional[CatalogDatabaseManager] = None


def get_database_manager() -> CatalogDatabaseManager:
    """Get the process database manager, creating it on first use."""
    global _database_manager
    if _database_manager is None:
        settings = get_settings()
        _database_manager = CatalogDatabaseManager(
            database_url=settings.CATALOG_DATABASE_URL, echo=settings.DEBUG
        )
    return _database_manager
