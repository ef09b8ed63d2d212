"""
Catalog Service configuration
"""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the catalog service directory path
CATALOG_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = CATALOG_SERVICE_DIR / ".env"


class CatalogSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Catalog Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    CATALOG_DATABASE_URL: str = "sqlite+aiosqlite:///./catalog.db"
    DATABASE_POOL_SIZE: int = 25
    DATABASE_MAX_OVERFLOW: int = 50

    # Search pagination
    PRODUCT_PER_PAGE: int = Field(default=8, gt=0)

    # Read cache; 0 disables the entry bound
    CACHE_MAX_ENTRIES: int = Field(default=10000, ge=0)

    # Photo uploads
    PHOTO_UPLOAD_DIR: str = "uploads"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["*"]
    CORS_HEADERS: List[str] = ["*"]


# Create a singleton instance
_settings_instance = None


def get_settings() -> CatalogSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = CatalogSettings()
    return _settings_instance
