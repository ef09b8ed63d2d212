from typing import Any, Dict

from fastapi import APIRouter, Request

from ...core.setting import get_settings
from ...utils.service_health import create_catalog_service_health_check

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> Dict[str, Any]:
    """Health check endpoint for the catalog service."""
    cache_store = getattr(request.app.state, "cache_store", None)
    return create_catalog_service_health_check(
        "catalog-service", get_settings().APP_VERSION, cache_store
    )
