"""
Catalog Service Health Check Utilities
======================================
"""

import time
from typing import Any, Callable, Dict, Optional

from ..services.cache import CacheStore


class CatalogServiceHealthChecker:
    """Runs named checks and aggregates their status"""

    def __init__(self, service_name: str = "catalog_service") -> None:
        self.service_name = service_name
        self.checks: Dict[str, Callable[[], Dict[str, Any]]] = {}
        self.start_time = time.time()

    def add_check(self, name: str, check_func: Callable[[], Dict[str, Any]]) -> None:
        """Add a health check function"""
        self.checks[name] = check_func

    def run_checks(self) -> Dict[str, Any]:
        results = {}
        check_start_time = time.time()

        for name, check_func in self.checks.items():
            individual_start = time.time()
            try:
                result = check_func()
            except Exception as e:
                result = {"status": "error", "error": str(e)}
            result["duration_ms"] = round((time.time() - individual_start) * 1000, 2)
            results[name] = result

        return {
            "service": self.service_name,
            "status": "healthy"
            if all(r.get("status") == "healthy" for r in results.values())
            else "unhealthy",
            "checks": results,
            "total_duration_ms": round((time.time() - check_start_time) * 1000, 2),
            "uptime_seconds": round(time.time() - self.start_time, 2),
            "timestamp": time.time(),
        }

    def add_catalog_checks(
        self, version: str, cache_store: Optional[CacheStore] = None
    ) -> None:
        def basic_check() -> Dict[str, Any]:
            return {
                "status": "healthy",
                "message": "Catalog Service is running",
                "version": version,
            }

        def cache_check() -> Dict[str, Any]:
            if cache_store is None:
                return {"status": "unhealthy", "message": "Cache store not initialized"}
            return {"status": "healthy", **cache_store.get_stats()}

        self.add_check("basic", basic_check)
        self.add_check("cache", cache_check)


def create_catalog_service_health_check(
    service_name: str = "catalog_service",
    version: str = "1.0.0",
    cache_store: Optional[CacheStore] = None,
) -> Dict[str, Any]:
    """Create basic Catalog Service health check"""
    health_checker = CatalogServiceHealthChecker(service_name)
    health_checker.add_catalog_checks(version, cache_store)
    return health_checker.run_checks()
