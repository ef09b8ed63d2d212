"""Catalog service exception hierarchy"""

from typing import Any, Dict, Optional, Union


class CatalogServiceError(Exception):
    """Base class for errors raised by the catalog service layers."""

    status_code: int = 500
    error_type: str = "catalog_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProductNotFoundError(CatalogServiceError):
    """A single-entity lookup found no product with the given id."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, product_id: Union[int, str], message: Optional[str] = None):
        super().__init__(
            message or "Product Not Found",
            details={"product_id": str(product_id)},
        )
        self.product_id = product_id


class ProductValidationError(CatalogServiceError):
    """Required product fields are missing; no store call was made."""

    status_code = 400
    error_type = "validation_failed"

    def __init__(self, message: str = "Please enter all fields", missing=None):
        super().__init__(message, details={"missing_fields": list(missing or [])})
        self.missing_fields = list(missing or [])


class StoreUnavailableError(CatalogServiceError):
    """The persistent store call itself failed."""

    status_code = 503
    error_type = "store_unavailable"

    def __init__(self, operation: str, original: Optional[BaseException] = None):
        super().__init__(
            f"Product store unavailable during {operation}",
            details={
                "operation": operation,
                "original_error": str(original) if original else None,
            },
        )
        self.operation = operation
