"""Repository layer for Catalog Service"""

from .product_repository import ProductRepository

__all__ = [
    "ProductRepository",
]
