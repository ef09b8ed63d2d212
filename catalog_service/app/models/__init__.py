from .base import CatalogServiceBase, CatalogServiceBaseModel
from .product import Product

"""Catalog Service Models"""

__all__ = [
    "CatalogServiceBase",
    "CatalogServiceBaseModel",
    "Product",
]
