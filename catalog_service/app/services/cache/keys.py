"""Cache key derivation, one function per cached query shape"""

from typing import Optional, Union

ScopeId = Optional[Union[int, str]]

LATEST_PRODUCTS_KEY = "latest-products"
CATEGORIES_KEY = "categories"
ALL_PRODUCTS_KEY = "all-products"
ALL_ORDERS_KEY = "all-orders"
ALL_COUPONS_KEY = "all-coupons"


def _segment(scope: ScopeId) -> str:
    # An absent scope yields a key no read ever populates
    return "" if scope is None else str(scope)


def latest_products_key() -> str:
    return LATEST_PRODUCTS_KEY


def categories_key() -> str:
    return CATEGORIES_KEY


def all_products_key() -> str:
    return ALL_PRODUCTS_KEY


def product_key(product_id: ScopeId) -> str:
    return f"product-{_segment(product_id)}"


def all_orders_key() -> str:
    return ALL_ORDERS_KEY


def my_orders_key(user_id: ScopeId) -> str:
    return f"my-orders-{_segment(user_id)}"


def order_key(order_id: ScopeId) -> str:
    return f"order-{_segment(order_id)}"


def all_coupons_key() -> str:
    return ALL_COUPONS_KEY
