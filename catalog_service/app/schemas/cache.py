from typing import List, Optional, Union

from pydantic import BaseModel, Field

ScopeId = Union[int, str]


class ChangeDescriptor(BaseModel):
    """What a write path changed, used to derive the cache keys to drop.

    The flags are independent; one descriptor may cover several domains.
    """

    product: bool = False
    order: bool = False
    coupon: bool = False
    # Passed by admin write paths; no key depends on it yet
    admin: bool = False

    product_id: Optional[ScopeId] = None
    product_ids: List[ScopeId] = Field(default_factory=list)
    order_id: Optional[ScopeId] = None
    user_id: Optional[ScopeId] = None
