from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

REQUIRED_CREATE_FIELDS = ("name", "price", "stock", "category", "photo")


class ProductCreate(BaseModel):
    """Incoming product fields.

    Fields are optional at the schema level so that the service can report
    every missing field at once before touching the store.
    """

    name: Optional[str] = None
    price: Optional[Decimal] = Field(None, description="Product price")
    stock: Optional[int] = Field(None, ge=0, description="Units in stock")
    category: Optional[str] = None
    photo: Optional[str] = Field(None, description="Reference to the stored photo")

    @field_validator("name", "category", "photo")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return v
        return v.strip()

    def missing_fields(self) -> List[str]:
        missing = []
        for field in REQUIRED_CREATE_FIELDS:
            value = getattr(self, field)
            if value is None or value == "":
                missing.append(field)
            elif field == "price" and value <= 0:
                # A price that is not positive counts as not provided
                missing.append(field)
        return missing


class ProductUpdate(BaseModel):
    """Partial update; None leaves the stored value unchanged."""

    name: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    photo: Optional[str] = None

    @field_validator("name", "category", "photo")
    @classmethod
    def blank_to_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    stock: int
    category: str
    photo: str
    created_at: datetime
    updated_at: datetime


class ProductFilter(BaseModel):
    """Store-level predicate shared by the page and count queries."""

    search: Optional[str] = None
    max_price: Optional[Decimal] = None
    category: Optional[str] = None


class ProductSearchParams(BaseModel):
    search: Optional[str] = None
    # "asc" sorts by ascending price, any other non-empty value descending
    sort: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, description="Maximum price (inclusive)")
    page: int = 1

    @field_validator("search", "sort", "category", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("price", mode="before")
    @classmethod
    def empty_price_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("page", mode="before")
    @classmethod
    def default_page(cls, v: Any) -> int:
        try:
            page = int(v)
        except (TypeError, ValueError):
            return 1
        return page if page >= 1 else 1

    def to_filter(self) -> ProductFilter:
        return ProductFilter(
            search=self.search, max_price=self.price, category=self.category
        )


class ProductSearchResult(BaseModel):
    products: List[ProductResponse]
    total_page: int


class OrderLine(BaseModel):
    product_id: int
    quantity: int = Field(..., gt=0)
