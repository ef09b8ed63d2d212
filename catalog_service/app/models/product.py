from decimal import Decimal

from sqlalchemy import DECIMAL, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import CatalogServiceBaseModel


class Product(CatalogServiceBaseModel):
    __tablename__ = "products"

    # id, created_at, updated_at are inherited from the base model
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)
    # Not clamped at zero; order placement may drive it negative
    stock: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    photo: Mapped[str] = mapped_column(String(500), nullable=False)
