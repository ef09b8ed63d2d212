from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CatalogServiceBase(DeclarativeBase):
    """Base class for all Catalog Service database models."""

    pass


class CatalogServiceBaseModel(CatalogServiceBase):
    """Base model with common fields for Catalog Service."""

    __abstract__ = True
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=_utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )
