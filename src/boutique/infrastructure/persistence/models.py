"""
SQLAlchemy models for Boutique persistence.

`product` and `customer` are owned by the commerce framework; only the
columns the outfit feature reads are mapped here.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""


class ProductModel(Base):
    """Framework product (read-only subset)."""

    __tablename__ = "product"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    handle: Mapped[Optional[str]] = mapped_column(String, unique=True)
    thumbnail: Mapped[Optional[str]] = mapped_column(String)


class CustomerModel(Base):
    """Framework customer (read-only subset)."""

    __tablename__ = "customer"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String, nullable=False)


outfit_products = Table(
    "outfit_products",
    Base.metadata,
    Column(
        "outfit_id",
        Uuid,
        ForeignKey("outfit.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "product_id",
        String,
        ForeignKey("product.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

outfit_creator = Table(
    "outfit_creator",
    Base.metadata,
    Column(
        "outfit_id",
        Uuid,
        ForeignKey("outfit.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "customer_id",
        String,
        ForeignKey("customer.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
)


class OutfitModel(Base):
    """Outfit database model."""

    __tablename__ = "outfit"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    thumbnail: Mapped[Optional[str]] = mapped_column(String)
    metadata_: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata", JSON().with_variant(JSONB(), "postgresql")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Relationships
    products: Mapped[list["ProductModel"]] = relationship(
        "ProductModel", secondary=outfit_products, lazy="selectin"
    )
    creator: Mapped[Optional["CustomerModel"]] = relationship(
        "CustomerModel", secondary=outfit_creator, uselist=False, lazy="selectin"
    )
