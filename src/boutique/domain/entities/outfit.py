"""
Outfit entity - a curated set of products put together by a customer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from boutique.domain.entities.product import ProductSummary


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Outfit:
    """
    Outfit entity.

    Business rules:
    - Name is required
    - An outfit always contains at least one product (no duplicates)
    - Only the creator, or an admin, may modify an outfit with a creator
    - Deletion is soft: deleted_at is set, the row is kept
    """

    name: str
    products: List[ProductSummary]
    id: UUID = field(default_factory=uuid4)
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    created_by: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate outfit data after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Outfit name is required")

        if not self.products:
            raise ValueError("Outfit must contain at least one product")

        unique: List[ProductSummary] = []
        for product in self.products:
            if product.id not in {p.id for p in unique}:
                unique.append(product)
        self.products = unique

        if self.metadata is None:
            self.metadata = {}

    @property
    def product_ids(self) -> List[str]:
        """IDs of products in the outfit, in insertion order."""
        return [product.id for product in self.products]

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def has_product(self, product_id: str) -> bool:
        return product_id in self.product_ids

    def can_be_modified_by(
        self, customer_id: Optional[str], is_admin: bool = False
    ) -> bool:
        """
        Check whether a customer may update or delete this outfit.

        Args:
            customer_id: Acting customer (None for anonymous)
            is_admin: Acting user is an administrator

        Returns:
            True if the change is allowed
        """
        if is_admin or self.created_by is None:
            return True
        return customer_id == self.created_by

    def add_product(self, product: ProductSummary) -> bool:
        """
        Add a product.

        Returns:
            False if the product was already part of the outfit
        """
        if self.has_product(product.id):
            return False
        self.products.append(product)
        self.touch()
        return True

    def remove_product(self, product_id: str) -> bool:
        """
        Remove a product.

        Returns:
            False if the product was not part of the outfit

        Raises:
            ValueError: If the outfit would be left without products
        """
        if not self.has_product(product_id):
            return False
        if len(self.products) <= 1:
            raise ValueError("Outfit must contain at least one product")
        self.products = [p for p in self.products if p.id != product_id]
        self.touch()
        return True

    def replace_products(self, products: List[ProductSummary]) -> None:
        if not products:
            raise ValueError("Outfit must contain at least one product")
        self.products = []
        for product in products:
            if not self.has_product(product.id):
                self.products.append(product)
        self.touch()

    def merge_metadata(self, metadata: Dict[str, Any]) -> None:
        """Merge keys into metadata, overwriting existing ones."""
        self.metadata = {**self.metadata, **metadata}
        self.touch()

    def soft_delete(self) -> None:
        """Mark the outfit as deleted."""
        self.deleted_at = _now()
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "products": [product.to_dict() for product in self.products],
            "created_by": self.created_by,
            "metadata": dict(self.metadata),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "deleted_at": (
                self.deleted_at.isoformat() if self.deleted_at else None
            ),
        }
