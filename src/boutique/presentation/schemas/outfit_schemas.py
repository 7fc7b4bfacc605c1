"""
Outfit API schemas.
"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from boutique.domain.entities.outfit import Outfit


class ProductReference(BaseModel):
    """Reference to an existing product."""

    id: str = Field(..., min_length=1, description="Product ID (e.g., prod_01H...)")


class CreateOutfitRequest(BaseModel):
    """Request to create an outfit."""

    name: str = Field(..., description="Outfit name")
    products: List[ProductReference] = Field(
        ..., description="Products in the outfit (at least one)"
    )
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class UpdateOutfitRequest(BaseModel):
    """
    Request to update an outfit.

    Omitted fields are left unchanged; an explicit null clears description
    or thumbnail.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    products: Optional[List[ProductReference]] = None
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, description="Keys merged into the existing metadata"
    )

    def cleared_fields(self) -> FrozenSet[str]:
        """Nullable fields the caller explicitly set to null."""
        return frozenset(
            name
            for name in ("description", "thumbnail")
            if name in self.model_fields_set and getattr(self, name) is None
        )


class AddProductRequest(BaseModel):
    """Request to add a product to an outfit."""

    product_id: str = Field(..., min_length=1)


class ProductResponse(BaseModel):
    id: str
    title: str
    handle: Optional[str] = None
    thumbnail: Optional[str] = None


class OutfitResponse(BaseModel):
    """Outfit representation."""

    id: str
    name: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    products: List[ProductResponse]
    created_by: Optional[str] = None
    metadata: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, outfit: Outfit) -> "OutfitResponse":
        """Build response from domain entity."""
        return cls(
            id=str(outfit.id),
            name=outfit.name,
            description=outfit.description,
            thumbnail=outfit.thumbnail,
            products=[
                ProductResponse(**product.to_dict()) for product in outfit.products
            ],
            created_by=outfit.created_by,
            metadata=outfit.metadata,
            created_at=outfit.created_at,
            updated_at=outfit.updated_at,
            deleted_at=outfit.deleted_at,
        )


class OutfitEnvelope(BaseModel):
    outfit: OutfitResponse


class OutfitListResponse(BaseModel):
    """Paginated outfit list."""

    outfits: List[OutfitResponse]
    count: int
    offset: int
    limit: Optional[int] = None


class OutfitDeleteResponse(BaseModel):
    id: str
    object: str = "outfit"
    deleted: bool = True
