"""
API schemas.
"""

from boutique.presentation.schemas.outfit_schemas import (
    AddProductRequest,
    CreateOutfitRequest,
    OutfitDeleteResponse,
    OutfitEnvelope,
    OutfitListResponse,
    OutfitResponse,
    ProductReference,
    UpdateOutfitRequest,
)

__all__ = [
    "AddProductRequest",
    "CreateOutfitRequest",
    "OutfitDeleteResponse",
    "OutfitEnvelope",
    "OutfitListResponse",
    "OutfitResponse",
    "ProductReference",
    "UpdateOutfitRequest",
]
