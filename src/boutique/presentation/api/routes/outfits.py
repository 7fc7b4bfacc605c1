"""
Outfit API routes.

Provides storefront endpoints for outfits:
- GET /store/outfits - List outfits (optionally by creator or product)
- GET /store/outfits/popular - Popular outfits
- GET /store/outfits/{id} - Get outfit
- POST /store/outfits - Create outfit
- POST /store/outfits/{id} - Update outfit
- DELETE /store/outfits/{id} - Delete outfit (soft)
- POST /store/outfits/{id}/products - Add product
- DELETE /store/outfits/{id}/products/{product_id} - Remove product

Domain errors are mapped to HTTP responses by the global exception handler.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from boutique.application.outfit_service import (
    Actor,
    CreateOutfitCommand,
    OutfitService,
    UpdateOutfitCommand,
)
from boutique.presentation.api.dependencies import get_actor, get_outfit_service
from boutique.presentation.schemas.outfit_schemas import (
    AddProductRequest,
    CreateOutfitRequest,
    OutfitDeleteResponse,
    OutfitEnvelope,
    OutfitListResponse,
    OutfitResponse,
    UpdateOutfitRequest,
)

router = APIRouter(prefix="/store/outfits", tags=["Outfits"])


@router.get("", response_model=OutfitListResponse)
async def list_outfits(
    created_by: Optional[str] = Query(default=None),
    product_id: Optional[str] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitListResponse:
    """
    List outfits, newest first.

    Args:
        created_by: Only outfits created by this customer
        product_id: Only outfits containing this product (not paginated)
        limit: Page size
        offset: Number of outfits to skip
    """
    if product_id is not None:
        outfits = await service.find_with_product(product_id)
        if created_by is not None:
            outfits = [o for o in outfits if o.created_by == created_by]
        outfits = outfits[offset : offset + limit]
    else:
        outfits = await service.list(
            created_by=created_by, limit=limit, offset=offset
        )

    return OutfitListResponse(
        outfits=[OutfitResponse.from_entity(o) for o in outfits],
        count=len(outfits),
        offset=offset,
        limit=limit,
    )


@router.get("/popular", response_model=OutfitListResponse)
async def popular_outfits(
    limit: int = Query(default=10, ge=1, le=100),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitListResponse:
    outfits = await service.popular(limit=limit)
    return OutfitListResponse(
        outfits=[OutfitResponse.from_entity(o) for o in outfits],
        count=len(outfits),
        offset=0,
        limit=limit,
    )


@router.get("/{outfit_id}", response_model=OutfitEnvelope)
async def get_outfit(
    outfit_id: UUID,
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitEnvelope:
    outfit = await service.retrieve(outfit_id)
    return OutfitEnvelope(outfit=OutfitResponse.from_entity(outfit))


@router.post(
    "",
    response_model=OutfitEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create outfit",
)
async def create_outfit(
    request: CreateOutfitRequest,
    actor: Actor = Depends(get_actor),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitEnvelope:
    """
    Create an outfit owned by the acting customer.

    Raises:
        400: Missing name, no products or unknown products
        404: Acting customer does not exist
    """
    outfit = await service.create(
        CreateOutfitCommand(
            name=request.name,
            product_ids=[p.id for p in request.products],
            description=request.description,
            thumbnail=request.thumbnail,
            created_by=actor.customer_id,
            metadata=request.metadata,
        )
    )
    return OutfitEnvelope(outfit=OutfitResponse.from_entity(outfit))


@router.post("/{outfit_id}", response_model=OutfitEnvelope)
async def update_outfit(
    outfit_id: UUID,
    request: UpdateOutfitRequest,
    actor: Actor = Depends(get_actor),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitEnvelope:
    """
    Update an outfit.

    Raises:
        400: Invalid name or products
        403: Acting customer is not the creator
        404: Outfit does not exist
    """
    outfit = await service.update(
        UpdateOutfitCommand(
            outfit_id=outfit_id,
            name=request.name,
            description=request.description,
            thumbnail=request.thumbnail,
            product_ids=(
                [p.id for p in request.products]
                if request.products is not None
                else None
            ),
            metadata=request.metadata,
            clear=request.cleared_fields(),
        ),
        actor=actor,
    )
    return OutfitEnvelope(outfit=OutfitResponse.from_entity(outfit))


@router.delete("/{outfit_id}", response_model=OutfitDeleteResponse)
async def delete_outfit(
    outfit_id: UUID,
    actor: Actor = Depends(get_actor),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitDeleteResponse:
    outfit = await service.delete(outfit_id, actor=actor)
    return OutfitDeleteResponse(id=str(outfit.id))


@router.post("/{outfit_id}/products", response_model=OutfitEnvelope)
async def add_outfit_product(
    outfit_id: UUID,
    request: AddProductRequest,
    actor: Actor = Depends(get_actor),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitEnvelope:
    outfit = await service.add_product(outfit_id, request.product_id, actor=actor)
    return OutfitEnvelope(outfit=OutfitResponse.from_entity(outfit))


@router.delete("/{outfit_id}/products/{product_id}", response_model=OutfitEnvelope)
async def remove_outfit_product(
    outfit_id: UUID,
    product_id: str,
    actor: Actor = Depends(get_actor),
    service: OutfitService = Depends(get_outfit_service),
) -> OutfitEnvelope:
    """
    Remove a product from an outfit.

    Raises:
        400: The outfit would be left without products
    """
    outfit = await service.remove_product(outfit_id, product_id, actor=actor)
    return OutfitEnvelope(outfit=OutfitResponse.from_entity(outfit))
