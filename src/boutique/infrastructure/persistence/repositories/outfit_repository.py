"""
Outfit repository implementation.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.domain.entities.outfit import Outfit
from boutique.domain.entities.product import ProductSummary
from boutique.domain.exceptions import EntityNotFoundError
from boutique.domain.repositories.i_outfit_repository import IOutfitRepository
from boutique.infrastructure.persistence.models import (
    CustomerModel,
    OutfitModel,
    ProductModel,
)


class OutfitRepository(IOutfitRepository):
    """SQLAlchemy implementation of outfit repository."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, outfit: Outfit) -> Outfit:
        """
        Create new outfit in database.

        Args:
            outfit: Outfit entity to create

        Returns:
            Created outfit entity
        """
        model = OutfitModel(
            id=outfit.id,
            name=outfit.name,
            description=outfit.description,
            thumbnail=outfit.thumbnail,
            metadata_=dict(outfit.metadata),
            created_at=outfit.created_at,
            updated_at=outfit.updated_at,
            deleted_at=outfit.deleted_at,
        )
        model.products = await self._load_products(outfit.product_ids)
        model.creator = await self._load_creator(outfit.created_by)

        self.session.add(model)
        await self.session.flush()

        return await self._get(outfit.id, include_deleted=True)

    async def get_by_id(
        self, outfit_id: UUID, include_deleted: bool = False
    ) -> Optional[Outfit]:
        model = await self._fetch(outfit_id, include_deleted)
        return self._to_entity(model) if model else None

    async def list(
        self,
        created_by: Optional[str] = None,
        product_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Outfit]:
        """
        List outfits that are not deleted, newest first.

        Args:
            created_by: Only outfits created by this customer
            product_id: Only outfits containing this product
            limit: Maximum number of outfits (None for all)
            offset: Number of outfits to skip

        Returns:
            List of outfit entities
        """
        stmt = select(OutfitModel).where(OutfitModel.deleted_at.is_(None))

        if created_by is not None:
            stmt = stmt.where(OutfitModel.creator.has(CustomerModel.id == created_by))

        if product_id is not None:
            stmt = stmt.where(OutfitModel.products.any(ProductModel.id == product_id))

        stmt = stmt.order_by(OutfitModel.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def update(self, outfit: Outfit) -> Outfit:
        """
        Update existing outfit.

        Args:
            outfit: Outfit entity with updated data

        Returns:
            Updated outfit entity

        Raises:
            EntityNotFoundError: If outfit does not exist
        """
        model = await self._fetch(outfit.id, include_deleted=True)
        if model is None:
            raise EntityNotFoundError("Outfit", str(outfit.id))

        model.name = outfit.name
        model.description = outfit.description
        model.thumbnail = outfit.thumbnail
        model.metadata_ = dict(outfit.metadata)
        model.updated_at = outfit.updated_at
        model.deleted_at = outfit.deleted_at

        if [p.id for p in model.products] != outfit.product_ids:
            model.products = await self._load_products(outfit.product_ids)

        await self.session.flush()

        return await self._get(outfit.id, include_deleted=True)

    async def _get(self, outfit_id: UUID, include_deleted: bool) -> Outfit:
        model = await self._fetch(outfit_id, include_deleted)
        return self._to_entity(model)

    async def _fetch(
        self, outfit_id: UUID, include_deleted: bool
    ) -> Optional[OutfitModel]:
        stmt = (
            select(OutfitModel)
            .where(OutfitModel.id == outfit_id)
            .execution_options(populate_existing=True)
        )
        if not include_deleted:
            stmt = stmt.where(OutfitModel.deleted_at.is_(None))

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _load_products(self, product_ids: List[str]) -> List[ProductModel]:
        if not product_ids:
            return []
        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id.in_(product_ids))
        )
        by_id = {model.id: model for model in result.scalars().all()}
        return [by_id[pid] for pid in product_ids if pid in by_id]

    async def _load_creator(self, customer_id: Optional[str]) -> Optional[CustomerModel]:
        if customer_id is None:
            return None
        return await self.session.get(CustomerModel, customer_id)

    def _to_entity(self, model: OutfitModel) -> Outfit:
        """
        Convert OutfitModel to Outfit entity.

        Args:
            model: SQLAlchemy model

        Returns:
            Outfit domain entity
        """
        return Outfit(
            id=model.id,
            name=model.name,
            description=model.description,
            thumbnail=model.thumbnail,
            products=[
                ProductSummary(
                    id=product.id,
                    title=product.title,
                    handle=product.handle,
                    thumbnail=product.thumbnail,
                )
                for product in model.products
            ],
            created_by=model.creator.id if model.creator else None,
            metadata=dict(model.metadata_ or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )
