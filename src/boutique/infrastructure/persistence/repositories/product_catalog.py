"""
Product catalog backed by the framework's product table.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.domain.entities.product import ProductSummary
from boutique.domain.repositories.i_product_catalog import IProductCatalog
from boutique.infrastructure.persistence.models import ProductModel


class ProductCatalog(IProductCatalog):
    """SQLAlchemy implementation of product catalog."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, product_id: str) -> Optional[ProductSummary]:
        model = await self.session.get(ProductModel, product_id)
        return self._to_entity(model) if model else None

    async def get_by_ids(self, product_ids: List[str]) -> List[ProductSummary]:
        """
        Get products by ID.

        Args:
            product_ids: Product identifiers

        Returns:
            Products that exist, in the order requested
        """
        if not product_ids:
            return []

        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id.in_(product_ids))
        )
        by_id = {model.id: model for model in result.scalars().all()}
        return [self._to_entity(by_id[pid]) for pid in product_ids if pid in by_id]

    def _to_entity(self, model: ProductModel) -> ProductSummary:
        return ProductSummary(
            id=model.id,
            title=model.title,
            handle=model.handle,
            thumbnail=model.thumbnail,
        )
