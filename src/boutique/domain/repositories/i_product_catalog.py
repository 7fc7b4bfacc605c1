"""
Product catalog interface (framework-owned products, read-only).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from boutique.domain.entities.product import ProductSummary


class IProductCatalog(ABC):
    """Read access to the framework's product table."""

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[ProductSummary]:
        """Get a product, None if it does not exist."""

    @abstractmethod
    async def get_by_ids(self, product_ids: List[str]) -> List[ProductSummary]:
        """
        Get products by ID.

        Args:
            product_ids: Product identifiers

        Returns:
            Products that exist, in the order requested
        """
