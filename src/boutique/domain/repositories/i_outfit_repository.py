"""
Outfit repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from boutique.domain.entities.outfit import Outfit


class IOutfitRepository(ABC):
    """Interface for outfit persistence operations."""

    @abstractmethod
    async def create(self, outfit: Outfit) -> Outfit:
        """
        Create new outfit.

        Args:
            outfit: Outfit entity to create

        Returns:
            Created outfit entity
        """

    @abstractmethod
    async def get_by_id(
        self, outfit_id: UUID, include_deleted: bool = False
    ) -> Optional[Outfit]:
        """
        Get outfit by ID.

        Args:
            outfit_id: Outfit unique identifier
            include_deleted: Also return soft-deleted outfits

        Returns:
            Outfit entity if found, None otherwise
        """

    @abstractmethod
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

    @abstractmethod
    async def update(self, outfit: Outfit) -> Outfit:
        """
        Update existing outfit (fields, products and deleted_at).

        Args:
            outfit: Outfit entity with updated data

        Returns:
            Updated outfit entity
        """
