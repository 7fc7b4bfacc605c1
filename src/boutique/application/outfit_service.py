"""
Outfit service.

Creates, updates, lists and soft-deletes outfits, validating product and
customer references against the framework's catalog and emitting
`outfit.*` events for other services to react to.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional
from uuid import UUID

from boutique.domain.entities.outfit import Outfit
from boutique.domain.entities.product import ProductSummary
from boutique.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from boutique.domain.repositories import (
    ICustomerDirectory,
    IOutfitRepository,
    IProductCatalog,
)
from boutique.domain.services import IEventPublisher

OUTFIT_CREATED = "outfit.created"
OUTFIT_UPDATED = "outfit.updated"
OUTFIT_DELETED = "outfit.deleted"


@dataclass
class Actor:
    """Customer performing a change (None id for anonymous requests)."""

    customer_id: Optional[str] = None
    is_admin: bool = False


@dataclass
class CreateOutfitCommand:
    """Command to create an outfit."""

    name: str
    product_ids: List[str]
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    created_by: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UpdateOutfitCommand:
    """
    Command to update an outfit.

    Fields left as None are not changed. `metadata` is merged into the
    existing metadata. Optional fields named in `clear` (description,
    thumbnail) are reset to None.
    """

    outfit_id: UUID
    name: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    product_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None
    clear: FrozenSet[str] = frozenset()


class OutfitService:
    """Use cases for the Outfit entity."""

    def __init__(
        self,
        outfit_repository: IOutfitRepository,
        product_catalog: IProductCatalog,
        customer_directory: ICustomerDirectory,
        event_publisher: IEventPublisher,
    ):
        """
        Initialize service.

        Args:
            outfit_repository: Outfit persistence
            product_catalog: Product lookup
            customer_directory: Customer lookup
            event_publisher: Domain event publisher
        """
        self.outfit_repository = outfit_repository
        self.product_catalog = product_catalog
        self.customer_directory = customer_directory
        self.event_publisher = event_publisher

    # ================================================================
    # Queries
    # ================================================================

    async def retrieve(self, outfit_id: UUID) -> Outfit:
        """
        Get an outfit that is not deleted.

        Raises:
            EntityNotFoundError: If the outfit does not exist
        """
        outfit = await self.outfit_repository.get_by_id(outfit_id)
        if outfit is None:
            raise EntityNotFoundError("Outfit", str(outfit_id))
        return outfit

    async def list(
        self,
        created_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Outfit]:
        return await self.outfit_repository.list(
            created_by=created_by, limit=limit, offset=offset
        )

    async def list_by_customer(self, customer_id: str) -> List[Outfit]:
        """Outfits created by a customer."""
        return await self.outfit_repository.list(created_by=customer_id)

    async def find_with_product(self, product_id: str) -> List[Outfit]:
        """Outfits containing a product."""
        return await self.outfit_repository.list(product_id=product_id)

    async def popular(self, limit: int = 10) -> List[Outfit]:
        """
        Popular outfits.

        No view or share counts are recorded, so the most recently created
        outfits are returned.
        """
        return await self.outfit_repository.list(limit=limit)

    # ================================================================
    # Commands
    # ================================================================

    async def create(self, command: CreateOutfitCommand) -> Outfit:
        """
        Create an outfit.

        Raises:
            ValidationError: Missing name, no products or unknown products
            EntityNotFoundError: Unknown creator
        """
        if not command.name or not command.name.strip():
            raise ValidationError("name", "Outfit name is required")

        if command.created_by is not None:
            if not await self.customer_directory.exists(command.created_by):
                raise EntityNotFoundError("Customer", command.created_by)

        products = await self._resolve_products(command.product_ids)

        outfit = Outfit(
            name=command.name.strip(),
            products=products,
            description=command.description,
            thumbnail=command.thumbnail,
            created_by=command.created_by,
            metadata=dict(command.metadata or {}),
        )

        created = await self.outfit_repository.create(outfit)
        await self.event_publisher.publish(OUTFIT_CREATED, {"id": str(created.id)})
        return created

    async def update(
        self, command: UpdateOutfitCommand, actor: Optional[Actor] = None
    ) -> Outfit:
        """
        Update an outfit.

        Raises:
            EntityNotFoundError: Outfit does not exist
            PermissionDeniedError: Actor is neither creator nor admin
            ValidationError: Empty name, empty or unknown products
        """
        outfit = await self._retrieve_for_change(command.outfit_id, actor, "update")

        if command.name is not None:
            if not command.name.strip():
                raise ValidationError("name", "Outfit name is required")
            outfit.name = command.name.strip()

        if "description" in command.clear:
            outfit.description = None
        elif command.description is not None:
            outfit.description = command.description

        if "thumbnail" in command.clear:
            outfit.thumbnail = None
        elif command.thumbnail is not None:
            outfit.thumbnail = command.thumbnail

        if command.product_ids is not None:
            outfit.replace_products(
                await self._resolve_products(command.product_ids)
            )

        if command.metadata:
            outfit.merge_metadata(command.metadata)

        outfit.touch()
        updated = await self.outfit_repository.update(outfit)
        await self.event_publisher.publish(OUTFIT_UPDATED, {"id": str(updated.id)})
        return updated

    async def delete(self, outfit_id: UUID, actor: Optional[Actor] = None) -> Outfit:
        """
        Soft-delete an outfit.

        Raises:
            EntityNotFoundError: Outfit does not exist
            PermissionDeniedError: Actor is neither creator nor admin
        """
        outfit = await self._retrieve_for_change(outfit_id, actor, "delete")

        outfit.soft_delete()
        deleted = await self.outfit_repository.update(outfit)
        await self.event_publisher.publish(OUTFIT_DELETED, {"id": str(deleted.id)})
        return deleted

    async def add_product(
        self, outfit_id: UUID, product_id: str, actor: Optional[Actor] = None
    ) -> Outfit:
        """
        Add a product to an outfit.

        Adding a product that is already part of the outfit is a no-op.

        Raises:
            EntityNotFoundError: Outfit or product does not exist
            PermissionDeniedError: Actor is neither creator nor admin
        """
        outfit = await self._retrieve_for_change(outfit_id, actor, "update")

        if outfit.has_product(product_id):
            return outfit

        product = await self.product_catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)

        outfit.add_product(product)
        updated = await self.outfit_repository.update(outfit)
        await self.event_publisher.publish(OUTFIT_UPDATED, {"id": str(updated.id)})
        return updated

    async def remove_product(
        self, outfit_id: UUID, product_id: str, actor: Optional[Actor] = None
    ) -> Outfit:
        """
        Remove a product from an outfit.

        Raises:
            EntityNotFoundError: Outfit does not exist
            PermissionDeniedError: Actor is neither creator nor admin
            ValidationError: The outfit would be left without products
        """
        outfit = await self._retrieve_for_change(outfit_id, actor, "update")

        try:
            removed = outfit.remove_product(product_id)
        except ValueError as e:
            raise ValidationError("products", str(e)) from e

        if not removed:
            return outfit

        updated = await self.outfit_repository.update(outfit)
        await self.event_publisher.publish(OUTFIT_UPDATED, {"id": str(updated.id)})
        return updated

    # ================================================================
    # Helpers
    # ================================================================

    async def _retrieve_for_change(
        self, outfit_id: UUID, actor: Optional[Actor], action: str
    ) -> Outfit:
        outfit = await self.retrieve(outfit_id)
        actor = actor or Actor()
        if not outfit.can_be_modified_by(actor.customer_id, actor.is_admin):
            raise PermissionDeniedError(action, "outfit")
        return outfit

    async def _resolve_products(self, product_ids: List[str]) -> List[ProductSummary]:
        """Load products, rejecting empty lists and unknown IDs."""
        if not product_ids:
            raise ValidationError(
                "products", "Outfit must contain at least one product"
            )

        unique_ids = list(dict.fromkeys(product_ids))
        products = await self.product_catalog.get_by_ids(unique_ids)

        if len(products) != len(unique_ids):
            raise ValidationError(
                "products", "One or more products in the outfit do not exist"
            )
        return products
