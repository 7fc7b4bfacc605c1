"""Repository implementations."""

from boutique.infrastructure.persistence.repositories.customer_directory import (
    CustomerDirectory,
)
from boutique.infrastructure.persistence.repositories.outfit_repository import (
    OutfitRepository,
)
from boutique.infrastructure.persistence.repositories.product_catalog import (
    ProductCatalog,
)

__all__ = [
    "CustomerDirectory",
    "OutfitRepository",
    "ProductCatalog",
]
