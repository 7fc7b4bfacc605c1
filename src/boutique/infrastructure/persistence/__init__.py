"""
Infrastructure persistence package.
"""

from boutique.infrastructure.persistence.database import Database
from boutique.infrastructure.persistence.models import (
    Base,
    CustomerModel,
    OutfitModel,
    ProductModel,
)

__all__ = [
    "Database",
    "Base",
    "CustomerModel",
    "OutfitModel",
    "ProductModel",
]
