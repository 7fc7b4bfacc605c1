"""
Repository interfaces.
"""

from boutique.domain.repositories.i_customer_directory import ICustomerDirectory
from boutique.domain.repositories.i_outfit_repository import IOutfitRepository
from boutique.domain.repositories.i_product_catalog import IProductCatalog

__all__ = ["ICustomerDirectory", "IOutfitRepository", "IProductCatalog"]
