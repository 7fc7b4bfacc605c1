"""
Domain entities package.
"""

from boutique.domain.entities.outfit import Outfit
from boutique.domain.entities.product import ProductSummary

__all__ = ["Outfit", "ProductSummary"]
