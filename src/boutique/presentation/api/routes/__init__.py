"""
API routes.
"""

from boutique.presentation.api.routes import health, metrics, outfits

__all__ = ["health", "metrics", "outfits"]
