"""
Domain exceptions package.
"""

from boutique.domain.exceptions.base import (
    BoutiqueException,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)

__all__ = [
    "BoutiqueException",
    "EntityNotFoundError",
    "PermissionDeniedError",
    "ValidationError",
]
