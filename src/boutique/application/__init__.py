"""
Application layer (use cases).
"""

from boutique.application.outfit_service import (
    OUTFIT_CREATED,
    OUTFIT_DELETED,
    OUTFIT_UPDATED,
    Actor,
    CreateOutfitCommand,
    OutfitService,
    UpdateOutfitCommand,
)

__all__ = [
    "OUTFIT_CREATED",
    "OUTFIT_DELETED",
    "OUTFIT_UPDATED",
    "Actor",
    "CreateOutfitCommand",
    "OutfitService",
    "UpdateOutfitCommand",
]
