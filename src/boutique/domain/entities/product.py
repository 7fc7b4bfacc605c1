"""
Product summary - read-only view of a framework-owned product.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProductSummary:
    """Product fields an outfit needs to render itself."""

    id: str
    title: str = ""
    handle: Optional[str] = None
    thumbnail: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "handle": self.handle,
            "thumbnail": self.thumbnail,
        }
