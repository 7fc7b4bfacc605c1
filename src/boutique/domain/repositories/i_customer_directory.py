"""
Customer directory interface (framework-owned customers, read-only).
"""

from abc import ABC, abstractmethod


class ICustomerDirectory(ABC):
    """Read access to the framework's customer table."""

    @abstractmethod
    async def exists(self, customer_id: str) -> bool:
        """Check whether a customer exists."""
