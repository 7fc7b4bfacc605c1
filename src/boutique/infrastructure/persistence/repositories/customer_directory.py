"""
Customer directory backed by the framework's customer table.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from boutique.domain.repositories.i_customer_directory import ICustomerDirectory
from boutique.infrastructure.persistence.models import CustomerModel


class CustomerDirectory(ICustomerDirectory):
    """SQLAlchemy implementation of customer directory."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, customer_id: str) -> bool:
        return await self.session.get(CustomerModel, customer_id) is not None
