"""
FastAPI dependency injection.

The container lives on `app.state.container` (set by the application
loader); nothing here reads module-level globals.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.application.outfit_service import Actor, OutfitService
from boutique.di.container import Container

# ================================================================
# Infrastructure Dependencies
# ================================================================


def get_container(request: Request) -> Container:
    """Get the DI container of the running application."""
    return request.app.state.container


async def get_db_session(
    container: Container = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Commits when the request succeeds, rolls back otherwise.
    """
    async with container.database.session() as session:
        yield session


# ================================================================
# Service Dependencies
# ================================================================


def get_outfit_service(
    session: AsyncSession = Depends(get_db_session),
    container: Container = Depends(get_container),
) -> OutfitService:
    """Get request-scoped OutfitService."""
    return container.get_outfit_service(session)


def get_actor(
    x_customer_id: Optional[str] = Header(default=None),
    x_customer_admin: bool = Header(default=False),
) -> Actor:
    """
    Get the acting customer.

    Authentication is handled by the commerce framework in front of this
    service; it forwards the resolved customer in these headers.
    """
    return Actor(customer_id=x_customer_id or None, is_admin=x_customer_admin)
