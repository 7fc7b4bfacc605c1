"""
Dependency Injection container for Boutique.

Manages lifecycle and dependencies of all application components.
"""

from pathlib import Path
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from boutique.application.outfit_service import OutfitService
from boutique.config.project import FrameworkConfig, build_project_config
from boutique.config.settings import Settings
from boutique.config.storefront import StorefrontConfig, build_storefront_config
from boutique.domain.services.i_event_publisher import IEventPublisher
from boutique.infrastructure.event_bus import LocalEventBus, RedisEventBus
from boutique.infrastructure.persistence.database import Database
from boutique.infrastructure.persistence.repositories import (
    CustomerDirectory,
    OutfitRepository,
    ProductCatalog,
)
from shared.lifecycle import StartupError


class Container:
    """
    Dependency Injection container.

    Creates and manages all application dependencies. Shared resources
    are singletons; repositories and services are session-scoped and built
    per request.
    """

    def __init__(self, settings: Settings, directory: Optional[Path] = None):
        """
        Initialize container with settings.

        Args:
            settings: Application settings
            directory: Project directory the application was loaded from
        """
        self.settings = settings
        self.directory = directory

        self._database: Optional[Database] = None
        self._event_bus: Optional[Union[LocalEventBus, RedisEventBus]] = None
        self._project_config: Optional[FrameworkConfig] = None
        self._storefront_config: Optional[StorefrontConfig] = None

    async def initialize(self) -> None:
        """
        Establish connections to backing services.

        Raises:
            StartupError: Database or Redis event bus is unreachable
        """
        await self.database.connect()
        if not await self.database.health_check():
            await self.shutdown()
            raise StartupError("Database is unreachable")

        if isinstance(self.event_bus, RedisEventBus):
            await self.event_bus.connect()
            if not await self.event_bus.health_check():
                await self.shutdown()
                raise StartupError(
                    f"Redis is unreachable at {self.settings.REDIS_URL}"
                )

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._database:
            await self._database.disconnect()

        if isinstance(self._event_bus, RedisEventBus):
            await self._event_bus.disconnect()

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=self.settings.DATABASE_URL,
                echo=self.settings.DATABASE_ECHO,
            )
        return self._database

    @property
    def event_bus(self) -> IEventPublisher:
        """
        Get event bus singleton.

        Returns:
            RedisEventBus if EVENT_BUS_TYPE is "redis", LocalEventBus otherwise
        """
        if self._event_bus is None:
            if self.settings.EVENT_BUS_TYPE == "redis":
                self._event_bus = RedisEventBus(redis_url=self.settings.REDIS_URL)
            else:
                self._event_bus = LocalEventBus()
        return self._event_bus

    @property
    def project_config(self) -> FrameworkConfig:
        """Get framework project configuration."""
        if self._project_config is None:
            self._project_config = build_project_config(self.settings)
        return self._project_config

    @property
    def storefront_config(self) -> StorefrontConfig:
        """Get storefront proxy configuration."""
        if self._storefront_config is None:
            self._storefront_config = build_storefront_config(self.settings)
        return self._storefront_config

    def get_outfit_service(self, session: AsyncSession) -> OutfitService:
        """
        Get OutfitService bound to a database session.

        Args:
            session: Request-scoped database session

        Returns:
            OutfitService instance
        """
        return OutfitService(
            outfit_repository=OutfitRepository(session),
            product_catalog=ProductCatalog(session),
            customer_directory=CustomerDirectory(session),
            event_publisher=self.event_bus,
        )
