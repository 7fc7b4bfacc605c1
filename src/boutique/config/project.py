"""
Commerce framework project configuration.

Builds the `projectConfig` block and plugin list the application loader
hands to the framework: database/redis wiring, CORS, secrets and the
fulfillment, payment, file storage and notification plugins.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from boutique.config.settings import Settings


class PluginConfig(BaseModel):
    """A framework plugin reference with its options."""

    resolve: str
    options: Dict[str, Any] = Field(default_factory=dict)


class ProjectConfig(BaseModel):
    """Core project settings consumed by the framework."""

    redis_url: str
    database_url: str
    database_type: str
    store_cors: str
    admin_cors: str
    jwt_secret: Optional[str] = None
    cookie_secret: Optional[str] = None


class FrameworkConfig(BaseModel):
    """Complete framework configuration (project + plugins)."""

    projectConfig: ProjectConfig
    plugins: List[Union[str, PluginConfig]]

    def plugin_names(self) -> List[str]:
        """Names of all configured plugins, in load order."""
        return [
            plugin if isinstance(plugin, str) else plugin.resolve
            for plugin in self.plugins
        ]

    def get_plugin(self, name: str) -> Optional[PluginConfig]:
        """
        Get plugin options by name.

        Args:
            name: Plugin package name

        Returns:
            PluginConfig (empty options for bare plugins), None if absent
        """
        for plugin in self.plugins:
            if isinstance(plugin, str) and plugin == name:
                return PluginConfig(resolve=plugin)
            if isinstance(plugin, PluginConfig) and plugin.resolve == name:
                return plugin
        return None


def build_project_config(settings: Settings) -> FrameworkConfig:
    """
    Build framework configuration from settings.

    Args:
        settings: Application settings

    Returns:
        FrameworkConfig with project settings and plugins
    """
    plugins: List[Union[str, PluginConfig]] = [
        "medusa-fulfillment-manual",
        "medusa-payment-manual",
        PluginConfig(
            resolve="medusa-file-s3",
            options={
                "s3_url": settings.S3_URL,
                "bucket": settings.S3_BUCKET,
                "region": settings.S3_REGION,
                "access_key_id": settings.S3_ACCESS_KEY_ID,
                "secret_access_key": settings.S3_SECRET_ACCESS_KEY,
            },
        ),
        PluginConfig(
            resolve="medusa-plugin-sendgrid",
            options={
                "api_key": settings.SENDGRID_API_KEY,
                "from": settings.SENDGRID_FROM,
                "order_placed_template": settings.SENDGRID_ORDER_PLACED_ID,
            },
        ),
    ]

    return FrameworkConfig(
        projectConfig=ProjectConfig(
            redis_url=settings.REDIS_URL,
            database_url=settings.DATABASE_URL,
            database_type=settings.DATABASE_TYPE,
            store_cors=settings.STORE_CORS,
            admin_cors=settings.ADMIN_CORS,
            jwt_secret=settings.JWT_SECRET,
            cookie_secret=settings.COOKIE_SECRET,
        ),
        plugins=plugins,
    )
