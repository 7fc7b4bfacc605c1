"""
Configuration module for Boutique.
"""

from boutique.config.project import FrameworkConfig, build_project_config
from boutique.config.settings import (
    Settings,
    get_settings,
    load_config,
    override_settings,
    reset_settings,
)
from boutique.config.storefront import (
    RewriteRule,
    StorefrontConfig,
    build_storefront_config,
)

__all__ = [
    "FrameworkConfig",
    "RewriteRule",
    "Settings",
    "StorefrontConfig",
    "build_project_config",
    "build_storefront_config",
    "get_settings",
    "load_config",
    "override_settings",
    "reset_settings",
]
