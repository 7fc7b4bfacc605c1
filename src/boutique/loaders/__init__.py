"""
Application loader.

Reads configuration from a project directory, builds the dependency
container and registers middleware, exception handlers and routes on the
FastAPI application.
"""

from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boutique.config.settings import Settings, load_config
from boutique.di.container import Container
from boutique.domain.exceptions import BoutiqueException
from boutique.infrastructure.monitoring import get_logger, setup_logging
from boutique.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    boutique_exception_handler,
)
from boutique.presentation.api.routes import health, metrics, outfits


async def load(
    directory: Union[str, Path],
    app: FastAPI,
    settings: Optional[Settings] = None,
) -> Container:
    """
    Load the application into app.

    Args:
        directory: Project directory (holds config/ and the .env files)
        app: FastAPI application to register on
        settings: Pre-built settings (skips reading directory/config)

    Returns:
        Initialized Container, also stored on `app.state.container`
    """
    directory = Path(directory)
    if settings is None:
        settings = load_config(config_dir=directory / "config")

    setup_logging(
        level=settings.LOG_LEVEL,
        json_logs=settings.ENV == "production",
        log_dir=settings.LOG_DIR,
    )
    logger = get_logger(__name__)
    logger.info(f"Loading {settings.APP_NAME} (ENV={settings.ENV})")

    container = Container(settings, directory=directory)
    await container.initialize()

    # Middleware chain (order matters!)
    # 1. Request ID middleware (FIRST for tracking)
    app.add_middleware(RequestIDMiddleware)

    # 2. Metrics middleware
    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)

    # 3. CORS middleware (LAST)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BoutiqueException, boutique_exception_handler)

    app.include_router(health.router)
    app.include_router(outfits.router)
    if settings.METRICS_ENABLED:
        app.include_router(metrics.router)

    app.state.container = container
    app.state.settings = settings

    logger.info(
        f"Loaded plugins: {', '.join(container.project_config.plugin_names())}"
    )
    return container


__all__ = ["load"]
