"""
Boutique - process entry point.

Loads the application, binds the HTTP listener and hands it to the
shutdown coordinator, which owns it until the process exits.

Exit codes:
    0 - clean shutdown after SIGTERM/SIGINT
    1 - startup failure, or error while draining/closing the listener
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI
from pydantic import ValidationError as SettingsValidationError

from boutique import __version__
from boutique.config.settings import PROJECT_ROOT, Settings, load_config
from boutique.di.container import Container
from boutique.infrastructure.monitoring import metrics
from boutique.infrastructure.server import Bootstrapper, ListenerHandle
from boutique.loaders import load
from shared.lifecycle import (
    ShutdownConfig,
    ShutdownCoordinator,
    StartupError,
)
from shared.lifecycle.graceful_shutdown import EXIT_FAILURE
from shared.reporter import SystemReporter


class BoutiqueApp:
    """
    Boutique application orchestrator.

    Responsibilities:
        - Load the application (config, container, routes)
        - Start the listener through the Bootstrapper
        - Hand the listener to the ShutdownCoordinator
        - Resolve the process exit code
    """

    def __init__(
        self,
        settings: Settings,
        directory: Optional[Path] = None,
        exit_handler: Optional[Callable[[int], None]] = None,
    ):
        """
        Initialize Boutique application.

        Args:
            settings: Application settings
            directory: Project directory handed to the loader
            exit_handler: Called once with the exit code after shutdown
        """
        self.settings = settings
        self.directory = Path(directory) if directory else PROJECT_ROOT
        self.exit_handler = exit_handler

        self.reporter = SystemReporter(
            name="boutique",
            log_dir=settings.LOG_DIR,
            level=getattr(logging, settings.LOG_LEVEL),
        )
        self.app = FastAPI(
            title=settings.APP_NAME,
            description="Casual Chic Boutique commerce backend",
            version=__version__,
        )

        self.container: Optional[Container] = None
        self.listener: Optional[ListenerHandle] = None
        self.coordinator: Optional[ShutdownCoordinator] = None

    async def run(self) -> int:
        """
        Run the server until a termination signal has been handled.

        Returns:
            Process exit code
        """
        try:
            self.container = await load(self.directory, self.app, settings=self.settings)

            bootstrapper = Bootstrapper(
                host=self.settings.HOST,
                reporter=self.reporter,
                log_level=self.settings.LOG_LEVEL.lower(),
                close_timeout=self.settings.SHUTDOWN_CLEANUP_TIMEOUT,
            )
            self.listener = await bootstrapper.start(self.settings.PORT, self.app)
        except StartupError as e:
            return await self._startup_failed(e.message)
        except Exception as e:
            return await self._startup_failed(str(e), exc_info=True)

        self.coordinator = ShutdownCoordinator(
            self.listener,
            ShutdownConfig(
                timeout=self.settings.SHUTDOWN_TIMEOUT,
                cleanup_timeout=self.settings.SHUTDOWN_CLEANUP_TIMEOUT,
            ),
            reporter=self.reporter,
            exit_handler=self.exit_handler,
            name="boutique server",
        )
        self.coordinator.register_cleanup_task(self.container.shutdown)
        self.coordinator.setup_signal_handlers()

        self.reporter.info(
            f"Graceful shutdown enabled (timeout: {self.settings.SHUTDOWN_TIMEOUT}s)",
            context="Startup",
        )

        exit_code = await self.coordinator.wait_for_exit()

        started_at = self.coordinator.shutdown_started_at
        if started_at is not None:
            metrics.shutdown_duration_seconds.observe(
                (datetime.now() - started_at).total_seconds()
            )
        return exit_code

    async def _startup_failed(self, message: str, exc_info: bool = False) -> int:
        self.reporter.error(
            f"Error starting Boutique server: {message}",
            context="Startup",
            exc_info=exc_info,
        )
        if self.container is not None:
            await self.container.shutdown()
        if self.exit_handler is not None:
            self.exit_handler(EXIT_FAILURE)
        return EXIT_FAILURE


def main() -> None:
    """
    Main entry point for Boutique.

    Loads configuration and runs the server. No command-line flags; the
    port comes from the PORT environment variable (default 9000).
    """
    try:
        settings = load_config()
    except SettingsValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    app = BoutiqueApp(settings)
    sys.exit(asyncio.run(app.run()))


if __name__ == "__main__":
    main()
