"""
Process bootstrapper.

Binds the listening socket, starts the listener for the loaded
application and emits the ready notification.
"""

import socket
from typing import Callable, Optional

from starlette.types import ASGIApp

from boutique.infrastructure.server.listener import ListenerHandle
from shared.lifecycle import StartupError
from shared.reporter import SystemReporter


class Bootstrapper:
    """
    Starts the HTTP listener.

    Example:
        bootstrapper = Bootstrapper(host="0.0.0.0", reporter=reporter)
        listener = await bootstrapper.start(9000, app)
    """

    def __init__(
        self,
        host: str = "0.0.0.0",
        reporter: Optional[SystemReporter] = None,
        on_ready: Optional[Callable[[ListenerHandle], None]] = None,
        log_level: str = "info",
        close_timeout: Optional[float] = 10.0,
    ):
        """
        Initialize bootstrapper.

        Args:
            host: Interface to bind
            reporter: Reporter for startup messages
            on_ready: Called once with the handle when it accepts connections
            log_level: uvicorn log level
            close_timeout: Non-forced close timeout handed to the listener
        """
        self.host = host
        self.reporter = reporter or SystemReporter(name="bootstrap")
        self.on_ready = on_ready
        self.log_level = log_level
        self.close_timeout = close_timeout

    async def start(self, port: int, app: ASGIApp) -> ListenerHandle:
        """
        Bind port and start serving app.

        Args:
            port: TCP port (positive integer)
            app: ASGI application

        Returns:
            ListenerHandle in ACCEPTING state

        Raises:
            StartupError: Invalid port, bind failure or application startup
                failure
        """
        if isinstance(port, bool) or not isinstance(port, int):
            raise StartupError(f"Port must be an integer, got {port!r}")
        if not 0 < port <= 65535:
            raise StartupError(f"Port out of range: {port}")

        sock = self._bind(port)

        handle = ListenerHandle(
            app,
            host=self.host,
            port=port,
            log_level=self.log_level,
            close_timeout=self.close_timeout,
        )
        state = getattr(app, "state", None)
        if state is not None:
            state.listener = handle

        await handle.open(sock)

        self.reporter.info(f"Server is ready on port: {port}", context="Startup")
        if self.on_ready is not None:
            self.on_ready(handle)

        return handle

    def _bind(self, port: int) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, port))
        except OSError as e:
            sock.close()
            raise StartupError(
                f"Could not bind {self.host}:{port}: {e.strerror or e}"
            ) from e

        sock.set_inheritable(True)
        return sock
