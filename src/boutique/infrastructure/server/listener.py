"""
Listener handle backed by a uvicorn server.

The handle drives uvicorn's startup/shutdown steps individually instead of
calling `Server.serve()`, so that signal handling and drain timing stay
with the shutdown coordinator.
"""

import asyncio
import socket
from typing import Optional

import uvicorn
from starlette.types import ASGIApp

from boutique.infrastructure.monitoring import metrics
from boutique.infrastructure.server.in_flight import (
    InFlightMiddleware,
    InFlightTracker,
)
from shared.lifecycle import InvalidStateTransitionError, ListenerState, StartupError

_STATE_METRIC = {
    ListenerState.STARTING: 0,
    ListenerState.ACCEPTING: 1,
    ListenerState.DRAINING: 2,
    ListenerState.STOPPED: 3,
}


class ListenerHandle:
    """
    Bound HTTP listener with lifecycle state and in-flight tracking.

    Created by the Bootstrapper in STARTING state; after open() succeeds it
    is ACCEPTING and owned by the shutdown coordinator.

    Attributes:
        host: Bind host
        port: Bind port
        tracker: In-flight request tracker
        server: Underlying uvicorn server
    """

    def __init__(
        self,
        app: ASGIApp,
        host: str,
        port: int,
        log_level: str = "info",
        close_timeout: Optional[float] = 10.0,
    ):
        """
        Initialize listener handle.

        Args:
            app: ASGI application to serve
            host: Bind host
            port: Bind port
            log_level: uvicorn log level
            close_timeout: Seconds to wait for connections to close on a
                non-forced close (None waits forever)
        """
        self.host = host
        self.port = port
        self.close_timeout = close_timeout
        self.tracker = InFlightTracker()

        self.config = uvicorn.Config(
            InFlightMiddleware(app, self.tracker),
            host=host,
            port=port,
            log_level=log_level.lower(),
            lifespan="on",
            timeout_graceful_shutdown=close_timeout,
        )
        self.server = uvicorn.Server(self.config)

        self._state = ListenerState.STARTING
        self._ticker: Optional[asyncio.Task] = None
        metrics.listener_state.set(_STATE_METRIC[self._state])

    @property
    def state(self) -> ListenerState:
        """Current lifecycle state."""
        return self._state

    @property
    def in_flight(self) -> int:
        """Number of requests currently being handled."""
        return self.tracker.count

    def _transition(self, target: ListenerState) -> None:
        if not self._state.can_transition_to(target):
            raise InvalidStateTransitionError(self._state.value, target.value)
        self._state = target
        metrics.listener_state.set(_STATE_METRIC[target])

    async def open(self, sock: socket.socket) -> None:
        """
        Start serving on an already bound socket.

        Runs the application lifespan startup, then starts accepting.

        Args:
            sock: Bound (not necessarily listening) socket

        Raises:
            StartupError: If the application or the server fails to start
        """
        try:
            if not self.config.loaded:
                self.config.load()
            self.server.lifespan = self.config.lifespan_class(self.config)
            await self.server.startup(sockets=[sock])
        except Exception as e:
            sock.close()
            self.abort()
            raise StartupError(f"Listener failed to start: {e}") from e

        if self.server.should_exit or not self.server.started:
            sock.close()
            self.abort()
            raise StartupError("Application startup failed")

        self._ticker = asyncio.create_task(self.server.main_loop())
        self._transition(ListenerState.ACCEPTING)

    def abort(self) -> None:
        """Mark a listener that never started as STOPPED."""
        self._transition(ListenerState.STOPPED)

    def begin_drain(self) -> None:
        """
        Stop accepting new connections.

        Closes the listening sockets and makes the request middleware
        refuse requests on connections that are already open. Synchronous:
        nothing new is accepted once this returns.
        """
        self._transition(ListenerState.DRAINING)
        self.tracker.stop_accepting()
        for server in getattr(self.server, "servers", []):
            server.close()
        self.server.should_exit = True

    async def wait_drained(self, timeout: Optional[float]) -> bool:
        """
        Wait for in-flight requests to finish.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            True if every request finished before the timeout
        """
        return await self.tracker.wait_idle(timeout)

    async def close(self, force: bool = False) -> None:
        """
        Close remaining connections and run the lifespan shutdown.

        Args:
            force: Cancel requests still running instead of waiting

        Raises:
            InvalidStateTransitionError: If the listener is not draining
        """
        if self._state is not ListenerState.DRAINING:
            raise InvalidStateTransitionError(
                self._state.value, ListenerState.STOPPED.value
            )

        try:
            if self._ticker is not None:
                await self._ticker
            self.config.timeout_graceful_shutdown = (
                0 if force else self.close_timeout
            )
            await self.server.shutdown()
        finally:
            self._transition(ListenerState.STOPPED)
