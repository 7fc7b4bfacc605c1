"""
Graceful shutdown coordinator.

Owns a single listener for the lifetime of the process and moves it from
ACCEPTING to STOPPED exactly once, whatever the number of termination
signals received.

Shutdown sequence:
1. Catch SIGTERM / SIGINT (first signal only, later ones are a no-op)
2. Stop accepting new connections (synchronously)
3. Wait for in-flight requests, bounded by the drain timeout
4. Close the listener (forced if the drain timed out)
5. Run registered cleanup tasks
6. Resolve the process exit code (0 clean, 1 on failure)
"""

import asyncio
import signal
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Protocol

from shared.lifecycle.exceptions import ShutdownError
from shared.lifecycle.listener_state import ListenerState
from shared.reporter import SystemReporter

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass
class ShutdownConfig:
    """Configuration for graceful shutdown."""

    timeout: float = 30.0
    """Maximum time to wait for in-flight requests to drain (seconds)"""

    cleanup_timeout: float = 10.0
    """Maximum time to wait for cleanup tasks (seconds)"""

    signals: tuple = (signal.SIGTERM, signal.SIGINT)
    """Signals that trigger a graceful shutdown"""


class DrainableListener(Protocol):
    """Listener contract required by the coordinator."""

    @property
    def state(self) -> ListenerState: ...

    @property
    def in_flight(self) -> int: ...

    def begin_drain(self) -> None: ...

    async def wait_drained(self, timeout: Optional[float]) -> bool: ...

    async def close(self, force: bool = False) -> None: ...


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of one listener.

    The coordinator is constructed once at startup with the listener the
    bootstrapper produced; nothing else may call socket-level operations on
    the listener after that handoff.

    Example:
        coordinator = ShutdownCoordinator(listener, ShutdownConfig(timeout=30))
        coordinator.register_cleanup_task(container.shutdown)
        coordinator.setup_signal_handlers()
        exit_code = await coordinator.wait_for_exit()

    Attributes:
        listener: Listener being coordinated
        config: Shutdown configuration
        shutdown_started_at: Timestamp when shutdown was initiated
    """

    def __init__(
        self,
        listener: DrainableListener,
        config: Optional[ShutdownConfig] = None,
        reporter: Optional[SystemReporter] = None,
        exit_handler: Optional[Callable[[int], None]] = None,
        name: str = "server",
    ):
        """
        Initialize shutdown coordinator.

        Args:
            listener: Started listener (must be ACCEPTING)
            config: Shutdown configuration (defaults to 30s drain timeout)
            reporter: Reporter for lifecycle messages
            exit_handler: Called exactly once with the final exit code
            name: Server name used in log messages
        """
        self.listener = listener
        self.config = config or ShutdownConfig()
        self.reporter = reporter or SystemReporter(name="shutdown")
        self.name = name
        self.shutdown_started_at: Optional[datetime] = None

        self._exit_handler = exit_handler
        self._cleanup_tasks: List[Callable[[], Awaitable[None]]] = []
        self._registered_signals: List[signal.Signals] = []
        self._drain_future: Optional[asyncio.Future] = None
        self._terminal_task: Optional[asyncio.Task] = None
        self._exit_future: Optional[asyncio.Future] = None

    # ================================================================
    # State
    # ================================================================

    @property
    def state(self) -> ListenerState:
        """Current state of the coordinated listener."""
        return self.listener.state

    def is_shutting_down(self) -> bool:
        """Check if shutdown has been initiated."""
        return self._drain_future is not None

    def get_shutdown_info(self) -> dict:
        """
        Get shutdown status information.

        Returns:
            Dictionary with shutdown status details
        """
        return {
            "state": self.state.value,
            "is_shutting_down": self.is_shutting_down(),
            "in_flight": self.listener.in_flight,
            "shutdown_started_at": (
                self.shutdown_started_at.isoformat()
                if self.shutdown_started_at
                else None
            ),
            "drain_timeout": self.config.timeout,
        }

    # ================================================================
    # Registration
    # ================================================================

    def register_cleanup_task(self, task: Callable[[], Awaitable[None]]) -> None:
        """
        Register cleanup task to run after the listener has closed.

        Tasks run concurrently; a failing task is logged and does not
        change the exit code.

        Args:
            task: Async function to call during cleanup
        """
        self._cleanup_tasks.append(task)

    def setup_signal_handlers(self) -> None:
        """
        Register one handler per termination signal on the running loop.

        Must be called from within the event loop.
        """
        loop = asyncio.get_running_loop()

        for sig in self.config.signals:
            if sig in self._registered_signals:
                continue
            loop.add_signal_handler(sig, self.handle_signal, sig)
            self._registered_signals.append(sig)

        self.reporter.info(
            "Signal handlers registered for graceful shutdown",
            context="Startup",
        )

    def remove_signal_handlers(self) -> None:
        """Remove the handlers installed by setup_signal_handlers()."""
        if not self._registered_signals:
            return

        loop = asyncio.get_running_loop()
        for sig in self._registered_signals:
            loop.remove_signal_handler(sig)
        self._registered_signals.clear()

    # ================================================================
    # Signal path
    # ================================================================

    def handle_signal(self, sig: int) -> None:
        """
        Handle a termination signal.

        Only the first invocation starts the shutdown sequence. Later
        invocations, including ones arriving before the first drain has
        finished, observe the sequence already running and return.

        Args:
            sig: Signal number
        """
        sig_name = signal.Signals(sig).name

        if self._terminal_task is not None:
            self.reporter.debug(
                f"Ignoring {sig_name}: shutdown already in progress",
                context="Shutdown",
            )
            return

        self.reporter.info(
            f"Received {sig_name}, gracefully shutting down...",
            context="Shutdown",
        )
        self._terminal_task = asyncio.ensure_future(self._shutdown_and_exit())

    async def _shutdown_and_exit(self) -> None:
        """Run shutdown, log the outcome and resolve the exit code."""
        exit_code = EXIT_FAILURE
        try:
            await self.shutdown()
        except ShutdownError as e:
            self.reporter.error(
                f"Error when shutting down {self.name}: {e.message}",
                context="Shutdown",
            )
        except Exception as e:
            self.reporter.error(
                f"Unexpected error when shutting down {self.name}: {e}",
                context="Shutdown",
            )
        else:
            self.reporter.info(
                f"Gracefully shutting down {self.name}",
                context="Shutdown",
            )
            exit_code = EXIT_OK
        finally:
            try:
                self.remove_signal_handlers()
            finally:
                self._exit(exit_code)

    # ================================================================
    # Shutdown
    # ================================================================

    def shutdown(self) -> "asyncio.Future[None]":
        """
        Stop accepting connections and drain the listener.

        The listener leaves ACCEPTING before this method returns; the
        returned future resolves once in-flight requests have finished (or
        the drain timeout forced the close) and cleanup tasks have run.
        Every call returns the same future.

        Returns:
            Future that resolves to None, or fails with ShutdownError
        """
        if self._drain_future is not None:
            return self._drain_future

        self.shutdown_started_at = datetime.now()

        try:
            self.listener.begin_drain()
        except Exception as e:
            future = asyncio.get_running_loop().create_future()
            future.set_exception(
                ShutdownError(f"Failed to stop accepting connections: {e}")
            )
            self._drain_future = future
            return future

        self.reporter.info(
            "Stopped accepting new connections",
            context="Shutdown",
        )
        self._drain_future = asyncio.ensure_future(self._drain())
        return self._drain_future

    async def _drain(self) -> None:
        """Wait for in-flight requests, close the listener, run cleanup."""
        timeout = self.config.timeout

        self.reporter.info(
            f"Draining {self.listener.in_flight} in-flight request(s) "
            f"(timeout: {timeout}s)",
            context="Shutdown",
        )

        try:
            drained = await self.listener.wait_drained(timeout)
        except Exception as e:
            await self._close_after_failure()
            raise ShutdownError(
                f"Failed to drain listener: {e}",
                in_flight=self.listener.in_flight,
            ) from e
        remaining = self.listener.in_flight

        if not drained:
            self.reporter.warning(
                f"Drain timeout after {timeout}s, "
                f"forcing close of {remaining} request(s)",
                context="Shutdown",
            )

        close_error: Optional[ShutdownError] = None
        try:
            await self.listener.close(force=not drained)
        except Exception as e:
            close_error = ShutdownError(
                f"Failed to close listener: {e}", in_flight=remaining
            )

        await self._run_cleanup_tasks()

        if close_error is not None:
            raise close_error

        if not drained:
            raise ShutdownError(
                f"Drain timed out after {timeout}s with "
                f"{remaining} request(s) still in flight",
                in_flight=remaining,
            )

        self.reporter.info(
            "Listener drained and closed",
            context="Shutdown",
        )

    async def _close_after_failure(self) -> None:
        """Force the listener closed and run cleanup after a failed drain."""
        try:
            await self.listener.close(force=True)
        except Exception as e:
            self.reporter.error(
                f"Failed to close listener: {e}",
                context="Shutdown",
            )
        await self._run_cleanup_tasks()

    async def _run_cleanup_tasks(self) -> None:
        """Run registered cleanup tasks concurrently, logging failures."""
        if not self._cleanup_tasks:
            return

        self.reporter.info(
            f"Running {len(self._cleanup_tasks)} cleanup tasks",
            context="Shutdown",
        )

        try:
            results = await asyncio.wait_for(
                asyncio.gather(
                    *(task() for task in self._cleanup_tasks),
                    return_exceptions=True,
                ),
                timeout=self.config.cleanup_timeout,
            )
        except asyncio.TimeoutError:
            self.reporter.warning(
                f"Cleanup tasks timed out after {self.config.cleanup_timeout}s",
                context="Shutdown",
            )
            return

        for task, result in zip(self._cleanup_tasks, results):
            if isinstance(result, Exception):
                task_name = getattr(task, "__qualname__", repr(task))
                self.reporter.error(
                    f"Cleanup task {task_name} failed: {result}",
                    context="Shutdown",
                )

    # ================================================================
    # Exit
    # ================================================================

    def _get_exit_future(self) -> asyncio.Future:
        if self._exit_future is None:
            self._exit_future = asyncio.get_running_loop().create_future()
        return self._exit_future

    def _exit(self, exit_code: int) -> None:
        """Resolve the exit code and notify the exit handler, once."""
        exit_future = self._get_exit_future()
        if exit_future.done():
            return

        exit_future.set_result(exit_code)
        if self._exit_handler is not None:
            self._exit_handler(exit_code)

    async def wait_for_exit(self) -> int:
        """
        Wait until a termination signal has been fully handled.

        Returns:
            Process exit code (0 clean shutdown, 1 failure)
        """
        return await self._get_exit_future()


__all__ = [
    "DrainableListener",
    "EXIT_FAILURE",
    "EXIT_OK",
    "ShutdownConfig",
    "ShutdownCoordinator",
]
