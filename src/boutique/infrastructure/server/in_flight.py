"""
In-flight request tracking.

Counts HTTP requests routed through the listener and refuses new ones once
the listener has started draining.
"""

import asyncio
from typing import Optional

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from boutique.infrastructure.monitoring import metrics


class InFlightTracker:
    """
    Counter of requests currently being handled.

    Example:
        tracker = InFlightTracker()
        tracker.begin()
        ...
        tracker.end()
        tracker.stop_accepting()
        drained = await tracker.wait_idle(timeout=30)
    """

    def __init__(self):
        self._count = 0
        self._accepting = True
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def count(self) -> int:
        """Number of requests in flight."""
        return self._count

    @property
    def accepting(self) -> bool:
        """False once stop_accepting() has been called."""
        return self._accepting

    def begin(self) -> None:
        """Record the start of a request."""
        self._count += 1
        self._idle.clear()
        metrics.http_requests_in_flight.set(self._count)

    def end(self) -> None:
        """Record the end of a request."""
        self._count = max(0, self._count - 1)
        if self._count == 0:
            self._idle.set()
        metrics.http_requests_in_flight.set(self._count)

    def stop_accepting(self) -> None:
        """Refuse every request that arrives from now on."""
        self._accepting = False

    async def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until no request is in flight.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            True if idle, False if the timeout elapsed first
        """
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True


class InFlightMiddleware:
    """
    ASGI middleware feeding an InFlightTracker.

    Requests arriving after the tracker stopped accepting (keep-alive
    connections opened before the drain) get 503 with `Connection: close`.
    Lifespan and other non-HTTP scopes pass through untracked.
    """

    def __init__(self, app: ASGIApp, tracker: InFlightTracker):
        self.app = app
        self.tracker = tracker

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if not self.tracker.accepting:
            metrics.http_requests_refused_total.inc()
            response = JSONResponse(
                status_code=503,
                content={
                    "error": "SERVICE_UNAVAILABLE",
                    "message": "Server is shutting down",
                },
                headers={"Connection": "close"},
            )
            await response(scope, receive, send)
            return

        self.tracker.begin()
        try:
            await self.app(scope, receive, send)
        finally:
            self.tracker.end()
