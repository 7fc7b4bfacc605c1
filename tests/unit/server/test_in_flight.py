"""
Unit tests for in-flight request tracking.

Usage:
    pytest tests/unit/server/test_in_flight.py -v
"""

import asyncio

import httpx

from boutique.infrastructure.server import InFlightMiddleware, InFlightTracker
from shared.tests.test_base import LaborantTest


def make_app(release: asyncio.Event):
    """Plain ASGI app answering 200 once release is set."""

    async def app(scope, receive, send):
        await release.wait()
        await send(
            {
                "type": "http.response.start",
                "status": 200,
                "headers": [(b"content-type", b"text/plain")],
            }
        )
        await send({"type": "http.response.body", "body": b"ok"})

    return app


class TestInFlightTracker(LaborantTest):
    """Unit tests for InFlightTracker."""

    component_name = "boutique"
    test_category = "unit"

    async def test_counts_requests(self):
        """Test begin/end maintain the in-flight count."""
        self.reporter.info("Testing in-flight count", context="Test")

        tracker = InFlightTracker()
        tracker.begin()
        tracker.begin()
        assert tracker.count == 2

        tracker.end()
        tracker.end()
        tracker.end()
        assert tracker.count == 0

    async def test_wait_idle_returns_immediately_when_idle(self):
        tracker = InFlightTracker()

        assert await tracker.wait_idle(timeout=0.01) is True

    async def test_wait_idle_times_out(self):
        """Test wait_idle reports False while requests are running."""
        tracker = InFlightTracker()
        tracker.begin()

        assert await tracker.wait_idle(timeout=0.05) is False

    async def test_wait_idle_resolves_on_last_request(self):
        """Test waiters wake when the last request ends."""
        self.reporter.info("Testing idle notification", context="Test")

        tracker = InFlightTracker()
        tracker.begin()
        waiter = asyncio.ensure_future(tracker.wait_idle(timeout=2))
        await asyncio.sleep(0)

        tracker.end()

        assert await waiter is True

    def test_stop_accepting(self):
        tracker = InFlightTracker()

        tracker.stop_accepting()

        assert tracker.accepting is False


class TestInFlightMiddleware(LaborantTest):
    """Unit tests for InFlightMiddleware."""

    component_name = "boutique"
    test_category = "unit"

    async def test_request_tracked_while_running(self):
        """Test a request counts as in flight until it completes."""
        self.reporter.info("Testing tracked request", context="Test")

        tracker = InFlightTracker()
        release = asyncio.Event()
        app = InFlightMiddleware(make_app(release), tracker)

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as client:
            request = asyncio.ensure_future(client.get("/slow"))
            while tracker.count == 0:
                await asyncio.sleep(0.01)

            assert tracker.count == 1
            release.set()
            response = await request

        assert response.status_code == 200
        assert tracker.count == 0

    async def test_refuses_requests_after_drain_started(self):
        """Test requests after stop_accepting get 503 Connection: close."""
        self.reporter.info("Testing refused request", context="Test")

        tracker = InFlightTracker()
        release = asyncio.Event()
        release.set()
        app = InFlightMiddleware(make_app(release), tracker)
        tracker.stop_accepting()

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/store/outfits")

        assert response.status_code == 503
        assert response.headers["connection"] == "close"
        assert response.json() == {
            "error": "SERVICE_UNAVAILABLE",
            "message": "Server is shutting down",
        }
        assert tracker.count == 0

    async def test_failing_app_releases_slot(self):
        """Test the count drops even when the app raises."""
        tracker = InFlightTracker()

        async def broken(scope, receive, send):
            raise RuntimeError("boom")

        middleware = InFlightMiddleware(broken, tracker)

        try:
            await middleware({"type": "http"}, None, None)
        except RuntimeError:
            pass

        assert tracker.count == 0

    async def test_lifespan_scope_passes_through(self):
        """Test non-HTTP scopes are forwarded without tracking."""
        tracker = InFlightTracker()
        seen = []

        async def app(scope, receive, send):
            seen.append((scope["type"], tracker.count))

        tracker.stop_accepting()
        await InFlightMiddleware(app, tracker)({"type": "lifespan"}, None, None)

        assert seen == [("lifespan", 0)]
