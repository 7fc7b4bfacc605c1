"""
End-to-end tests for graceful shutdown of a live listener.

A real uvicorn listener is started by the Bootstrapper and handed to the
ShutdownCoordinator; termination signals are delivered through
handle_signal().

Usage:
    pytest tests/e2e/test_graceful_drain.py -v
"""

import asyncio
import signal

import httpx
import pytest
from fastapi import FastAPI

from boutique.infrastructure.server import Bootstrapper
from helpers.fakes import RecordingReporter
from shared.lifecycle import ListenerState, ShutdownConfig, ShutdownCoordinator
from shared.tests.test_base import LaborantTest


class SlowApp:
    """FastAPI app with an endpoint that blocks until released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.app = FastAPI()

        @self.app.get("/slow")
        async def slow():
            await self.release.wait()
            return {"done": True}

        @self.app.get("/fast")
        async def fast():
            return {"done": True}


def client_for(port: int) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=f"http://127.0.0.1:{port}", trust_env=False, timeout=10
    )


async def wait_for(predicate, timeout: float = 5.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


class TestGracefulDrain(LaborantTest):
    """End-to-end drain behavior."""

    component_name = "boutique"
    test_category = "e2e"

    def setup_test(self):
        self.exit_codes = []
        self.recorder = RecordingReporter()

    async def start(self, port, slow_app, timeout=5.0):
        listener = await Bootstrapper(
            host="127.0.0.1",
            reporter=self.recorder,
            log_level="warning",
            close_timeout=2,
        ).start(port, slow_app.app)
        coordinator = ShutdownCoordinator(
            listener,
            ShutdownConfig(timeout=timeout, cleanup_timeout=2),
            reporter=self.recorder,
            exit_handler=self.exit_codes.append,
            name="boutique server",
        )
        return listener, coordinator

    async def test_in_flight_request_completes(self, free_port):
        """Test SIGTERM waits for the running request, then exits 0."""
        self.reporter.info("Testing drain with in-flight request", context="Test")

        slow_app = SlowApp()
        listener, coordinator = await self.start(free_port, slow_app)

        async with client_for(free_port) as client:
            request = asyncio.ensure_future(client.get("/slow"))
            await wait_for(lambda: listener.in_flight == 1)

            coordinator.handle_signal(signal.SIGTERM)
            coordinator.handle_signal(signal.SIGTERM)

            # Listener leaves ACCEPTING immediately
            assert listener.state == ListenerState.DRAINING

            # New connections are refused while draining
            async with client_for(free_port) as late_client:
                with pytest.raises(httpx.ConnectError):
                    await late_client.get("/fast")

            slow_app.release.set()
            response = await request

        assert response.status_code == 200
        assert response.json() == {"done": True}

        exit_code = await asyncio.wait_for(coordinator.wait_for_exit(), timeout=10)

        assert exit_code == 0
        assert self.exit_codes == [0]
        assert listener.state == ListenerState.STOPPED
        assert "Gracefully shutting down boutique server" in (
            self.recorder.messages("info")
        )

    async def test_idle_listener_stops_immediately(self, free_port):
        """Test a listener with no traffic drains at once."""
        slow_app = SlowApp()
        listener, coordinator = await self.start(free_port, slow_app)

        async with client_for(free_port) as client:
            assert (await client.get("/fast")).status_code == 200

        coordinator.handle_signal(signal.SIGINT)
        exit_code = await asyncio.wait_for(coordinator.wait_for_exit(), timeout=10)

        assert exit_code == 0
        assert listener.state == ListenerState.STOPPED

    async def test_drain_timeout_exits_with_failure(self, free_port):
        """Test a request outliving the drain timeout forces exit 1."""
        self.reporter.info("Testing drain timeout", context="Test")

        slow_app = SlowApp()
        listener, coordinator = await self.start(free_port, slow_app, timeout=0.3)

        async with client_for(free_port) as client:
            request = asyncio.ensure_future(client.get("/slow"))
            await wait_for(lambda: listener.in_flight == 1)

            coordinator.handle_signal(signal.SIGTERM)
            exit_code = await asyncio.wait_for(
                coordinator.wait_for_exit(), timeout=10
            )

            await asyncio.gather(request, return_exceptions=True)

        assert exit_code == 1
        assert self.exit_codes == [1]
        assert listener.state == ListenerState.STOPPED
        assert any(
            msg.startswith("Error when shutting down boutique server:")
            for msg in self.recorder.messages("error")
        )
