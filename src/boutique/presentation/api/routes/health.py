"""
Health check API routes.

Kubernetes-compatible liveness and readiness probes. Readiness reports
503 once the listener has started draining so that load balancers stop
routing traffic to this instance.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status

from shared.lifecycle import ListenerState

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """
    Liveness probe endpoint.

    Returns 200 as long as the process is serving requests.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_probe(request: Request, response: Response):
    """
    Readiness probe endpoint.

    Checks:
    - Listener is accepting connections
    - Database connectivity

    Returns:
        Health status dict with dependency checks
    """
    checks = {}

    listener = getattr(request.app.state, "listener", None)
    if listener is not None:
        checks["listener"] = listener.state.value
        listener_ok = listener.state is ListenerState.ACCEPTING
    else:
        checks["listener"] = "unmanaged"
        listener_ok = True

    container = getattr(request.app.state, "container", None)
    database_ok = container is not None and await container.database.health_check()
    checks["database"] = "healthy" if database_ok else "unhealthy"

    healthy = listener_ok and database_ok
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if healthy else "unhealthy",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("", status_code=status.HTTP_200_OK)
async def health_check_endpoint(request: Request, response: Response):
    """General health check endpoint (alias for readiness)."""
    return await readiness_probe(request, response)
