"""
Prometheus HTTP metrics middleware.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from boutique.infrastructure.monitoring import metrics

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """
    Label for a request: the matched route template.

    `/store/outfits/{outfit_id}` rather than the concrete path, so outfit
    IDs do not each create a new time series.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ENDPOINT


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Records request count, duration and errors per method and route.

    Scrapes of `/metrics` itself are not counted.
    """

    def __init__(self, app, skip_paths=("/metrics",)):
        super().__init__(app)
        self.skip_paths = frozenset(skip_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        method = request.method
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            endpoint = endpoint_label(request)
            metrics.http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(time.perf_counter() - started)
            metrics.http_errors_total.labels(
                method=method, endpoint=endpoint, error_type=type(e).__name__
            ).inc()
            raise

        endpoint = endpoint_label(request)
        metrics.http_request_duration_seconds.labels(
            method=method, endpoint=endpoint
        ).observe(time.perf_counter() - started)
        metrics.http_requests_total.labels(
            method=method, endpoint=endpoint, status=response.status_code
        ).inc()

        if response.status_code >= 400:
            metrics.http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                error_type="client_error" if response.status_code < 500 else "server_error",
            ).inc()

        return response
