"""
Request ID middleware.

Binds a request ID to the logging context for the duration of a request
and echoes it back to the caller. The storefront proxy forwards the
browser's `X-Request-ID`, so one ID follows a request across both tiers.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from boutique.infrastructure.monitoring.logger import get_logger, set_request_id

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an ID.

    The ID is taken from the request header when present and sane,
    otherwise generated. It is stored on `request.state.request_id`,
    attached to every log record and returned in the response header.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        response.headers[self.header_name] = request_id
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({(time.perf_counter() - started) * 1000:.1f}ms)"
        )
        return response
