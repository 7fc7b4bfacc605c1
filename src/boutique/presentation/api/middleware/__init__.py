"""
API middleware.
"""

from boutique.presentation.api.middleware.error_handler import (
    boutique_exception_handler,
)
from boutique.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from boutique.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "MetricsMiddleware",
    "RequestIDMiddleware",
    "boutique_exception_handler",
]
