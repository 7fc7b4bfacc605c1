"""
Monitoring and observability infrastructure.
"""

from boutique.infrastructure.monitoring import metrics
from boutique.infrastructure.monitoring.logger import (
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "metrics",
    "get_logger",
    "get_request_id",
    "set_request_id",
    "setup_logging",
]
