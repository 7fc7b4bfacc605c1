"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "boutique_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "boutique_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "boutique_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Listener Metrics
# ============================================================

http_requests_in_flight = Gauge(
    "boutique_http_requests_in_flight",
    "HTTP requests currently being handled",
)

http_requests_refused_total = Counter(
    "boutique_http_requests_refused_total",
    "HTTP requests refused while draining",
)

listener_state = Gauge(
    "boutique_listener_state",
    "Listener lifecycle state (0=starting, 1=accepting, 2=draining, 3=stopped)",
)

shutdown_duration_seconds = Histogram(
    "boutique_shutdown_duration_seconds",
    "Time from termination signal to listener stopped",
    buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# ============================================================
# Business Metrics
# ============================================================

outfit_events_total = Counter(
    "boutique_outfit_events_total",
    "Outfit lifecycle events emitted",
    ["event"],
)
