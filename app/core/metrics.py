"""
Prometheus instruments and the middleware that feeds them (monitoring & observability).
Challenge: Bounded label cardinality; instruments registered once per process.
"""

import time

from prometheus_client import Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUESTS_TOTAL = Counter(
    "requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status"],
)
REQUEST_DURATION = Histogram(
    "request_duration_seconds",
    "HTTP request duration",
    ["method", "path"],
)
ACTIVE_CONNECTIONS = Gauge(
    "active_connections",
    "Number of active connections",
)

UNMATCHED_PATH = "unmatched"


def route_path(request: Request) -> str:
    """Route template (e.g. /health) rather than the raw URL; unknown paths collapse to one label."""
    path = getattr(request.scope.get("route"), "path", None)
    return path or UNMATCHED_PATH


class MetricsMiddleware(BaseHTTPMiddleware):
    """Counts requests, times them and tracks how many are in flight."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ACTIVE_CONNECTIONS.inc()
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            path = route_path(request)
            REQUEST_DURATION.labels(request.method, path).observe(time.perf_counter() - start)
            REQUESTS_TOTAL.labels(request.method, path, str(status_code)).inc()
            ACTIVE_CONNECTIONS.dec()
