"""Prometheus metrics for cso-proxy."""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

from cso_proxy import __version__

# Application info
app_info = Info("cso_proxy_app", "cso-proxy application information")
app_info.info({"version": __version__, "name": "cso-proxy"})

# Inbound HTTP metrics
http_requests_total = Counter(
    "cso_proxy_http_requests_total",
    "Total HTTP requests served",
    ["method", "route", "status"],
)
http_request_duration_seconds = Histogram(
    "cso_proxy_http_request_duration_seconds",
    "Time spent serving HTTP requests",
    ["method", "route"],
)

# Upstream registry metrics
upstream_requests_total = Counter(
    "cso_proxy_upstream_requests_total",
    "Total vulnerability report requests sent to the registry",
    ["adapter", "status"],
)
upstream_request_duration_seconds = Histogram(
    "cso_proxy_upstream_request_duration_seconds",
    "Time spent waiting for the registry to return a vulnerability report",
    ["adapter"],
)


def record_request(method: str, route: str, status: int, elapsed: float) -> None:
    """Record one served inbound request."""
    http_requests_total.labels(method=method, route=route, status=str(status)).inc()
    http_request_duration_seconds.labels(method=method, route=route).observe(elapsed)


def record_upstream(adapter: str, status: int | str, elapsed: float) -> None:
    """Record one upstream call; status is the HTTP code or 'error' on transport failure."""
    upstream_requests_total.labels(adapter=adapter, status=str(status)).inc()
    upstream_request_duration_seconds.labels(adapter=adapter).observe(elapsed)


def render_metrics() -> tuple[bytes, str]:
    """Return the exposition payload and its content type."""
    return generate_latest(), CONTENT_TYPE_LATEST
