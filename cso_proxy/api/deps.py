"""Request-scoped dependencies shared by the route modules."""

from fastapi import Request

from cso_proxy.adapters import Adapter


def get_current_adapter(request: Request) -> Adapter:
    """Dependency returning the adapter configured at startup."""
    return request.app.state.adapter


def request_host(request: Request) -> str:
    """Host the client addressed, honoring X-Forwarded-Host from a reverse proxy."""
    forwarded = request.headers.get("x-forwarded-host", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip()
    return request.headers.get("host") or request.url.netloc


def request_scheme(request: Request) -> str:
    """Scheme the client used; the proxy is assumed to sit behind TLS unless told otherwise."""
    forwarded = request.headers.get("x-forwarded-proto", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip().lower()
    return "https"
