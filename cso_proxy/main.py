"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import Response

from cso_proxy import __version__
from cso_proxy.adapters import get_adapter
from cso_proxy.api import router
from cso_proxy.api.metrics import router as metrics_router
from cso_proxy.core.config import Settings, get_settings
from cso_proxy.core.logging import QUIET_PATHS
from cso_proxy.services import metrics

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the configured adapter; unknown adapters fail here."""
    settings = settings or get_settings()
    app = FastAPI(
        title="cso-proxy",
        version=__version__,
        docs_url="/docs" if settings.APP_ENV == "dev" else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.adapter = get_adapter(settings.ADAPTER, settings)

    @app.middleware("http")
    async def access_log(request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        route = request.scope.get("route")
        route_path = getattr(route, "path", "unmatched")
        metrics.record_request(request.method, route_path, response.status_code, elapsed)
        if request.url.path not in QUIET_PATHS:
            logger.info(
                "%s %s %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "elapsed_seconds": elapsed,
                },
            )
        return response

    app.include_router(router)
    if settings.METRICS_ENABLED:
        app.include_router(metrics_router, tags=["metrics"])

    logger.info(
        "Application configured",
        extra={"adapter": app.state.adapter.name, "harbor_url": settings.HARBOR_URL or ""},
    )
    return app


app = create_app()
