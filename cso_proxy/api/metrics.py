"""Prometheus scrape endpoint."""

from fastapi import APIRouter
from fastapi.responses import Response

from cso_proxy.services.metrics import render_metrics

router = APIRouter()


@router.get("/metrics")
def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    payload, content_type = render_metrics()
    return Response(content=payload, media_type=content_type)
