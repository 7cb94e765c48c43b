"""Liveness endpoint used by orchestrators and load balancers."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse)
def get_health() -> str:
    return "OK"
