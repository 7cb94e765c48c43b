"""HTTP routes."""

from fastapi import APIRouter

from cso_proxy.api import capabilities, health, security

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(capabilities.router, tags=["capabilities"])
router.include_router(security.router, tags=["security"])
