"""App-capabilities discovery endpoint consumed by the Container Security Operator."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from cso_proxy.adapters import Adapter
from cso_proxy.api.deps import get_current_adapter, request_host, request_scheme
from cso_proxy.schemas.capabilities import AppCapabilities

router = APIRouter()


@router.get(
    "/.well-known/app-capabilities",
    response_model=AppCapabilities,
    response_model_exclude_none=True,
)
def get_app_capabilities(
    request: Request,
    adapter: Annotated[Adapter, Depends(get_current_adapter)],
) -> AppCapabilities:
    """
    Return the app name and URL templates for this host.

    Template placeholders ({namespace}, {reponame}, {tag}, {digest}, {imageid})
    are left for the client to fill in.
    """
    url = f"{request_scheme(request)}://{request_host(request)}{request.url.path}"
    return adapter.capabilities(url)
