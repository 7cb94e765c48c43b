"""Manifest and image security endpoints: route CSO requests to the configured adapter."""

import logging
import re
from dataclasses import dataclass
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.datastructures import QueryParams

from cso_proxy.adapters import Adapter, AdapterOptions
from cso_proxy.api.deps import get_current_adapter, request_host
from cso_proxy.schemas.secscan import SecscanResponse
from cso_proxy.services.harbor_client import UpstreamError

logger = logging.getLogger(__name__)
router = APIRouter()

REPOSITORY_PREFIX = "/cso/v1/repository/"

# Two or more repository segments (optional leading registry host), then the reference.
MANIFEST_PATH_PATTERN = re.compile(
    r"^/cso/v1/repository/((?:[^/]+/){2,})manifest/([^/]+)/security$"
)
IMAGE_PATH_PATTERN = re.compile(
    r"^/cso/v1/repository/((?:[^/]+/){2,})image/([^/]+)/security$"
)


@dataclass(frozen=True)
class SecurityQuery:
    """Coordinates and display flags extracted from a security request."""

    path: str
    reference: str
    features: bool
    vulnerabilities: bool


def _flag(query: QueryParams | dict[str, str], name: str) -> bool:
    return query.get(name) == "true"


def match_security_path(
    url_path: str,
    query: QueryParams | dict[str, str],
    pattern: re.Pattern[str] = MANIFEST_PATH_PATTERN,
) -> SecurityQuery | None:
    """
    Match a request path against a security pattern.

    Returns None when the path does not have the expected shape. Only the
    literal "true" enables the features/vulnerabilities flags.
    """
    match = pattern.match(url_path)
    if match is None:
        return None
    return SecurityQuery(
        path=match.group(1).rstrip("/"),
        reference=match.group(2),
        features=_flag(query, "features"),
        vulnerabilities=_flag(query, "vulnerabilities"),
    )


@router.get(REPOSITORY_PREFIX + "{repository_path:path}", response_model=SecscanResponse)
async def get_security(
    request: Request,
    repository_path: str,
    adapter: Annotated[Adapter, Depends(get_current_adapter)],
) -> SecscanResponse | Response:
    """
    Return the CSO security report of a manifest (or image, when supported).

    - **/cso/v1/repository/{namespace}/{reponame}/manifest/{digest}/security**
    - **/cso/v1/repository/{namespace}/{reponame}/image/{imageid}/security**

    Add `features=true` to list affected packages and `vulnerabilities=true`
    to include their vulnerabilities. Upstream failures are returned as plain
    text with the upstream status code (or 500).
    """
    url_path = REPOSITORY_PREFIX + repository_path
    query = match_security_path(url_path, request.query_params)
    kind = "manifest"
    if query is None and adapter.supports_image_security:
        query = match_security_path(url_path, request.query_params, IMAGE_PATH_PATTERN)
        kind = "image"
    if query is None:
        raise HTTPException(status_code=404, detail="Not Found")

    opts = AdapterOptions(
        uri=f"https://{request_host(request)}",
        features=query.features,
        vulnerabilities=query.vulnerabilities,
    )
    try:
        if kind == "manifest":
            return await adapter.manifest_security(query.path, query.reference, opts)
        return await adapter.image_security(query.path, query.reference, opts)
    except UpstreamError as e:
        logger.warning(
            "Security report request failed",
            extra={
                "kind": kind,
                "path": query.path,
                "reference": query.reference,
                "status": e.status_code,
                "reason": e.message[:500],
            },
        )
        return PlainTextResponse(e.message, status_code=e.status_code)
