"""Harbor client: fetch an artifact's vulnerability report from the registry API."""

import json
import logging
import time
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from cso_proxy.schemas.harbor import HarborReport
from cso_proxy.services import metrics

if TYPE_CHECKING:
    from cso_proxy.core.config import Settings

logger = logging.getLogger(__name__)

VULNERABILITIES_PATH = (
    "/api/v2.0/projects/{namespace}/repositories/{repository}"
    "/artifacts/{reference}/additions/vulnerabilities"
)
ACCEPT_VULNERABILITIES_HEADER = "X-Accept-Vulnerabilities"


class UpstreamError(Exception):
    """Raised when the registry could not produce a usable vulnerability report."""

    def __init__(self, message: str, status_code: int = 500, cause: Exception | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


class UpstreamTransportError(UpstreamError):
    """DNS, connect, timeout or other transport failure; nothing was received."""


class UpstreamStatusError(UpstreamError):
    """Registry answered with a non-2xx status; carries that status verbatim."""


class UpstreamDecodeError(UpstreamError):
    """Registry answered 2xx but the body is not a vulnerability report."""


def vulnerabilities_url(base_uri: str, namespace: str, repository: str, reference: str) -> str:
    """Build the additions/vulnerabilities URL. Components must already be escaped."""
    return base_uri.rstrip("/") + VULNERABILITIES_PATH.format(
        namespace=namespace,
        repository=repository,
        reference=reference,
    )


def _status_text(response: httpx.Response) -> str:
    reason = response.reason_phrase
    return f"{response.status_code} {reason}" if reason else str(response.status_code)


async def fetch_vulnerability_report(
    base_uri: str,
    namespace: str,
    repository: str,
    reference: str,
    settings: "Settings",
    adapter: str = "harbor",
) -> HarborReport:
    """
    GET the vulnerability report for one artifact and decode it.

    Raises UpstreamTransportError (500) when the registry cannot be reached,
    UpstreamStatusError (upstream status) on a non-2xx answer without reading
    the body, and UpstreamDecodeError (500) when a 2xx body does not decode.
    """
    url = vulnerabilities_url(base_uri, namespace, repository, reference)
    headers: dict[str, str] = {}
    if settings.VULNERABILITY_REPORT_MIME_TYPE:
        headers[ACCEPT_VULNERABILITIES_HEADER] = settings.VULNERABILITY_REPORT_MIME_TYPE
    timeout = httpx.Timeout(settings.REQUEST_TIMEOUT_SEC)
    logger.debug("Targeting registry", extra={"target_url": url})
    start = time.perf_counter()

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, headers=headers)
        elapsed = time.perf_counter() - start
    except httpx.TimeoutException as e:
        elapsed = time.perf_counter() - start
        metrics.record_upstream(adapter, "error", elapsed)
        logger.error(
            "Registry request timed out",
            extra={"target_url": url, "elapsed_seconds": elapsed, "status": "error"},
        )
        raise UpstreamTransportError("registry request timed out", cause=e) from e
    except httpx.HTTPError as e:
        elapsed = time.perf_counter() - start
        metrics.record_upstream(adapter, "error", elapsed)
        logger.error(
            "Registry request failed",
            extra={"target_url": url, "elapsed_seconds": elapsed, "status": "error"},
        )
        raise UpstreamTransportError("failed to execute registry request", cause=e) from e

    metrics.record_upstream(adapter, response.status_code, elapsed)
    logger.info(
        "Registry responded",
        extra={
            "target_url": url,
            "elapsed_seconds": elapsed,
            "status": response.status_code,
        },
    )

    if not response.is_success:
        logger.warning(
            "Registry request failed with code %s", response.status_code,
            extra={"target_url": url, "status": response.status_code},
        )
        raise UpstreamStatusError(
            f"request failed: {_status_text(response)}",
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Registry response body is not valid JSON", extra={"target_url": url})
        raise UpstreamDecodeError(
            "failed to decode registry response: body is not valid JSON",
            cause=e,
        ) from e

    try:
        return HarborReport.model_validate(body)
    except ValidationError as e:
        logger.error(
            "Registry response does not match the vulnerability report schema",
            extra={"target_url": url, "error_count": e.error_count()},
        )
        raise UpstreamDecodeError(
            "failed to decode registry response: unexpected vulnerability report shape",
            cause=e,
        ) from e
