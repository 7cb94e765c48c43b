"""Pydantic request/response schemas."""

from cso_proxy.schemas.capabilities import (
    AppCapabilities,
    Capabilities,
    RestApiTemplate,
    UrlTemplate,
)
from cso_proxy.schemas.harbor import CVSS, HarborReport, Report, VulnerabilityItem
from cso_proxy.schemas.secscan import (
    STATUS_SCANNED,
    Data,
    Feature,
    Layer,
    SecscanResponse,
    Vulnerability,
)

__all__ = [
    "AppCapabilities",
    "CVSS",
    "Capabilities",
    "Data",
    "Feature",
    "HarborReport",
    "Layer",
    "Report",
    "RestApiTemplate",
    "STATUS_SCANNED",
    "SecscanResponse",
    "UrlTemplate",
    "Vulnerability",
    "VulnerabilityItem",
]
