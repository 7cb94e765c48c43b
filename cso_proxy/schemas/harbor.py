"""Pydantic schemas for Harbor's native vulnerability report (additions/vulnerabilities)."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, RootModel


def _none_to_empty_str(value: Any) -> Any:
    return "" if value is None else value


def _none_to_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_to_empty_dict(value: Any) -> Any:
    return {} if value is None else value


# Harbor (Go) serializes empty strings/lists/maps as null or omits them.
NullableStr = Annotated[str, BeforeValidator(_none_to_empty_str)]
NullableStrList = Annotated[list[str], BeforeValidator(_none_to_empty_list)]


class CVSS(BaseModel):
    """CVSS3 and CVSS2 scores and attack vectors for one vulnerability item."""

    model_config = {"extra": "ignore"}

    score_v3: float | None = Field(default=None, description="CVSS-3 score (e.g. 2.5).")
    score_v2: float | None = Field(default=None, description="CVSS-2 score (e.g. 2.5).")
    vector_v3: NullableStr = Field(
        default="",
        description="CVSS-3 attack vector (e.g. CVSS:3.0/AV:L/AC:L/PR:L/UI:N/S:U/C:H/I:N/A:N).",
    )
    vector_v2: NullableStr = Field(
        default="",
        description="CVSS-2 attack vector (e.g. AV:L/AC:M/Au:N/C:P/I:N/A:N).",
    )


class VulnerabilityItem(BaseModel):
    """One vulnerability found by a scanner in a Harbor artifact."""

    model_config = {"extra": "ignore"}

    id: NullableStr = Field(default="", description="Vulnerability identifier (e.g. CVE-2017-8283).")
    package: NullableStr = Field(default="", description="Affected package (e.g. dpkg).")
    version: NullableStr = Field(default="", description="Installed package version (e.g. 1.17.27).")
    fix_version: NullableStr = Field(
        default="",
        description="Package version containing the fix; empty when none is available.",
    )
    severity: NullableStr = Field(default="", description="Severity label (e.g. High).")
    description: NullableStr = Field(default="", description="Free-text description.")
    links: NullableStrList = Field(
        default_factory=list,
        description="Links to upstream databases with the full description.",
    )
    artifact_digests: NullableStrList = Field(
        default_factory=list,
        description="Digests of the artifacts the vulnerability belongs to.",
    )
    preferred_cvss: CVSS | None = Field(
        default=None,
        description="Preferred CVSS details; not propagated to CSO responses.",
    )
    cwe_ids: NullableStrList = Field(
        default_factory=list,
        description="CWE ids associated with the vulnerability (e.g. CWE-465).",
    )
    vendor_attributes: Annotated[dict[str, Any], BeforeValidator(_none_to_empty_dict)] = Field(
        default_factory=dict,
        description="Vendor specific key-value attributes.",
    )


class Report(BaseModel):
    """Vulnerability report produced by a single scanner."""

    model_config = {"extra": "ignore"}

    generated_at: NullableStr = Field(default="", description="Time the report was generated.")
    severity: NullableStr = Field(default="", description="Overall severity of the report.")
    vulnerabilities: Annotated[
        list[VulnerabilityItem], BeforeValidator(_none_to_empty_list)
    ] = Field(
        default_factory=list,
        description="Vulnerabilities found by the scanner.",
    )


NullableReport = Annotated[Report, BeforeValidator(_none_to_empty_dict)]


class HarborReport(RootModel[dict[str, NullableReport]]):
    """Harbor response body: report key (scanner mime type) → Report; null reports are empty."""

    root: dict[str, NullableReport] = Field(default_factory=dict)
