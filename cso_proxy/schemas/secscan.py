"""Pydantic schemas for the Container Security Operator (secscan) response served to clients."""

from pydantic import BaseModel, ConfigDict, Field

STATUS_SCANNED = "scanned"


class Vulnerability(BaseModel):
    """One vulnerability affecting a feature (package)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", alias="Name", description="Vulnerability identifier.")
    namespace_name: str = Field(
        default="",
        alias="NamespaceName",
        description="OS namespace; the registry does not supply one.",
    )
    description: str = Field(default="", alias="Description")
    link: str = Field(default="", alias="Link", description="First reference link, if any.")
    severity: str = Field(default="", alias="Severity")
    fixed_by: str = Field(
        default="",
        alias="FixedBy",
        description="Version containing the fix; empty when none is available.",
    )


class Feature(BaseModel):
    """An installed package/version pair and the vulnerabilities affecting it."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", alias="Name")
    namespace_name: str = Field(default="", alias="NamespaceName")
    version_format: str = Field(default="", alias="VersionFormat")
    version: str = Field(default="", alias="Version")
    vulnerabilities: list[Vulnerability] = Field(default_factory=list, alias="Vulnerabilities")
    added_by: str = Field(default="", alias="AddedBy")


class Layer(BaseModel):
    features: list[Feature] = Field(default_factory=list)


class Data(BaseModel):
    layer: Layer = Field(default_factory=Layer)


class SecscanResponse(BaseModel):
    """Response body for the manifest and image security endpoints."""

    status: str = Field(default=STATUS_SCANNED)
    data: Data = Field(default_factory=Data)
