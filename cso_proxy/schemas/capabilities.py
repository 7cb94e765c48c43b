"""Pydantic schemas for the app-capabilities discovery document."""

from pydantic import BaseModel, ConfigDict, Field


class UrlTemplate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url_template: str = Field(alias="url-template")


class RestApiTemplate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rest_api_template: str = Field(alias="rest-api-template")


class Capabilities(BaseModel):
    """URL templates; placeholders such as {namespace} are filled in by the client."""

    model_config = ConfigDict(populate_by_name=True)

    view_image: UrlTemplate = Field(alias="viewImage")
    manifest_security: RestApiTemplate = Field(alias="manifestSecurity")
    image_security: RestApiTemplate | None = Field(
        default=None,
        alias="imageSecurity",
        description="Unset when the adapter does not support image security.",
    )


class AppCapabilities(BaseModel):
    """Response body for GET /.well-known/app-capabilities."""

    model_config = ConfigDict(populate_by_name=True)

    app_name: str = Field(alias="appName", description="Host labels reversed (e.g. io.quay).")
    capabilities: Capabilities
