"""Harbor adapter: serve CSO security reports from Harbor's vulnerability additions API."""

import logging
from urllib.parse import quote, urlsplit

from cso_proxy.adapters.base import Adapter, AdapterOptions, default_app_name, register_adapter
from cso_proxy.schemas.capabilities import (
    AppCapabilities,
    Capabilities,
    RestApiTemplate,
    UrlTemplate,
)
from cso_proxy.schemas.secscan import SecscanResponse
from cso_proxy.services.aggregate import aggregate
from cso_proxy.services.harbor_client import fetch_vulnerability_report

logger = logging.getLogger(__name__)

VIEW_IMAGE_TEMPLATE = "{app_url}/{{namespace}}/{{reponame}}:{{tag}}"
MANIFEST_SECURITY_TEMPLATE = (
    "{app_url}/cso/v1/repository/{{namespace}}/{{reponame}}/manifest/{{digest}}/security"
)
IMAGE_SECURITY_TEMPLATE = (
    "{app_url}/cso/v1/repository/{{namespace}}/{{reponame}}/image/{{imageid}}/security"
)


def split_repository_path(path: str) -> tuple[str, str]:
    """
    Split a repository path once on its last '/' into (namespace, repository).

    The namespace keeps any leading registry host segment.
    """
    namespace, _, repository = path.strip("/").rpartition("/")
    return namespace, repository


@register_adapter("harbor")
class HarborAdapter(Adapter):
    """Translate Harbor vulnerability reports into CSO secscan responses."""

    @property
    def supports_image_security(self) -> bool:
        return bool(self.settings.IMAGE_SECURITY_ENABLED)

    def capabilities(self, url: str) -> AppCapabilities:
        parts = urlsplit(url)
        app_url = f"{parts.scheme or 'https'}://{parts.netloc}"
        return AppCapabilities(
            app_name=default_app_name(url),
            capabilities=Capabilities(
                view_image=UrlTemplate(url_template=VIEW_IMAGE_TEMPLATE.format(app_url=app_url)),
                manifest_security=RestApiTemplate(
                    rest_api_template=MANIFEST_SECURITY_TEMPLATE.format(app_url=app_url)
                ),
                image_security=(
                    RestApiTemplate(
                        rest_api_template=IMAGE_SECURITY_TEMPLATE.format(app_url=app_url)
                    )
                    if self.supports_image_security
                    else None
                ),
            ),
        )

    async def manifest_security(
        self, path: str, digest: str, opts: AdapterOptions
    ) -> SecscanResponse:
        return await self._vulnerability_info(path, digest, opts, kind="manifest")

    async def image_security(
        self, path: str, image_id: str, opts: AdapterOptions
    ) -> SecscanResponse:
        return await self._vulnerability_info(path, image_id, opts, kind="image")

    async def _vulnerability_info(
        self, path: str, reference: str, opts: AdapterOptions, kind: str
    ) -> SecscanResponse:
        namespace, repository = split_repository_path(path)
        logger.info(
            "Fetching %s information",
            kind,
            extra={"namespace": namespace, "repository": repository, "reference": reference},
        )
        base_uri = self.settings.HARBOR_URL or opts.uri
        report = await fetch_vulnerability_report(
            base_uri,
            namespace,
            quote(repository, safe=""),
            reference,
            self.settings,
            adapter=self.name,
        )
        for key, scanner_report in report.root.items():
            logger.debug(
                "Reading report",
                extra={"report": key, "vulnerability_count": len(scanner_report.vulnerabilities)},
            )
        return aggregate(report, opts.features, opts.vulnerabilities)
