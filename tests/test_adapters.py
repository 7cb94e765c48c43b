"""Unit tests for cso_proxy.adapters: app names, capabilities, registry, and the Harbor adapter."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from cso_proxy.adapters import (
    Adapter,
    AdapterOptions,
    HarborAdapter,
    UnknownAdapterError,
    available_adapters,
    default_app_name,
    get_adapter,
    register_adapter,
)
from cso_proxy.adapters.base import _ADAPTERS
from cso_proxy.adapters.harbor import split_repository_path
from cso_proxy.schemas.harbor import HarborReport
from cso_proxy.schemas.secscan import SecscanResponse
from cso_proxy.services.harbor_client import UpstreamStatusError


def _settings(harbor_url: str | None = None, image_security: bool = False) -> MagicMock:
    settings = MagicMock()
    settings.HARBOR_URL = harbor_url
    settings.IMAGE_SECURITY_ENABLED = image_security
    settings.REQUEST_TIMEOUT_SEC = 5.0
    return settings


class TestDefaultAppName(unittest.TestCase):
    """Host DNS labels are reversed; path and port are ignored."""

    def test_two_labels(self) -> None:
        self.assertEqual(default_app_name("https://quay.io"), "io.quay")

    def test_three_labels_with_path(self) -> None:
        self.assertEqual(default_app_name("https://harbor.dcas.dev/docker.io"), "dev.dcas.harbor")

    def test_port_is_ignored(self) -> None:
        self.assertEqual(default_app_name("https://a.b.c:8443"), "c.b.a")

    def test_single_label(self) -> None:
        self.assertEqual(default_app_name("http://localhost"), "localhost")


class TestHarborCapabilities(unittest.TestCase):
    def test_templates_keep_placeholders(self) -> None:
        caps = HarborAdapter(_settings()).capabilities("https://harbor.example.com:8443/.well-known/app-capabilities")

        self.assertEqual(caps.app_name, "com.example.harbor")
        self.assertEqual(
            caps.capabilities.view_image.url_template,
            "https://harbor.example.com:8443/{namespace}/{reponame}:{tag}",
        )
        self.assertEqual(
            caps.capabilities.manifest_security.rest_api_template,
            "https://harbor.example.com:8443/cso/v1/repository/{namespace}/{reponame}/manifest/{digest}/security",
        )
        self.assertIsNone(caps.capabilities.image_security)

    def test_image_security_advertised_when_enabled(self) -> None:
        adapter = HarborAdapter(_settings(image_security=True))

        caps = adapter.capabilities("https://harbor.example.com:8443/.well-known/app-capabilities")

        self.assertTrue(adapter.supports_image_security)
        self.assertEqual(
            caps.capabilities.image_security.rest_api_template,
            "https://harbor.example.com:8443/cso/v1/repository/{namespace}/{reponame}/image/{imageid}/security",
        )

    def test_serializes_wire_names(self) -> None:
        body = HarborAdapter(_settings()).capabilities("https://quay.io").model_dump(by_alias=True)
        self.assertEqual(body["appName"], "io.quay")
        self.assertIn("url-template", body["capabilities"]["viewImage"])
        self.assertIn("rest-api-template", body["capabilities"]["manifestSecurity"])
        self.assertIsNone(body["capabilities"]["imageSecurity"])


class TestSplitRepositoryPath(unittest.TestCase):
    def test_namespace_and_repository(self) -> None:
        self.assertEqual(split_repository_path("bitnami/postgresql"), ("bitnami", "postgresql"))

    def test_registry_segment_stays_in_namespace(self) -> None:
        self.assertEqual(
            split_repository_path("registry.gitlab.com/av1o/base-images/alpine"),
            ("registry.gitlab.com/av1o/base-images", "alpine"),
        )


@patch("cso_proxy.adapters.harbor.fetch_vulnerability_report", new_callable=AsyncMock)
class TestHarborManifestSecurity(unittest.TestCase):
    def _report(self) -> HarborReport:
        return HarborReport.model_validate(
            {"scanner": {"vulnerabilities": [{"id": "CVE-1", "package": "dpkg", "version": "1.0"}]}}
        )

    def test_fetches_with_request_host_and_aggregates(self, mock_fetch: AsyncMock) -> None:
        mock_fetch.return_value = self._report()
        adapter = HarborAdapter(_settings())
        opts = AdapterOptions(uri="https://harbor.example.com", features=True, vulnerabilities=True)

        result = asyncio.run(adapter.manifest_security("bitnami/postgresql", "sha256:abc", opts))

        self.assertIsInstance(result, SecscanResponse)
        self.assertEqual(result.data.layer.features[0].vulnerabilities[0].name, "CVE-1")
        args = mock_fetch.call_args[0]
        self.assertEqual(args[:4], ("https://harbor.example.com", "bitnami", "postgresql", "sha256:abc"))

    def test_configured_harbor_url_wins(self, mock_fetch: AsyncMock) -> None:
        mock_fetch.return_value = self._report()
        adapter = HarborAdapter(_settings(harbor_url="http://harbor.internal"))

        asyncio.run(
            adapter.manifest_security("bitnami/postgresql", "d", AdapterOptions(uri="https://public"))
        )

        self.assertEqual(mock_fetch.call_args[0][0], "http://harbor.internal")

    def test_repository_is_escaped(self, mock_fetch: AsyncMock) -> None:
        mock_fetch.return_value = self._report()
        adapter = HarborAdapter(_settings())

        asyncio.run(
            adapter.manifest_security("library/my repo:x", "d", AdapterOptions(uri="https://h"))
        )

        self.assertEqual(mock_fetch.call_args[0][2], "my%20repo%3Ax")

    def test_image_security_uses_image_id(self, mock_fetch: AsyncMock) -> None:
        mock_fetch.return_value = self._report()
        adapter = HarborAdapter(_settings(image_security=True))

        result = asyncio.run(
            adapter.image_security("bitnami/postgresql", "abc123", AdapterOptions(uri="https://h"))
        )

        self.assertEqual(mock_fetch.call_args[0][3], "abc123")
        self.assertEqual(result.data.layer.features, [])

    def test_upstream_error_propagates(self, mock_fetch: AsyncMock) -> None:
        mock_fetch.side_effect = UpstreamStatusError("request failed: 404 Not Found", status_code=404)
        adapter = HarborAdapter(_settings())

        with self.assertRaises(UpstreamStatusError):
            asyncio.run(adapter.manifest_security("a/b", "d", AdapterOptions(uri="https://h")))


class TestAdapterRegistry(unittest.TestCase):
    def test_harbor_is_registered(self) -> None:
        self.assertIn("harbor", available_adapters())
        adapter = get_adapter("Harbor", _settings())
        self.assertIsInstance(adapter, HarborAdapter)
        self.assertEqual(adapter.name, "harbor")
        self.assertFalse(adapter.supports_image_security)

    def test_unknown_adapter_raises(self) -> None:
        with self.assertRaises(UnknownAdapterError) as ctx:
            get_adapter("quay", _settings())
        self.assertIn("harbor", ctx.exception.message)
        self.assertNotIn("test-capabilities-only", ctx.exception.message)

    def test_register_new_backend(self) -> None:
        self.addCleanup(_ADAPTERS.pop, "test-capabilities-only", None)

        @register_adapter("test-capabilities-only")
        class CapabilitiesOnly(Adapter):
            def capabilities(self, url):
                return HarborAdapter(self.settings).capabilities(url)

            async def manifest_security(self, path, digest, opts):
                return SecscanResponse()

        adapter = get_adapter("test-capabilities-only", _settings())
        self.assertIsInstance(adapter, CapabilitiesOnly)
        self.assertFalse(adapter.supports_image_security)
        with self.assertRaises(NotImplementedError):
            asyncio.run(adapter.image_security("a/b", "i", AdapterOptions(uri="https://h")))

    def test_duplicate_name_rejected(self) -> None:
        with self.assertRaises(ValueError):

            @register_adapter("harbor")
            class Other(HarborAdapter):
                pass

        self.assertIs(_ADAPTERS["harbor"], HarborAdapter)


if __name__ == "__main__":
    unittest.main()
