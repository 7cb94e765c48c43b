"""Group Harbor vulnerability items by installed package/version into CSO features."""

from collections import defaultdict
from typing import NamedTuple

from cso_proxy.schemas.harbor import HarborReport, VulnerabilityItem
from cso_proxy.schemas.secscan import (
    STATUS_SCANNED,
    Data,
    Feature,
    Layer,
    SecscanResponse,
    Vulnerability,
)


class AggregationKey(NamedTuple):
    """Installed package/version pair that vulnerabilities are grouped under."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}:{self.version}"


def first(items: list[str] | None) -> str:
    """Return the first element, or an empty string when there is none."""
    if not items:
        return ""
    return items[0]


def to_vulnerability(item: VulnerabilityItem) -> Vulnerability:
    """Translate one Harbor item into a CSO vulnerability (CVSS/CWE data is dropped)."""
    return Vulnerability(
        name=item.id,
        namespace_name="",
        description=item.description,
        link=first(item.links),
        severity=item.severity,
        fixed_by=item.fix_version,
    )


def group_vulnerabilities(
    report: HarborReport,
) -> dict[AggregationKey, list[Vulnerability]]:
    """
    Merge items from every scanner report by (package, version).

    No deduplication beyond the grouping: the same id reported twice under
    one key appears twice.
    """
    packages: defaultdict[AggregationKey, list[Vulnerability]] = defaultdict(list)
    for scanner_report in report.root.values():
        for item in scanner_report.vulnerabilities:
            packages[AggregationKey(item.package, item.version)].append(
                to_vulnerability(item)
            )
    return packages


def aggregate(
    report: HarborReport,
    show_features: bool,
    show_vulnerabilities: bool,
) -> SecscanResponse:
    """
    Convert a Harbor report into a CSO secscan response.

    With show_features false the feature list is empty. With show_features
    true and show_vulnerabilities false, every feature is present but carries
    no vulnerabilities. Feature order follows first appearance in the report
    and is not part of the contract.
    """
    packages = group_vulnerabilities(report)

    features: list[Feature] = []
    if show_features:
        for key, vulnerabilities in packages.items():
            features.append(
                Feature(
                    name=key.name,
                    version=key.version,
                    vulnerabilities=vulnerabilities if show_vulnerabilities else [],
                )
            )

    return SecscanResponse(
        status=STATUS_SCANNED,
        data=Data(layer=Layer(features=features)),
    )
