"""Metric schema registry and the fixed CDN metric catalog."""

from collections.abc import Sequence
from dataclasses import dataclass

from ucdn_exporter.core.models import MetricDescriptor

CDN_NAMESPACE = "uCloud"
CDN_SUBSYSTEM = "cdn"
INSTANCE_LABEL = "instanceId"


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join namespace, subsystem and name with underscores.

    Empty namespace or subsystem parts are skipped. An empty name yields
    an empty string.

    Args:
        namespace: Metric namespace (e.g., "uCloud")
        subsystem: Metric subsystem (e.g., "cdn")
        name: Metric name (e.g., "band_width")

    Returns:
        Fully qualified metric name.
    """
    if not name:
        return ""
    return "_".join(part for part in (namespace, subsystem, name) if part)


class MetricSchemaRegistry:
    """Catalog of every metric the exporter can emit.

    Metrics are defined once at construction time and never change
    afterwards; every scrape shares the same descriptors.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, MetricDescriptor] = {}

    def define_metric(
        self,
        namespace: str,
        subsystem: str,
        name: str,
        help: str,
        label_names: Sequence[str] = (),
    ) -> MetricDescriptor:
        """Define and register a gauge metric.

        Args:
            namespace: Metric namespace
            subsystem: Metric subsystem
            name: Metric name within the subsystem
            help: Help text
            label_names: Ordered label names

        Returns:
            The registered MetricDescriptor.

        Raises:
            ValueError: If a metric with the same fully qualified name exists.
        """
        fq_name = build_fq_name(namespace, subsystem, name)
        if fq_name in self._descriptors:
            raise ValueError(f"metric {fq_name!r} already defined")
        descriptor = MetricDescriptor(
            fq_name=fq_name,
            help=help,
            label_names=tuple(label_names),
        )
        self._descriptors[fq_name] = descriptor
        return descriptor

    def list_descriptors(self) -> tuple[MetricDescriptor, ...]:
        """Return every defined descriptor in definition order."""
        return tuple(self._descriptors.values())

    def get(self, fq_name: str) -> MetricDescriptor | None:
        """Look up a descriptor by fully qualified name."""
        return self._descriptors.get(fq_name)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, fq_name: object) -> bool:
        return fq_name in self._descriptors


@dataclass(frozen=True)
class CdnMetricCatalog:
    """Descriptors for the seven per-domain CDN gauges."""

    request_hit_rate: MetricDescriptor
    flow_hit_rate: MetricDescriptor
    bandwidth: MetricDescriptor
    http_code_4xx: MetricDescriptor
    http_code_5xx: MetricDescriptor
    bandwidth_95: MetricDescriptor
    resource_request: MetricDescriptor

    def descriptors(self) -> tuple[MetricDescriptor, ...]:
        return (
            self.request_hit_rate,
            self.flow_hit_rate,
            self.bandwidth,
            self.http_code_4xx,
            self.bandwidth_95,
            self.http_code_5xx,
            self.resource_request,
        )


def build_cdn_catalog(registry: MetricSchemaRegistry | None = None) -> CdnMetricCatalog:
    """Define the CDN metrics in a registry.

    Args:
        registry: Registry to define the metrics in. A fresh one is used
            when omitted.

    Returns:
        CdnMetricCatalog holding the defined descriptors.
    """
    registry = registry if registry is not None else MetricSchemaRegistry()
    labels = (INSTANCE_LABEL,)

    def define(name: str, help: str) -> MetricDescriptor:
        return registry.define_metric(CDN_NAMESPACE, CDN_SUBSYSTEM, name, help, labels)

    return CdnMetricCatalog(
        request_hit_rate=define("request_hit_rate", "Request hit rate (%)"),
        flow_hit_rate=define("flow_hit_rate", "Flow hit rate (%)"),
        bandwidth=define("band_width", "Domain bandwidth (Mbps)"),
        http_code_4xx=define("http_code_4XX", "Origin HTTP 4XX requests (Count)"),
        http_code_5xx=define("http_code_5XX", "Origin HTTP 5XX requests (Count)"),
        bandwidth_95=define("95_band_width", "95th percentile bandwidth (Mbps)"),
        resource_request=define("resource_request", "Origin request count"),
    )
