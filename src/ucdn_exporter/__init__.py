"""ucdn_exporter - Prometheus exporter for UCloud CDN statistics.

Each scrape fetches windowed statistics per domain, reduces every series
to one value and exposes the results as gauges.
"""

from ucdn_exporter.adapters.frameworks.asgi import create_asgi_app
from ucdn_exporter.adapters.sink.in_memory import InMemoryMetricSink
from ucdn_exporter.adapters.ucloud import UCloudCdnDataSource, UCloudClient
from ucdn_exporter.core.aggregator import ScrapeAggregator
from ucdn_exporter.core.encoding.prometheus import PrometheusTextSink, encode_prometheus
from ucdn_exporter.core.errors import DataSourceError, ExporterError, ReductionError
from ucdn_exporter.core.logs import configure_logging, get_logger
from ucdn_exporter.core.models import (
    MetricDescriptor,
    MonitoredResource,
    ReducedObservation,
    ReportWindow,
    ScrapeResult,
)
from ucdn_exporter.core.reduction import NO_DATA, integer_mean, mean_rounded
from ucdn_exporter.core.schema import (
    CdnMetricCatalog,
    MetricSchemaRegistry,
    build_cdn_catalog,
)

__version__ = "0.1.0"

__all__ = [
    "NO_DATA",
    "CdnMetricCatalog",
    "DataSourceError",
    "ExporterError",
    "InMemoryMetricSink",
    "MetricDescriptor",
    "MetricSchemaRegistry",
    "MonitoredResource",
    "PrometheusTextSink",
    "ReducedObservation",
    "ReductionError",
    "ReportWindow",
    "ScrapeAggregator",
    "ScrapeResult",
    "UCloudCdnDataSource",
    "UCloudClient",
    "build_cdn_catalog",
    "configure_logging",
    "create_asgi_app",
    "encode_prometheus",
    "get_logger",
    "integer_mean",
    "mean_rounded",
]
