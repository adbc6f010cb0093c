"""Port interfaces for the scrape pipeline.

These protocols define the contracts that adapters must implement.
The aggregator depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from ucdn_exporter.core.models import (
    BandwidthPoint,
    HitRatePoint,
    HttpCodePoint,
    MetricDescriptor,
    ReducedObservation,
    ReportWindow,
    RequestCountPoint,
)


@runtime_checkable
class CdnDataSourcePort(Protocol):
    """Port for fetching per-domain CDN statistics.

    Every call covers the given report window and returns the raw series;
    reduction happens in the aggregator. Retry and timeout policy belong
    to the implementation.
    Examples: UCloudCdnDataSource.
    """

    async def fetch_hit_rate(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> Sequence[HitRatePoint]:
        """Fetch request and flow hit-rate samples."""
        ...

    async def fetch_bandwidth(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> Sequence[BandwidthPoint]:
        """Fetch bandwidth samples."""
        ...

    async def fetch_http_codes(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> Sequence[HttpCodePoint]:
        """Fetch origin status-code breakdown samples."""
        ...

    async def fetch_origin_requests(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> Sequence[RequestCountPoint]:
        """Fetch origin request count samples."""
        ...

    async def fetch_bandwidth_95(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> float:
        """Fetch the pre-aggregated 95th-percentile bandwidth."""
        ...


@runtime_checkable
class MetricSinkPort(Protocol):
    """Port receiving the output of a scrape.

    Adapters implementing this protocol handle serialization.
    Examples: PrometheusTextSink, InMemoryMetricSink.
    """

    def describe(self, descriptors: Iterable[MetricDescriptor]) -> None:
        """Receive the fixed set of metric descriptors."""
        ...

    def write(self, observation: ReducedObservation) -> None:
        """Receive one observation."""
        ...
