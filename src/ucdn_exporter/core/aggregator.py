"""Scrape aggregator: fetch, reduce and emit CDN statistics per domain."""

import math
import time
from collections.abc import Awaitable, Callable, Iterable

from ucdn_exporter.core.errors import DataSourceError, ReductionError
from ucdn_exporter.core.logs import get_logger
from ucdn_exporter.core.models import (
    MetricDescriptor,
    MonitoredResource,
    ReducedObservation,
    ReportWindow,
    ResourceFailure,
    ScrapeResult,
)
from ucdn_exporter.core.ports import CdnDataSourcePort, MetricSinkPort
from ucdn_exporter.core.reduction import NoData, integer_mean, is_no_data, mean_rounded
from ucdn_exporter.core.schema import CdnMetricCatalog, build_cdn_catalog

logger = get_logger(__name__)

# A statistic step yields (descriptor, reduced value) pairs for one resource.
Reduced = list[tuple[MetricDescriptor, float | int | NoData]]
StatisticStep = Callable[[MonitoredResource], Awaitable[Reduced]]


def _finite(statistic: str, value: float | NoData) -> float | NoData:
    if isinstance(value, NoData):
        return value
    if not math.isfinite(value):
        raise ReductionError(statistic, value)
    return value


class ScrapeAggregator:
    """Runs the fetch-reduce-emit cycle for every monitored domain.

    The resource list, project and window are fixed at construction and
    only read during scrapes. Fetches run strictly one after another.

    Example:
        ```python
        aggregator = ScrapeAggregator(resources, "org-1", ReportWindow(300, 300), source)
        result = await aggregator.scrape()
        ```
    """

    def __init__(
        self,
        resources: Iterable[MonitoredResource],
        project_id: str,
        window: ReportWindow,
        data_source: CdnDataSourcePort,
        catalog: CdnMetricCatalog | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            resources: Domains to report on.
            project_id: UCloud project the domains belong to (may be empty).
            window: Reporting window applied to every fetch.
            data_source: Adapter implementing CdnDataSourcePort.
            catalog: Metric catalog. Defaults to a freshly built CDN catalog.
        """
        self.resources: tuple[MonitoredResource, ...] = tuple(resources)
        self.project_id = project_id
        self.window = window
        self.data_source = data_source
        self.catalog = catalog if catalog is not None else build_cdn_catalog()
        self._steps: tuple[tuple[str, StatisticStep], ...] = (
            ("hit_rate", self._hit_rate),
            ("bandwidth", self._bandwidth),
            ("http_codes", self._http_codes),
            ("origin_requests", self._origin_requests),
            ("bandwidth_95", self._bandwidth_95),
        )

    def describe(self) -> tuple[MetricDescriptor, ...]:
        """Return the fixed set of descriptors this aggregator emits."""
        return self.catalog.descriptors()

    async def scrape(self) -> ScrapeResult:
        """Run one scrape over every resource.

        A fetch or reduction failure drops every metric of the resource it
        occurred in and is recorded once; other resources are still emitted.
        Empty series are omitted from the output.

        Returns:
            ScrapeResult with observations, failures and duration.
        """
        start = time.perf_counter()
        observations: list[ReducedObservation] = []
        failures: list[ResourceFailure] = []

        for resource in self.resources:
            emitted, failure = await self._scrape_resource(resource)
            if failure is not None:
                failures.append(failure)
                continue
            observations.extend(emitted)

        duration = time.perf_counter() - start
        logger.debug(
            "Scrape finished: %d observations, %d failures in %.3fs",
            len(observations),
            len(failures),
            duration,
        )
        return ScrapeResult(
            observations=tuple(observations),
            failures=tuple(failures),
            duration_seconds=duration,
        )

    async def collect(self, sink: MetricSinkPort) -> ScrapeResult:
        """Describe the catalog to a sink, scrape, and write every observation.

        Args:
            sink: Adapter implementing MetricSinkPort.

        Returns:
            The ScrapeResult of the scrape.
        """
        sink.describe(self.describe())
        result = await self.scrape()
        for observation in result.observations:
            sink.write(observation)
        return result

    async def _scrape_resource(
        self, resource: MonitoredResource
    ) -> tuple[list[ReducedObservation], ResourceFailure | None]:
        emitted: list[ReducedObservation] = []
        for statistic, step in self._steps:
            try:
                reduced = await step(resource)
            except (DataSourceError, ReductionError) as exc:
                logger.warning(
                    "Skipping %s after %s failed: %s",
                    resource.display_name,
                    statistic,
                    exc,
                )
                return [], ResourceFailure(resource, statistic, str(exc))
            emitted.extend(self._emit(resource, statistic, reduced))
        return emitted, None

    def _emit(
        self, resource: MonitoredResource, statistic: str, reduced: Reduced
    ) -> list[ReducedObservation]:
        emitted: list[ReducedObservation] = []
        for descriptor, value in reduced:
            if is_no_data(value):
                logger.warning(
                    "No data points for %s on %s, omitting %s",
                    statistic,
                    resource.display_name,
                    descriptor.fq_name,
                )
                continue
            emitted.append(
                ReducedObservation(
                    descriptor=descriptor,
                    value=float(value),  # type: ignore[arg-type]
                    label_values=(resource.display_name,),
                )
            )
        return emitted

    async def _hit_rate(self, resource: MonitoredResource) -> Reduced:
        points = await self.data_source.fetch_hit_rate(
            resource.resource_id, self.project_id, self.window
        )
        return [
            (
                self.catalog.request_hit_rate,
                _finite(
                    "request_hit_rate",
                    mean_rounded(p.request_hit_rate for p in points),
                ),
            ),
            (
                self.catalog.flow_hit_rate,
                _finite("flow_hit_rate", mean_rounded(p.flow_hit_rate for p in points)),
            ),
        ]

    async def _bandwidth(self, resource: MonitoredResource) -> Reduced:
        points = await self.data_source.fetch_bandwidth(
            resource.resource_id, self.project_id, self.window
        )
        value = mean_rounded(p.bandwidth for p in points)
        return [(self.catalog.bandwidth, _finite("bandwidth", value))]

    async def _http_codes(self, resource: MonitoredResource) -> Reduced:
        points = await self.data_source.fetch_http_codes(
            resource.resource_id, self.project_id, self.window
        )
        return [
            (self.catalog.http_code_4xx, integer_mean(p.http_4xx for p in points)),
            (self.catalog.http_code_5xx, integer_mean(p.http_5xx for p in points)),
        ]

    async def _origin_requests(self, resource: MonitoredResource) -> Reduced:
        points = await self.data_source.fetch_origin_requests(
            resource.resource_id, self.project_id, self.window
        )
        value = mean_rounded(p.request_count for p in points)
        return [(self.catalog.resource_request, _finite("resource_request", value))]

    async def _bandwidth_95(self, resource: MonitoredResource) -> Reduced:
        value = await self.data_source.fetch_bandwidth_95(
            resource.resource_id, self.project_id, self.window
        )
        return [(self.catalog.bandwidth_95, value)]
