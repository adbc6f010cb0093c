"""Core domain models for the CDN scrape pipeline."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class MonitoredResource:
    """A CDN domain to report on.

    Attributes:
        resource_id: Opaque upstream identifier (UCloud DomainId).
        display_name: Domain name, emitted as the metric label value.
    """

    resource_id: str
    display_name: str


@dataclass(frozen=True)
class ReportWindow:
    """Time span queried on every scrape.

    Attributes:
        range_seconds: Duration of the reporting window.
        delay_seconds: Offset back from "now" where the window ends,
            compensating for upstream reporting lag.
    """

    range_seconds: int
    delay_seconds: int = 0

    def __post_init__(self) -> None:
        if self.range_seconds <= 0:
            raise ValueError("range_seconds must be positive")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

    def bounds(self, now: float) -> tuple[int, int]:
        """Return (begin, end) unix timestamps of the window ending at now - delay."""
        end = int(now) - self.delay_seconds
        return end - self.range_seconds, end


@dataclass(frozen=True)
class HitRatePoint:
    """Hit-rate sample (both values in percent)."""

    time: int
    request_hit_rate: float
    flow_hit_rate: float


@dataclass(frozen=True)
class BandwidthPoint:
    """Bandwidth sample in Mbps."""

    time: int
    bandwidth: float


@dataclass(frozen=True)
class HttpCodePoint:
    """Per-status-class request totals for one sample."""

    time: int
    http_1xx: int = 0
    http_2xx: int = 0
    http_3xx: int = 0
    http_4xx: int = 0
    http_5xx: int = 0


@dataclass(frozen=True)
class RequestCountPoint:
    """Origin request count sample."""

    time: int
    request_count: float


@dataclass(frozen=True)
class MetricDescriptor:
    """Identity of an exported metric.

    Attributes:
        fq_name: Fully qualified metric name (e.g., uCloud_cdn_band_width).
        help: Help text shown in the exposition output.
        label_names: Ordered label names every observation must supply.
        kind: Exposition type. Every CDN metric is a gauge.
    """

    fq_name: str
    help: str
    label_names: tuple[str, ...] = ()
    kind: Literal["gauge"] = "gauge"


@dataclass(frozen=True)
class ReducedObservation:
    """One scalar for one metric and one resource.

    Attributes:
        descriptor: The metric this value belongs to.
        value: The reduced scalar.
        label_values: Label values, positionally matching descriptor.label_names.
    """

    descriptor: MetricDescriptor
    value: float
    label_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.label_values) != len(self.descriptor.label_names):
            raise ValueError(
                f"{self.descriptor.fq_name} expects "
                f"{len(self.descriptor.label_names)} label values, "
                f"got {len(self.label_values)}"
            )

    @property
    def labels(self) -> dict[str, str]:
        """Label names mapped to their values."""
        return dict(zip(self.descriptor.label_names, self.label_values, strict=True))


@dataclass(frozen=True)
class ResourceFailure:
    """A resource dropped from a scrape and the statistic whose failure dropped it."""

    resource: MonitoredResource
    statistic: str
    reason: str


ScrapeStatus = Literal["success", "partial", "failure"]


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of one scrape.

    Attributes:
        observations: Every observation produced, in emission order.
        failures: Resources skipped because a fetch or reduction failed.
        duration_seconds: Wall time spent in the scrape.
    """

    observations: tuple[ReducedObservation, ...] = ()
    failures: tuple[ResourceFailure, ...] = ()
    duration_seconds: float = 0.0

    @property
    def status(self) -> ScrapeStatus:
        if not self.failures:
            return "success"
        if self.observations:
            return "partial"
        return "failure"
