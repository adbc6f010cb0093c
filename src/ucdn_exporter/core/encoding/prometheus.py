"""Prometheus text exposition format (0.0.4) encoder."""

import math
from collections.abc import Iterable

from ucdn_exporter.core.models import (
    MetricDescriptor,
    ReducedObservation,
    ScrapeResult,
)
from ucdn_exporter.core.schema import CDN_NAMESPACE, build_fq_name

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

SCRAPE_ERRORS = MetricDescriptor(
    fq_name=build_fq_name(CDN_NAMESPACE, "cdn_exporter", "scrape_errors"),
    help="Statistics that failed to fetch or reduce in the last scrape",
)
SCRAPE_DURATION = MetricDescriptor(
    fq_name=build_fq_name(CDN_NAMESPACE, "cdn_exporter", "scrape_duration_seconds"),
    help="Duration of the last scrape in seconds",
)
LAST_SCRAPE_SUCCESS = MetricDescriptor(
    fq_name=build_fq_name(CDN_NAMESPACE, "cdn_exporter", "last_scrape_success"),
    help="Whether the last scrape completed without failures (1) or not (0)",
)


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_value(value: float) -> str:
    """Render a sample value the way Prometheus parses it.

    Args:
        value: The sample value.

    Returns:
        "NaN", "+Inf", "-Inf", or the float's repr.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return repr(float(value))


def _format_sample(descriptor: MetricDescriptor, value: float, labels: dict[str, str]) -> str:
    if not labels:
        return f"{descriptor.fq_name} {format_value(value)}"
    label_str = ",".join(
        f'{name}="{_escape_label_value(val)}"' for name, val in labels.items()
    )
    return f"{descriptor.fq_name}{{{label_str}}} {format_value(value)}"


def encode_prometheus(
    descriptors: Iterable[MetricDescriptor],
    observations: Iterable[ReducedObservation],
) -> str:
    """Encode descriptors and their observations to Prometheus text format.

    Every descriptor gets # HELP and # TYPE lines even when it has no
    observations. Observations are grouped under their descriptor.

    Args:
        descriptors: Metric descriptors, in output order.
        observations: Observations to render.

    Returns:
        Prometheus text format string, newline-terminated.
        Empty string if there are no descriptors.
    """
    grouped: dict[str, list[ReducedObservation]] = {}
    for observation in observations:
        grouped.setdefault(observation.descriptor.fq_name, []).append(observation)

    lines: list[str] = []
    for descriptor in descriptors:
        lines.append(f"# HELP {descriptor.fq_name} {_escape_help(descriptor.help)}")
        lines.append(f"# TYPE {descriptor.fq_name} {descriptor.kind}")
        for observation in grouped.get(descriptor.fq_name, []):
            lines.append(
                _format_sample(descriptor, observation.value, observation.labels)
            )

    if not lines:
        return ""

    return "\n".join(lines) + "\n"


def encode_scrape_status(result: ScrapeResult) -> str:
    """Encode the exporter's own gauges describing a scrape.

    Args:
        result: The scrape to describe.

    Returns:
        Prometheus text format string for the self-monitoring gauges.
    """
    samples = (
        (SCRAPE_ERRORS, float(len(result.failures))),
        (SCRAPE_DURATION, result.duration_seconds),
        (LAST_SCRAPE_SUCCESS, 1.0 if result.status == "success" else 0.0),
    )
    return encode_prometheus(
        [descriptor for descriptor, _ in samples],
        [ReducedObservation(descriptor, value) for descriptor, value in samples],
    )


class PrometheusTextSink:
    """MetricSinkPort that buffers one scrape and renders it as text.

    Example:
        ```python
        sink = PrometheusTextSink()
        result = await aggregator.collect(sink)
        body = sink.render(result)
        ```
    """

    def __init__(self) -> None:
        self._descriptors: list[MetricDescriptor] = []
        self._observations: list[ReducedObservation] = []

    def describe(self, descriptors: Iterable[MetricDescriptor]) -> None:
        """Receive the fixed set of metric descriptors."""
        self._descriptors = list(descriptors)

    def write(self, observation: ReducedObservation) -> None:
        """Buffer one observation."""
        self._observations.append(observation)

    def render(self, result: ScrapeResult | None = None) -> str:
        """Render buffered metrics, followed by scrape status gauges if given."""
        body = encode_prometheus(self._descriptors, self._observations)
        if result is not None:
            body += encode_scrape_status(result)
        return body
