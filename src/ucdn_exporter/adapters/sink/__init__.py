"""Metric sink adapters implementing MetricSinkPort."""

from ucdn_exporter.adapters.sink.in_memory import InMemoryMetricSink
from ucdn_exporter.core.encoding.prometheus import PrometheusTextSink

__all__ = ["InMemoryMetricSink", "PrometheusTextSink"]
