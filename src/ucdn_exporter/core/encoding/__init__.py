"""Exposition encoders for scrape output."""

from ucdn_exporter.core.encoding.prometheus import (
    CONTENT_TYPE,
    PrometheusTextSink,
    encode_prometheus,
    encode_scrape_status,
)

__all__ = [
    "CONTENT_TYPE",
    "PrometheusTextSink",
    "encode_prometheus",
    "encode_scrape_status",
]
