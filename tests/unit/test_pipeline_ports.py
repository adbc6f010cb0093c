"""Tests for port interfaces."""

from collections.abc import Iterable

import pytest

from ucdn_exporter.core.models import MetricDescriptor, ReducedObservation
from ucdn_exporter.core.ports import CdnDataSourcePort, MetricSinkPort

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


class TestCdnDataSourcePort:
    """Tests for CdnDataSourcePort protocol."""

    @pytest.mark.parametrize(
        "method",
        [
            "fetch_hit_rate",
            "fetch_bandwidth",
            "fetch_http_codes",
            "fetch_origin_requests",
            "fetch_bandwidth_95",
        ],
    )
    def test_protocol_has_fetch_method(self, method: str) -> None:
        assert hasattr(CdnDataSourcePort, method)

    def test_incomplete_class_is_not_recognized(self) -> None:
        """A class missing fetch methods does not satisfy the port."""

        class HitRateOnly:
            async def fetch_hit_rate(self, resource_id, project_id, window):
                return []

        assert not isinstance(HitRateOnly(), CdnDataSourcePort)


class TestMetricSinkPort:
    """Tests for MetricSinkPort protocol."""

    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with describe and write methods should satisfy MetricSinkPort."""

        class FakeSink:
            def describe(self, descriptors: Iterable[MetricDescriptor]) -> None:
                pass

            def write(self, observation: ReducedObservation) -> None:
                pass

        sink: MetricSinkPort = FakeSink()
        assert isinstance(sink, MetricSinkPort)
