"""Tests for core domain models."""

import dataclasses

import pytest

from ucdn_exporter.core.models import (
    MetricDescriptor,
    MonitoredResource,
    ReducedObservation,
    ReportWindow,
    ResourceFailure,
    ScrapeResult,
)

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]

DESCRIPTOR = MetricDescriptor("uCloud_cdn_band_width", "Bandwidth", ("instanceId",))


class TestReportWindow:
    """Tests for ReportWindow."""

    def test_bounds_end_at_now_minus_delay(self) -> None:
        window = ReportWindow(range_seconds=3600, delay_seconds=300)
        assert window.bounds(10_000.0) == (6100, 9700)

    def test_bounds_truncate_fractional_now(self) -> None:
        window = ReportWindow(range_seconds=60)
        assert window.bounds(1000.9) == (940, 1000)

    def test_zero_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="range_seconds"):
            ReportWindow(range_seconds=0)

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError, match="delay_seconds"):
            ReportWindow(range_seconds=60, delay_seconds=-1)

    def test_is_immutable(self) -> None:
        window = ReportWindow(range_seconds=60)
        with pytest.raises(dataclasses.FrozenInstanceError):
            window.range_seconds = 120  # type: ignore[misc]


class TestReducedObservation:
    """Tests for ReducedObservation."""

    def test_labels_map_names_to_values(self) -> None:
        observation = ReducedObservation(DESCRIPTOR, 1.5, ("example.com",))
        assert observation.labels == {"instanceId": "example.com"}

    def test_label_arity_mismatch_rejected(self) -> None:
        with pytest.raises(ValueError, match="expects 1 label values, got 2"):
            ReducedObservation(DESCRIPTOR, 1.5, ("a", "b"))

    def test_missing_label_rejected(self) -> None:
        with pytest.raises(ValueError):
            ReducedObservation(DESCRIPTOR, 1.5)


class TestScrapeResult:
    """Tests for ScrapeResult.status."""

    resource = MonitoredResource("d1", "example.com")

    def _failure(self) -> ResourceFailure:
        return ResourceFailure(self.resource, "bandwidth", "boom")

    def test_success_without_failures(self) -> None:
        assert ScrapeResult().status == "success"

    def test_partial_with_failures_and_observations(self) -> None:
        result = ScrapeResult(
            observations=(ReducedObservation(DESCRIPTOR, 1.0, ("example.com",)),),
            failures=(self._failure(),),
        )
        assert result.status == "partial"

    def test_failure_without_observations(self) -> None:
        assert ScrapeResult(failures=(self._failure(),)).status == "failure"
