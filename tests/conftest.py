"""Shared test fixtures for all test modules."""

import pytest

from tests.fakes import FakeCdnDataSource, full_stats
from ucdn_exporter.core.aggregator import ScrapeAggregator
from ucdn_exporter.core.models import MonitoredResource, ReportWindow

try:
    import httpx
except ImportError:
    httpx = None


@pytest.fixture
def window() -> ReportWindow:
    """One hour window ending five minutes ago."""
    return ReportWindow(range_seconds=3600, delay_seconds=300)


@pytest.fixture
def resources() -> list[MonitoredResource]:
    """Two monitored domains."""
    return [
        MonitoredResource(resource_id="d1", display_name="example.com"),
        MonitoredResource(resource_id="d2", display_name="static.example.com"),
    ]


@pytest.fixture
def data_source() -> FakeCdnDataSource:
    """Fake data source with full statistics for d1 and d2."""
    return FakeCdnDataSource(
        {
            "d1": full_stats(),
            "d2": full_stats(
                hit_rates=[(80.0, 70.0)],
                bandwidths=[10.0, 20.0, 15.5],
                http_4xx=[10, 1],
                http_5xx=[2, 3],
                requests=[5.0],
                bandwidth_95=99.99,
            ),
        }
    )


@pytest.fixture
def aggregator(
    resources: list[MonitoredResource],
    window: ReportWindow,
    data_source: FakeCdnDataSource,
) -> ScrapeAggregator:
    """Aggregator over the two domains and the fake data source."""
    return ScrapeAggregator(resources, "org-test", window, data_source)


# === ASGI Test Fixtures ===


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(aggregator)
            async with asgi_test_client(app) as client:
                response = await client.get("/metrics")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        """Capture ASGI messages."""
        responses.append(message)

    return send, responses
