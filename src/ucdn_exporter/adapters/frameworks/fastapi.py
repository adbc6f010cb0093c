"""FastAPI adapter for the scrape endpoint."""

from fastapi import APIRouter, Response

from ucdn_exporter.adapters.frameworks.asgi import render_scrape
from ucdn_exporter.core.aggregator import ScrapeAggregator
from ucdn_exporter.core.encoding.prometheus import CONTENT_TYPE


def create_exporter_router(aggregator: ScrapeAggregator) -> APIRouter:
    """Create a FastAPI router with a /metrics endpoint.

    Args:
        aggregator: Aggregator run on every /metrics request.

    Returns:
        APIRouter with /metrics configured.
    """
    router = APIRouter()

    @router.get("/metrics")
    async def get_metrics() -> Response:
        """Return CDN metrics in Prometheus text format."""
        body = await render_scrape(aggregator)
        return Response(content=body, media_type=CONTENT_TYPE)

    return router
