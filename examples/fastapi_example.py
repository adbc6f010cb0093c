"""Example FastAPI application embedding the CDN exporter.

Run with:
    UCDN_PUBLIC_KEY=... UCDN_PRIVATE_KEY=... uvicorn examples.fastapi_example:app

Endpoints:
    /metrics   - UCDN gauges in Prometheus text format (scrapes UCloud per request)
    /          - Lists the monitored domains

Domains come from UCDN_DOMAINS (id=name pairs) when set, otherwise they are
discovered from the account when the app starts.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ucdn_exporter import ScrapeAggregator, UCloudCdnDataSource, UCloudClient
from ucdn_exporter.adapters.frameworks.fastapi import create_exporter_router
from ucdn_exporter.config import ExporterSettings
from ucdn_exporter.core.logs import configure_logging

settings = ExporterSettings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with UCloudClient(
        settings.public_key,
        settings.private_key,
        base_url=settings.base_url,
        region=settings.region,
        timeout=settings.request_timeout,
    ) as client:
        data_source = UCloudCdnDataSource(client)
        resources = settings.static_resources() or await data_source.list_domains(
            settings.project_id
        )
        aggregator = ScrapeAggregator(
            resources, settings.project_id, settings.window(), data_source
        )
        app.state.aggregator = aggregator
        app.include_router(create_exporter_router(aggregator))
        yield


app = FastAPI(title="UCDN Exporter Example", lifespan=lifespan)


@app.get("/")
async def root() -> dict[str, list[str]]:
    """List the monitored domains."""
    return {"domains": [r.display_name for r in app.state.aggregator.resources]}
