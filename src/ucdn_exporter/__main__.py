"""Command-line entry point: python -m ucdn_exporter."""

import argparse
import asyncio
import sys

import uvicorn
from pydantic import ValidationError

from ucdn_exporter.adapters.frameworks.asgi import ASGIApp, create_asgi_app
from ucdn_exporter.adapters.ucloud import UCloudCdnDataSource, UCloudClient
from ucdn_exporter.config import ExporterSettings
from ucdn_exporter.core.aggregator import ScrapeAggregator
from ucdn_exporter.core.logs import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ucdn_exporter",
        description="Prometheus exporter for UCloud CDN domain statistics",
    )
    parser.add_argument("--host", help="listen address (UCDN_HOST)")
    parser.add_argument("--port", type=int, help="listen port (UCDN_PORT)")
    parser.add_argument("--log-level", help="logging level (UCDN_LOG_LEVEL)")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> ExporterSettings:
    """Load settings from the environment, letting CLI flags override them."""
    overrides = {
        key: value
        for key, value in (
            ("host", args.host),
            ("port", args.port),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    return ExporterSettings(**overrides)


async def build_app(
    settings: ExporterSettings, client: UCloudClient
) -> tuple[ScrapeAggregator, ASGIApp]:
    """Resolve the monitored domains and build the aggregator and ASGI app."""
    data_source = UCloudCdnDataSource(client)
    resources = settings.static_resources()
    if not resources:
        resources = await data_source.list_domains(settings.project_id)
    aggregator = ScrapeAggregator(
        resources=resources,
        project_id=settings.project_id,
        window=settings.window(),
        data_source=data_source,
    )
    return aggregator, create_asgi_app(aggregator)


async def serve(settings: ExporterSettings) -> None:
    async with UCloudClient(
        settings.public_key,
        settings.private_key,
        base_url=settings.base_url,
        region=settings.region,
        timeout=settings.request_timeout,
    ) as client:
        aggregator, app = await build_app(settings, client)
        logger.info(
            "Serving %d domains on %s:%d (window %ds, delay %ds)",
            len(aggregator.resources),
            settings.host,
            settings.port,
            settings.range_seconds,
            settings.delay_seconds,
        )
        config = uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            lifespan="off",
        )
        await uvicorn.Server(config).serve()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)
    asyncio.run(serve(settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
