"""HTTP framework adapters exposing the scrape endpoint."""

from ucdn_exporter.adapters.frameworks.asgi import create_asgi_app

__all__ = ["create_asgi_app"]
