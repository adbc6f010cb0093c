"""Exporter configuration."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ucdn_exporter.adapters.ucloud.client import DEFAULT_BASE_URL
from ucdn_exporter.core.models import MonitoredResource, ReportWindow


class ExporterSettings(BaseSettings):
    """Exporter settings, read from UCDN_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="UCDN_",
        env_file=".env",
        case_sensitive=False,
    )

    public_key: str = Field(description="UCloud API public key")
    private_key: str = Field(description="UCloud API private key")
    project_id: str = Field(default="", description="UCloud project id")
    region: str | None = Field(default=None, description="UCloud region")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="UCloud API endpoint")
    request_timeout: float = Field(
        default=10.0, gt=0, description="Per-request timeout in seconds"
    )

    range_seconds: int = Field(default=300, gt=0, description="Report window length")
    delay_seconds: int = Field(
        default=300, ge=0, description="Offset of the window end from now"
    )
    domains: str = Field(
        default="",
        description="Comma separated id=name pairs; empty discovers all domains",
    )

    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=9146, description="Listen port")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level {value!r}")
        return level

    @field_validator("domains")
    @classmethod
    def _check_domains(cls, value: str) -> str:
        for item in filter(None, (part.strip() for part in value.split(","))):
            resource_id, sep, name = item.partition("=")
            if not sep or not resource_id.strip() or not name.strip():
                raise ValueError(f"domain entry {item!r} must look like id=name")
        return value

    def window(self) -> ReportWindow:
        """Build the report window."""
        return ReportWindow(
            range_seconds=self.range_seconds, delay_seconds=self.delay_seconds
        )

    def static_resources(self) -> list[MonitoredResource]:
        """Return the domains configured explicitly, if any."""
        resources = []
        for item in filter(None, (part.strip() for part in self.domains.split(","))):
            resource_id, _, name = item.partition("=")
            resources.append(
                MonitoredResource(
                    resource_id=resource_id.strip(), display_name=name.strip()
                )
            )
        return resources
