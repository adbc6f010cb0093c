
"""UCloud UCDN implementation of CdnDataSourcePort."""

import time
from collections.abc import Callable
from typing import Any

from ucdn_exporter.adapters.ucloud.client import ParamValue, UCloudClient
from ucdn_exporter.core.errors import DataSourceError
from ucdn_exporter.core.logs import get_logger
from ucdn_exporter.core.models import (
    BandwidthPoint,
    HitRatePoint,
    HttpCodePoint,
    MonitoredResource,
    ReportWindow,
    RequestCountPoint,
)

logger = get_logger(__name__)

# 0 selects 5 minute granularity for time-series actions
GRANULARITY_5_MINUTES = 0
DOMAIN_PAGE_SIZE = 100


def _total(entry: dict[str, Any], key: str) -> int:
    detail = entry.get(key) or {}
    return int(detail.get("Total", 0))


def _entries(action: str, list_key: str, body: dict[str, Any]) -> list[dict[str, Any]]:
    entries = body.get(list_key) or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise DataSourceError(f"{action} returned malformed {list_key}")
    return entries


class UCloudCdnDataSource:
    """Fetches UCDN statistics for a domain over a report window.

    Args:
        client: Signed UCloud API client.
        clock: Returns the current unix time; the window is anchored to it.
    """

    def __init__(
        self, client: UCloudClient, clock: Callable[[], float] = time.time
    ) -> None:
        self.client = client
        self.clock = clock

    def _window_params(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> dict[str, ParamValue]:
        begin, end = window.bounds(self.clock())
        params: dict[str, ParamValue] = {
            "DomainId.0": resource_id,
            "BeginTime": begin,
            "EndTime": end,
            "Type": GRANULARITY_5_MINUTES,
        }
        if project_id:
            params["ProjectId"] = project_id
        return params

    async def _series(
        self,
        action: str,
        list_key: str,
        resource_id: str,
        project_id: str,
        window: ReportWindow,
    ) -> list[dict[str, Any]]:
        body = await self.client.call(
            action, self._window_params(resource_id, project_id, window)
        )
        return _entries(action, list_key, body)

    async def fetch_hit_rate(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> list[HitRatePoint]:
        """Fetch hit rates via GetUcdnDomainHitRate."""
        entries = await self._series(
            "GetUcdnDomainHitRate", "HitRateList", resource_id, project_id, window
        )
        try:
            return [
                HitRatePoint(
                    time=int(e.get("Time", 0)),
                    request_hit_rate=float(e["RequestHitRate"]),
                    flow_hit_rate=float(e["FlowHitRate"]),
                )
                for e in entries
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DataSourceError(f"malformed HitRateList entry: {exc!r}") from exc

    async def fetch_bandwidth(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> list[BandwidthPoint]:
        """Fetch bandwidth via GetNewUcdnDomainBandwidth."""
        entries = await self._series(
            "GetNewUcdnDomainBandwidth",
            "BandwidthList",
            resource_id,
            project_id,
            window,
        )
        try:
            return [
                BandwidthPoint(
                    time=int(e.get("Time", 0)), bandwidth=float(e["CdnBandwidth"])
                )
                for e in entries
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DataSourceError(f"malformed BandwidthList entry: {exc!r}") from exc

    async def fetch_http_codes(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> list[HttpCodePoint]:
        """Fetch origin status-code details via GetUcdnDomainOriginHttpCode4xx."""
        entries = await self._series(
            "GetUcdnDomainOriginHttpCode4xx",
            "HttpCodeDetail",
            resource_id,
            project_id,
            window,
        )
        try:
            return [
                HttpCodePoint(
                    time=int(e.get("Time", 0)),
                    http_1xx=_total(e, "Http1XX"),
                    http_2xx=_total(e, "Http2XX"),
                    http_3xx=_total(e, "Http3XX"),
                    http_4xx=_total(e, "Http4XX"),
                    http_5xx=_total(e, "Http5XX"),
                )
                for e in entries
            ]
        except (AttributeError, TypeError, ValueError) as exc:
            raise DataSourceError(f"malformed HttpCodeDetail entry: {exc!r}") from exc

    async def fetch_origin_requests(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> list[RequestCountPoint]:
        """Fetch origin request counts via GetUcdnDomainOriginRequestNum."""
        entries = await self._series(
            "GetUcdnDomainOriginRequestNum",
            "RequestList",
            resource_id,
            project_id,
            window,
        )
        try:
            return [
                RequestCountPoint(
                    time=int(e.get("Time", 0)), request_count=float(e["CdnRequest"])
                )
                for e in entries
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DataSourceError(f"malformed RequestList entry: {exc!r}") from exc

    async def fetch_bandwidth_95(
        self, resource_id: str, project_id: str, window: ReportWindow
    ) -> float:
        """Fetch the 95th-percentile bandwidth via GetUcdnDomain95BandwidthV2."""
        begin, end = window.bounds(self.clock())
        params: dict[str, ParamValue] = {
            "DomainId.0": resource_id,
            "BeginTime": begin,
            "EndTime": end,
        }
        if project_id:
            params["ProjectId"] = project_id
        body = await self.client.call("GetUcdnDomain95BandwidthV2", params)
        try:
            return float(body["CdnBandwidth"])
        except (KeyError, TypeError, ValueError) as exc:
            raise DataSourceError(f"malformed 95 bandwidth response: {exc!r}") from exc

    async def list_domains(self, project_id: str = "") -> list[MonitoredResource]:
        """List every CDN domain of a project via GetUcdnDomainConfig.

        Args:
            project_id: UCloud project; empty selects the default project.

        Returns:
            MonitoredResource per domain, in API order.
        """
        resources: list[MonitoredResource] = []
        offset = 0
        while True:
            params: dict[str, ParamValue] = {
                "Offset": offset,
                "Limit": DOMAIN_PAGE_SIZE,
            }
            if project_id:
                params["ProjectId"] = project_id
            body = await self.client.call("GetUcdnDomainConfig", params)
            page = _entries("GetUcdnDomainConfig", "DomainList", body)
            try:
                resources.extend(
                    MonitoredResource(
                        resource_id=str(entry["DomainId"]),
                        display_name=str(entry["Domain"]),
                    )
                    for entry in page
                )
            except KeyError as exc:
                raise DataSourceError(
                    f"malformed DomainList entry: missing {exc}"
                ) from exc
            if len(page) < DOMAIN_PAGE_SIZE:
                break
            offset += len(page)
        logger.info("Discovered %d CDN domains", len(resources))
