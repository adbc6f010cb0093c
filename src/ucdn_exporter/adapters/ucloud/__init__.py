"""UCloud adapters implementing the data source port."""

from ucdn_exporter.adapters.ucloud.client import UCloudAPIError, UCloudClient, sign
from ucdn_exporter.adapters.ucloud.data_source import UCloudCdnDataSource

__all__ = ["UCloudAPIError", "UCloudCdnDataSource", "UCloudClient", "sign"]
