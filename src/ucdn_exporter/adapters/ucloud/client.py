"""Async UCloud API client with request signing."""

import hashlib
from collections.abc import Mapping
from typing import Any

import httpx

from ucdn_exporter.core.errors import DataSourceError
from ucdn_exporter.core.logs import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.ucloud.cn"

ParamValue = str | int | bool


class UCloudAPIError(DataSourceError):
    """The UCloud API answered with a non-zero RetCode."""

    def __init__(self, action: str, ret_code: int, message: str) -> None:
        super().__init__(f"{action} failed with RetCode {ret_code}: {message}")
        self.action = action
        self.ret_code = ret_code
        self.message = message


def _format_param(value: ParamValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def sign(params: Mapping[str, ParamValue], private_key: str) -> str:
    """Compute the UCloud request signature.

    Parameters are sorted by key and concatenated as key followed by value,
    the private key is appended, and the SHA-1 hex digest is returned.

    Args:
        params: Request parameters, excluding Signature.
        private_key: Account private key.

    Returns:
        Lowercase hex signature.
    """
    payload = "".join(f"{key}{_format_param(params[key])}" for key in sorted(params))
    return hashlib.sha1((payload + private_key).encode("utf-8")).hexdigest()


class UCloudClient:
    """Minimal async client for the UCloud management API.

    Use as an async context manager, or call aclose() when done.

    Example:
        ```python
        async with UCloudClient(public_key, private_key) as client:
            body = await client.call("GetUcdnDomainConfig", {"Limit": 10})
        ```
    """

    def __init__(
        self,
        public_key: str,
        private_key: str,
        base_url: str = DEFAULT_BASE_URL,
        region: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            public_key: Account public key.
            private_key: Account private key used for signing.
            base_url: API endpoint.
            region: Region sent with every request, if set.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (used for testing).
        """
        self.public_key = public_key
        self._private_key = private_key
        self.region = region
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "UCloudClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def signed_params(
        self, action: str, params: Mapping[str, ParamValue]
    ) -> dict[str, str]:
        """Return the full form body for an action, including its Signature."""
        request: dict[str, ParamValue] = {
            "Action": action,
            "PublicKey": self.public_key,
            **params,
        }
        if self.region and "Region" not in request:
            request["Region"] = self.region
        form = {key: _format_param(value) for key, value in request.items()}
        form["Signature"] = sign(request, self._private_key)
        return form

    async def call(
        self, action: str, params: Mapping[str, ParamValue] | None = None
    ) -> dict[str, Any]:
        """Invoke an API action.

        Args:
            action: API action name (e.g., "GetUcdnDomainHitRate").
            params: Action parameters.

        Returns:
            Decoded JSON response body.

        Raises:
            DataSourceError: On transport failures or an unreadable body.
            UCloudAPIError: If the response carries a non-zero RetCode.
        """
        form = self.signed_params(action, params or {})
        logger.debug("Calling %s", action)
        try:
            response = await self._client.post("/", data=form)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise DataSourceError(f"{action} request failed: {exc}") from exc
        except ValueError as exc:
            raise DataSourceError(f"{action} returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise DataSourceError(f"{action} returned unexpected body")
        try:
            ret_code = int(body.get("RetCode", 0))
        except (TypeError, ValueError) as exc:
            raise DataSourceError(f"{action} returned invalid RetCode") from exc
        if ret_code != 0:
            raise UCloudAPIError(action, ret_code, str(body.get("Message", "")))
        return body
