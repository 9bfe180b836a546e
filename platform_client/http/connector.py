"""
API Connector — shared HTTP transport for Platform API resources.
Owns a single httpx.AsyncClient (auth + user agent headers, timeout) and
decodes JSON responses. No retry, no pagination: HTTP errors are raised as-is.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from platform_client.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ApiConnector:
    """Thin JSON-over-HTTP connector used by every Resource."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.api_url = self.settings.api_url
        headers = {
            "Accept": "application/json",
            "User-Agent": self.settings.user_agent,
        }
        if self.settings.api_token:
            headers["Authorization"] = f"Bearer {self.settings.api_token}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=self.settings.http_timeout,
            transport=transport,
        )
        logger.debug(f"[API Connector] Initialized with api_url={self.api_url}")

    async def send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request and return the raw response (status not checked)."""
        method = method.upper()
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        logger.debug(f"[API Connector] {method} {url} params={params or {}}")
        return await self._client.request(method, url, params=params or None, json=json)

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Send a request, raise on HTTP error status, return the decoded JSON body."""
        resp = await self.send(method, url, params=params, json=json)
        resp.raise_for_status()
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()


_connector: Optional[ApiConnector] = None


def get_connector() -> ApiConnector:
    """
    Return the process-wide connector, creating it from settings on first use.
    A connector created here is owned by the caller; release it with
    close_connector().
    """
    global _connector
    if _connector is None:
        _connector = ApiConnector()
    return _connector


def set_connector(connector: Optional[ApiConnector]) -> None:
    """
    Replace the process-wide connector (None resets to lazy default).
    The previous connector is not closed; whoever created it closes it.
    """
    global _connector
    _connector = connector


async def close_connector() -> None:
    """Close the process-wide connector, if any, and reset to the lazy default."""
    global _connector
    connector, _connector = _connector, None
    if connector is not None:
        await connector.close()
        logger.debug("[API Connector] Closed process-wide connector")


def release_connector(connector: ApiConnector) -> None:
    """Reset the process-wide connector to the lazy default if it is `connector`."""
    global _connector
    if _connector is connector:
        _connector = None
