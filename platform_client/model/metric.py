"""
Metric — a snapshot of environment metrics.
The backend accepts an InfluxDB-style query in the `q` parameter and
answers at the collection URL itself, so there is no id segment.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from platform_client.http.connector import ApiConnector, get_connector
from platform_client.model.resource import Resource


class Metric(Resource):
    results: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    async def get(cls, params: Optional[Dict[str, Any]], url: str,
                  connector: Optional[ApiConnector] = None):
        """GET `url` with `params` (typically `{"q": query}`)."""
        collection_url = url.rstrip("/")
        data = await (connector or get_connector()).request("GET", collection_url, params=params or None)
        return cls.from_payload(data if isinstance(data, dict) else {"results": data or []},
                                collection_url, connector)
