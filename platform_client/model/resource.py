"""
Resource — base class for Platform API resources.
A typed pydantic model over a HAL-style JSON representation, plus the
HTTP verbs every resource shares (get/query/update/delete/save) and the
hypermedia helpers (links, operations, long-running operations).
"""

import logging
from typing import Any, ClassVar, Dict, List, Optional
from urllib.parse import quote, urljoin

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from platform_client.exceptions import LinkNotFoundError
from platform_client.http.connector import ApiConnector, get_connector

logger = logging.getLogger(__name__)


def quote_id(value: Any) -> str:
    """URL-encode a resource id for use as a single path segment."""
    return quote(str(value), safe="")


def link_href(link: Any) -> str:
    """A link is either `{"href": ...}` or a bare URL string."""
    if isinstance(link, dict):
        return link.get("href") or ""
    return str(link or "")


def unwrap_entity(payload: Any) -> Optional[Dict[str, Any]]:
    """Extract the resource representation from a write response, if any."""
    if not isinstance(payload, dict):
        return None
    embedded = payload.get("_embedded") or {}
    if isinstance(embedded.get("entity"), dict):
        return embedded["entity"]
    if "id" in payload:
        return payload
    return None


class Resource(BaseModel):
    """
    Base Platform API resource.

    Instances are built from a server representation and the URL of the
    collection they belong to:
        env = Environment.from_payload(data, "https://.../environments")

    Subclasses declare their typed fields and `modifiable_fields`, the
    allow-list that update() transmits.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    modifiable_fields: ClassVar[List[str]] = []

    id: str = ""
    links: Dict[str, Any] = Field(default_factory=dict, alias="_links")

    _url: str = PrivateAttr(default="")
    _data: Dict[str, Any] = PrivateAttr(default_factory=dict)
    _connector: Optional[ApiConnector] = PrivateAttr(default=None)

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]], url: str,
                     connector: Optional[ApiConnector] = None):
        """
        Build an instance from a server representation.
        `connector` is kept for every later request this instance makes;
        without one, the process-wide connector at request time is used.
        """
        payload = dict(data or {})
        instance = cls.model_validate(payload)
        instance._url = url.rstrip("/")
        instance._data = payload
        instance._connector = connector
        return instance

    @property
    def url(self) -> str:
        """URL of the collection this resource was loaded from."""
        return self._url

    @property
    def data(self) -> Dict[str, Any]:
        """The raw representation this instance was built from."""
        return self._data

    @property
    def connector(self) -> ApiConnector:
        return self._connector or get_connector()

    # ── Fetch ─────────────────────────────────────────────────────

    @classmethod
    async def get(cls, params: Dict[str, Any], url: str,
                  connector: Optional[ApiConnector] = None):
        """
        GET `{url}/{id}`; remaining params become the query string.
        Returns None when the server answers 404.
        """
        query = dict(params or {})
        resource_id = query.pop("id", None)
        if resource_id is None or resource_id == "":
            raise ValueError(f"{cls.__name__}.get() requires an id")
        collection_url = url.rstrip("/")
        return await cls._fetch(f"{collection_url}/{quote_id(resource_id)}", collection_url,
                                query, connector)

    @classmethod
    async def query(cls, params: Optional[Dict[str, Any]], url: str,
                    connector: Optional[ApiConnector] = None) -> list:
        """GET the collection at `url` and return a list of instances."""
        collection_url = url.rstrip("/")
        data = await (connector or get_connector()).request("GET", collection_url, params=params or None)
        if isinstance(data, dict):
            data = data.get("items", [])
        return [cls.from_payload(item, collection_url, connector) for item in (data or [])]

    @classmethod
    async def _fetch(cls, item_url: str, collection_url: str,
                     params: Optional[Dict[str, Any]] = None,
                     connector: Optional[ApiConnector] = None):
        resp = await (connector or get_connector()).send("GET", item_url, params=params)
        if resp.status_code == 404:
            logger.debug(f"[{cls.__name__}] Not found: {item_url}")
            return None
        resp.raise_for_status()
        return cls.from_payload(resp.json(), collection_url, connector)

    async def refresh(self):
        """Re-fetch this resource; None if it no longer exists."""
        return await self._fetch(self.get_uri(), self._url, connector=self._connector)

    # ── Write ─────────────────────────────────────────────────────

    async def update(self, data: Dict[str, Any], url: Optional[str] = None):
        """PATCH the allow-listed fields of `data` and return the updated resource."""
        body = {k: v for k, v in data.items() if k in self.modifiable_fields}
        ignored = sorted(set(data) - set(body))
        if ignored:
            logger.debug(f"[{type(self).__name__}] Ignoring non-modifiable fields: {ignored}")
        target = url or self.get_uri()
        payload = await self.connector.request("PATCH", target, json=body)
        logger.info(f"[{type(self).__name__}] Updated {self.id or target}: {sorted(body)}")
        entity = unwrap_entity(payload) or {**self._data, **body}
        return self.from_payload(entity, self._url, self._connector)

    async def delete(self) -> bool:
        """DELETE this resource. The local instance is stale afterwards."""
        target = self.get_uri()
        await self.connector.request("DELETE", target)
        logger.info(f"[{type(self).__name__}] Deleted {self.id or target}")
        return True

    async def save(self):
        """POST this (new) resource to its collection and return the created resource."""
        payload = await self.connector.request("POST", self._url, json=self._data)
        entity = unwrap_entity(payload) or self._data
        created = self.from_payload(entity, self._url, self._connector)
        logger.info(f"[{type(self).__name__}] Created {created.id or self._url}")
        return created

    # ── Hypermedia ────────────────────────────────────────────────

    def has_link(self, rel: str) -> bool:
        return bool(link_href(self.links.get(rel)))

    def get_link(self, rel: str, absolute: bool = True) -> str:
        """Return the href of relation `rel`; raises LinkNotFoundError if absent."""
        if not self.has_link(rel):
            raise LinkNotFoundError(rel, self._url or None)
        href = link_href(self.links[rel])
        if absolute and self._url:
            return urljoin(self._url, href)
        return href

    def get_uri(self, absolute: bool = True) -> str:
        """The resource's own URI: its `self` link, or `{collection}/{id}` without one."""
        if self.has_link("self"):
            return self.get_link("self", absolute)
        if self.id and self._url:
            return f"{self._url}/{quote_id(self.id)}"
        raise LinkNotFoundError("self", self._url or None)

    async def run_operation(self, op: str, method: str = "POST",
                            body: Optional[Dict[str, Any]] = None) -> Any:
        """Request the `#<op>` link if advertised, otherwise `<self>/<op>`."""
        rel = f"#{op}"
        target = self.get_link(rel) if self.has_link(rel) else f"{self.get_uri()}/{op}"
        method = (method or "POST").upper()
        logger.info(f"[{type(self).__name__}] Running '{op}' on {self.id or target} ({method})")
        return await self.connector.request(
            method, target, json=body if method != "GET" else None,
        )

    async def run_long_operation(self, op: str, method: str = "POST",
                                 body: Optional[Dict[str, Any]] = None):
        """
        Run an operation that starts server-side work and return its Activity.
        The activity is not polled; callers refresh() it to follow progress.
        """
        from platform_client.model.activity import Activity

        data = await self.run_operation(op, method, body)
        activities = []
        if isinstance(data, dict):
            activities = (data.get("_embedded") or {}).get("activities") or []
        if not activities:
            logger.warning(f"[{type(self).__name__}] Operation '{op}' returned no activity")
            return None
        return Activity.from_payload(activities[0], f"{self.get_uri()}/activities", self._connector)
