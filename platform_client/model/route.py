"""Route — one entry of an environment's route configuration (`#manage-routes`)."""

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field

from platform_client.model.resource import Resource


class Route(Resource):
    modifiable_fields: ClassVar[List[str]] = ["type", "to", "upstream", "cache", "ssi", "redirects", "tls", "attributes"]

    type: str = ""
    to: Optional[str] = None
    upstream: Optional[str] = None
    original_url: Optional[str] = None
    cache: Dict[str, Any] = Field(default_factory=dict)
    ssi: Dict[str, Any] = Field(default_factory=dict)
    redirects: Dict[str, Any] = Field(default_factory=dict)
    tls: Dict[str, Any] = Field(default_factory=dict)
    attributes: Dict[str, Any] = Field(default_factory=dict)
    restrict_robots: Optional[bool] = None
    primary: Optional[bool] = None
    # Only present on some route types.
    http_access: Optional[Dict[str, Any]] = None
    aliases: List[str] = Field(default_factory=list)
