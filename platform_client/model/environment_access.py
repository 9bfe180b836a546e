"""EnvironmentAccess — a user's role on one environment (`#manage-access`)."""

from typing import ClassVar, List, Optional

from platform_client.model.resource import Resource

ROLES = ["admin", "contributor", "viewer"]


class EnvironmentAccess(Resource):
    modifiable_fields: ClassVar[List[str]] = ["role"]

    user: Optional[str] = None
    email: Optional[str] = None
    role: str = ""
    project: str = ""
    environment: str = ""
