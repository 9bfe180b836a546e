"""Variable — an environment variable managed through `#manage-variables`."""

from datetime import datetime
from typing import Any, ClassVar, List, Optional

from platform_client.model.resource import Resource


class Variable(Resource):
    modifiable_fields: ClassVar[List[str]] = ["value", "is_json", "is_enabled"]

    name: str = ""
    value: Any = None
    is_json: bool = False
    is_enabled: bool = True
    inherited: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
