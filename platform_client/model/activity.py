"""
Activity — handle to an asynchronous server-side job (branch, merge, backup, ...).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from platform_client.model.resource import Resource

STATE_PENDING = "pending"
STATE_IN_PROGRESS = "in_progress"
STATE_COMPLETE = "complete"

RESULT_SUCCESS = "success"
RESULT_FAILURE = "failure"


class Activity(Resource):
    """An environment or project activity, as reported by the API."""

    type: str = ""
    state: str = ""
    result: Optional[str] = None
    completion_percent: int = 0
    description: str = ""
    log: str = ""
    project: str = ""
    environments: List[str] = Field(default_factory=list)
    parameters: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def is_complete(self) -> bool:
        return self.state == STATE_COMPLETE

    def is_successful(self) -> bool:
        return self.is_complete() and self.result == RESULT_SUCCESS
