"""
Platform Client — entry point for fetching environments of a project.
Resources it loads keep its ApiConnector for their own requests; it is also
installed as the process-wide connector for resources built without one.
"""

import logging
from typing import List, Optional

import httpx

from platform_client.config.settings import Settings, get_settings
from platform_client.http.connector import ApiConnector, release_connector, set_connector
from platform_client.model.environment import Environment
from platform_client.model.resource import quote_id

logger = logging.getLogger(__name__)


class PlatformClient:
    """
    Usage:
        async with PlatformClient() as client:
            env = await client.get_environment("abc123", "main")
            activity = await env.backup()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        connector: Optional[ApiConnector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.connector = connector or ApiConnector(self.settings, transport=transport)
        set_connector(self.connector)
        logger.info(f"[Platform Client] Initialized with api_url={self.connector.api_url}")

    def environments_url(self, project_id: str) -> str:
        return f"{self.connector.api_url}/projects/{quote_id(project_id)}/environments"

    async def get_environment(self, project_id: str, environment_id: str) -> Optional[Environment]:
        """Get a single environment; None if it does not exist."""
        return await Environment.get({"id": environment_id}, self.environments_url(project_id),
                                     connector=self.connector)

    async def get_environments(self, project_id: str) -> List[Environment]:
        return await Environment.query({}, self.environments_url(project_id),
                                       connector=self.connector)

    async def close(self):
        await self.connector.close()
        release_connector(self.connector)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
