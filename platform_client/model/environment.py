"""
Environment — a deployable branch of a project and its running infrastructure.

Wraps the environment representation returned by the Platform API and the
actions it supports: lifecycle (activate/deactivate/delete), Git-like
operations (branch/merge/synchronize/initialize), backups, and the
subordinate resources reached through its hypermedia links (activities,
variables, routes, user access, metrics).

Guards on `status`/`parent` are checked client-side before any request is
sent; the server stays authoritative for everything else.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import Field
from slugify import slugify

from platform_client.exceptions import (
    EnvironmentStateError,
    OperationUnavailableError,
    ResourceUnavailableError,
    SshUrlError,
)
from platform_client.model.activity import Activity
from platform_client.model.environment_access import ROLES, EnvironmentAccess
from platform_client.model.metric import Metric
from platform_client.model.resource import Resource, link_href, quote_id
from platform_client.model.route import Route
from platform_client.model.variable import Variable

logger = logging.getLogger(__name__)

SSH_URL_PATTERN = re.compile(r"^ssh://([a-zA-Z0-9_\-]+)@(.+)$")
SSH_LINK_PREFIX = "pf:ssh:"
MAX_ID_LENGTH = 32

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class Environment(Resource):
    """A Platform environment."""

    modifiable_fields: ClassVar[List[str]] = ["enable_smtp", "restrict_robots", "http_access", "title"]

    status: str = ""
    head_commit: Optional[str] = None
    name: str = ""
    parent: Optional[str] = None
    machine_name: str = ""
    restrict_robots: bool = False
    title: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    project: str = ""
    is_dirty: bool = False
    enable_smtp: bool = False
    has_code: bool = False
    deployment_target: str = ""
    http_access: Dict[str, Any] = Field(default_factory=dict)
    is_main: Any = Field(default_factory=list)

    async def update(self, data: Dict[str, Any], url: Optional[str] = None):
        """Update enable_smtp, restrict_robots, http_access and/or title."""
        return await super().update(data, url or f"{self._url}/{quote_id(self.id)}")

    # ── State ─────────────────────────────────────────────────────

    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    async def delete(self) -> bool:
        """Delete the environment. Active environments must be deactivated first."""
        if self.is_active():
            raise EnvironmentStateError(
                "Active environments cannot be deleted",
                reason="active", environment_id=self.id,
            )
        return await super().delete()

    async def activate(self) -> Optional[Activity]:
        """Activate an inactive environment. Returns None if the server reports no activity."""
        if self.is_active():
            raise EnvironmentStateError(
                "Active environments cannot be activated",
                reason="active", environment_id=self.id,
            )
        return await self.run_long_operation("activate", "POST")

    async def deactivate(self) -> Optional[Activity]:
        """Deactivate an active environment. Returns None if the server reports no activity."""
        if not self.is_active():
            raise EnvironmentStateError(
                "Inactive environments cannot be deactivated",
                reason="inactive", environment_id=self.id,
            )
        return await self.run_long_operation("deactivate", "POST")

    # ── Git-like operations ───────────────────────────────────────
    # Each returns the Activity the server started, or None when the
    # response embeds no activity.

    async def branch(self, title: str, branch_id: Optional[str] = None) -> Optional[Activity]:
        """
        Create a new environment branched from this one.

        `branch_id` becomes the Git branch name; when omitted it is derived
        from the title with sanitize_id().
        """
        name = branch_id or self.sanitize_id(title)
        if not name:
            raise ValueError(f"Cannot derive a branch id from title {title!r}")
        return await self.run_long_operation("branch", "POST", {"name": name, "title": title})

    async def merge(self) -> Optional[Activity]:
        """Merge the environment into its parent."""
        if not self.parent:
            raise OperationUnavailableError(
                "The environment does not have a parent, so it cannot be merged",
                operation="merge",
            )
        return await self.run_long_operation("merge", "POST")

    async def synchronize(self, data: bool = False, code: bool = False) -> Optional[Activity]:
        """Synchronize data and/or code from the parent environment."""
        if not data and not code:
            raise OperationUnavailableError(
                "Nothing to synchronize: you must specify data or code",
                operation="synchronize",
            )
        body = {"synchronize_data": bool(data), "synchronize_code": bool(code)}
        return await self.run_long_operation("synchronize", "POST", body)

    async def backup(self) -> Optional[Activity]:
        return await self.run_long_operation("backup", "POST")

    async def initialize(self, profile: str, repository: str) -> Optional[Activity]:
        """
        Initialize the environment from an external repository.

        Only works while the environment's repository is empty; the server
        enforces that. `repository` may carry a branch after an '@', e.g.
        'git://github.com/platformsh/platformsh-examples.git@drupal/7.x'.
        """
        body = {"profile": profile, "repository": repository}
        return await self.run_long_operation("initialize", "POST", body)

    @staticmethod
    def sanitize_id(proposed: str) -> str:
        return slugify(proposed or "", max_length=MAX_ID_LENGTH)

    # ── SSH ───────────────────────────────────────────────────────

    def get_ssh_url(self, app: str = "") -> str:
        """
        SSH address (user@host) for the environment or one of its apps.

        Uses the generic `ssh` link when no app is given, then the app's
        `pf:ssh:<app>` link, and finally the legacy `<user>--<app>@host` form.
        """
        if self.has_link("ssh") and not app:
            return self.convert_ssh_url(self.get_link("ssh", absolute=False))

        urls = self.get_ssh_urls()
        if app and urls.get(app):
            return self.convert_ssh_url(urls[app])

        return self._construct_legacy_ssh_url(app)

    def _construct_legacy_ssh_url(self, app: str) -> str:
        if not self.has_link("ssh"):
            if not self.is_active():
                raise ResourceUnavailableError(
                    f"No SSH URL found for environment '{self.id}'. It is not currently active.",
                    reason="not_active", environment_id=self.id,
                )
            raise ResourceUnavailableError(
                f"No SSH URL found for environment '{self.id}'. You may not have permission to SSH.",
                reason="no_permission", environment_id=self.id,
            )
        suffix = f"--{app}" if app else ""
        return self.convert_ssh_url(self.get_link("ssh", absolute=False), suffix)

    @staticmethod
    def convert_ssh_url(url: str, username_suffix: str = "") -> str:
        """Turn `ssh://user@host` into `user<suffix>@host`."""
        match = SSH_URL_PATTERN.match(url or "")
        if not match:
            raise SshUrlError(url)
        user, host = match.group(1), match.group(2)
        return f"{user}{username_suffix}@{host}"

    def get_ssh_urls(self) -> Dict[str, str]:
        """Map of app name to raw SSH URL, from the `pf:ssh:<app>` links."""
        return {
            rel[len(SSH_LINK_PREFIX):]: link_href(link)
            for rel, link in self.links.items()
            if rel.startswith(SSH_LINK_PREFIX)
        }

    # ── Activities ────────────────────────────────────────────────

    async def get_activity(self, activity_id: str) -> Optional[Activity]:
        return await Activity.get({"id": activity_id}, f"{self.get_uri()}/activities",
                                  connector=self._connector)

    async def get_activities(self, type: Optional[str] = None,
                             starts_at: Union[int, datetime, None] = None) -> List[Activity]:
        """
        List environment activities.

        `type` filters by activity type. `starts_at` is the maximum creation
        date of returned activities, sent as a UNIX timestamp; a datetime is
        converted to one (naive datetimes are taken as local time).
        """
        if isinstance(starts_at, datetime):
            starts_at = int(starts_at.timestamp())
        params = {"type": type, "starts_at": starts_at}
        return await Activity.query(params, f"{self.get_uri()}/activities",
                                    connector=self._connector)

    # ── Variables ─────────────────────────────────────────────────

    async def get_variables(self, limit: Optional[int] = None) -> List[Variable]:
        return await Variable.query({"limit": limit}, self.get_link("#manage-variables"),
                                    connector=self._connector)

    async def get_variable(self, name: str) -> Optional[Variable]:
        return await Variable.get({"id": name}, self.get_link("#manage-variables"),
                                  connector=self._connector)

    async def set_variable(self, name: str, value: Any, is_json: bool = False) -> Variable:
        """
        Create or update a variable.

        Fetches the variable first and updates it if it exists, otherwise
        creates it. The two steps are not atomic: concurrent callers can both
        see "missing" and both create.
        """
        if is_json and isinstance(value, str):
            value = json.loads(value)
        values = {"value": value, "is_json": is_json}

        existing = await self.get_variable(name)
        if existing and existing.id:
            return await existing.update(values)

        variable = Variable.from_payload({"name": name, **values}, self.get_link("#manage-variables"),
                                         self._connector)
        return await variable.save()

    # ── Routes ────────────────────────────────────────────────────

    async def set_route(self, values: Optional[Dict[str, Any]] = None) -> Route:
        """
        Create or update a route.

        Without an `id` a new route is always created. With one, the route is
        fetched first and updated if found; not atomic, like set_variable().
        """
        values = dict(values or {})
        routes_url = self.get_link("#manage-routes")
        if not values.get("id"):
            return await Route.from_payload(values, routes_url, self._connector).save()

        existing = await self.get_route(values["id"])
        if existing and existing.id:
            return await existing.update(values, f"{routes_url}/{quote_id(existing.id)}")
        return await Route.from_payload(values, routes_url, self._connector).save()

    async def get_route(self, route_id: str) -> Optional[Route]:
        return await Route.get({"id": route_id}, self.get_link("#manage-routes"),
                               connector=self._connector)

    async def get_routes(self) -> List[Route]:
        return await Route.query({}, self.get_link("#manage-routes"), connector=self._connector)

    def get_route_urls(self) -> List[str]:
        """Resolved URLs of the environment's routes (`pf:routes` links)."""
        routes = self.links.get("pf:routes") or []
        return [link_href(route) for route in routes]

    # ── User access ───────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[EnvironmentAccess]:
        return await EnvironmentAccess.get({"id": user_id}, self.get_link("#manage-access"),
                                           connector=self._connector)

    async def get_users(self) -> List[EnvironmentAccess]:
        return await EnvironmentAccess.query({}, self.get_link("#manage-access"),
                                             connector=self._connector)

    async def add_user(self, user: str, role: str, by_uuid: bool = True) -> EnvironmentAccess:
        """
        Grant `user` a role on this environment.

        `user` is a UUID when `by_uuid` is true, otherwise an email address.
        Note the default is by_uuid=True here, unlike Project.add_user().
        """
        if role not in ROLES:
            raise ValueError(f"Invalid role '{role}', expected one of {ROLES}")
        body = {"role": role, ("user" if by_uuid else "email"): user}
        access = EnvironmentAccess.from_payload(body, self.get_link("#manage-access"),
                                                self._connector)
        return await access.save()

    async def remove_user(self, user_id: str) -> bool:
        """Revoke a user's access. Returns False if the user had no access."""
        access = await self.get_user(user_id)
        if not access:
            logger.info(f"[Environment] No access for user {user_id} on {self.id}")
            return False
        return await access.delete()

    # ── Metrics ───────────────────────────────────────────────────

    async def get_metrics(self, query: Optional[str] = None) -> Metric:
        """Fetch a metrics snapshot; `query` is passed through as an InfluxDB query."""
        params = {"q": query} if query else None
        return await Metric.get(params, f"{self.get_uri()}/metrics", connector=self._connector)
