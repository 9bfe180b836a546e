"""
Platform Client exceptions.

Client-side guards raise these before any request is sent. HTTP and network
failures are not wrapped: httpx.HTTPStatusError / httpx.TransportError reach
the caller unchanged.
"""
from typing import Optional

__all__ = [
    "PlatformClientError",
    "EnvironmentStateError",
    "ResourceUnavailableError",
    "OperationUnavailableError",
    "LinkNotFoundError",
    "SshUrlError",
]


class PlatformClientError(Exception):
    """Base class for errors raised by the client itself."""


class EnvironmentStateError(PlatformClientError, RuntimeError):
    """
    The environment is in the wrong state for the requested action.

    `reason` is a stable code for callers that need to branch on the cause:
      - "active":        the environment is active (delete, activate)
      - "inactive":      the environment is inactive (deactivate)
      - "not_active", "no_permission": see ResourceUnavailableError
    """

    def __init__(self, message: str, reason: Optional[str] = None,
                 environment_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.environment_id = environment_id


class ResourceUnavailableError(EnvironmentStateError):
    """
    A resource the environment would expose is not available, e.g. no SSH link.

    `reason` is "not_active" when the environment is not active, or
    "no_permission" when it is active but the link is not advertised.
    """


class OperationUnavailableError(PlatformClientError, RuntimeError):
    """A precondition for the operation does not hold (e.g. merge without a parent)."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation


class LinkNotFoundError(PlatformClientError, KeyError):
    """A hypermedia relation is missing from the resource's `_links`."""

    def __init__(self, rel: str, uri: Optional[str] = None):
        self.rel = rel
        self.uri = uri
        where = f" on {uri}" if uri else ""
        self.message = f"Link not found: {rel}{where}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SshUrlError(PlatformClientError, ValueError):
    """An SSH link does not have the ssh://user@host shape."""

    def __init__(self, url: str):
        self.url = url
        self.message = f"Invalid SSH URL: {url!r}"
        super().__init__(self.message)
