"""Platform API client — typed hypermedia resources for project environments."""
from .client import PlatformClient
from .exceptions import (
    EnvironmentStateError,
    LinkNotFoundError,
    OperationUnavailableError,
    PlatformClientError,
    ResourceUnavailableError,
    SshUrlError,
)
from .model import Activity, Environment, EnvironmentAccess, Metric, Route, Variable

__all__ = [
    "PlatformClient",
    "Environment", "Activity", "Variable", "Route", "EnvironmentAccess", "Metric",
    "PlatformClientError", "EnvironmentStateError", "OperationUnavailableError",
    "ResourceUnavailableError", "LinkNotFoundError", "SshUrlError",
]
