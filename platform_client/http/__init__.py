"""HTTP transport for the Platform API."""
from .connector import (
    ApiConnector,
    close_connector,
    get_connector,
    release_connector,
    set_connector,
)

__all__ = ["ApiConnector", "get_connector", "set_connector", "release_connector", "close_connector"]
