"""Platform API resources — Environment and its subordinate resources."""
from .resource import Resource
from .activity import Activity
from .variable import Variable
from .route import Route
from .environment_access import EnvironmentAccess
from .metric import Metric
from .environment import Environment

__all__ = ["Resource", "Activity", "Variable", "Route", "EnvironmentAccess", "Metric", "Environment"]
