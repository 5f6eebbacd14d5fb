"""
wbglance - Read-only viewer client for a Weights & Biases style tracking service.

This module provides a GraphQL client that lists projects and runs and
rebuilds metric time series from run history.

Examples:
    >>> from wbglance import Credential, WandbClient
    >>> client = WandbClient()
    >>> cred = Credential(api_key="...", entity="my-team")
    >>> for series in client.fetch_metrics(cred, "my-team", "mnist", "brisk-river-7"):
    ...     print(series.name, len(series.points))
"""

from wbglance.api import WandbClient, build_auth_header
from wbglance.credentials import CredentialStore, validate_credential
from wbglance.models import Credential, MetricPoint, MetricSeries, Project, Run, RunState

__version__ = "0.1.0"
__all__ = [
    "Credential",
    "CredentialStore",
    "MetricPoint",
    "MetricSeries",
    "Project",
    "Run",
    "RunState",
    "WandbClient",
    "build_auth_header",
    "validate_credential",
]
