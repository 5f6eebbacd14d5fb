"""API package - GraphQL client for the tracking service.

Example:
    >>> from wbglance.api import WandbClient
    >>> from wbglance.models import Credential
    >>> client = WandbClient()
    >>> client.fetch_projects(Credential(api_key="...", entity="me"))
"""

from wbglance.api.auth import build_auth_header
from wbglance.api.client import WandbClient
from wbglance.api.history import decode_history
from wbglance.api.transport import GraphQLTransport

__all__ = [
    "GraphQLTransport",
    "WandbClient",
    "build_auth_header",
    "decode_history",
]
