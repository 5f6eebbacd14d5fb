"""GraphQL-over-HTTP transport for the tracking service."""

from __future__ import annotations

import logging
from typing import Any

import requests

from wbglance.api.auth import build_auth_header
from wbglance.config import ClientSettings, get_settings
from wbglance.exceptions import GraphQLErrorsError, HttpStatusError, MalformedPayloadError, NetworkFailureError
from wbglance.logger import mask_secret
from wbglance.models import Credential

logger = logging.getLogger(__name__)


def _error_messages(errors: Any) -> list[str]:
    """Extract human-readable messages from a GraphQL ``errors`` value."""
    if not isinstance(errors, list):
        return [str(errors)]

    messages = []
    for error in errors:
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            messages.append(error["message"])
        else:
            messages.append(str(error))
    return messages


class GraphQLTransport:
    """Sends GraphQL documents to the service and unwraps the ``data`` object.

    The transport holds no credential: every call is authenticated with the
    credential passed to :meth:`execute`, so one instance can be shared by
    callers using different keys.
    """

    def __init__(self, settings: ClientSettings | None = None, session: requests.Session | None = None) -> None:
        """Initialize the transport.

        Args:
            settings: Endpoint and timeout settings. Defaults to environment-derived settings.
            session: HTTP session to use. A new one is created if omitted.
        """
        self.settings = settings or get_settings()
        self.url = self.settings.graphql_url
        self.session = session or requests.Session()

    def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        credential: Credential,
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` object.

        Args:
            query: GraphQL document text
            variables: Optional variables; omitted from the body when None
            credential: Credential used for the Authorization header

        Returns:
            The ``data`` object of the response.

        Raises:
            NetworkFailureError: If no HTTP response was obtained
            HttpStatusError: If the status code is not 200
            MalformedPayloadError: If the body is not a JSON object or lacks ``data``
            GraphQLErrorsError: If the response carries a non-empty ``errors`` array
        """
        body: dict[str, Any] = {"query": query}
        if variables is not None:
            body["variables"] = variables

        headers = {
            "Authorization": build_auth_header(credential.api_key),
            "Content-Type": "application/json",
        }

        logger.debug(f"POST {self.url} (key {mask_secret(credential.api_key)})")
        try:
            response = self.session.post(self.url, json=body, headers=headers, timeout=self.settings.timeout)
        except requests.RequestException as e:
            logger.debug(f"Request to {self.url} failed: {e}")
            raise NetworkFailureError(str(e)) from e

        if response.status_code != 200:
            logger.debug(f"GraphQL request returned HTTP {response.status_code}")
            raise HttpStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedPayloadError("Response body is not valid JSON") from e

        if not isinstance(payload, dict):
            raise MalformedPayloadError("Response body is not a JSON object")

        # Errors can accompany HTTP 200 and even a partial data object
        errors = payload.get("errors")
        if errors:
            messages = _error_messages(errors)
            logger.debug(f"GraphQL errors: {messages}")
            raise GraphQLErrorsError(messages)

        data = payload.get("data")
        if not isinstance(data, dict):
            raise MalformedPayloadError("Response has no data object")

        return data

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> GraphQLTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
