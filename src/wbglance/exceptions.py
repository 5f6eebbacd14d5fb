"""
wbglance exceptions module.

Contains the error taxonomy shared by the transport, the resource fetchers
and the credential boundary.
"""

from __future__ import annotations


class WbglanceError(Exception):
    """Base class for all wbglance errors."""

    pass


class TransportError(WbglanceError):
    """Raised by the GraphQL transport when a request cannot produce data."""

    pass


class NetworkFailureError(TransportError):
    """The request never produced an HTTP response (connection, timeout, ...)."""

    pass


class HttpStatusError(TransportError):
    """The service answered with a status other than 200."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected HTTP status {status_code}")


class MalformedPayloadError(TransportError):
    """The response body is not a usable GraphQL JSON document."""

    pass


class GraphQLErrorsError(TransportError):
    """The response carried a non-empty GraphQL ``errors`` array."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("GraphQL errors: " + "; ".join(self.messages))


class AuthError(WbglanceError):
    """Credential verification failed, for whatever reason."""

    pass


class FetchError(WbglanceError):
    """Raised by resource fetchers when a call cannot produce a result."""

    pass


class MissingCredentialError(FetchError):
    """No API key was supplied; no request was issued."""

    pass


class UnauthenticatedError(FetchError):
    """The service did not recognise the credential (null viewer)."""

    pass


class MalformedResponseError(FetchError):
    """The response data does not have the expected overall shape."""

    pass


class RequestFailedError(FetchError):
    """The underlying transport failed; see ``transport_error``."""

    def __init__(self, transport_error: TransportError) -> None:
        self.transport_error = transport_error
        super().__init__(str(transport_error) or type(transport_error).__name__)


class InvalidCredentialError(WbglanceError):
    """A credential was rejected at the storage boundary before any use."""

    pass
