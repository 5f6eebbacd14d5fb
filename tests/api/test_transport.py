"""Tests for the GraphQL transport."""

import base64

import pytest
import requests

from wbglance.api.transport import GraphQLTransport
from wbglance.exceptions import (
    GraphQLErrorsError,
    HttpStatusError,
    MalformedPayloadError,
    NetworkFailureError,
    TransportError,
)


@pytest.fixture
def transport(settings, mock_session):
    return GraphQLTransport(settings=settings, session=mock_session)


class TestRequest:
    """Tests for what the transport sends."""

    def test_posts_query_to_graphql_endpoint(self, transport, mock_session, credential):
        """Test URL, body, headers and timeout of the request."""
        transport.execute("query { viewer { id } }", {"a": 1}, credential=credential)

        mock_session.post.assert_called_once()
        args, kwargs = mock_session.post.call_args
        assert args[0] == "https://tracker.example/graphql"
        assert kwargs["json"] == {"query": "query { viewer { id } }", "variables": {"a": 1}}
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"] == 5.0

        auth = kwargs["headers"]["Authorization"]
        assert auth.startswith("Basic ")
        assert base64.b64decode(auth[6:]).decode() == f"api:{credential.api_key}"

    def test_variables_omitted_when_absent(self, transport, mock_session, credential):
        """Test that no variables key is sent when variables is None."""
        transport.execute("query { viewer { id } }", credential=credential)

        body = mock_session.post.call_args.kwargs["json"]
        assert body == {"query": "query { viewer { id } }"}

    def test_credential_is_per_call(self, transport, mock_session, credential):
        """Test that two calls with different keys send different headers."""
        from wbglance.models import Credential

        other = Credential(api_key="another-key-another-key-1234", entity="x")
        transport.execute("q", credential=credential)
        transport.execute("q", credential=other)

        first, second = (c.kwargs["headers"]["Authorization"] for c in mock_session.post.call_args_list)
        assert first != second
        assert not hasattr(transport, "credential")


class TestResponseHandling:
    """Tests for how responses are classified."""

    def test_returns_data_object(self, transport, mock_session, credential, make_response):
        """Test that the data object is returned on success."""
        mock_session.post.return_value = make_response(payload={"data": {"viewer": {"id": "u1"}}})

        assert transport.execute("q", credential=credential) == {"viewer": {"id": "u1"}}

    @pytest.mark.parametrize(
        "exc",
        [requests.ConnectionError("refused"), requests.Timeout("slow"), requests.exceptions.ChunkedEncodingError("cut")],
    )
    def test_network_failure(self, transport, mock_session, credential, exc):
        """Test that requests exceptions become NetworkFailureError."""
        mock_session.post.side_effect = exc

        with pytest.raises(NetworkFailureError) as exc_info:
            transport.execute("q", credential=credential)
        assert exc_info.value.__cause__ is exc

    @pytest.mark.parametrize("status", [401, 403, 404, 500, 502])
    def test_http_status(self, transport, mock_session, credential, make_response, status):
        """Test that non-200 statuses become HttpStatusError carrying the code."""
        mock_session.post.return_value = make_response(status_code=status, payload={"data": {}})

        with pytest.raises(HttpStatusError) as exc_info:
            transport.execute("q", credential=credential)
        assert exc_info.value.status_code == status

    def test_non_json_body(self, transport, mock_session, credential, make_response):
        """Test that an unparseable body is a malformed payload."""
        mock_session.post.return_value = make_response(text="<html>oops</html>")

        with pytest.raises(MalformedPayloadError):
            transport.execute("q", credential=credential)

    def test_json_body_not_an_object(self, transport, mock_session, credential, make_response):
        """Test that a JSON array body is a malformed payload."""
        mock_session.post.return_value = make_response(payload=[1, 2, 3])

        with pytest.raises(MalformedPayloadError):
            transport.execute("q", credential=credential)

    def test_graphql_errors_with_data(self, transport, mock_session, credential, make_response):
        """Test that errors win even when data is present."""
        mock_session.post.return_value = make_response(
            payload={
                "data": {"viewer": {"id": "u1"}},
                "errors": [{"message": "permission denied"}, {"message": "field deprecated"}],
            }
        )

        with pytest.raises(GraphQLErrorsError) as exc_info:
            transport.execute("q", credential=credential)
        assert exc_info.value.messages == ["permission denied", "field deprecated"]

    def test_graphql_errors_without_message(self, transport, mock_session, credential, make_response):
        """Test that errors lacking a message are still reported."""
        mock_session.post.return_value = make_response(payload={"errors": [{"path": ["x"]}]})

        with pytest.raises(GraphQLErrorsError) as exc_info:
            transport.execute("q", credential=credential)
        assert len(exc_info.value.messages) == 1

    def test_empty_errors_array_is_ignored(self, transport, mock_session, credential, make_response):
        """Test that an empty errors array does not fail the call."""
        mock_session.post.return_value = make_response(payload={"data": {"ok": True}, "errors": []})

        assert transport.execute("q", credential=credential) == {"ok": True}

    @pytest.mark.parametrize("payload", [{}, {"data": None}, {"data": "text"}, {"errors": []}])
    def test_missing_data(self, transport, mock_session, credential, make_response, payload):
        """Test that a response without a data object is malformed."""
        mock_session.post.return_value = make_response(payload=payload)

        with pytest.raises(MalformedPayloadError):
            transport.execute("q", credential=credential)

    def test_all_failures_are_transport_errors(self):
        """Test the error hierarchy."""
        for cls in (NetworkFailureError, HttpStatusError, MalformedPayloadError, GraphQLErrorsError):
            assert issubclass(cls, TransportError)


def test_default_settings_come_from_environment(monkeypatch, mock_session):
    """Test that the endpoint follows WBGLANCE_BASE_URL."""
    monkeypatch.setenv("WBGLANCE_BASE_URL", "http://localhost:8080/")

    transport = GraphQLTransport(session=mock_session)

    assert transport.url == "http://localhost:8080/graphql"


def test_context_manager_closes_session(settings, mock_session):
    """Test that leaving the context closes the session."""
    with GraphQLTransport(settings=settings, session=mock_session):
        pass
    mock_session.close.assert_called_once()
