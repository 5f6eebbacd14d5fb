"""Read-only client for projects, runs and run metrics."""

from __future__ import annotations

import logging
from typing import Any

from wbglance.api.history import decode_history
from wbglance.api.queries import PROJECTS_QUERY, RUN_HISTORY_QUERY, RUNS_QUERY, VIEWER_QUERY
from wbglance.api.transport import GraphQLTransport
from wbglance.config import ClientSettings
from wbglance.exceptions import (
    AuthError,
    MalformedPayloadError,
    MalformedResponseError,
    MissingCredentialError,
    RequestFailedError,
    TransportError,
    UnauthenticatedError,
)
from wbglance.models import Credential, MetricSeries, Project, Run, RunId, RunName

logger = logging.getLogger(__name__)


def _edges(connection: Any) -> list[Any]:
    """Return the ``edges`` list of a GraphQL connection object.

    Raises:
        MalformedResponseError: If the connection or its edges have the wrong shape
    """
    if not isinstance(connection, dict):
        raise MalformedResponseError("Expected a connection object")
    edges = connection.get("edges")
    if not isinstance(edges, list):
        raise MalformedResponseError("Connection has no edges list")
    return edges


def _node(edge: Any) -> dict[str, Any] | None:
    """Return the ``node`` object of an edge, or None if there is none."""
    if not isinstance(edge, dict):
        return None
    node = edge.get("node")
    return node if isinstance(node, dict) else None


def _optional_str(node: dict[str, Any], key: str) -> str | None:
    value = node.get(key)
    return value if isinstance(value, str) else None


def decode_project(edge: Any, fallback_entity: str) -> Project | None:
    """Decode one project edge.

    Args:
        edge: Raw edge from ``viewer.projects.edges``
        fallback_entity: Entity used when the node carries no ``entityName``

    Returns:
        The project, or None if the edge lacks a node, an id or a name.
    """
    node = _node(edge)
    if node is None:
        return None

    project_id = _optional_str(node, "id")
    name = _optional_str(node, "name")
    if project_id is None or name is None:
        return None

    # An empty entityName is kept as sent
    entity = _optional_str(node, "entityName")
    if entity is None:
        entity = fallback_entity

    return Project(
        id=project_id,
        name=name,
        entity=entity,
        created_at=_optional_str(node, "createdAt"),
    )


def decode_run(edge: Any) -> Run | None:
    """Decode one run edge.

    Args:
        edge: Raw edge from ``project.runs.edges``

    Returns:
        The run, or None if id, name or state is missing or not a string.
    """
    node = _node(edge)
    if node is None:
        return None

    run_id = _optional_str(node, "id")
    name = _optional_str(node, "name")
    state = _optional_str(node, "state")
    if run_id is None or name is None or state is None:
        return None

    return Run(id=RunId(run_id), name=RunName(name), state=state, created_at=_optional_str(node, "createdAt"))


class WandbClient:
    """Client for the read-only operations of the tracking service.

    Every operation takes the credential to use; the client itself stores
    none. Malformed individual records in a list are dropped, while a
    response whose overall shape is wrong fails the call.

    Examples:
        >>> client = WandbClient()
        >>> cred = Credential(api_key="...", entity="my-team")
        >>> projects = client.fetch_projects(cred)
        >>> runs = client.fetch_runs(cred, projects[0].entity, projects[0].name)
        >>> series = client.fetch_metrics(cred, projects[0].entity, projects[0].name, runs[0].name)
    """

    def __init__(self, transport: GraphQLTransport | None = None, settings: ClientSettings | None = None) -> None:
        """Initialize the client.

        Args:
            transport: Transport to send queries through. Created from ``settings`` if omitted.
            settings: Settings for a newly created transport.
        """
        self.transport = transport or GraphQLTransport(settings=settings)

    def _execute(self, query: str, variables: dict[str, Any] | None, credential: Credential) -> dict[str, Any]:
        try:
            return self.transport.execute(query, variables, credential=credential)
        except MalformedPayloadError as e:
            raise MalformedResponseError(str(e)) from e
        except TransportError as e:
            logger.debug(f"Transport failure: {type(e).__name__}: {e}")
            raise RequestFailedError(e) from e

    @staticmethod
    def _require_key(credential: Credential) -> None:
        if credential.is_empty:
            raise MissingCredentialError("API key is empty")

    def verify(self, credential: Credential) -> bool:
        """Check that the service accepts a credential.

        All failure modes are reported the same way.

        Args:
            credential: Credential to check

        Returns:
            True if the service resolved the credential to an identity.

        Raises:
            AuthError: If the key is empty, the request failed or no identity was returned
        """
        if credential.is_empty:
            raise AuthError("API key is empty")

        try:
            data = self.transport.execute(VIEWER_QUERY, credential=credential)
        except TransportError as e:
            logger.debug(f"Credential verification failed: {type(e).__name__}: {e}")
            raise AuthError("Authentication failed") from e

        if not isinstance(data.get("viewer"), dict):
            raise AuthError("Authentication failed")
        return True

    def fetch_projects(self, credential: Credential) -> list[Project]:
        """Fetch the projects visible to the credential's user, newest first.

        Args:
            credential: Credential to authenticate with; its entity is the
                fallback owner for projects that do not report one

        Returns:
            Projects in service order. Edges without id or name are skipped.

        Raises:
            MissingCredentialError: If the API key is empty (no request is sent)
            UnauthenticatedError: If the service returned a null viewer
            MalformedResponseError: If the response does not contain a project list
            RequestFailedError: If the transport failed
        """
        self._require_key(credential)
        data = self._execute(PROJECTS_QUERY, None, credential)

        if "viewer" not in data:
            raise MalformedResponseError("Response has no viewer")
        viewer = data["viewer"]
        # A rejected key yields HTTP 200 with a null viewer
        if viewer is None:
            raise UnauthenticatedError("Service returned no viewer for this credential")
        if not isinstance(viewer, dict):
            raise MalformedResponseError("Viewer is not an object")

        edges = _edges(viewer.get("projects"))
        projects = []
        for edge in edges:
            project = decode_project(edge, credential.entity)
            if project is not None:
                projects.append(project)

        if len(projects) != len(edges):
            logger.debug(f"Dropped {len(edges) - len(projects)} malformed project edges")
        return projects

    def fetch_runs(self, credential: Credential, entity: str, project: str) -> list[Run]:
        """Fetch the runs of a project, newest first.

        Args:
            credential: Credential to authenticate with
            entity: Entity owning the project
            project: Project name

        Returns:
            Runs in service order. Edges without string id, name and state are skipped.

        Raises:
            MissingCredentialError: If the API key is empty (no request is sent)
            MalformedResponseError: If the response does not contain a run list
            RequestFailedError: If the transport failed
        """
        self._require_key(credential)
        data = self._execute(RUNS_QUERY, {"entityName": entity, "projectName": project}, credential)

        project_data = data.get("project")
        if not isinstance(project_data, dict):
            raise MalformedResponseError(f"Project {entity}/{project} not found in response")

        edges = _edges(project_data.get("runs"))
        runs = []
        for edge in edges:
            run = decode_run(edge)
            if run is not None:
                runs.append(run)

        if len(runs) != len(edges):
            logger.debug(f"Dropped {len(edges) - len(runs)} malformed run edges")
        return runs

    def fetch_metrics(self, credential: Credential, entity: str, project: str, run_name: RunName) -> list[MetricSeries]:
        """Fetch a run's history and rebuild its metric series.

        Args:
            credential: Credential to authenticate with
            entity: Entity owning the project
            project: Project name
            run_name: Name of the run (``Run.name``, not ``Run.id``)

        Returns:
            One series per numeric metric key. Empty if the run or its history
            does not exist yet.

        Raises:
            MissingCredentialError: If the API key is empty (no request is sent)
            MalformedResponseError: If the response has no project object
            RequestFailedError: If the transport failed
        """
        self._require_key(credential)
        variables = {"runId": run_name, "projectName": project, "entityName": entity}
        data = self._execute(RUN_HISTORY_QUERY, variables, credential)

        project_data = data.get("project")
        if not isinstance(project_data, dict):
            raise MalformedResponseError(f"Project {entity}/{project} not found in response")

        run_data = project_data.get("run")
        if run_data is None:
            logger.debug(f"Run {run_name} has no history yet")
            return []
        if not isinstance(run_data, dict):
            raise MalformedResponseError("Run is not an object")

        history = run_data.get("history")
        if not isinstance(history, list):
            return []

        series = decode_history(history)
        logger.debug(f"Decoded {len(series)} metric series from {len(history)} history entries")
        return series
