#!/usr/bin/env python3
"""
wbglance CLI tool

Command line interface for logging in and browsing projects, runs and metrics
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from wbglance.api import WandbClient
from wbglance.credentials import CredentialStore, validate_credential
from wbglance.exceptions import AuthError, FetchError, InvalidCredentialError, UnauthenticatedError
from wbglance.models import Credential, MetricSeries, RunName, RunState


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}")
    sys.exit(1)


def _open_store(store: CredentialStore | None) -> CredentialStore:
    if store is not None:
        return store
    try:
        return CredentialStore()
    except ValueError as e:
        _fail(str(e))


def _require_credential(store: CredentialStore) -> Credential:
    credential = store.load()
    if credential is None:
        _fail("Not logged in. Run: wbglance login --api-key <key> --entity <entity>")
    return credential


def format_series_summary(series: MetricSeries) -> str:
    """
    Format a one-line summary of a metric series

    Args:
        series: Metric series to summarize

    Returns:
        Summary with point count, step range and last value
    """
    if not series.points:
        return f"{series.name}: no data"
    first, last = series.points[0], series.points[-1]
    return f"{series.name}: {len(series.points)} points, steps {first.step}-{last.step}, last={last.value:.6g}"


def run_login(api_key: str, entity: str, store: CredentialStore | None = None, client: WandbClient | None = None) -> None:
    """
    Validate, verify and store a credential

    Args:
        api_key: API key
        entity: Entity (user or team) name
        store: Credential store (default: config directory)
        client: API client
    """
    store = _open_store(store)
    client = client or WandbClient()

    try:
        credential = validate_credential(api_key, entity)
    except InvalidCredentialError as e:
        _fail(str(e))

    try:
        client.verify(credential)
    except AuthError:
        _fail("Authentication failed. Check your API key.")

    try:
        store.save(credential)
    except OSError as e:
        _fail(f"Could not store credential in {store.path}: {e}")
    print(f"Logged in as entity '{credential.entity}'")
    print(f"Credential stored in: {store.path}")


def run_logout(store: CredentialStore | None = None) -> None:
    """
    Remove the stored credential

    Args:
        store: Credential store (default: config directory)
    """
    store = _open_store(store)
    try:
        store.clear()
    except OSError as e:
        _fail(f"Could not remove credential {store.path}: {e}")
    print("Logged out")


def run_projects(store: CredentialStore | None = None, client: WandbClient | None = None) -> None:
    """
    Print projects of the logged-in user
    """
    store = _open_store(store)
    client = client or WandbClient()
    credential = _require_credential(store)

    try:
        projects = client.fetch_projects(credential)
    except UnauthenticatedError:
        _fail("The stored API key was rejected. Run: wbglance login")
    except FetchError as e:
        _fail(f"Failed to fetch projects: {e}")

    if not projects:
        print("No projects found")
        return
    for project in projects:
        created = project.created_at or "-"
        print(f"{project.entity}/{project.name}\t{created}")


def run_runs(entity: str, project: str, store: CredentialStore | None = None, client: WandbClient | None = None) -> None:
    """
    Print runs of a project

    Args:
        entity: Entity owning the project
        project: Project name
    """
    store = _open_store(store)
    client = client or WandbClient()
    credential = _require_credential(store)

    try:
        runs = client.fetch_runs(credential, entity, project)
    except FetchError as e:
        _fail(f"Failed to fetch runs: {e}")

    if not runs:
        print("No runs found")
        return
    for run in runs:
        state = RunState.from_raw(run.state).value
        print(f"{run.name}\t{state}\t{run.created_at or '-'}")


def run_metrics(
    entity: str,
    project: str,
    run_name: str,
    store: CredentialStore | None = None,
    client: WandbClient | None = None,
) -> None:
    """
    Print a summary of each metric series of a run

    Args:
        entity: Entity owning the project
        project: Project name
        run_name: Run name (not the run id)
    """
    store = _open_store(store)
    client = client or WandbClient()
    credential = _require_credential(store)

    try:
        series_list = client.fetch_metrics(credential, entity, project, RunName(run_name))
    except FetchError as e:
        _fail(f"Failed to fetch metrics: {e}")

    if not series_list:
        print("No metrics recorded")
        return
    for series in sorted(series_list, key=lambda s: s.name):
        print(format_series_summary(series))


def run_tui() -> None:
    """
    Start TUI
    """
    from wbglance.tui import run_tui as _run_tui

    _run_tui(store=_open_store(None))


def main(argv: list[str] | None = None) -> None:
    """
    CLI main entry point
    """
    parser = argparse.ArgumentParser(description="Browse experiment tracking projects, runs and metrics")
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    login_parser = subparsers.add_parser("login", help="Verify and store an API key")
    login_parser.add_argument("--api-key", required=True, help="API key")
    login_parser.add_argument("--entity", default="", help="Entity (user or team) name")

    subparsers.add_parser("logout", help="Remove the stored API key")
    subparsers.add_parser("projects", help="List projects")

    runs_parser = subparsers.add_parser("runs", help="List runs of a project")
    runs_parser.add_argument("entity", help="Entity owning the project")
    runs_parser.add_argument("project", help="Project name")

    metrics_parser = subparsers.add_parser("metrics", help="Summarize metric series of a run")
    metrics_parser.add_argument("entity", help="Entity owning the project")
    metrics_parser.add_argument("project", help="Project name")
    metrics_parser.add_argument("run_name", help="Run name (not the run id)")

    subparsers.add_parser("tui", help="Start terminal UI")

    args = parser.parse_args(argv)

    if args.command == "login":
        run_login(api_key=args.api_key, entity=args.entity)
    elif args.command == "logout":
        run_logout()
    elif args.command == "projects":
        run_projects()
    elif args.command == "runs":
        run_runs(entity=args.entity, project=args.project)
    elif args.command == "metrics":
        run_metrics(entity=args.entity, project=args.project, run_name=args.run_name)
    else:
        run_tui()


if __name__ == "__main__":
    main()
