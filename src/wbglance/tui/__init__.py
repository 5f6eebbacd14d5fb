"""
wbglance Terminal UI

A terminal-based viewer using the Textual framework for browsing
projects, runs, and metrics of the remote tracking service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wbglance.credentials import CredentialStore


def run_tui(store: CredentialStore | None = None) -> None:
    """Run the wbglance TUI application."""
    from wbglance.tui.app import WbglanceTUIApp

    app = WbglanceTUIApp(store=store)
    app.run()


__all__ = ["run_tui"]
