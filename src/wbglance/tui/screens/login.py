"""
Login Screen

Asks for an API key and entity, verifies them against the service and
stores them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Static

from wbglance.credentials import validate_credential
from wbglance.exceptions import AuthError, InvalidCredentialError
from wbglance.models import Credential

if TYPE_CHECKING:
    from wbglance.tui.app import WbglanceTUIApp

logger = logging.getLogger(__name__)


class LoginScreen(Screen[None]):
    """Screen asking for credentials."""

    def __init__(self) -> None:
        super().__init__()
        self._verifying = False

    @property
    def tui_app(self) -> WbglanceTUIApp:
        """Get the typed app instance."""
        from wbglance.tui.app import WbglanceTUIApp

        assert isinstance(self.app, WbglanceTUIApp)
        return self.app

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Container(
            Vertical(
                Static("Log in", classes="screen-title"),
                Static("Paste an API key from your account settings.", classes="hint"),
                Input(placeholder="API key", password=True, id="api-key-input"),
                Input(placeholder="Entity (user or team name)", id="entity-input"),
                Button("Log in", variant="primary", id="login-button"),
                Static(id="login-status", classes="error-text"),
                classes="login-form",
            ),
            classes="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event - focus the key input."""
        self.query_one("#api-key-input", Input).focus()

    @on(Button.Pressed, "#login-button")
    @on(Input.Submitted)
    def submit_login(self, event: Button.Pressed | Input.Submitted) -> None:
        """Validate the input and start verification."""
        if self._verifying:
            return

        api_key = self.query_one("#api-key-input", Input).value
        entity = self.query_one("#entity-input", Input).value
        status = self.query_one("#login-status", Static)

        try:
            credential = validate_credential(api_key, entity)
        except InvalidCredentialError as e:
            status.update(str(e))
            return

        self._verifying = True
        status.update("Verifying...")
        self._verify(credential)

    @work(thread=True, exclusive=True)
    def _verify(self, credential: Credential) -> None:
        """Verify the credential off the UI thread."""
        try:
            self.tui_app.client.verify(credential)
        except AuthError as e:
            logger.debug(f"Verification failed: {e}")
            self.app.call_from_thread(self._on_verify_failed)
            return
        self.app.call_from_thread(self._on_verified, credential)

    def _on_verify_failed(self) -> None:
        self._verifying = False
        self.query_one("#login-status", Static).update("Authentication failed. Check your API key.")

    def _on_verified(self, credential: Credential) -> None:
        self._verifying = False
        try:
            self.tui_app.store.save(credential)
        except OSError as e:
            logger.warning(f"Failed to store credential: {e}")
            self.notify("Logged in, but the credential could not be saved", severity="warning")

        self.tui_app.credential = credential
        from wbglance.tui.screens import ProjectsScreen

        self.app.switch_screen(ProjectsScreen())
