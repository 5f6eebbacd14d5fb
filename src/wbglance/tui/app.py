"""
wbglance TUI Application

Main application class for the terminal-based viewer.
"""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding
from textual.theme import Theme

from wbglance.api import WandbClient
from wbglance.config import get_settings
from wbglance.credentials import CredentialStore
from wbglance.models import Credential

# Chart line color
CHART_LINE_COLOR = (255, 190, 40)

WBGLANCE_THEME = Theme(
    name="wbglance",
    primary="#FFBE28",
    secondary="#A3A3A3",
    accent="#13A9BA",
    foreground="#E6E6E6",
    background="#1A1C1F",
    surface="#24272B",
    panel="#2F3338",
    success="#3EB370",
    error="#E05A4F",
    warning="#F0A03C",
    dark=True,
)


class WbglanceTUIApp(App[None]):
    """wbglance Terminal UI Application.

    Shows the login screen when no credential is stored, the project list
    otherwise. The credential lives on the app and is handed to the client
    on every call.
    """

    TITLE = "wbglance"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "help", "Help", show=True),
        Binding("escape", "back", "Back", show=True),
        Binding("ctrl+l", "logout", "Logout", show=True),
    ]

    def __init__(self, client: WandbClient | None = None, store: CredentialStore | None = None) -> None:
        """Initialize the TUI application.

        Args:
            client: API client. Defaults to one built from environment settings.
            store: Credential store. Defaults to the user's config directory.
        """
        super().__init__()
        self._client = client
        self._store = store or CredentialStore()
        self.credential: Credential | None = None

        self.register_theme(WBGLANCE_THEME)
        self.theme = "wbglance"

    @property
    def client(self) -> WandbClient:
        """Get or create the API client instance."""
        if self._client is None:
            self._client = WandbClient()
        return self._client

    @property
    def store(self) -> CredentialStore:
        """Get the credential store."""
        return self._store

    def on_mount(self) -> None:
        """Handle mount event - push the initial screen."""
        from wbglance.tui.screens import LoginScreen, ProjectsScreen

        self.credential = self._store.load()
        if self.credential is None:
            self.push_screen(LoginScreen())
        else:
            self.push_screen(ProjectsScreen())

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def action_help(self) -> None:
        """Show help screen."""
        from wbglance.tui.screens import HelpScreen

        self.push_screen(HelpScreen(get_settings().graphql_url, str(self._store.path)))

    async def action_back(self) -> None:
        """Go back to previous screen."""
        from wbglance.tui.screens import LoginScreen

        if len(self.screen_stack) > 2 and not isinstance(self.screen, LoginScreen):
            self.pop_screen()

    async def action_logout(self) -> None:
        """Forget the stored credential and return to the login screen."""
        from wbglance.tui.screens import LoginScreen

        self._store.clear()
        self.credential = None
        while len(self.screen_stack) > 2:
            await self.pop_screen()
        await self.switch_screen(LoginScreen())
