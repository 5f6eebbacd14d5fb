"""
Help Screen

Lists key bindings per screen and where the session's settings come from.
"""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from wbglance.models import RunState
from wbglance.tui.formatting import STATE_ICONS

# (section title, [(keys, description), ...])
KEY_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Anywhere",
        [
            ("q", "Quit"),
            ("?", "Show this help"),
            ("Esc / Backspace", "Back to the previous list"),
            ("Ctrl+L", "Log out and forget the stored key"),
        ],
    ),
    (
        "Projects and runs",
        [
            ("j / k", "Move down / up"),
            ("Enter", "Open the selected row"),
            ("/ or Tab", "Search by name"),
            ("s", "Cycle sort column and direction"),
            ("r", "Reload from the server"),
        ],
    ),
    (
        "Metric chart",
        [
            ("h / l", "Pan left / right"),
            ("+ / -", "Zoom in / out"),
            ("r", "Show the whole series"),
        ],
    ),
]


def build_help_text(endpoint: str | None = None, credential_path: str | None = None) -> str:
    """Render the help text as console markup.

    Args:
        endpoint: GraphQL endpoint of the session, shown when given
        credential_path: Location of the stored credential, shown when given
    """
    lines = ["[bold]wbglance keys[/bold]", ""]
    for title, keys in KEY_SECTIONS:
        lines.append(f"[bold underline]{title}[/bold underline]")
        lines.extend(f"  [cyan]{escape(key):<16}[/] {description}" for key, description in keys)
        lines.append("")

    lines.append("[bold underline]Run states[/bold underline]")
    lines.extend(f"  {STATE_ICONS[state]}  {state.value}" for state in RunState)

    if endpoint or credential_path:
        lines.append("")
        lines.append("[bold underline]Session[/bold underline]")
        if endpoint:
            lines.append(f"  Endpoint:   {escape(endpoint)}")
        if credential_path:
            lines.append(f"  Credential: {escape(credential_path)}")

    lines.extend(["", "Press [cyan]Esc[/] or [cyan]?[/] to close."])
    return "\n".join(lines)


class HelpScreen(ModalScreen[None]):
    """Modal screen with key bindings and session details."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=True),
        Binding("question_mark", "dismiss", "Close", show=False),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Container {
        width: 70;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def __init__(self, endpoint: str | None = None, credential_path: str | None = None) -> None:
        super().__init__()
        self._text = build_help_text(endpoint, credential_path)

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        yield Container(VerticalScroll(Static(self._text, id="help-text")))

    async def action_dismiss(self, result: None = None) -> None:
        """Close the help screen."""
        self.dismiss(result)
