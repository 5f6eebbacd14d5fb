"""
Breadcrumb Widget

One-line trail of where the user is: Projects > entity > project > run > metric.
"""

from __future__ import annotations

from rich.markup import escape
from textual.widgets import Static

SEPARATOR = " > "


def format_trail(items: list[str]) -> str:
    """Render items as markup, dimming all but the last one.

    Names are escaped so run names containing brackets render literally.
    """
    if not items:
        return ""
    *parents, current = (escape(item) for item in items)
    return SEPARATOR.join([*(f"[dim]{p}[/dim]" for p in parents), f"[bold]{current}[/bold]"])


class Breadcrumb(Static):
    """Breadcrumb shown at the top of drill-down screens."""

    DEFAULT_CSS = """
    Breadcrumb {
        width: 100%;
        height: 1;
        padding: 0 1;
        background: $surface;
        color: $text-muted;
    }
    """

    def __init__(self, items: list[str]) -> None:
        self._items = list(items)
        super().__init__(format_trail(self._items))

    @property
    def items(self) -> list[str]:
        """Trail items, outermost first."""
        return list(self._items)
