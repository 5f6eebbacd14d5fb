"""
Runs Screen

Runs of one project with their state.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import Input, Static

from wbglance.models import Run, RunState
from wbglance.tui.formatting import STATE_ICONS, format_created_at, state_icon
from wbglance.tui.screens.listing import ListingScreen
from wbglance.tui.widgets import Breadcrumb

if TYPE_CHECKING:
    from wbglance.models import Credential

LEGEND = "State: " + "  ".join(f"{STATE_ICONS[state]} {state.value.capitalize()}" for state in RunState)

# Live runs first when sorting by state
STATE_ORDER = {
    RunState.RUNNING: 0,
    RunState.FINISHED: 1,
    RunState.CRASHED: 2,
    RunState.FAILED: 3,
    RunState.OTHER: 4,
}


class RunsScreen(ListingScreen[Run]):
    """Screen listing the runs of a project."""

    BINDINGS = [
        Binding("backspace", "go_back", "Back", show=False),
    ]

    NOUN = "runs"
    TABLE_ID = "runs-table"
    STATUS_ID = "runs-status"
    COLUMNS = [("State", 1), ("Name", 4), ("Created", 2)]
    SORT_KEYS = ["created", "name", "state"]

    def __init__(self, entity: str, project_name: str) -> None:
        super().__init__()
        self._entity = entity
        self._project_name = project_name

    def heading(self) -> Iterable[Widget]:
        return [Breadcrumb(["Projects", self._entity, self._project_name])]

    def notes(self) -> Iterable[Widget]:
        return [Static(LEGEND, classes="status-legend")]

    def fetch(self, credential: Credential) -> list[Run]:
        return self.tui_app.client.fetch_runs(credential, self._entity, self._project_name)

    def row_cells(self, item: Run) -> tuple[Any, ...]:
        return (state_icon(item.state), item.name, format_created_at(item.created_at))

    def row_key(self, item: Run) -> str:
        return item.id

    def sort_value(self, item: Run, sort_key: str) -> Any:
        if sort_key == "name":
            return item.name.lower()
        if sort_key == "state":
            return STATE_ORDER[RunState.from_raw(item.state)]
        return item.created_at or ""

    def search_text(self, item: Run) -> str:
        return item.name

    def open_item(self, item: Run) -> None:
        from wbglance.tui.screens.metrics import MetricsScreen

        # History is looked up by run name, not id
        self.app.push_screen(MetricsScreen(self._entity, self._project_name, item.name))

    def action_go_back(self) -> None:
        """Go back to the project list unless the search box is being edited."""
        if isinstance(self.app.focused, Input):
            return
        self.app.pop_screen()
