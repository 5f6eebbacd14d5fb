"""
Projects Screen

Projects of the logged-in user, newest first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wbglance.models import Project
from wbglance.tui.formatting import format_created_at
from wbglance.tui.screens.listing import ListingScreen

if TYPE_CHECKING:
    from wbglance.models import Credential


class ProjectsScreen(ListingScreen[Project]):
    """Screen listing every project the credential can see."""

    NOUN = "projects"
    TABLE_ID = "projects-table"
    STATUS_ID = "projects-status"
    COLUMNS = [("Name", 4), ("Entity", 2), ("Created", 2)]
    MIN_COLUMN_WIDTH = 8
    SORT_KEYS = ["created", "name", "entity"]

    def fetch(self, credential: Credential) -> list[Project]:
        return self.tui_app.client.fetch_projects(credential)

    def row_cells(self, item: Project) -> tuple[Any, ...]:
        return (item.name, item.entity, format_created_at(item.created_at))

    def row_key(self, item: Project) -> str:
        return item.id

    def sort_value(self, item: Project, sort_key: str) -> Any:
        if sort_key == "name":
            return item.name.lower()
        if sort_key == "entity":
            return item.entity.lower()
        return item.created_at or ""

    def search_text(self, item: Project) -> str:
        return item.name

    def open_item(self, item: Project) -> None:
        from wbglance.tui.screens.runs import RunsScreen

        self.app.push_screen(RunsScreen(item.entity, item.name))
