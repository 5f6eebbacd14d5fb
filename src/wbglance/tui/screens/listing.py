"""
Listing Screen

Base class for screens that fetch a list of records and show it as a
searchable, sortable table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from textual import events, on, work
from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import DataTable, Footer, Header, Input, Static
from textual.worker import get_current_worker

from wbglance.exceptions import FetchError, UnauthenticatedError

if TYPE_CHECKING:
    from wbglance.models import Credential
    from wbglance.tui.app import WbglanceTUIApp

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListingScreen(Screen[None], Generic[T]):
    """Searchable, sortable table of records fetched in a worker thread.

    Subclasses set the class attributes below and implement :meth:`fetch`,
    :meth:`row_cells`, :meth:`row_key`, :meth:`sort_value`,
    :meth:`search_text` and :meth:`open_item`.
    """

    BINDINGS = [
        Binding("slash", "focus_search", "Search", show=True),
        Binding("tab", "focus_search", "Search", show=False),
        Binding("s", "toggle_sort", "Sort", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("escape", "unfocus_search", "Clear focus", show=False),
    ]

    # Plural used in placeholders and status lines, e.g. "projects"
    NOUN: ClassVar[str] = "items"
    TABLE_ID: ClassVar[str] = "items-table"
    STATUS_ID: ClassVar[str] = "items-status"
    # (label, share of the table width)
    COLUMNS: ClassVar[list[tuple[str, int]]] = []
    MIN_COLUMN_WIDTH: ClassVar[int] = 6
    # The first key is the initial sort, descending
    SORT_KEYS: ClassVar[list[str]] = []

    def __init__(self) -> None:
        super().__init__()
        self._all_items: list[T] = []
        self._items: list[T] = []
        self._filter_text = ""
        self._sort_key = self.SORT_KEYS[0]
        self._sort_reverse = True

    @property
    def tui_app(self) -> WbglanceTUIApp:
        """Get the typed app instance."""
        from wbglance.tui.app import WbglanceTUIApp

        assert isinstance(self.app, WbglanceTUIApp)
        return self.app

    @property
    def rows(self) -> list[T]:
        """Records currently shown, in table order."""
        return list(self._items)

    def fetch(self, credential: Credential) -> list[T]:
        """Return the records for this screen; runs in a worker thread."""
        raise NotImplementedError

    def row_cells(self, item: T) -> tuple[Any, ...]:
        """Return one cell per entry of COLUMNS."""
        raise NotImplementedError

    def row_key(self, item: T) -> str:
        """Return a key unique among the fetched records."""
        raise NotImplementedError

    def sort_value(self, item: T, sort_key: str) -> Any:
        """Return the value ordering ``item`` under one of SORT_KEYS."""
        raise NotImplementedError

    def search_text(self, item: T) -> str:
        """Return the text the search box matches against."""
        raise NotImplementedError

    def open_item(self, item: T) -> None:
        """Act on a selected row, typically by pushing a screen."""
        raise NotImplementedError

    def heading(self) -> Iterable[Widget]:
        """Widgets shown above the search box."""
        return [Static(self.NOUN.capitalize(), classes="screen-title")]

    def notes(self) -> Iterable[Widget]:
        """Widgets shown below the status line."""
        return []

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Container(
            *self.heading(),
            Input(placeholder=f"Search {self.NOUN}...", id="search-input"),
            Vertical(DataTable(id=self.TABLE_ID, cursor_type="row"), classes="table-container"),
            Static(id=self.STATUS_ID, classes="status-legend"),
            *self.notes(),
            classes="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event - set up columns and load records."""
        table = self._table()
        for label, _ in self.COLUMNS:
            table.add_column(label)
        self._fit_columns()
        table.focus()
        self.action_refresh()

    def on_resize(self, event: events.Resize) -> None:
        self._fit_columns()

    def _table(self) -> DataTable:
        return self.query_one(f"#{self.TABLE_ID}", DataTable)

    def _status(self, text: str) -> None:
        self.query_one(f"#{self.STATUS_ID}", Static).update(text)

    def _fit_columns(self) -> None:
        """Share the table width between columns by their ratios."""
        table = self._table()
        available = table.size.width - 4
        if available <= 0 or not table.columns:
            return

        total = sum(ratio for _, ratio in self.COLUMNS)
        for column, (_, ratio) in zip(table.columns.values(), self.COLUMNS, strict=True):
            column.width = max(self.MIN_COLUMN_WIDTH, available * ratio // total)
            column.auto_width = False
        table.refresh()

    def action_refresh(self) -> None:
        """Fetch the records from the service."""
        credential = self.tui_app.credential
        if credential is None:
            return
        self._status(f"Loading {self.NOUN}...")
        self._load(credential)

    @work(thread=True, exclusive=True)
    def _load(self, credential: Credential) -> None:
        try:
            items = self.fetch(credential)
        except UnauthenticatedError:
            logger.warning("Stored API key was rejected by the service")
            message = "API key was rejected. Press Ctrl+L to log in again."
        except FetchError as e:
            logger.error(f"Failed to load {self.NOUN}: {e}")
            message = f"Failed to load {self.NOUN}"
        else:
            message = None

        # Superseded by a later refresh
        if get_current_worker().is_cancelled:
            return
        if message is not None:
            self.app.call_from_thread(self._show_error, message)
        else:
            self.app.call_from_thread(self._show_items, items)

    def _show_error(self, message: str) -> None:
        self._status(f"[red]{message}[/]")
        self.notify(message, severity="error")

    def _show_items(self, items: list[T]) -> None:
        self._all_items = items
        self._status(f"{len(items)} {self.NOUN}")
        self._refilter()

    def _refilter(self) -> None:
        needle = self._filter_text.lower()
        self._items = [item for item in self._all_items if needle in self.search_text(item).lower()]
        self._resort()

    def _resort(self) -> None:
        self._items.sort(key=lambda item: self.sort_value(item, self._sort_key), reverse=self._sort_reverse)

        table = self._table()
        table.clear()
        for item in self._items:
            table.add_row(*self.row_cells(item), key=self.row_key(item))

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self._filter_text = event.value
        self._refilter()

    @on(DataTable.RowSelected)
    def on_row_selected(self, event: DataTable.RowSelected) -> None:
        key = event.row_key.value if event.row_key else None
        item = next((i for i in self._items if self.row_key(i) == key), None)
        if item is not None:
            self.open_item(item)

    def action_focus_search(self) -> None:
        """Focus the search input."""
        self.query_one("#search-input", Input).focus()

    def action_toggle_sort(self) -> None:
        """Cycle descending/ascending, then on to the next sort key."""
        if self._sort_reverse:
            index = self.SORT_KEYS.index(self._sort_key)
            self._sort_key = self.SORT_KEYS[(index + 1) % len(self.SORT_KEYS)]
            self._sort_reverse = False
        else:
            self._sort_reverse = True

        self._resort()
        self.notify(f"Sorted by {self._sort_key} ({'desc' if self._sort_reverse else 'asc'})")

    def action_cursor_down(self) -> None:
        """Move cursor down in table."""
        self._table().action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move cursor up in table."""
        self._table().action_cursor_up()

    def action_unfocus_search(self) -> None:
        """Remove focus from search input (Escape key), otherwise go back."""
        search_input = self.query_one("#search-input", Input)
        if not search_input.has_focus:
            raise SkipAction()
        self._table().focus()
