"""
Metrics Screen

Displays every metric series of a run as a grid of small charts.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
from textual.worker import get_current_worker

from wbglance.exceptions import FetchError
from wbglance.tui.widgets import Breadcrumb, MetricsGridWidget

if TYPE_CHECKING:
    from wbglance.models import Credential, MetricSeries, RunName
    from wbglance.tui.app import WbglanceTUIApp

logger = logging.getLogger(__name__)


class MetricsScreen(Screen[None]):
    """Screen displaying the metrics of a specific run."""

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
        Binding("backspace", "go_back", "Back", show=False),
    ]

    def __init__(self, entity: str, project_name: str, run_name: RunName) -> None:
        super().__init__()
        self._entity = entity
        self._project_name = project_name
        self._run_name = run_name
        self._series: list[MetricSeries] = []
        self._generation = 0

    @property
    def tui_app(self) -> WbglanceTUIApp:
        """Get the typed app instance."""
        from wbglance.tui.app import WbglanceTUIApp

        assert isinstance(self.app, WbglanceTUIApp)
        return self.app

    @property
    def breadcrumb_items(self) -> list[str]:
        """Breadcrumb trail of this screen."""
        return ["Projects", self._entity, self._project_name, self._run_name]

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Container(
            Breadcrumb(self.breadcrumb_items),
            Vertical(
                Static("Metrics (Click to view detail)", classes="section-title"),
                VerticalScroll(
                    Container(id="metrics-grid-container"),
                    classes="metrics-scroll",
                ),
                classes="metrics-container",
            ),
            classes="main-container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        """Handle mount event - load metrics."""
        await self.action_refresh()

    async def action_refresh(self) -> None:
        """Fetch the run history from the service."""
        credential = self.tui_app.credential
        if credential is None:
            return
        await self._replace_content(Static("Loading metrics...", id="metrics-loading"))
        self._fetch_metrics(credential)

    @work(thread=True, exclusive=True)
    def _fetch_metrics(self, credential: Credential) -> None:
        """Fetch metric series off the UI thread."""
        try:
            series = self.tui_app.client.fetch_metrics(credential, self._entity, self._project_name, self._run_name)
        except FetchError as e:
            logger.error(f"Failed to load metrics for {self._run_name}: {e}")
            if not get_current_worker().is_cancelled:
                self.app.call_from_thread(self._show_error, "Failed to load metrics")
            return
        # A refresh started meanwhile owns the content now
        if not get_current_worker().is_cancelled:
            self.app.call_from_thread(self._show_metrics, series)

    async def _replace_content(self, widget: Static | MetricsGridWidget) -> None:
        """Swap the grid container content for ``widget``.

        Only the latest of overlapping calls mounts its widget, so fixed ids
        never appear twice.
        """
        self._generation += 1
        generation = self._generation
        container = self.query_one("#metrics-grid-container", Container)
        await container.remove_children()
        if generation != self._generation:
            return
        await container.mount(widget)

    async def _show_error(self, message: str) -> None:
        await self._replace_content(Static(f"[red]{message}[/]", id="metrics-error"))
        self.notify(message, severity="error")

    async def _show_metrics(self, series: list[MetricSeries]) -> None:
        # Series order from the client is not meaningful
        self._series = sorted(series, key=lambda s: s.name)
        if self._series:
            await self._replace_content(MetricsGridWidget(self._series, id="metrics-grid"))
        else:
            await self._replace_content(Static("No metrics available", id="no-metrics"))

    @on(MetricsGridWidget.MetricSelected)
    def on_chart_selected(self, event: MetricsGridWidget.MetricSelected) -> None:
        """Handle chart selection."""
        series = next((s for s in self._series if s.name == event.metric_name), None)
        if series is None:
            return

        from wbglance.tui.screens.metric_chart import MetricChartScreen

        self.app.push_screen(MetricChartScreen(self.breadcrumb_items, series))

    def action_go_back(self) -> None:
        """Go back to previous screen."""
        self.app.pop_screen()
