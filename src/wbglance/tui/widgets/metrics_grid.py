"""
Metrics Grid Widget

One small chart per metric series, arranged with a CSS grid whose column
count follows the widget width.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.events import Click, Resize
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static
from textual_plotext import PlotextPlot

from wbglance.models import MetricSeries
from wbglance.tui.app import CHART_LINE_COLOR
from wbglance.tui.formatting import downsample_for_display

# Point budget for a single cell of the grid
CELL_MAX_POINTS = 50


class ChartCell(Widget):
    """A focusable mini chart of one series."""

    can_focus = True

    DEFAULT_CSS = """
    ChartCell {
        height: 100%;
        border: round $panel;
    }

    ChartCell:focus {
        border: round $primary;
    }
    """

    class Selected(Message):
        """Posted when the cell is clicked or Enter is pressed on it."""

        def __init__(self, metric_name: str) -> None:
            self.metric_name = metric_name
            super().__init__()

    def __init__(self, series: MetricSeries, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)
        self.series = series

    @property
    def metric_name(self) -> str:
        return self.series.name

    def compose(self) -> ComposeResult:
        yield PlotextPlot()

    def on_mount(self) -> None:
        plot = self.query_one(PlotextPlot)
        plt = plot.plt
        plt.clear_figure()

        steps, values = downsample_for_display(self.series.steps, self.series.values, CELL_MAX_POINTS)
        if not steps:
            plt.title(f"{self.metric_name} (no data)")
        else:
            plt.title(f"{self.metric_name} = {self.series.values[-1]:.4g}")
            plt.plot(steps, values, color=CHART_LINE_COLOR)
            if len(steps) > 1:
                # Endpoints only; mini charts have no room for more ticks
                plt.xticks([steps[0], steps[-1]])
        plot.refresh()

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Selected(self.metric_name))

    def key_enter(self) -> None:
        self.post_message(self.Selected(self.metric_name))


class MetricsGridWidget(Widget):
    """Grid of mini charts, one per series.

    Attributes:
        MIN_CHART_WIDTH: Minimum column width in characters (for xticks visibility).
        CHART_HEIGHT: Height per chart in terminal lines.
    """

    MIN_CHART_WIDTH = 40
    CHART_HEIGHT = 14

    DEFAULT_CSS = """
    MetricsGridWidget {
        layout: grid;
        grid-gutter: 0 1;
        height: auto;
    }
    """

    class MetricSelected(Message):
        """Posted when one of the charts is selected."""

        def __init__(self, metric_name: str) -> None:
            self.metric_name = metric_name
            super().__init__()

    def __init__(self, series: list[MetricSeries], *, id: str | None = None, classes: str | None = None) -> None:
        """Initialize the grid.

        Args:
            series: Metric series to chart, in display order.
            id: Widget ID.
            classes: CSS classes.
        """
        super().__init__(id=id, classes=classes)
        self._series = series

    @property
    def metric_names(self) -> list[str]:
        """Names of the charted series, in display order."""
        return [s.name for s in self._series]

    def compose(self) -> ComposeResult:
        if not self._series:
            yield Static("No metrics available")
            return
        for index, series in enumerate(self._series):
            yield ChartCell(series, id=f"chart-cell-{index}", classes="chart-cell")

    def on_mount(self) -> None:
        self._apply_columns()

    def on_resize(self, event: Resize) -> None:
        self._apply_columns()

    def _calculate_cols(self) -> int:
        """Column count for the current width, at most one per series."""
        width = self.size.width if self.size.width > 0 else 80
        return max(1, min(width // self.MIN_CHART_WIDTH, len(self._series)))

    def _apply_columns(self) -> None:
        cols = self._calculate_cols()
        rows = -(-len(self._series) // cols) if self._series else 1
        self.styles.grid_size_columns = cols
        self.styles.grid_rows = str(self.CHART_HEIGHT)
        self.styles.height = rows * self.CHART_HEIGHT

    def on_chart_cell_selected(self, event: ChartCell.Selected) -> None:
        event.stop()
        self.post_message(self.MetricSelected(event.metric_name))
