"""
Metric Chart Screen

Displays a single metric series with pan and zoom over the step axis.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
from textual_plotext import PlotextPlot

from wbglance.models import MetricSeries
from wbglance.tui.app import CHART_LINE_COLOR
from wbglance.tui.formatting import downsample_for_display
from wbglance.tui.widgets import Breadcrumb

# Narrowest window zooming in can reach, in steps
MIN_WINDOW = 10


@dataclass(frozen=True)
class StepWindow:
    """Inclusive range of steps shown on the chart.

    ``lo``/``hi`` bound the series; the window never leaves them.
    """

    lo: int
    hi: int
    start: int
    end: int

    @classmethod
    def full(cls, steps: list[int]) -> StepWindow:
        if not steps:
            return cls(0, 0, 0, 0)
        return cls(steps[0], steps[-1], steps[0], steps[-1])

    @property
    def width(self) -> int:
        return self.end - self.start

    @property
    def is_full(self) -> bool:
        return self.start == self.lo and self.end == self.hi

    def pan(self, direction: int) -> StepWindow:
        """Shift by a tenth of the width; ``direction`` is -1 (left) or 1 (right)."""
        shift = max(1, self.width // 10) * direction
        start = min(max(self.lo, self.start + shift), self.hi - self.width)
        return StepWindow(self.lo, self.hi, start, start + self.width)

    def zoom_in(self) -> StepWindow:
        if self.width <= MIN_WINDOW:
            return self
        half = max(MIN_WINDOW, self.width // 2) // 2
        center = (self.start + self.end) // 2
        return StepWindow(self.lo, self.hi, center - half, center + half)

    def zoom_out(self) -> StepWindow:
        center = (self.start + self.end) // 2
        return StepWindow(self.lo, self.hi, max(self.lo, center - self.width), min(self.hi, center + self.width))


class MetricChartScreen(Screen[None]):
    """Screen displaying a chart for one metric series."""

    BINDINGS = [
        Binding("h", "pan_left", "Pan Left", show=True),
        Binding("l", "pan_right", "Pan Right", show=True),
        Binding("left", "pan_left", "Pan Left", show=False),
        Binding("right", "pan_right", "Pan Right", show=False),
        Binding("plus", "zoom_in", "Zoom In", show=True),
        Binding("equals", "zoom_in", "Zoom In", show=False),
        Binding("minus", "zoom_out", "Zoom Out", show=True),
        Binding("r", "reset_view", "Reset", show=True),
        Binding("backspace", "go_back", "Back", show=False),
    ]

    def __init__(self, breadcrumb_items: list[str], series: MetricSeries) -> None:
        super().__init__()
        self._breadcrumb_items = [*breadcrumb_items, series.name]
        self._series = series
        self._window = StepWindow.full(series.steps)

    @property
    def window(self) -> StepWindow:
        """Currently visible step range."""
        return self._window

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Container(
            Breadcrumb(self._breadcrumb_items),
            Vertical(PlotextPlot(id="chart"), id="chart-container", classes="chart-container"),
            Static(id="current-value", classes="current-value"),
            classes="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event - draw the chart."""
        self._show_latest()
        self._redraw()

    def _visible_points(self) -> tuple[list[int], list[float]]:
        """Points whose step lies inside the window."""
        if self._window.is_full:
            return self._series.steps, self._series.values
        start, end = self._window.start, self._window.end
        visible = [p for p in self._series.points if start <= p.step <= end]
        return [p.step for p in visible], [p.value for p in visible]

    def _show_latest(self) -> None:
        if not self._series.points:
            return
        last = self._series.points[-1]
        self.query_one("#current-value", Static).update(
            f"Latest: step={last.step}, value={last.value:.6g}  ({len(self._series.points)} points)"
        )

    def _redraw(self) -> None:
        plot = self.query_one("#chart", PlotextPlot)
        plt = plot.plt
        plt.clear_figure()

        steps, values = downsample_for_display(*self._visible_points())
        if not steps:
            plt.title(f"{self._series.name} (no data)")
        else:
            plt.title(self._series.name)
            plt.xlabel("step")
            plt.plot(steps, values, color=CHART_LINE_COLOR)
        plot.refresh()

    def _set_window(self, window: StepWindow) -> None:
        if window != self._window:
            self._window = window
            self._redraw()

    def action_pan_left(self) -> None:
        """Pan chart view left."""
        self._set_window(self._window.pan(-1))

    def action_pan_right(self) -> None:
        """Pan chart view right."""
        self._set_window(self._window.pan(1))

    def action_zoom_in(self) -> None:
        """Halve the visible step range around its center."""
        self._set_window(self._window.zoom_in())

    def action_zoom_out(self) -> None:
        """Double the visible step range, up to the whole series."""
        self._set_window(self._window.zoom_out())

    def action_reset_view(self) -> None:
        """Show the whole series."""
        self._set_window(StepWindow.full(self._series.steps))

    def action_go_back(self) -> None:
        """Go back to previous screen."""
        self.app.pop_screen()
