"""Tests for TUI widgets and display helpers."""

from __future__ import annotations

import math

import pytest

from wbglance.models import MetricPoint, MetricSeries, RunState
from wbglance.tui.formatting import STATE_ICONS, downsample_for_display, format_created_at, state_icon
from wbglance.tui.screens.help import build_help_text
from wbglance.tui.screens.metric_chart import StepWindow
from wbglance.tui.widgets.breadcrumb import Breadcrumb, format_trail
from wbglance.tui.widgets.metrics_grid import MetricsGridWidget


class TestBreadcrumb:
    """Tests for Breadcrumb widget."""

    def test_render_multiple_items(self) -> None:
        """Test rendering multiple breadcrumb items."""
        rendered = format_trail(["Projects", "my-team", "brisk-river-7"])
        assert rendered == "[dim]Projects[/dim] > [dim]my-team[/dim] > [bold]brisk-river-7[/bold]"

    def test_render_single_item(self) -> None:
        assert format_trail(["Projects"]) == "[bold]Projects[/bold]"

    def test_render_empty_items(self) -> None:
        """Test rendering empty breadcrumb."""
        assert format_trail([]) == ""

    def test_markup_in_names_is_escaped(self) -> None:
        """Test that run names with brackets are not parsed as markup."""
        assert "\\[red]run" in format_trail(["Projects", "[red]run"])

    def test_items_is_a_copy(self) -> None:
        bc = Breadcrumb(["Projects"])
        bc.items.append("x")
        assert bc.items == ["Projects"]


class TestMetricsGridWidget:
    """Tests for MetricsGridWidget."""

    def test_metric_names_in_display_order(self) -> None:
        widget = MetricsGridWidget([MetricSeries(name="b"), MetricSeries(name="a")])
        assert widget.metric_names == ["b", "a"]

    def test_calculate_cols_without_size(self) -> None:
        """Test the column count before the widget has been laid out."""
        widget = MetricsGridWidget([MetricSeries(name=str(i)) for i in range(5)])
        assert widget._calculate_cols() == 80 // MetricsGridWidget.MIN_CHART_WIDTH

    def test_calculate_cols_capped_by_series_count(self) -> None:
        widget = MetricsGridWidget([MetricSeries(name="only")])
        assert widget._calculate_cols() == 1


class TestDownsampleForDisplay:
    """Tests for downsample_for_display."""

    def test_short_data_unchanged(self) -> None:
        steps = list(range(10))
        values = [float(i) for i in range(10)]

        assert downsample_for_display(steps, values, 50) == (steps, values)

    def test_long_data_downsampled(self) -> None:
        """Test that long data keeps its endpoints and point budget."""
        steps = list(range(5000))
        values = [math.sin(i / 100) for i in steps]

        result_steps, result_values = downsample_for_display(steps, values, 100)

        assert len(result_steps) == 100
        assert len(result_values) == 100
        assert result_steps[0] == 0
        assert result_steps[-1] == 4999
        assert result_steps == sorted(result_steps)

    def test_non_finite_values_dropped(self) -> None:
        steps = [0, 1, 2, 3]
        values = [1.0, math.nan, math.inf, 2.0]

        assert downsample_for_display(steps, values, 50) == ([0, 3], [1.0, 2.0])

    def test_default_budget_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WBGLANCE_CHART_MAX_POINTS", "10")
        steps = list(range(100))

        result_steps, _ = downsample_for_display(steps, [float(s) for s in steps])

        assert len(result_steps) == 10

    def test_budget_has_minimum(self) -> None:
        steps = list(range(10))

        result_steps, _ = downsample_for_display(steps, [float(s) for s in steps], 1)

        assert len(result_steps) == 3

    def test_series_accessors_feed_downsampling(self) -> None:
        series = MetricSeries(name="acc", points=(MetricPoint(step=1, value=0.5), MetricPoint(step=7, value=0.75)))

        assert downsample_for_display(series.steps, series.values, 10) == ([1, 7], [0.5, 0.75])


class TestFormatting:
    """Tests for formatting helpers."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2024-05-01T12:34:56", "2024-05-01 12:34"),
            ("2024-05-01T12:34:56Z", "2024-05-01 12:34"),
            ("yesterday", "yesterday"),
            (None, "-"),
            ("", "-"),
        ],
    )
    def test_format_created_at(self, raw: str | None, expected: str) -> None:
        assert format_created_at(raw) == expected

    def test_state_icon(self) -> None:
        assert state_icon("finished") == STATE_ICONS[RunState.FINISHED]
        assert state_icon("preempted") == STATE_ICONS[RunState.OTHER]


class TestHelpText:
    """Tests for the help screen text."""

    def test_lists_logout_and_states(self) -> None:
        text = build_help_text()
        assert "Ctrl+L" in text
        for state in RunState:
            assert state.value in text
        assert "Session" not in text

    def test_session_details(self) -> None:
        text = build_help_text("https://api.wandb.ai/graphql", "/home/me/.config/wbglance/credentials.json")
        assert "https://api.wandb.ai/graphql" in text
        assert "credentials.json" in text


class TestStepWindow:
    """Tests for the chart's visible step range."""

    def test_full(self) -> None:
        window = StepWindow.full([3, 5, 100])
        assert (window.start, window.end) == (3, 100)
        assert window.is_full

    def test_empty_series(self) -> None:
        window = StepWindow.full([])
        assert window.zoom_in() == window
        assert window.pan(1) == window

    def test_zoom_in_halves_around_center(self) -> None:
        window = StepWindow.full(list(range(101))).zoom_in()
        assert (window.start, window.end) == (25, 75)
        assert not window.is_full

    def test_zoom_in_stops_at_minimum(self) -> None:
        window = StepWindow(0, 100, 40, 50)
        assert window.zoom_in() == window

    def test_zoom_out_clamps_to_series(self) -> None:
        window = StepWindow(0, 100, 25, 75).zoom_out()
        assert window.is_full

    def test_pan_keeps_width_and_bounds(self) -> None:
        window = StepWindow(0, 100, 80, 100)
        assert window.pan(1) == window

        moved = window.pan(-1)
        assert (moved.start, moved.end) == (78, 98)

        assert StepWindow(0, 100, 0, 20).pan(-1).start == 0
