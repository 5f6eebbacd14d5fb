"""Display helpers shared by TUI screens."""

from __future__ import annotations

import math
from datetime import datetime

from wbglance.config import get_settings
from wbglance.models import RunState

# Icon and label per normalized run state
STATE_ICONS = {
    RunState.RUNNING: "[yellow]●[/]",
    RunState.FINISHED: "[green]✓[/]",
    RunState.FAILED: "[red]✗[/]",
    RunState.CRASHED: "[red]![/]",
    RunState.OTHER: "[white]?[/]",
}


def state_icon(raw_state: str) -> str:
    """Get a colored icon for a raw run state."""
    return STATE_ICONS[RunState.from_raw(raw_state)]


def format_created_at(created_at: str | None) -> str:
    """Format a service timestamp as ``YYYY-MM-DD HH:MM``.

    Unparseable values are shown as-is, missing ones as "-".
    """
    if not created_at:
        return "-"
    try:
        # The service sends ISO 8601 without a timezone, sometimes with a trailing Z
        parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return created_at
    return parsed.strftime("%Y-%m-%d %H:%M")


def downsample_for_display(steps: list[int], values: list[float], max_points: int | None = None) -> tuple[list[int], list[float]]:
    """Reduce a series to at most ``max_points`` points for plotting.

    Non-finite values are dropped first. Longer series are downsampled with
    LTTB, which keeps the visual shape (peaks and dips) of the series.

    Args:
        steps: Strictly increasing steps
        values: Values aligned with ``steps``
        max_points: Point budget. Defaults to the configured chart threshold.

    Returns:
        Tuple of (steps, values) to plot.
    """
    import numpy as np
    from lttb import downsample

    if max_points is None:
        max_points = get_settings().chart_max_points
    max_points = max(3, max_points)

    finite = [(s, v) for s, v in zip(steps, values, strict=True) if math.isfinite(v)]
    if len(finite) <= max_points:
        return [s for s, _ in finite], [v for _, v in finite]

    data = np.array(finite, dtype=float)
    downsampled = downsample(data, max_points)
    return (
        [int(d[0]) for d in downsampled],
        [float(d[1]) for d in downsampled],
    )
