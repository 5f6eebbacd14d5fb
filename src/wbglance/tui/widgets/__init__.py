"""
wbglance TUI Widgets

Custom widget classes for the TUI application.
"""

from .breadcrumb import Breadcrumb
from .metrics_grid import ChartCell, MetricsGridWidget

__all__ = ["Breadcrumb", "ChartCell", "MetricsGridWidget"]
