"""
wbglance TUI Screens

Screen classes for different views in the TUI application.
"""

from .help import HelpScreen
from .login import LoginScreen
from .metric_chart import MetricChartScreen
from .metrics import MetricsScreen
from .projects import ProjectsScreen
from .runs import RunsScreen

__all__ = [
    "HelpScreen",
    "LoginScreen",
    "MetricChartScreen",
    "MetricsScreen",
    "ProjectsScreen",
    "RunsScreen",
]
