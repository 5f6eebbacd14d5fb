"""
wbglance data models package.

This package contains the value objects returned by the API client.
"""

from wbglance.models.credential import Credential
from wbglance.models.records import MetricPoint, MetricSeries, Project, Run, RunId, RunName
from wbglance.models.state import RunState

__all__ = ["Credential", "MetricPoint", "MetricSeries", "Project", "Run", "RunId", "RunName", "RunState"]
