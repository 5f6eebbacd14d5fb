"""
Records returned by the API client.

Projects, runs and reconstructed metric series are immutable and built once
per fetch response.
"""

from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

# Opaque run identifier surfaced by run listings
RunId = NewType("RunId", str)
# Human-readable run name used to look up a run's history
RunName = NewType("RunName", str)


class Project(BaseModel):
    """A project owned by (or shared with) an entity."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque project identifier")
    name: str = Field(..., description="Project name")
    entity: str = Field(..., description="Owning entity")
    created_at: str | None = Field(default=None, description="Creation time as reported by the service")


class Run(BaseModel):
    """One tracked execution inside a project.

    ``state`` is the raw string from the service; use
    :meth:`wbglance.models.RunState.from_raw` to normalize it for display.
    """

    model_config = ConfigDict(frozen=True)

    id: RunId = Field(..., description="Opaque run identifier")
    name: RunName = Field(..., description="Run name (used for history lookups)")
    state: str = Field(..., description="Raw run state")
    created_at: str | None = Field(default=None, description="Creation time as reported by the service")


class MetricPoint(BaseModel):
    """A single sample of a metric."""

    model_config = ConfigDict(frozen=True)

    step: int = Field(..., description="Zero-based position of the sample's snapshot in the run history")
    value: float = Field(..., description="Sample value")


class MetricSeries(BaseModel):
    """All numeric samples recorded for one metric key, in history order."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Metric key")
    points: tuple[MetricPoint, ...] = Field(default=(), description="Samples ordered by step")

    @property
    def steps(self) -> list[int]:
        """Steps of all points, ascending."""
        return [p.step for p in self.points]

    @property
    def values(self) -> list[float]:
        """Values of all points, in step order."""
        return [p.value for p in self.points]

    def __str__(self) -> str:
        return f"MetricSeries(name={self.name}, points={len(self.points)})"
