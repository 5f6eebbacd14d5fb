"""
Run state enumeration.

The client passes the service's state string through untouched; this
enumeration is for presentation code that needs a closed set.
"""

from enum import Enum


class RunState(Enum):
    """Normalized run state.

    - running: Run is still logging
    - finished: Run completed
    - failed: Run exited with an error
    - crashed: Run stopped reporting without finishing
    - other: Anything the service reports that is not listed above
    """

    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"
    CRASHED = "crashed"
    OTHER = "other"

    @classmethod
    def from_raw(cls, raw: str | None) -> "RunState":
        """Map a raw service state to a RunState.

        Args:
            raw: State string as returned by the service

        Returns:
            RunState: Matching member, or OTHER for unknown/missing values
        """
        if not raw:
            return cls.OTHER
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.OTHER
