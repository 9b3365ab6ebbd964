"""Execution context handed explicitly to every operation that needs it."""
from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ExecutionContext:
    """Read-only ambient settings for a run.

    Instances are immutable so any number of cases may read one
    concurrently.
    """

    default_timeout: int = 0  # milliseconds; 0 disables enforcement
    stop_on_error: bool = False

    def with_timeout(self, timeout: int) -> "ExecutionContext":
        return replace(self, default_timeout=timeout)
