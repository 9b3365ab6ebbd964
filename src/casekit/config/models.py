"""Data models for run settings."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from casekit.core import ExecutionContext

REPORT_FORMATS = ("terminal", "xml")


@dataclass(frozen=True)
class ReportSettings:
    format: str = "terminal"
    path: Optional[str] = None
    color: bool = True


@dataclass(frozen=True)
class RunSettings:
    default_timeout: int = 0
    stop_on_error: bool = False
    report: ReportSettings = field(default_factory=ReportSettings)

    def context(self) -> ExecutionContext:
        return ExecutionContext(default_timeout=self.default_timeout, stop_on_error=self.stop_on_error)

    def override(self, **changes: Any) -> "RunSettings":
        """Return a copy with every non-``None`` value in ``changes`` applied.

        ``report_format``, ``report_path`` and ``color`` update the nested
        report settings.
        """

        report_changes = {
            key: changes.pop(name)
            for name, key in (("report_format", "format"), ("report_path", "path"), ("color", "color"))
            if changes.get(name) is not None
        }
        top = {key: value for key, value in changes.items() if value is not None}
        return replace(self, report=replace(self.report, **report_changes), **top)
