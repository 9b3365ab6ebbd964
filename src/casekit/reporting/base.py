"""Reporter interface definitions."""
from __future__ import annotations

from typing import List, Sequence

from casekit.core import TestCaseResult, TestFixture


class Reporter:
    """Interface for output renderers."""

    def on_start(self, fixtures: Sequence[TestFixture], total: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_case_result(self, result: TestCaseResult, index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, results: Sequence[TestCaseResult]) -> None:  # pragma: no cover
        raise NotImplementedError


class ReportManager:
    """Dispatches lifecycle callbacks to multiple reporters."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)

    def start(self, fixtures: Sequence[TestFixture], total: int) -> None:
        for reporter in self._reporters:
            reporter.on_start(fixtures, total)

    def handle_result(self, result: TestCaseResult, index: int, total: int) -> None:
        for reporter in self._reporters:
            reporter.on_case_result(result, index, total)

    def complete(self, results: Sequence[TestCaseResult]) -> None:
        for reporter in self._reporters:
            reporter.on_complete(results)

    def reporters(self) -> List[Reporter]:
        return list(self._reporters)


def summarize(results: Sequence[TestCaseResult]) -> dict:
    counts = {"total": len(results), "passed": 0, "failed": 0, "error": 0, "timeout": 0, "skipped": 0}
    for result in results:
        if result.status in counts:
            counts[result.status] += 1
    return counts
