"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

import time
from typing import Sequence

import click
from colorama import Fore, Style

from casekit.core import TestCaseResult, TestFixture

from .base import Reporter, summarize

STATUS_COLORS = {
    "passed": Fore.GREEN,
    "failed": Fore.RED,
    "error": Fore.RED,
    "timeout": Fore.MAGENTA,
    "skipped": Fore.YELLOW,
}

STATUS_LABELS = {
    "passed": "PASS",
    "failed": "FAIL",
    "error": "ERROR",
    "timeout": "TIMEOUT",
    "skipped": "SKIP",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True) -> None:
        self._use_color = use_color
        self._start_time = 0.0
        self._failures: list[tuple[int, TestCaseResult]] = []

    def on_start(self, fixtures: Sequence[TestFixture], total: int) -> None:
        self._start_time = time.perf_counter()
        self._failures.clear()
        click.echo(self._styled(f"Starting run: {total} case(s) in {len(fixtures)} fixture(s)", Fore.CYAN))

    def on_case_result(self, result: TestCaseResult, index: int, total: int) -> None:
        ms = result.duration_s * 1000
        label = self._styled(STATUS_LABELS.get(result.status, result.status.upper()), STATUS_COLORS.get(result.status))
        click.echo(f"[{index}/{total}] {result.test.full_name} -> {label} ({ms:.2f} ms)")
        if result.status not in {"passed", "skipped"}:
            self._failures.append((index, result))
            self._print_failure_details(result)

    def on_complete(self, results: Sequence[TestCaseResult]) -> None:
        duration = time.perf_counter() - self._start_time
        counts = summarize(results)
        color = Fore.GREEN if not self._failures else Fore.RED
        click.echo(
            self._styled(
                f"Summary: total={counts['total']} passed={counts['passed']} failed={counts['failed']} "
                f"errors={counts['error']} timeouts={counts['timeout']} skipped={counts['skipped']} "
                f"duration={duration:.2f}s",
                color,
            )
        )
        if self._failures:
            click.echo(self._styled("Failure details:", Fore.RED))
            for index, result in self._failures:
                click.echo(f"  [{index}] {result.test.full_name} -> {result.status}")
                self._print_failure_details(result, indent="    ")

    def _styled(self, text: str, color: str | None) -> str:
        if not self._use_color or not color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def _print_failure_details(self, result: TestCaseResult, *, indent: str = "    ") -> None:
        verdict = result.verdict
        if verdict is None:
            click.echo(f"{indent}no verdict recorded")
            return
        if verdict.kind is not None:
            click.echo(f"{indent}kind: {verdict.kind.value}")
        for line in verdict.message.splitlines():
            click.echo(f"{indent}{line}")
        if verdict.secondary_fault is not None:
            click.echo(f"{indent}caused by: {type(verdict.secondary_fault).__name__}: {verdict.secondary_fault}")
