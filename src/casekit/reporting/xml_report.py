"""XML reporter assembling a ``test-run`` tree from fixture and case nodes."""
from __future__ import annotations

import datetime as dt
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Sequence

import click

from casekit.core import TestCaseResult, TestFixture

from .base import Reporter, summarize


def build_report(fixtures: Sequence[TestFixture], results: Sequence[TestCaseResult]) -> ET.Element:
    """Return a ``test-run`` element with one ``test-suite`` per fixture."""

    counts = summarize(results)
    root = ET.Element("test-run")
    root.set("testcasecount", str(sum(len(fixture.tests) for fixture in fixtures)))
    root.set("result", "Passed" if counts["passed"] + counts["skipped"] == counts["total"] else "Failed")
    root.set("total", str(counts["total"]))
    root.set("passed", str(counts["passed"]))
    root.set("failed", str(counts["failed"] + counts["error"] + counts["timeout"]))
    root.set("skipped", str(counts["skipped"]))
    root.set("duration", f"{sum(r.duration_s for r in results):.6f}")
    by_parent: Dict[str, List[TestCaseResult]] = {}
    for result in results:
        parent = result.test.parent
        by_parent.setdefault(parent.id if parent is not None else "", []).append(result)
    for fixture in fixtures:
        suite_node = fixture.add_to_xml(root, recursive=False)
        suite_results = by_parent.get(fixture.id, [])
        suite_node.set("total", str(len(suite_results)))
        suite_node.set("passed", str(sum(1 for r in suite_results if r.passed)))
        for result in suite_results:
            result.add_to_xml(suite_node, recursive=True)
    return root


class XmlReporter(Reporter):
    """Collects results and writes them as an XML tree on completion."""

    def __init__(self, path: str | None = None) -> None:
        self._path = Path(path) if path else None
        self._fixtures: List[TestFixture] = []
        self._started_at: dt.datetime | None = None

    def on_start(self, fixtures: Sequence[TestFixture], total: int) -> None:
        self._fixtures = list(fixtures)
        self._started_at = dt.datetime.now(dt.timezone.utc)

    def on_case_result(self, result: TestCaseResult, index: int, total: int) -> None:
        pass

    def on_complete(self, results: Sequence[TestCaseResult]) -> None:
        root = build_report(self._fixtures, results)
        if self._started_at is not None:
            root.set("start-time", self._started_at.isoformat())
        root.set("end-time", dt.datetime.now(dt.timezone.utc).isoformat())
        ET.indent(root)
        text = ET.tostring(root, encoding="unicode")
        if self._path is None:
            click.echo(text)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text('<?xml version="1.0" encoding="utf-8"?>\n' + text + "\n", encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write XML report to {self._path}: {exc}") from exc
        click.echo(f"XML report written to {self._path}")
