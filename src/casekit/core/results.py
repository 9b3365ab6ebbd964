"""Result data structures produced by the test runner."""
from __future__ import annotations

import datetime as dt
import traceback
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .evaluation import FailureKind, Verdict

if TYPE_CHECKING:  # pragma: no cover
    from .case import TestMethod


_RESULT_LABELS = {
    "passed": ("Passed", None),
    "failed": ("Failed", None),
    "error": ("Failed", "Error"),
    "timeout": ("Failed", "Timeout"),
    "skipped": ("Skipped", "Ignored"),
}

_KIND_LABELS = {
    FailureKind.NOT_RUNNABLE: "Invalid",
}


@dataclass
class TestCaseResult:
    """Outcome of executing a single test method."""

    __test__ = False

    test: "TestMethod"
    verdict: Optional[Verdict] = None
    duration_s: float = 0.0
    start_time: Optional[dt.datetime] = None
    end_time: Optional[dt.datetime] = None

    @property
    def status(self) -> str:
        return self.verdict.status if self.verdict else "notrun"

    @property
    def passed(self) -> bool:
        return self.status == "passed"

    @property
    def message(self) -> str:
        return self.verdict.message if self.verdict else ""

    def record(self, verdict: Verdict, duration_s: float) -> None:
        self.verdict = verdict
        self.duration_s = duration_s
        self.end_time = dt.datetime.now(dt.timezone.utc)
        self.start_time = self.end_time - dt.timedelta(seconds=duration_s)

    def add_to_xml(self, parent_node: ET.Element, recursive: bool) -> ET.Element:
        """Attach a ``test-case`` node carrying identity and verdict to ``parent_node``."""

        node = ET.Element(self.test.xml_element_name)
        self.test.populate_test_node(node, recursive)
        result, label = _RESULT_LABELS.get(self.status, ("Inconclusive", None))
        if self.verdict is not None and self.verdict.kind in _KIND_LABELS:
            label = _KIND_LABELS[self.verdict.kind]
        node.set("result", result)
        if label:
            node.set("label", label)
        if self.start_time and self.end_time:
            node.set("start-time", self.start_time.isoformat())
            node.set("end-time", self.end_time.isoformat())
        node.set("duration", f"{self.duration_s:.6f}")
        verdict = self.verdict
        if verdict is not None and verdict.status == "skipped":
            reason = ET.SubElement(node, "reason")
            ET.SubElement(reason, "message").text = verdict.message
        elif verdict is not None and not verdict.passed:
            failure = ET.SubElement(node, "failure")
            ET.SubElement(failure, "message").text = verdict.message
            trace = _stack_trace(verdict)
            if trace:
                ET.SubElement(failure, "stack-trace").text = trace
        parent_node.append(node)
        return node


def _stack_trace(verdict: Verdict) -> str:
    parts = []
    for fault in (verdict.fault, verdict.secondary_fault):
        if fault is not None:
            parts.append("".join(traceback.format_exception(type(fault), fault, fault.__traceback__)))
    return "\n".join(parts)
