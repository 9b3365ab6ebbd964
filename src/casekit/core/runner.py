"""Test runner dispatching cases to the shared worker or a dedicated thread."""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence

from .affinity import resolve_affinity
from .case import TestMethod
from .context import ExecutionContext
from .evaluation import FailureKind, Outcome, Verdict, evaluate
from .models import PropertyNames, RunState
from .results import TestCaseResult

logger = logging.getLogger(__name__)


class TestRunner:
    """Executes a collection of test methods sequentially.

    Cases run on a single shared worker thread unless the thread-affinity
    policy asks for isolation. Isolated cases get a fresh daemon thread that
    is abandoned if it outlives the case's timeout.
    """

    __test__ = False

    def __init__(self, context: Optional[ExecutionContext] = None) -> None:
        self._context = context or ExecutionContext()

    @property
    def context(self) -> ExecutionContext:
        return self._context

    def run(
        self,
        cases: Sequence[TestMethod],
        *,
        on_result: Optional[Callable[[TestCaseResult, int, int], None]] = None,
    ) -> List[TestCaseResult]:
        results: List[TestCaseResult] = []
        total = len(cases)
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="casekit-shared") as shared:
            for index, case in enumerate(cases, start=1):
                result = self.run_case(case, shared)
                results.append(result)
                if on_result:
                    on_result(result, index, total)
                if self._context.stop_on_error and result.status not in {"passed", "skipped"}:
                    logger.info("Stopping after %s (%s)", case.full_name, result.status)
                    break
        return results

    def run_case(self, case: TestMethod, shared: Optional[Executor] = None) -> TestCaseResult:
        if case.run_state is not RunState.RUNNABLE:
            return self.execute(case)
        affinity = resolve_affinity(case, self._context)
        if affinity.isolated:
            logger.debug("Running %s on its own thread (timeout=%s)", case.full_name, affinity.timeout_ms)
            return self._run_isolated(case, affinity.timeout_ms)
        logger.debug("Running %s on the shared worker", case.full_name)
        if shared is None:
            return self.execute(case)
        return shared.submit(self.execute, case).result()

    def execute(self, case: TestMethod) -> TestCaseResult:
        """Invoke ``case`` on the calling thread and evaluate the outcome."""

        result = case.make_test_result()
        if case.run_state is not RunState.RUNNABLE:
            reason = str(case.properties.get(PropertyNames.SKIP_REASON, ""))
            if case.run_state is RunState.IGNORED:
                verdict = Verdict.skipped(reason)
            else:
                verdict = Verdict.failure(FailureKind.NOT_RUNNABLE, reason or "Test is not runnable")
            result.record(verdict, 0.0)
            return result
        start = time.perf_counter()
        try:
            instance = self._make_instance(case)
        except Exception as exc:
            verdict = Verdict.failure(
                FailureKind.SETUP_ERROR,
                f"Could not construct fixture {case.class_name}: {exc}",
                fault=exc,
            )
            result.record(verdict, time.perf_counter() - start)
            return result
        outcome = Outcome.capture(case.method.invoke, instance)
        verdict = evaluate(case, outcome, instance=instance)
        result.record(verdict, time.perf_counter() - start)
        return result

    def _run_isolated(self, case: TestMethod, timeout_ms: Optional[int]) -> TestCaseResult:
        box: Dict[str, TestCaseResult] = {}

        def target() -> None:
            box["result"] = self.execute(case)

        worker = threading.Thread(target=target, name=f"casekit-{case.name}", daemon=True)
        start = time.perf_counter()
        worker.start()
        worker.join(timeout_ms / 1000.0 if timeout_ms else None)
        if worker.is_alive():
            # Abandoned: the thread keeps running until the method returns.
            logger.warning("%s exceeded its timeout of %sms; abandoning thread", case.full_name, timeout_ms)
            result = case.make_test_result()
            result.record(
                Verdict.failure(
                    FailureKind.TIMEOUT_EXCEEDED,
                    f"Test exceeded Timeout value of {timeout_ms}ms",
                ),
                time.perf_counter() - start,
            )
            return result
        result = box.get("result")
        if result is None:
            result = case.make_test_result()
            result.record(
                Verdict.failure(
                    FailureKind.EVALUATION_ERROR,
                    "Test thread terminated without producing a result",
                ),
                time.perf_counter() - start,
            )
        return result

    @staticmethod
    def _make_instance(case: TestMethod) -> Any:
        handler = case.alternate_exception_handler
        if case.method.needs_instance or (handler is not None and handler.needs_instance):
            return case.method.reflected_type()
        return None
