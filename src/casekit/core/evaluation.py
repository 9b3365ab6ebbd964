"""Turn the raw outcome of invoking a test method into a verdict.

The rules, in order:

* an alternate exception handler, when declared, receives any fault first;
  whatever it returns is evaluated once more as a *handled* outcome, and a
  handler that raises is an evaluation error;
* a case expecting an exception fails when none was raised, when the type
  differs, or when the message does not match; a handled outcome satisfies
  the expectation;
* a case not expecting an exception fails on any fault;
* a case with an expected result fails when the returned value differs,
  including a value returned by the handler for a case not expecting an
  exception.

Cases that could not be built correctly (``RunState.NOT_RUNNABLE``) never
reach evaluation; the runner reports them as ``NOT_RUNNABLE`` errors.

Exceptions raised while comparing are reported as evaluation errors, never
propagated.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from .comparator import describe_match, fault_message, fault_type_matches, message_matches, values_equal
from .models import full_type_name

if TYPE_CHECKING:  # pragma: no cover
    from .case import TestMethod


class FailureKind(enum.Enum):
    UNEXPECTED_FAULT = "UnexpectedFault"
    RESULT_MISMATCH = "ResultMismatch"
    TIMEOUT_EXCEEDED = "TimeoutExceeded"
    EVALUATION_ERROR = "EvaluationError"
    SETUP_ERROR = "SetUpError"
    NOT_RUNNABLE = "NotRunnable"


_KIND_STATUS = {
    FailureKind.UNEXPECTED_FAULT: "failed",
    FailureKind.RESULT_MISMATCH: "failed",
    FailureKind.TIMEOUT_EXCEEDED: "timeout",
    FailureKind.EVALUATION_ERROR: "error",
    FailureKind.SETUP_ERROR: "error",
    FailureKind.NOT_RUNNABLE: "error",
}


@dataclass(frozen=True)
class Outcome:
    """What happened when the test method was invoked."""

    returned: Any = None
    fault: Optional[BaseException] = None
    handled: bool = False

    @classmethod
    def capture(cls, func: Callable[..., Any], *args: Any) -> "Outcome":
        try:
            return cls(returned=func(*args))
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            # SystemExit and friends raised by the method are faults too.
            return cls(fault=exc)


@dataclass(frozen=True)
class Verdict:
    """Pass/fail decision for a single case."""

    status: str
    kind: Optional[FailureKind] = None
    message: str = ""
    fault: Optional[BaseException] = None
    secondary_fault: Optional[BaseException] = None

    @property
    def passed(self) -> bool:
        return self.status == "passed"

    @classmethod
    def success(cls) -> "Verdict":
        return cls(status="passed")

    @classmethod
    def skipped(cls, reason: str = "") -> "Verdict":
        return cls(status="skipped", message=reason)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        message: str,
        *,
        fault: Optional[BaseException] = None,
        secondary_fault: Optional[BaseException] = None,
    ) -> "Verdict":
        return cls(
            status=_KIND_STATUS[kind],
            kind=kind,
            message=message,
            fault=fault,
            secondary_fault=secondary_fault,
        )


def evaluate(case: "TestMethod", outcome: Outcome, *, instance: Any = None) -> Verdict:
    """Check ``outcome`` against the expectations declared on ``case``.

    ``instance`` is the fixture object the method ran on; it is needed only
    when an instance-bound alternate exception handler must be called.
    """

    try:
        return _evaluate(case, outcome, instance, depth=0)
    except Exception as exc:
        return Verdict.failure(
            FailureKind.EVALUATION_ERROR,
            f"Error during evaluation: {_describe_fault(exc)}",
            fault=outcome.fault,
            secondary_fault=exc,
        )


def _evaluate(case: "TestMethod", outcome: Outcome, instance: Any, depth: int) -> Verdict:
    fault = outcome.fault
    if fault is not None and case.alternate_exception_handler is not None and depth < 1:
        return _run_handler(case, fault, instance, depth)

    if case.exception_expected:
        if outcome.handled:
            return Verdict.success()
        if fault is None:
            return Verdict.failure(
                FailureKind.UNEXPECTED_FAULT,
                _with_user_message(case, f"Expected exception not thrown: {_expected_label(case)} was expected"),
            )
        return _check_fault(case, fault)

    if fault is not None:
        return Verdict.failure(
            FailureKind.UNEXPECTED_FAULT,
            f"Unexpected exception raised: {_describe_fault(fault)}",
            fault=fault,
        )
    if case.has_expected_result and not values_equal(case.expected_result, outcome.returned):
        return Verdict.failure(
            FailureKind.RESULT_MISMATCH,
            f"Expected result {case.expected_result!r}, got {outcome.returned!r}",
        )
    return Verdict.success()


def _run_handler(case: "TestMethod", fault: BaseException, instance: Any, depth: int) -> Verdict:
    handler = case.alternate_exception_handler
    assert handler is not None
    try:
        returned = handler.invoke(instance, fault)
    except KeyboardInterrupt:
        raise
    except BaseException as exc:
        return Verdict.failure(
            FailureKind.EVALUATION_ERROR,
            f"Exception handler '{handler.name}' raised {_describe_fault(exc)}",
            fault=fault,
            secondary_fault=exc,
        )
    return _evaluate(case, Outcome(returned=returned, handled=True), instance, depth + 1)


def _check_fault(case: "TestMethod", fault: BaseException) -> Verdict:
    expects_type = case.expected_exception_type is not None or case.expected_exception_name is not None
    if expects_type and not fault_type_matches(fault, case.expected_exception_type, case.expected_exception_name):
        return Verdict.failure(
            FailureKind.UNEXPECTED_FAULT,
            _with_user_message(
                case,
                "An unexpected exception type was thrown\n"
                f"Expected: {_expected_label(case)}\n"
                f" but was: {_describe_fault(fault)}",
            ),
            fault=fault,
        )
    expected_message = case.expected_exception_message
    if expected_message is not None:
        actual_message = fault_message(fault)
        if not message_matches(expected_message, actual_message, case.message_match_type):
            return Verdict.failure(
                FailureKind.UNEXPECTED_FAULT,
                _with_user_message(
                    case,
                    "The exception message text was incorrect\n"
                    f"Expected: {describe_match(case.message_match_type)}{expected_message!r}\n"
                    f" but was: {actual_message!r}",
                ),
                fault=fault,
            )
    return Verdict.success()


def _expected_label(case: "TestMethod") -> str:
    if case.expected_exception_type is not None:
        return full_type_name(case.expected_exception_type)
    if case.expected_exception_name:
        return case.expected_exception_name
    return "An exception"


def _describe_fault(fault: BaseException) -> str:
    return f"{full_type_name(type(fault))}: {fault_message(fault)}"


def _with_user_message(case: "TestMethod", text: str) -> str:
    if case.expected_exception_user_message:
        return f"{case.expected_exception_user_message}\n{text}"
    return text
