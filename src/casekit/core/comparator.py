"""Comparison helpers used when checking a case's declared expectations."""
from __future__ import annotations

import re
from typing import Any, Optional

import numpy as np

from .models import MessageMatch, full_type_name


def message_matches(expected: str, actual: str, mode: MessageMatch) -> bool:
    """Compare an exception message according to ``mode``.

    ``re.error`` from an invalid pattern propagates to the caller.
    """

    if mode is MessageMatch.EXACT:
        return actual == expected
    if mode is MessageMatch.CONTAINS:
        return expected in actual
    if mode is MessageMatch.STARTS_WITH:
        return actual.startswith(expected)
    if mode is MessageMatch.REGEX:
        return re.search(expected, actual) is not None
    raise ValueError(f"Unsupported message match mode: {mode!r}")


def describe_match(mode: MessageMatch) -> str:
    return {
        MessageMatch.EXACT: "",
        MessageMatch.CONTAINS: "String containing ",
        MessageMatch.STARTS_WITH: "String starting with ",
        MessageMatch.REGEX: "String matching ",
    }[mode]


def fault_message(fault: BaseException) -> str:
    if len(fault.args) == 1 and isinstance(fault.args[0], str):
        return fault.args[0]
    return str(fault)


def fault_type_matches(
    fault: BaseException,
    expected_type: Optional[type],
    expected_name: Optional[str],
) -> bool:
    """Exact type equality; subclasses of the expected type do not match."""

    actual = type(fault)
    if expected_type is not None:
        return actual is expected_type
    if expected_name is not None:
        # builtins are accepted with or without the "builtins." prefix
        return expected_name in (full_type_name(actual), f"{actual.__module__}.{actual.__qualname__}")
    return True


def values_equal(expected: Any, actual: Any) -> bool:
    """Value equality with array awareness.

    Arrays compare by shape and element values. Any exception raised by a
    user ``__eq__`` (or by an ambiguous truth value) propagates.
    """

    if isinstance(expected, np.ndarray) or isinstance(actual, np.ndarray):
        return bool(np.array_equal(np.asarray(expected), np.asarray(actual)))
    result = expected == actual
    if isinstance(result, np.ndarray):
        return bool(result.all())
    return bool(result)
