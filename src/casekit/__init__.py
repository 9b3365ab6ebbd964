"""casekit package initialization."""
from __future__ import annotations

from .core import ExecutionContext, TestFixture, TestMethod, TestRunner
from .discovery import (
    build_fixture,
    category,
    description,
    expected_exception,
    expected_result,
    ignore,
    load_fixtures,
    requires_thread,
    test,
    timeout,
)
from .version import __version__

__all__ = [
    "__version__",
    "ExecutionContext",
    "TestFixture",
    "TestMethod",
    "TestRunner",
    "build_fixture",
    "category",
    "description",
    "expected_exception",
    "expected_result",
    "ignore",
    "load_fixtures",
    "requires_thread",
    "test",
    "timeout",
]
