"""Decorator-based discovery of fixtures and test methods."""
from .attributes import (
    category,
    description,
    expected_exception,
    expected_result,
    ignore,
    read_metadata,
    requires_thread,
    test,
    timeout,
)
from .loader import build_fixture, build_test_method, load_fixtures

__all__ = [
    "build_fixture",
    "build_test_method",
    "category",
    "description",
    "expected_exception",
    "expected_result",
    "ignore",
    "load_fixtures",
    "read_metadata",
    "requires_thread",
    "test",
    "timeout",
]
