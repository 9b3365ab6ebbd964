"""Decide whether a case runs on the shared worker or on its own thread."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .context import ExecutionContext
from .models import PropertyNames
from .suite import Test


@dataclass(frozen=True)
class ThreadAffinity:
    isolated: bool
    timeout_ms: Optional[int] = None  # enforced bound, only when positive


def resolve_timeout(test: Test, context: ExecutionContext) -> int:
    """Timeout in ms: the test's own property, then its parent's, then the context default."""

    if PropertyNames.TIMEOUT in test.properties:
        return _as_millis(test.properties.get(PropertyNames.TIMEOUT))
    parent = test.parent
    if parent is not None and PropertyNames.TIMEOUT in parent.properties:
        return _as_millis(parent.properties.get(PropertyNames.TIMEOUT))
    return _as_millis(context.default_timeout)


def resolve_affinity(test: Test, context: ExecutionContext) -> ThreadAffinity:
    timeout = resolve_timeout(test, context)
    bound = timeout if timeout > 0 else None
    return ThreadAffinity(isolated=test.should_run_on_own_thread(context), timeout_ms=bound)


def _as_millis(value: Any) -> int:
    if value is None:
        return 0
    # Round up so a positive fraction of a millisecond still isolates.
    return math.ceil(value)
