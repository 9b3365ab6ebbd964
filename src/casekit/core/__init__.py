"""Core models and helpers exposed at the package level."""
from .affinity import ThreadAffinity, resolve_affinity, resolve_timeout
from .case import TestMethod
from .context import ExecutionContext
from .errors import CasekitError, ConfigError, DiscoveryError, InvalidArgument
from .evaluation import FailureKind, Outcome, Verdict, evaluate
from .models import MessageMatch, MethodRef, PropertyBag, PropertyNames, RunState, full_type_name
from .results import TestCaseResult
from .runner import TestRunner
from .suite import Test, TestFixture

__all__ = [
    "CasekitError",
    "ConfigError",
    "DiscoveryError",
    "ExecutionContext",
    "FailureKind",
    "InvalidArgument",
    "MessageMatch",
    "MethodRef",
    "Outcome",
    "PropertyBag",
    "PropertyNames",
    "RunState",
    "Test",
    "TestCaseResult",
    "TestFixture",
    "TestMethod",
    "TestRunner",
    "ThreadAffinity",
    "Verdict",
    "evaluate",
    "full_type_name",
    "resolve_affinity",
    "resolve_timeout",
]
