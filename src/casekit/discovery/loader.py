"""Build fixtures and test methods from decorated classes."""
from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Set

from casekit.core import InvalidArgument, MethodRef, PropertyNames, RunState, Test, TestFixture, TestMethod
from casekit.core.errors import DiscoveryError

from .attributes import read_metadata

logger = logging.getLogger(__name__)

# Keys that hold a single value; later declarations replace earlier ones.
_SINGLE_VALUED = {PropertyNames.TIMEOUT, PropertyNames.REQUIRES_THREAD, PropertyNames.DESCRIPTION}


def build_fixture(fixture_type: type) -> TestFixture:
    """Create a ``TestFixture`` holding one ``TestMethod`` per test member, sorted by name."""

    if not inspect.isclass(fixture_type):
        raise InvalidArgument(f"Fixture must be a class, got {fixture_type!r}")
    fixture = TestFixture(fixture_type)
    for klass in reversed(fixture_type.__mro__):
        meta = read_metadata(klass)
        _apply_properties(fixture, meta)
        if "ignore" in meta:
            _set_run_state(fixture, RunState.IGNORED, meta["ignore"])
    for name in sorted(_test_member_names(fixture_type)):
        case = build_test_method(fixture_type, name, fixture)
        if fixture.run_state is not RunState.RUNNABLE and case.run_state is RunState.RUNNABLE:
            _set_run_state(case, fixture.run_state, fixture.properties.get(PropertyNames.SKIP_REASON, ""))
        fixture.add(case)
    return fixture


def build_test_method(fixture_type: type, name: str, parent: Test | None = None) -> TestMethod:
    ref = MethodRef.from_class(fixture_type, name)
    case = TestMethod(ref, parent)
    meta = read_metadata(ref.function)
    _apply_properties(case, meta)
    if "ignore" in meta:
        _set_run_state(case, RunState.IGNORED, meta["ignore"])
    expected = meta.get("expected_exception")
    if expected is not None:
        case.expect_exception(
            expected["exception"],
            message=expected["message"],
            match=expected["match"],
            user_message=expected["user_message"],
        )
        handler = expected["handler"]
        if handler:
            try:
                case.alternate_exception_handler = MethodRef.from_class(fixture_type, handler)
            except InvalidArgument as exc:
                logger.debug("Handler %r for %s not found", handler, case.full_name)
                _set_run_state(case, RunState.NOT_RUNNABLE, str(exc))
    if "expected_result" in meta:
        case.expect_result(meta["expected_result"])
    return case


def load_fixtures(source: str | Path) -> List[TestFixture]:
    """Import a Python file (or dotted module name) and build its fixtures."""

    module = _import_source(source)
    fixtures: List[TestFixture] = []
    for _, member in sorted(vars(module).items()):
        if not inspect.isclass(member) or member.__module__ != module.__name__:
            continue
        if not _test_member_names(member):
            logger.debug("Skipping %s: no tests", member.__qualname__)
            continue
        fixtures.append(build_fixture(member))
    return fixtures


def _test_member_names(fixture_type: type) -> Set[str]:
    names: Set[str] = set()
    candidates = {name for klass in fixture_type.__mro__ for name in vars(klass)}
    for name in candidates:
        try:
            ref = MethodRef.from_class(fixture_type, name)
        except InvalidArgument:
            continue
        if ref.is_resolved and read_metadata(ref.function).get("test"):
            names.add(name)
    return names


def _apply_properties(test: Test, meta: Dict[str, Any]) -> None:
    for key, value in meta.get("properties", ()):
        if key in _SINGLE_VALUED:
            test.properties.set(key, value)
        else:
            test.properties.add(key, value)


def _set_run_state(test: Test, state: RunState, reason: str) -> None:
    test.run_state = state
    test.properties.set(PropertyNames.SKIP_REASON, reason)


def _import_source(source: str | Path) -> ModuleType:
    text = str(source)
    path = Path(text).expanduser()
    if not text.endswith(".py") and not path.exists():
        try:
            return importlib.import_module(text)
        except Exception as exc:
            raise DiscoveryError(f"Unable to import module '{text}': {exc}") from exc
    path = path.resolve()
    if not path.exists():
        raise DiscoveryError(f"Fixture source file not found: {path}")
    module_name = f"casekit_fixtures_{path.stem}_{hash(str(path)) & 0xFFFF:x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise DiscoveryError(f"Unable to load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise DiscoveryError(f"Error importing {path}: {exc}") from exc
    return module
