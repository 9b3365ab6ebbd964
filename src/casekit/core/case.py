"""The leaf test node: a single method plus its expected-outcome contract."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any, List, Optional

from . import affinity
from .context import ExecutionContext
from .errors import InvalidArgument
from .models import MessageMatch, MethodRef, full_type_name
from .suite import Test

if TYPE_CHECKING:  # pragma: no cover
    from .results import TestCaseResult


class TestMethod(Test):
    """A test implemented as a method of a fixture class.

    The expectation attributes are filled in by discovery after construction
    and must not change once the case starts executing.
    """

    xml_element_name = "test-case"
    test_type = "TestMethod"

    def __init__(self, method: Optional[MethodRef], parent: Optional[Test] = None) -> None:
        if method is None:
            raise InvalidArgument("A test method requires a method reference")
        if not isinstance(method, MethodRef) or not method.is_resolved:
            raise InvalidArgument(f"Method reference {method!r} does not resolve to a callable")
        name = method.name
        # Inherited members are qualified so they cannot collide with a
        # same-named member declared directly on the fixture.
        if method.is_inherited:
            name = f"{method.declaring_type.__name__}.{method.name}"
        owner = parent.full_name if parent is not None else method.reflected_type_id
        super().__init__(name, f"{owner}.{name}", parent)
        self._method = method

        self.exception_expected = False
        self.expected_exception_type: Optional[type] = None
        self.expected_exception_name: Optional[str] = None
        self.expected_exception_message: Optional[str] = None
        self.message_match_type = MessageMatch.EXACT
        self.expected_exception_user_message: Optional[str] = None
        self.alternate_exception_handler: Optional[MethodRef] = None
        self.has_expected_result = False
        self.expected_result: Any = None

    @property
    def method(self) -> MethodRef:
        return self._method

    @property
    def has_children(self) -> bool:
        return False

    @property
    def tests(self) -> List[Test]:
        return []

    @property
    def class_name(self) -> str:
        return full_type_name(self._method.reflected_type)

    def expect_exception(
        self,
        exception: "type | str | None" = None,
        *,
        message: Optional[str] = None,
        match: "MessageMatch | str" = MessageMatch.EXACT,
        user_message: Optional[str] = None,
    ) -> None:
        """Declare that invoking the method must raise."""

        self.exception_expected = True
        if isinstance(exception, type):
            self.expected_exception_type = exception
            self.expected_exception_name = full_type_name(exception)
        elif exception is not None:
            self.expected_exception_name = str(exception)
        self.expected_exception_message = message
        self.message_match_type = MessageMatch.parse(match)
        self.expected_exception_user_message = user_message

    def expect_result(self, value: Any) -> None:
        self.has_expected_result = True
        self.expected_result = value

    def make_test_result(self) -> "TestCaseResult":
        from .results import TestCaseResult

        return TestCaseResult(self)

    def resolve_timeout(self, context: ExecutionContext) -> int:
        return affinity.resolve_timeout(self, context)

    def should_run_on_own_thread(self, context: ExecutionContext) -> bool:
        if super().should_run_on_own_thread(context):
            return True
        return self.resolve_timeout(context) > 0

    def add_to_xml(self, parent_node: ET.Element, recursive: bool) -> ET.Element:
        node = ET.Element(self.xml_element_name)
        self.populate_test_node(node, recursive)
        parent_node.append(node)
        return node

    def populate_test_node(self, node: ET.Element, recursive: bool) -> None:
        super().populate_test_node(node, recursive)
        node.set("methodname", self._method.name)
        node.set("classname", self.class_name)
