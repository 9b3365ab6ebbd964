"""Test tree nodes: the shared ``Test`` base and the ``TestFixture`` suite."""
from __future__ import annotations

import itertools
import xml.etree.ElementTree as ET
from typing import List, Optional

from .context import ExecutionContext
from .models import PropertyBag, PropertyNames, RunState, full_type_name

_ids = itertools.count(1000)


def next_test_id() -> str:
    return f"0-{next(_ids)}"


class Test:
    """Common identity, properties and tree behaviour of every test node."""

    __test__ = False  # keep pytest from collecting this class

    xml_element_name = "test"
    test_type = "Test"

    def __init__(self, name: str, full_name: Optional[str] = None, parent: Optional["Test"] = None) -> None:
        self.id = next_test_id()
        self.name = name
        self.full_name = full_name or name
        self.parent = parent
        self.properties = PropertyBag()
        self.run_state = RunState.RUNNABLE

    @property
    def has_children(self) -> bool:
        raise NotImplementedError

    @property
    def tests(self) -> List["Test"]:
        raise NotImplementedError

    @property
    def class_name(self) -> str:
        return self.full_name

    def should_run_on_own_thread(self, context: ExecutionContext) -> bool:
        """Base isolation policy: an explicit ``RequiresThread`` marker."""

        node: Optional[Test] = self
        while node is not None:
            if node.properties.get(PropertyNames.REQUIRES_THREAD):
                return True
            node = node.parent
        return False

    def add_to_xml(self, parent_node: ET.Element, recursive: bool) -> ET.Element:
        raise NotImplementedError

    def populate_test_node(self, node: ET.Element, recursive: bool) -> None:
        node.set("id", self.id)
        node.set("name", self.name)
        node.set("fullname", self.full_name)
        node.set("runstate", self.run_state.value)
        if len(self.properties):
            props = ET.SubElement(node, "properties")
            for key, value in self.properties.items():
                prop = ET.SubElement(props, "property")
                prop.set("name", key)
                prop.set("value", str(value))

    def __repr__(self) -> str:
        return f"<{self.test_type} {self.full_name}>"


class TestFixture(Test):
    """Suite built from a class whose members are test methods."""

    xml_element_name = "test-suite"
    test_type = "TestFixture"

    def __init__(self, fixture_type: type, parent: Optional[Test] = None) -> None:
        super().__init__(fixture_type.__name__, full_type_name(fixture_type), parent)
        self.fixture_type = fixture_type
        self._tests: List[Test] = []

    @property
    def has_children(self) -> bool:
        return bool(self._tests)

    @property
    def tests(self) -> List[Test]:
        return list(self._tests)

    def add(self, test: Test) -> None:
        test.parent = self
        test.full_name = f"{self.full_name}.{test.name}"
        self._tests.append(test)

    def add_to_xml(self, parent_node: ET.Element, recursive: bool) -> ET.Element:
        node = ET.Element(self.xml_element_name)
        node.set("type", self.test_type)
        self.populate_test_node(node, recursive)
        node.set("testcasecount", str(len(self._tests)))
        if recursive:
            for test in self._tests:
                test.add_to_xml(node, recursive)
        parent_node.append(node)
        return node
