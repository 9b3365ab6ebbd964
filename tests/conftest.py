import pytest

from casekit.core import ExecutionContext, MethodRef, TestFixture, TestMethod

from samples import Calculator


@pytest.fixture
def calculator_fixture() -> TestFixture:
    return TestFixture(Calculator)


@pytest.fixture
def make_case(calculator_fixture):
    """Build a ``TestMethod`` for ``name`` on ``cls`` (Calculator by default)."""

    def factory(name: str, cls: type = Calculator, parent=calculator_fixture) -> TestMethod:
        return TestMethod(MethodRef.from_class(cls, name), parent)

    return factory


@pytest.fixture
def context() -> ExecutionContext:
    return ExecutionContext()
