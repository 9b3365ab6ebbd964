import pytest

from casekit.core import InvalidArgument, MessageMatch, MethodRef, RunState, TestFixture, TestMethod

from samples import BaseFixture, Calculator, DerivedFixture


def test_name_is_simple_method_name(make_case) -> None:
    case = make_case("answer")
    assert case.name == "answer"
    assert case.full_name == "samples.Calculator.answer"


def test_full_name_uses_parent_full_name(calculator_fixture, make_case) -> None:
    case = make_case("answer")
    assert case.full_name == calculator_fixture.full_name + "." + case.name


def test_inherited_method_is_qualified_with_declaring_type() -> None:
    parent = TestFixture(DerivedFixture)
    ref = MethodRef.from_class(DerivedFixture, "shared")
    case = TestMethod(ref, parent)
    assert ref.declaring_type is BaseFixture
    assert ref.reflected_type is DerivedFixture
    assert case.name == "BaseFixture.shared"
    assert case.full_name == "samples.DerivedFixture.BaseFixture.shared"


def test_overridden_method_keeps_simple_name() -> None:
    parent = TestFixture(DerivedFixture)
    case = TestMethod(MethodRef.from_class(DerivedFixture, "overridden"), parent)
    assert case.name == "overridden"


def test_full_name_without_parent_uses_reflected_type() -> None:
    case = TestMethod(MethodRef.from_class(DerivedFixture, "shared"))
    assert case.full_name == "samples.DerivedFixture.BaseFixture.shared"
    assert case.parent is None


def test_none_method_rejected() -> None:
    with pytest.raises(InvalidArgument):
        TestMethod(None)


def test_unresolved_method_rejected() -> None:
    ref = MethodRef(name="ghost", function=None, declaring_type=Calculator, reflected_type=Calculator)
    with pytest.raises(InvalidArgument) as exc:
        TestMethod(ref)
    assert isinstance(exc.value, ValueError)


def test_unknown_member_rejected() -> None:
    with pytest.raises(InvalidArgument):
        MethodRef.from_class(Calculator, "does_not_exist")


def test_defaults_have_no_expectation(make_case) -> None:
    case = make_case("answer")
    assert case.exception_expected is False
    assert case.expected_exception_type is None
    assert case.expected_exception_name is None
    assert case.expected_exception_message is None
    assert case.message_match_type is MessageMatch.EXACT
    assert case.alternate_exception_handler is None
    assert case.has_expected_result is False
    assert case.run_state is RunState.RUNNABLE


def test_case_is_a_leaf(make_case) -> None:
    case = make_case("bad_input")
    case.expect_exception(ValueError, message="bad", match="contains")
    assert case.has_children is False
    assert case.tests == []
    assert case.xml_element_name == "test-case"


def test_expect_exception_records_type_and_name(make_case) -> None:
    case = make_case("bad_input")
    case.expect_exception(ValueError, message="bad", match="startswith", user_message="oops")
    assert case.exception_expected
    assert case.expected_exception_type is ValueError
    assert case.expected_exception_name == "ValueError"
    assert case.message_match_type is MessageMatch.STARTS_WITH
    assert case.expected_exception_user_message == "oops"


def test_expect_exception_by_name_only(make_case) -> None:
    case = make_case("custom")
    case.expect_exception("samples.CustomError")
    assert case.expected_exception_type is None
    assert case.expected_exception_name == "samples.CustomError"


def test_unknown_match_mode_rejected(make_case) -> None:
    case = make_case("bad_input")
    with pytest.raises(InvalidArgument):
        case.expect_exception(ValueError, match="fuzzy")


def test_static_and_class_methods_invoke_without_instance() -> None:
    assert MethodRef.from_class(Calculator, "static_answer").invoke() == 42
    assert MethodRef.from_class(Calculator, "owner_name").invoke() == "Calculator"
    assert MethodRef.from_class(Calculator, "answer").needs_instance


def test_ids_are_unique(make_case) -> None:
    assert make_case("answer").id != make_case("answer").id


def test_adding_to_fixture_rebases_full_name() -> None:
    case = TestMethod(MethodRef.from_class(BaseFixture, "shared"))
    fixture = TestFixture(DerivedFixture)
    fixture.add(case)
    assert case.parent is fixture
    assert case.full_name == "samples.DerivedFixture.shared"
