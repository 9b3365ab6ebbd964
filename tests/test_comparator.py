import numpy as np
import pytest

from casekit.core import MessageMatch
from casekit.core.comparator import fault_message, fault_type_matches, message_matches, values_equal


@pytest.mark.parametrize(
    "mode, expected, matched",
    [
        (MessageMatch.EXACT, "this is bad input", True),
        (MessageMatch.EXACT, "bad", False),
        (MessageMatch.CONTAINS, "bad", True),
        (MessageMatch.STARTS_WITH, "this is", True),
        (MessageMatch.STARTS_WITH, "bad", False),
        (MessageMatch.REGEX, r"b.d\s+input", True),
        (MessageMatch.REGEX, r"^bad", False),
    ],
)
def test_message_matches(mode, expected, matched) -> None:
    assert message_matches(expected, "this is bad input", mode) is matched


def test_message_match_parse_accepts_aliases() -> None:
    assert MessageMatch.parse("starts_with") is MessageMatch.STARTS_WITH
    assert MessageMatch.parse("Contains") is MessageMatch.CONTAINS
    assert MessageMatch.parse(MessageMatch.REGEX) is MessageMatch.REGEX


def test_fault_message_unwraps_single_string_arg() -> None:
    assert fault_message(KeyError("missing")) == "missing"
    assert fault_message(ValueError(1, 2)) == "(1, 2)"


def test_fault_type_matches_exact_type_only() -> None:
    assert fault_type_matches(ValueError("x"), ValueError, None)
    assert not fault_type_matches(UnicodeError("x"), ValueError, None)
    assert fault_type_matches(ValueError("x"), None, "ValueError")
    assert fault_type_matches(ValueError("x"), None, None)


def test_values_equal_handles_arrays() -> None:
    assert values_equal(np.array([1.0, 2.0]), np.array([1.0, 2.0]))
    assert not values_equal(np.array([1.0, 2.0]), np.array([1.0, 3.0]))
    assert not values_equal(np.array([1.0]), [1.0, 2.0])
    assert values_equal([1, 2], [1, 2])
    assert not values_equal(42, 43)
