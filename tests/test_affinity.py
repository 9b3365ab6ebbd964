from casekit.core import ExecutionContext, PropertyNames, resolve_affinity


def test_no_timeout_anywhere_means_shared(make_case, context) -> None:
    case = make_case("answer")
    affinity = resolve_affinity(case, context)
    assert affinity.isolated is False
    assert affinity.timeout_ms is None
    assert case.should_run_on_own_thread(context) is False


def test_parent_timeout_is_inherited(make_case, calculator_fixture, context) -> None:
    calculator_fixture.properties.set(PropertyNames.TIMEOUT, 500)
    case = make_case("answer")
    affinity = resolve_affinity(case, context)
    assert affinity.isolated is True
    assert affinity.timeout_ms == 500


def test_explicit_zero_overrides_parent(make_case, calculator_fixture, context) -> None:
    calculator_fixture.properties.set(PropertyNames.TIMEOUT, 500)
    case = make_case("answer")
    case.properties.set(PropertyNames.TIMEOUT, 0)
    assert case.resolve_timeout(context) == 0
    assert resolve_affinity(case, context).isolated is False


def test_case_timeout_wins_over_context(make_case) -> None:
    case = make_case("answer")
    case.properties.set(PropertyNames.TIMEOUT, 25)
    context = ExecutionContext(default_timeout=1000)
    assert case.resolve_timeout(context) == 25


def test_context_default_applies_last(make_case) -> None:
    case = make_case("answer")
    context = ExecutionContext(default_timeout=200)
    affinity = resolve_affinity(case, context)
    assert affinity == affinity.__class__(isolated=True, timeout_ms=200)


def test_negative_timeout_does_not_isolate(make_case, context) -> None:
    case = make_case("answer")
    case.properties.set(PropertyNames.TIMEOUT, -5)
    assert resolve_affinity(case, context).isolated is False


def test_requires_thread_isolates_without_bound(make_case, calculator_fixture, context) -> None:
    calculator_fixture.properties.set(PropertyNames.REQUIRES_THREAD, True)
    affinity = resolve_affinity(make_case("answer"), context)
    assert affinity.isolated is True
    assert affinity.timeout_ms is None


def test_context_is_not_mutated(make_case) -> None:
    context = ExecutionContext(default_timeout=10)
    case = make_case("answer")
    case.properties.set(PropertyNames.TIMEOUT, 0)
    resolve_affinity(case, context)
    assert context.default_timeout == 10
    assert context.with_timeout(0).default_timeout == 0


def test_fractional_timeout_still_isolates(make_case, context) -> None:
    case = make_case("answer")
    case.properties.set(PropertyNames.TIMEOUT, 0.5)
    affinity = resolve_affinity(case, context)
    assert affinity.isolated is True
    assert affinity.timeout_ms == 1
