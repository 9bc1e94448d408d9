"""
Engine behaviour: dispatch errors, depth/step accounting, memoization,
logging, and freedom from host recursion.
"""

import logging
import sys

import pytest

from peano_eval import (
    FIVE,
    FOUR,
    ONE,
    OPERATIONS,
    SIX,
    TEN,
    THREE,
    TRUE,
    TWO,
    ZERO,
    ArityError,
    DerivationDepthExceeded,
    Engine,
    EngineConfig,
    IllTypedQueryError,
    StepBudgetExceeded,
    UnknownOperationError,
    default_engine,
    num,
    plus,
    reify,
    set_default_engine,
)


# ---------------------------------------------------------------------------
# Dispatch errors
# ---------------------------------------------------------------------------

def test_operation_surface_is_complete(engine: Engine) -> None:
    assert set(OPERATIONS) == {
        "If", "Equals", "LessThan", "Not", "AndAlso", "OrElse",
        "Plus", "Pred", "Minus", "Times", "Fact", "Mod", "Fib",
    }
    assert engine.operations == OPERATIONS


def test_unknown_operation(engine: Engine) -> None:
    with pytest.raises(UnknownOperationError) as exc:
        engine.resolve("Divide", TEN, TWO)
    assert isinstance(exc.value, LookupError)
    assert exc.value.op == "Divide"


@pytest.mark.parametrize("op,operands", [("Plus", (ONE,)), ("Pred", (ONE, TWO)), ("If", (TRUE, ONE))])
def test_arity_is_checked(engine: Engine, op, operands) -> None:
    with pytest.raises(ArityError):
        engine.resolve(op, *operands)


def test_ill_typed_query_names_the_operation(engine: Engine) -> None:
    with pytest.raises(IllTypedQueryError) as exc:
        engine.resolve("Plus", TRUE, ZERO)
    assert exc.value.op == "Plus"
    assert "TrueTerm" in str(exc.value)


# ---------------------------------------------------------------------------
# Depth and step accounting
# ---------------------------------------------------------------------------

def test_plus_depth_and_steps_are_linear(engine: Engine) -> None:
    engine.resolve("Plus", num(100), ONE)
    assert engine.last_steps == 101
    assert engine.last_max_depth == 101


def test_depth_limit_raises_deterministically() -> None:
    eng = Engine(EngineConfig(max_depth=50))
    with pytest.raises(DerivationDepthExceeded) as exc:
        eng.resolve("Plus", num(100), ONE)
    assert exc.value.op == "Plus"
    assert exc.value.limit == 50
    assert exc.value.reached == 51


def test_depth_limit_boundary() -> None:
    # Plus(num(k), b) needs exactly k + 1 nested clause applications
    assert reify(Engine(EngineConfig(max_depth=11)).resolve("Plus", TEN, ONE)) == 11
    with pytest.raises(DerivationDepthExceeded):
        Engine(EngineConfig(max_depth=10)).resolve("Plus", TEN, ONE)


def test_step_budget() -> None:
    eng = Engine(EngineConfig(max_steps=10))
    with pytest.raises(StepBudgetExceeded) as exc:
        eng.resolve("Plus", num(20), ZERO)
    assert exc.value.limit == 10
    assert exc.value.reached == 11
    assert reify(eng.resolve("Plus", FIVE, ZERO)) == 5


def test_counters_describe_a_failed_query() -> None:
    eng = Engine(EngineConfig(max_depth=5))
    eng.resolve("Plus", ONE, ONE)
    assert eng.last_steps == 2
    with pytest.raises(DerivationDepthExceeded):
        eng.resolve("Plus", TEN, ZERO)
    assert eng.last_steps == 6
    assert eng.last_max_depth == 5


def test_failed_query_leaves_engine_usable() -> None:
    eng = Engine(EngineConfig(max_depth=20))
    with pytest.raises(DerivationDepthExceeded):
        eng.resolve("Times", SIX, SIX)
    assert reify(eng.resolve("Times", TWO, THREE)) == 6


def test_fact_depth_grows_with_result() -> None:
    eng = Engine()
    eng.resolve("Fact", FOUR)
    shallow = eng.last_max_depth
    eng.resolve("Fact", FIVE)
    assert eng.last_max_depth > shallow
    with pytest.raises(DerivationDepthExceeded):
        Engine(EngineConfig(max_depth=shallow)).resolve("Fact", FIVE)


def test_deep_derivation_does_not_touch_host_stack() -> None:
    n = sys.getrecursionlimit() * 4
    result = plus(num(n), ONE)
    assert reify(result) == n + 1
    assert result == num(n + 1)


# ---------------------------------------------------------------------------
# Memoization
# ---------------------------------------------------------------------------

def test_memoized_results_match_plain_results() -> None:
    plain = Engine()
    memo = Engine(EngineConfig(memoize=True))
    for op, args in [("Fib", (TEN,)), ("Fact", (FIVE,)), ("Mod", (TEN, THREE)), ("Times", (SIX, FOUR))]:
        assert memo.resolve(op, *args) == plain.resolve(op, *args)


def test_memo_short_circuits_repeated_queries() -> None:
    memo = Engine(EngineConfig(memoize=True))
    memo.resolve("Fib", TEN)
    first = memo.last_steps
    memo.resolve("Fib", TEN)
    assert first > 0
    assert memo.last_steps == 0
    memo.clear_memo()
    memo.resolve("Fib", TEN)
    assert memo.last_steps == first


def test_memo_cuts_fib_work() -> None:
    plain = Engine()
    memo = Engine(EngineConfig(memoize=True))
    plain.resolve("Fib", TEN)
    memo.resolve("Fib", TEN)
    assert memo.last_steps < plain.last_steps


def test_memo_skips_unhashable_branches() -> None:
    memo = Engine(EngineConfig(memoize=True))
    branch = ["not", "hashable"]
    assert memo.resolve("If", TRUE, branch, ZERO) is branch


def test_memo_keeps_equal_branches_of_different_types_apart() -> None:
    memo = Engine(EngineConfig(memoize=True))
    assert memo.resolve("If", TRUE, 1, ZERO) == 1
    assert memo.resolve("If", TRUE, True, ZERO) is True
    assert type(memo.resolve("If", TRUE, 1.0, ZERO)) is float
    assert type(memo.resolve("If", TRUE, 1, ZERO)) is int


# ---------------------------------------------------------------------------
# Default engine and logging
# ---------------------------------------------------------------------------

def test_default_engine_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("PEANO_MAX_DEPTH", "5")
    set_default_engine(None)
    assert default_engine().config.max_depth == 5
    with pytest.raises(DerivationDepthExceeded):
        plus(TEN, ZERO)


def test_default_engine_can_be_replaced() -> None:
    custom = Engine(EngineConfig(max_depth=3))
    set_default_engine(custom)
    assert default_engine() is custom
    with pytest.raises(DerivationDepthExceeded):
        plus(FIVE, ONE)


def test_resource_exhaustion_is_logged(caplog) -> None:
    eng = Engine(EngineConfig(max_depth=5))
    with caplog.at_level(logging.WARNING, logger="peano_eval.engine.machine"):
        with pytest.raises(DerivationDepthExceeded):
            eng.resolve("Plus", TEN, ONE)
    assert "evaluation of Plus aborted" in caplog.text


def test_successful_queries_log_at_debug(caplog) -> None:
    eng = Engine()
    with caplog.at_level(logging.DEBUG, logger="peano_eval.engine.machine"):
        eng.resolve("Plus", TWO, TWO)
    assert "resolved Plus in 3 step(s)" in caplog.text
